"""
Example 01: Model Mapping

This example demonstrates declaring persisted fields and converting models
to documents and back, without a database.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Optional

import bson
from bson import ObjectId
from bson.codec_options import CodecOptions

from doc_mapper import Document, DocumentMapper, Persist, persist, persisted


class Role(Enum):
    ADMIN = "admin"
    MEMBER = "member"


@dataclass
class Preferences:
    """Dataclass model using persisted() fields"""
    language: str = persisted(default="en")
    darkMode: bool = persisted("dark", default=False)


class User(Document):
    """User model using Annotated markers and accessors"""
    id: Annotated[Optional[ObjectId], Persist("_id")] = None
    name: Annotated[str, Persist()] = ""
    role: Annotated[Role, Persist()] = Role.MEMBER
    lastLoginAt: Annotated[Optional[datetime], Persist()] = None
    preferences: Annotated[Preferences, Persist()]
    _email: Annotated[str, Persist()] = ""
    _display_name: str

    def __init__(self):
        self.preferences = Preferences()

    def get_email(self) -> str:
        return self._email

    def set_email(self, value: str) -> None:
        self._email = value.lower()

    @property
    @persist("display")
    def display_name(self) -> str:
        # Serialized only; never read back
        return f"{self.name} <{self._email}>"


def main():
    user = User()
    user.id = ObjectId()
    user.name = "Alice"
    user.role = Role.ADMIN
    user.lastLoginAt = datetime.now(timezone.utc)
    user.set_email("Alice@Example.com")
    user.preferences.darkMode = True

    mapper = DocumentMapper(User, strict=True)

    print("=== Model Mapping ===\n")

    print("1. Model -> document:")
    document = mapper.to_document(user)
    for key, value in document.items():
        print(f"   {key}: {value!r}")

    print("\n2. Document -> BSON bytes -> document:")
    data = bson.encode(document)
    decoded = bson.decode(data, CodecOptions(tz_aware=True))
    print(f"   {len(data)} bytes, keys: {list(decoded)}")

    print("\n3. Document -> model:")
    restored = mapper.from_document(decoded)
    print(f"   {restored.name} ({restored.role.name}) {restored.get_email()}")
    print(f"   last login: {restored.lastLoginAt.isoformat()}")
    print(f"   dark mode: {restored.preferences.darkMode}")


if __name__ == "__main__":
    main()
