"""Connection configuration and management.

ConnectionConfig is a Pydantic model for type-safe connection config.
ConnectionManager and AsyncConnectionManager lazily create the pymongo
client and hand out databases and collections.
"""

from __future__ import annotations

from typing import Any

from bson.codec_options import CodecOptions
from bson.raw_bson import RawBSONDocument
from pydantic import BaseModel
from pymongo import AsyncMongoClient, MongoClient
from pymongo.errors import ConfigurationError, InvalidURI

from doc_mapper.core.exceptions import ConnectionError  # noqa: A004


class ConnectionConfig(BaseModel):
    """Configuration for MongoDB connections."""

    database: str
    uri: str | None = None
    host: str = "localhost"
    port: int = 27017
    user: str | None = None
    password: str | None = None
    auth_source: str | None = None
    pool_size: int = 100
    pool_timeout: int = 30
    tz_aware: bool = True
    extra: dict[str, Any] = {}


def _client_kwargs(config: ConnectionConfig) -> dict[str, Any]:
    """Build MongoClient keyword arguments from config fields."""
    kwargs: dict[str, Any] = {
        "host": config.uri or config.host,
        "maxPoolSize": config.pool_size,
        "waitQueueTimeoutMS": config.pool_timeout * 1000,
        "tz_aware": config.tz_aware,
    }
    if config.uri is None:
        kwargs["port"] = config.port
    if config.user is not None:
        kwargs["username"] = config.user
    if config.password is not None:
        kwargs["password"] = config.password
    if config.auth_source is not None:
        kwargs["authSource"] = config.auth_source
    kwargs.update(config.extra)
    return kwargs


def _raw_options(collection: Any) -> CodecOptions[Any]:
    return collection.codec_options.with_options(document_class=RawBSONDocument)


class ConnectionManager:
    """Synchronous connection manager over ``pymongo.MongoClient``."""

    def __init__(self, config: ConnectionConfig) -> None:
        self.config = config
        self._client: MongoClient[Any] | None = None

    @property
    def client(self) -> MongoClient[Any]:
        """The client, created on first access."""
        if self._client is None:
            try:
                self._client = MongoClient(**_client_kwargs(self.config))
            except (ConfigurationError, InvalidURI) as e:
                raise ConnectionError(f"Invalid MongoDB configuration: {e}") from e
        return self._client

    @property
    def database(self) -> Any:
        return self.client[self.config.database]

    def collection(self, name: str, *, raw: bool = False) -> Any:
        """Get a collection; raw collections decode to ``RawBSONDocument``."""
        collection = self.database[name]
        if raw:
            collection = collection.with_options(codec_options=_raw_options(collection))
        return collection

    def close(self) -> None:
        """Close the client and its connection pool."""
        if self._client is not None:
            self._client.close()
            self._client = None


class AsyncConnectionManager:
    """Asynchronous connection manager over ``pymongo.AsyncMongoClient``."""

    def __init__(self, config: ConnectionConfig) -> None:
        self.config = config
        self._client: AsyncMongoClient[Any] | None = None

    @property
    def client(self) -> AsyncMongoClient[Any]:
        """The async client, created on first access."""
        if self._client is None:
            try:
                self._client = AsyncMongoClient(**_client_kwargs(self.config))
            except (ConfigurationError, InvalidURI) as e:
                raise ConnectionError(f"Invalid MongoDB configuration: {e}") from e
        return self._client

    @property
    def database(self) -> Any:
        return self.client[self.config.database]

    def collection(self, name: str, *, raw: bool = False) -> Any:
        """Get an async collection; raw collections decode to ``RawBSONDocument``."""
        collection = self.database[name]
        if raw:
            collection = collection.with_options(codec_options=_raw_options(collection))
        return collection

    async def close(self) -> None:
        """Close the async client."""
        if self._client is not None:
            await self._client.close()
            self._client = None
