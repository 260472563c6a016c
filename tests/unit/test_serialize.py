"""Unit tests for model -> document conversion."""

from __future__ import annotations

from datetime import date, datetime, timezone
from enum import Enum, IntEnum
from typing import Annotated

import pytest
from bson import Decimal128, ObjectId
from bson.datetime_ms import DatetimeMS

from doc_mapper.core.exceptions import CyclicStructureError, UnsupportedValueError
from doc_mapper.mapping.markers import Persist
from doc_mapper.mapping.model import Document
from doc_mapper.mapping.serialize import serialize_value, to_document


class Color(Enum):
    RED = "red"
    GREEN = "green"


class Level(IntEnum):
    LOW = 1
    HIGH = 3


class Street(Document):
    name: Annotated[str, Persist()]
    number: Annotated[int, Persist("no")]


class Resident(Document):
    name: Annotated[str, Persist()]
    home: Annotated[Street | None, Persist()] = None
    color: Annotated[Color, Persist()] = Color.RED


class Plain:
    value: Annotated[int, Persist()] = 0


class Link(Document):
    label: Annotated[str, Persist()] = ""
    next: Annotated[Link | None, Persist()] = None


class Opaque:
    pass


class Profile(Document):
    _name: Annotated[str, Persist()] = "anon"

    def get_name(self) -> str:
        return self._name.upper_case()  # type: ignore[attr-defined]


class Badge(Document):
    _code: Annotated[str, Persist()] = ""

    @property
    def code(self) -> str:
        raise AttributeError("badge not issued")


class Slotted:
    __slots__ = ("label",)
    label: Annotated[str, Persist()]


def _street(name: str = "Main", number: int = 1) -> Street:
    street = Street()
    street.name = name
    street.number = number
    return street


class TestPrimitives:
    @pytest.mark.parametrize("value", [None, True, 3, 2.5, "text", b"\x00\x01"])
    def test_passthrough(self, value: object) -> None:
        assert serialize_value(value) == value

    def test_enum_to_value(self) -> None:
        assert serialize_value(Color.GREEN) == "green"

    def test_int_enum_to_plain_int(self) -> None:
        result = serialize_value(Level.HIGH)
        assert result == 3
        assert type(result) is int


class TestDates:
    def test_datetime_truncated_to_seconds(self) -> None:
        value = datetime(2024, 3, 14, 15, 9, 26, 535897, tzinfo=timezone.utc)
        expected = DatetimeMS(datetime(2024, 3, 14, 15, 9, 26, tzinfo=timezone.utc))
        assert serialize_value(value) == expected

    def test_naive_datetime_is_utc(self) -> None:
        naive = datetime(2024, 3, 14, 15, 9, 26)
        aware = naive.replace(tzinfo=timezone.utc)
        assert serialize_value(naive) == serialize_value(aware)

    def test_date_is_midnight_utc(self) -> None:
        expected = DatetimeMS(datetime(2024, 1, 2, tzinfo=timezone.utc))
        assert serialize_value(date(2024, 1, 2)) == expected


class TestNativePassthrough:
    def test_object_id(self) -> None:
        value = ObjectId()
        assert serialize_value(value) is value

    def test_datetime_ms_idempotent(self) -> None:
        value = DatetimeMS(1_700_000_000_000)
        assert serialize_value(value) is value
        assert serialize_value(serialize_value(value)) is value

    def test_decimal128(self) -> None:
        value = Decimal128("1.10")
        assert serialize_value(value) is value


class TestContainers:
    def test_dict_recursive_and_ordered(self) -> None:
        result = serialize_value({"b": Color.RED, "a": {"when": date(2024, 1, 2)}})
        assert list(result) == ["b", "a"]
        assert result["b"] == "red"
        assert isinstance(result["a"]["when"], DatetimeMS)

    def test_enum_keys(self) -> None:
        assert serialize_value({Color.RED: 1}) == {"red": 1}

    def test_list_and_tuple(self) -> None:
        assert serialize_value([Color.RED, (1, Level.LOW)]) == ["red", [1, 1]]

    def test_set_and_frozenset_become_lists(self) -> None:
        assert serialize_value({Color.RED}) == ["red"]
        assert sorted(serialize_value(frozenset({2, 1}))) == [1, 2]

    def test_shared_reference_is_not_a_cycle(self) -> None:
        shared = [1, 2]
        assert serialize_value({"a": shared, "b": shared}) == {"a": [1, 2], "b": [1, 2]}


class TestMappedObjects:
    def test_nested_document(self) -> None:
        resident = Resident()
        resident.name = "Ada"
        resident.home = _street("Elm", 7)
        assert to_document(resident) == {
            "name": "Ada",
            "home": {"name": "Elm", "no": 7},
            "color": "red",
        }

    def test_plain_mapped_class(self) -> None:
        plain = Plain()
        plain.value = 5
        assert serialize_value(plain) == {"value": 5}

    def test_unset_fields_skipped(self) -> None:
        assert to_document(Street()) == {}

    def test_source_not_mutated(self) -> None:
        resident = Resident()
        resident.name = "Ada"
        resident.home = _street()
        before = dict(vars(resident))
        to_document(resident)
        assert vars(resident) == before
        assert resident.color is Color.RED


class TestFailures:
    def test_unsupported_object(self) -> None:
        with pytest.raises(UnsupportedValueError) as exc_info:
            serialize_value(Opaque())
        assert exc_info.value.type_name == "Opaque"

    def test_unsupported_inside_field(self) -> None:
        resident = Resident()
        resident.name = Opaque()  # type: ignore[assignment]
        with pytest.raises(UnsupportedValueError):
            to_document(resident)

    def test_cyclic_dict(self) -> None:
        data: dict[str, object] = {}
        data["self"] = data
        with pytest.raises(CyclicStructureError):
            serialize_value(data)

    def test_cyclic_list(self) -> None:
        items: list[object] = []
        items.append(items)
        with pytest.raises(CyclicStructureError):
            serialize_value(items)

    def test_cyclic_documents(self) -> None:
        first = Link()
        second = Link()
        first.next = second
        second.next = first
        with pytest.raises(CyclicStructureError):
            to_document(first)


class TestAccessorErrors:
    def test_getter_method_error_propagates(self) -> None:
        with pytest.raises(AttributeError, match="upper_case"):
            to_document(Profile())

    def test_property_error_propagates(self) -> None:
        with pytest.raises(AttributeError, match="badge not issued"):
            to_document(Badge())

    def test_unassigned_slot_skipped(self) -> None:
        slotted = Slotted()
        assert to_document(slotted) == {}
        slotted.label = "x"
        assert to_document(slotted) == {"label": "x"}
