"""BSON value helpers.

Aliases and conversions for the native ``bson`` types that documents carry
unchanged: identifiers, UTC datetimes and the other encoded types shipped
with pymongo.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, timezone
from typing import Any

from bson import Binary, Code, DBRef, Decimal128, MaxKey, MinKey, ObjectId, Regex, Timestamp
from bson.codec_options import CodecOptions
from bson.datetime_ms import DatetimeMS
from bson.errors import InvalidBSON, InvalidId

from doc_mapper.core.exceptions import InvalidIdentifierError

# Values already in their encoded form; serialization passes them through.
NATIVE_TYPES: tuple[type, ...] = (
    ObjectId,
    DatetimeMS,
    Decimal128,
    Binary,
    Timestamp,
    Regex,
    Code,
    DBRef,
    MinKey,
    MaxKey,
)

_UTC_OPTIONS: CodecOptions[Any] = CodecOptions(tz_aware=True, tzinfo=timezone.utc)


def is_native(value: Any) -> bool:
    """Check whether *value* is an already-encoded ``bson`` value."""
    return isinstance(value, NATIVE_TYPES)


def oid(value: str) -> ObjectId:
    """Build an ObjectId from its 24-character hex representation.

    Raises:
        InvalidIdentifierError: If *value* is not a valid ObjectId.
    """
    try:
        return ObjectId(value)
    except (InvalidId, TypeError) as e:
        raise InvalidIdentifierError(str(value), str(e)) from e


def utc_datetime(value: date) -> DatetimeMS:
    """Convert a date or datetime to a BSON UTC datetime.

    Precision is whole seconds: sub-second parts are dropped. Naive
    datetimes are taken as UTC; plain dates map to midnight UTC.
    """
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    seconds = calendar.timegm(value.utctimetuple())
    return DatetimeMS(seconds * 1000)


def now() -> DatetimeMS:
    """Current time as a BSON UTC datetime."""
    return utc_datetime(datetime.now(timezone.utc))


def to_datetime(value: DatetimeMS) -> datetime | DatetimeMS:
    """Convert a BSON UTC datetime to a timezone-aware ``datetime``.

    Values outside the ``datetime`` range are returned unchanged.
    """
    try:
        return value.as_datetime(_UTC_OPTIONS)
    except (InvalidBSON, OverflowError, ValueError):
        return value
