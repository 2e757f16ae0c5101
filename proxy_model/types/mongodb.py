"""
MongoDB type converters.

``date`` and ``oid`` convert between stored BSON values and API values:

- ``date``: stored ``datetime`` / Extended JSON ``{"$date": ...}`` <-> aware
  UTC ``datetime``
- ``oid``: stored ``ObjectId`` / Extended JSON ``{"$oid": ...}`` <-> ``str``

Reads accept both native (pymongo) and Extended JSON shapes. Writes produce
native BSON values; ``ejson_date`` and ``ejson_oid`` write canonical Extended
JSON instead, for documents that are kept in that form.

Example:
    class User(ProxyModel):
        type_converters = {"_id": MongoDB.oid, "birthday": MongoDB.date}
"""

from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from typing import Any

from bson import ObjectId
from bson.datetime_ms import DatetimeMS

from ..constants import EJSON_DATE, EJSON_NUMBER_LONG, EJSON_OID
from ..core.types import UNDEFINED, Converter, is_defined
from ..exceptions import ConversionError

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)


def _from_millis(millis: int) -> datetime:
    return EPOCH + timedelta(milliseconds=int(millis))


def _to_millis(value: datetime) -> int:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return (value - EPOCH) // _ONE_MS


def _parse_iso(text: str) -> datetime:
    # fromisoformat() only learned the "Z" suffix in 3.11
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as e:
        raise ConversionError(f"Invalid date string: {text!r}", converter="date", value=text) from e
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def to_datetime(raw: Any, context: Any = None) -> Any:
    """Stored date value -> aware UTC datetime. A missing value stays missing."""
    if not is_defined(raw):
        return UNDEFINED
    if isinstance(raw, datetime):
        return raw if raw.tzinfo else raw.replace(tzinfo=timezone.utc)
    if isinstance(raw, DatetimeMS):
        return _from_millis(int(raw))
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return _from_millis(raw)
    if isinstance(raw, Mapping) and EJSON_DATE in raw:
        inner = raw[EJSON_DATE]
        if isinstance(inner, Mapping) and EJSON_NUMBER_LONG in inner:
            return _from_millis(int(inner[EJSON_NUMBER_LONG]))
        if isinstance(inner, str):
            return _parse_iso(inner)
        if isinstance(inner, int) and not isinstance(inner, bool):
            return _from_millis(inner)
    if isinstance(raw, str):
        return _parse_iso(raw)
    raise ConversionError(
        f"Cannot convert {type(raw).__name__} to datetime", converter="date", value=raw
    )


def from_datetime(value: Any) -> datetime:
    """API datetime -> native BSON date (aware UTC datetime)."""
    if not isinstance(value, datetime):
        raise ConversionError(
            f"Expected datetime, got {type(value).__name__}", converter="date", value=value
        )
    return _from_millis(_to_millis(value))


def to_ejson_date(value: Any) -> dict[str, Any]:
    """API datetime -> canonical Extended JSON date."""
    return {EJSON_DATE: {EJSON_NUMBER_LONG: str(_to_millis(from_datetime(value)))}}


def to_oid_str(raw: Any, context: Any = None) -> Any:
    """Stored ObjectId value -> hex string. A missing value stays missing."""
    if not is_defined(raw):
        return UNDEFINED
    if isinstance(raw, ObjectId):
        return str(raw)
    if isinstance(raw, Mapping) and EJSON_OID in raw:
        return str(raw[EJSON_OID])
    if isinstance(raw, str):
        return raw
    raise ConversionError(
        f"Cannot convert {type(raw).__name__} to an ObjectId string", converter="oid", value=raw
    )


def from_oid_str(value: Any) -> ObjectId:
    """API id -> ObjectId."""
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    raise ConversionError(f"Invalid ObjectId: {value!r}", converter="oid", value=value)


def to_ejson_oid(value: Any) -> dict[str, str]:
    """API id -> canonical Extended JSON ObjectId."""
    if isinstance(value, ObjectId):
        value = str(value)
    return {EJSON_OID: str(value)}


date = Converter(get=to_datetime, set=from_datetime)
oid = Converter(get=to_oid_str, set=from_oid_str)
ejson_date = Converter(get=to_datetime, set=to_ejson_date)
ejson_oid = Converter(get=to_oid_str, set=to_ejson_oid)

__all__ = [
    "date",
    "oid",
    "ejson_date",
    "ejson_oid",
    "to_datetime",
    "from_datetime",
    "to_ejson_date",
    "to_oid_str",
    "from_oid_str",
    "to_ejson_oid",
]
