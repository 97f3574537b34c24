"""
Coercion of scalar values: booleans from numeric wire representations and
dates from strings or epoch milliseconds.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any

from ._types import UNDEFINED
from .inspecting.annotations import Annotation, strip_optional
from .inspecting.utils import safe_issubclass

__all__ = [
    "coerce_bool",
    "parse_date",
    "parse_time",
    "format_datetime",
    "format_scalar",
    "convert_scalar",
]

logger = logging.getLogger(__name__)


def coerce_bool(obj: Any, /) -> bool:
    """
    Coerce a present JSON value to a boolean: `True`, or anything numerically
    greater than or equal to 1 (including numeric strings like `"1"`), is `True`;
    anything else is `False`.
    """
    if obj is True:
        return True
    if isinstance(obj, bool):
        return False
    if isinstance(obj, (int, float, Decimal)):
        return obj >= 1
    if isinstance(obj, str):
        try:
            return float(obj) >= 1
        except ValueError:
            return False
    return False


def parse_date(obj: Any, /) -> datetime | None:
    """
    Parse a datetime from a JSON value, returning `None` if it's not parseable:

    - `datetime`: returned as-is
    - `date`: midnight of that day
    - `str`: ISO 8601 format
    - `int`/`float`: milliseconds since the epoch, as local wall-clock time
    """
    if isinstance(obj, datetime):
        return obj
    if isinstance(obj, date):
        return datetime(obj.year, obj.month, obj.day)
    if isinstance(obj, bool):
        return None
    if isinstance(obj, (int, float)):
        try:
            return datetime.fromtimestamp(obj / 1000)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(obj, str):
        try:
            return datetime.fromisoformat(obj.strip())
        except ValueError:
            return None
    return None


def parse_time(obj: Any, /) -> time | None:
    """
    Parse a time of day from an ISO 8601 string, returning `None` if it's not
    parseable.
    """
    if isinstance(obj, time):
        return obj
    if isinstance(obj, str):
        try:
            return time.fromisoformat(obj.strip())
        except ValueError:
            return None
    return None


def format_datetime(obj: datetime, /, *, timespec: str = "milliseconds") -> str:
    """
    Format a datetime as ISO 8601 in the local timezone, without offset or `Z`, so
    the output shows wall-clock time.

    Aware datetimes are converted to local time; naive datetimes are assumed to
    already be local.
    """
    if obj.tzinfo is not None:
        obj = obj.astimezone().replace(tzinfo=None)
    return obj.isoformat(timespec=timespec)


def format_scalar(obj: Any, /, *, timespec: str = "milliseconds") -> Any:
    """
    Format dates and times as strings and enums as their values, passing anything
    else through.
    """
    if isinstance(obj, datetime):
        return format_datetime(obj, timespec=timespec)
    if isinstance(obj, (date, time)):
        return obj.isoformat()
    if isinstance(obj, Enum):
        return obj.value
    return obj


def convert_scalar(annotation: Any, obj: Any, /, *, parse_dates: bool = True) -> Any:
    """
    Convert a raw JSON value to the primitive type given by the annotation.

    Only booleans, enums (by value) and, if `parse_dates` is set, dates and times
    are coerced; other values are passed through. `UNDEFINED` stays `UNDEFINED`.
    """
    if obj is UNDEFINED:
        return UNDEFINED

    type_ = Annotation(strip_optional(annotation)).concrete_type

    if type_ is bool:
        return coerce_bool(obj)

    if obj is None:
        return obj

    if safe_issubclass(type_, Enum):
        try:
            return type_(obj)
        except ValueError:
            logger.debug("%r is not a member of %s", obj, type_.__name__)
            return UNDEFINED

    if not parse_dates:
        return obj

    if safe_issubclass(type_, date):
        parsed = parse_date(obj)
        if parsed is None:
            logger.debug("Could not parse %r as %s", obj, type_.__name__)
            return UNDEFINED
        return parsed if safe_issubclass(type_, datetime) else parsed.date()

    if safe_issubclass(type_, time):
        parsed_time = parse_time(obj)
        if parsed_time is None:
            logger.debug("Could not parse %r as time", obj)
            return UNDEFINED
        return parsed_time

    return obj
