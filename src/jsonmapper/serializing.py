"""
Serialization capability: typed object graphs to JSON values.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from types import NoneType
from typing import Any, Literal

from ._types import UNDEFINED, Undefined
from .coercing import format_scalar
from .inspecting.classifying import (
    PRIMITIVE_TYPES,
    TypeKind,
    classify,
    element_type,
    is_array_value,
)
from .model.fields import PropertyMetadata
from .model.registry import get_declared_type, get_properties, get_property_metadata

__all__ = [
    "JsonValueType",
    "SerializationParams",
    "serialize",
    "serialize_array",
    "serialize_property",
]

type JsonValueType = str | int | float | bool | NoneType | list[
    JsonValueType
] | dict[str, JsonValueType]
"""
Native types which can be represented in JSON format.
"""

type TimespecType = Literal[
    "auto", "hours", "minutes", "seconds", "milliseconds", "microseconds"
]


@dataclass(kw_only=True)
class SerializationParams:
    """
    Serialization params passed by user.
    """

    drop_undefined: bool = True
    """
    Whether to omit properties whose value is `UNDEFINED` from the output, as JSON
    text can't represent them.
    """

    datetime_timespec: TimespecType = "milliseconds"
    """
    Precision of formatted datetimes, passed to `datetime.isoformat()`.
    """


def serialize(
    obj: Any, /, *, params: SerializationParams | None = None
) -> JsonValueType | Undefined:
    """
    Recursively serialize an object to JSON-compatible values.

    Dataclasses, mappings and other objects with attributes are converted to a new
    `dict`, honoring each property's metadata (renames, exclusion and custom
    converters). Dates and enums are formatted as scalars; other scalars and arrays
    are returned unchanged. Use `serialize_array()` to serialize each element of an
    array.

    :param obj: Object to serialize
    :param params: Parameters to configure serialization behavior
    """
    return _serialize(obj, params or SerializationParams())


def serialize_array(
    objs: Iterable[Any], /, *, params: SerializationParams | None = None
) -> list[JsonValueType | Undefined]:
    """
    Serialize each element of an array, preserving order.
    """
    params_ = params or SerializationParams()
    return [_serialize(o, params_) for o in objs]


def serialize_property(
    metadata: PropertyMetadata | None,
    obj: Any,
    declared_type: Any | None = None,
    /,
    *,
    params: SerializationParams | None = None,
) -> Any:
    """
    Serialize a single property value.

    Order of precedence:

    1. `None` and `UNDEFINED`: passed through
    2. Custom converter
    3. No nested type: dates formatted as local ISO 8601, other values as-is
    4. Nested type: arrays serialized element-wise, otherwise recursion

    The nested type is taken from the metadata, or else from the declared type if
    it's composed (or an array of a composed type).
    """
    params_ = params or SerializationParams()

    if obj is UNDEFINED or obj is None:
        return obj

    if metadata and metadata.custom_converter:
        return metadata.custom_converter.to_json(obj)

    if _get_nested_type(metadata, declared_type) is None:
        return _serialize_untyped(obj, params_)

    if is_array_value(obj):
        return [_serialize(o, params_) for o in obj]

    return _serialize(obj, params_)


def _serialize(obj: Any, params: SerializationParams) -> Any:
    if obj is None or obj is UNDEFINED:
        return obj

    if isinstance(obj, PRIMITIVE_TYPES + (Enum,)):
        # e.g. a date held where a nested object was declared
        return format_scalar(obj, timespec=params.datetime_timespec)

    cls: type | None
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        cls = type(obj)
        items = ((name, getattr(obj, name)) for name in get_properties(cls))
    elif isinstance(obj, Mapping):
        cls = None
        items = obj.items()
    elif _is_plain_object(obj):
        cls = type(obj)
        items = vars(obj).items()
    else:
        # arrays and opaque objects
        return obj

    values: dict[Any, Any] = {}
    for name, value in items:
        metadata = get_property_metadata(cls, name) if cls else None
        if metadata and metadata.exclude_from_output:
            continue

        key = (metadata.output_name or name) if metadata else name
        declared_type = get_declared_type(cls, name) if cls else None
        serialized_obj = serialize_property(
            metadata, value, declared_type, params=params
        )

        if serialized_obj is UNDEFINED and params.drop_undefined:
            continue
        values[key] = serialized_obj

    return values


def _serialize_untyped(obj: Any, params: SerializationParams) -> Any:
    """
    Serialize a value without a known nested type, based on its runtime type.
    """
    if is_array_value(obj):
        return [serialize_property(None, o, None, params=params) for o in obj]
    if isinstance(obj, Mapping) or dataclasses.is_dataclass(obj):
        return _serialize(obj, params)
    return format_scalar(obj, timespec=params.datetime_timespec)


def _get_nested_type(
    metadata: PropertyMetadata | None, declared_type: Any | None
) -> Any | None:
    if metadata and metadata.nested_type is not None:
        return metadata.nested_type

    if declared_type is None:
        return None

    kind = classify(declared_type)
    if kind is TypeKind.COMPOSED:
        return declared_type
    if kind is TypeKind.ARRAY:
        item_type = element_type(declared_type)
        if item_type is not None and classify(item_type) is TypeKind.COMPOSED:
            return item_type

    return None


def _is_plain_object(obj: Any) -> bool:
    """
    Check whether object is an instance of a user-defined class with attributes.
    """
    return (
        not isinstance(obj, (type, Enum))
        and not callable(obj)
        and hasattr(obj, "__dict__")
    )
