"""
Deserialization capability: JSON values to typed object graphs.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, overload

from ._types import UNDEFINED, Undefined
from .coercing import convert_scalar, parse_date
from .inspecting.annotations import get_concrete_type, strip_optional
from .inspecting.classifying import (
    TypeKind,
    classify,
    element_type,
    is_array_value,
    is_object_value,
)
from .model.registry import get_declared_type, get_properties, get_property_metadata

__all__ = [
    "DeserializationParams",
    "deserialize",
    "deserialize_array",
    "map_from_json",
]

logger = logging.getLogger(__name__)


@dataclass(kw_only=True)
class DeserializationParams:
    """
    Deserialization params passed by user.
    """

    parse_dates: bool = True
    """
    Whether to parse properties declared as `datetime`, `date` or `time` from their
    string (or epoch milliseconds) representation.
    """


@overload
def deserialize[T](
    target_type: type[T],
    json: Any,
    /,
    *,
    params: DeserializationParams | None = None,
) -> T | None | Undefined: ...


@overload
def deserialize(
    target_type: Any,
    json: Any,
    /,
    *,
    params: DeserializationParams | None = None,
) -> Any: ...


def deserialize(
    target_type: Any,
    json: Any,
    /,
    *,
    params: DeserializationParams | None = None,
) -> Any:
    """
    Recursively map a JSON value to an instance of the target type.

    Properties are driven by the target type's declarations: keys in the JSON
    object which aren't declared are ignored, and declared properties whose key is
    absent are set to `UNDEFINED`. Mismatches between the data and the declared
    types never raise; they resolve to `UNDEFINED`.

    Dataclasses are constructed via `__init__()`; other classes are created
    without calling `__init__()` and their annotated attributes are set directly.

    :param target_type: Type to map to, generally a dataclass
    :param json: JSON value, e.g. as returned by `json.loads()`
    :param params: Parameters to configure deserialization behavior
    :return: Instance of target type; `None` if `json` is `None`; `UNDEFINED` if \
    there was nothing to map
    """
    return _deserialize(target_type, json, params or DeserializationParams())


def deserialize_array[T](
    target_type: type[T] | Any,
    json: Iterable[Any],
    /,
    *,
    params: DeserializationParams | None = None,
) -> list[T | None | Undefined]:
    """
    Deserialize each element of an array, preserving order. Elements which map to
    `None` or `UNDEFINED` are kept in place.
    """
    params_ = params or DeserializationParams()
    return [_deserialize(target_type, o, params_) for o in json]


def map_from_json(
    target_cls: type,
    json: Mapping[str, Any],
    key: str,
    /,
    *,
    params: DeserializationParams | None = None,
) -> Any:
    """
    Map a single declared property of `target_cls` from the JSON object.

    Order of precedence:

    1. Custom converter
    2. Arrays: element-wise mapping if an element type is known, else raw value
    3. Nested type from metadata, or composed declared type: recursion
    4. Scalar coercion of primitives
    """
    params_ = params or DeserializationParams()
    metadata = get_property_metadata(target_cls, key)
    source_key = metadata.source_key if metadata and metadata.source_key else key
    obj = json.get(source_key, UNDEFINED)

    if metadata and metadata.custom_converter:
        return metadata.custom_converter.from_json(obj)

    declared_type = get_declared_type(target_cls, key)
    nested_type = metadata.nested_type if metadata else None
    kind = classify(declared_type)

    if kind is TypeKind.ARRAY:
        item_type = nested_type or element_type(declared_type)
        if item_type is None:
            # untyped array: pass through as-is
            return obj
        return _deserialize_items(item_type, obj, params_)

    if nested_type is not None or kind is TypeKind.COMPOSED:
        return _deserialize(nested_type or declared_type, obj, params_)

    return convert_scalar(declared_type, obj, parse_dates=params_.parse_dates)


def _deserialize(target_type: Any, json: Any, params: DeserializationParams) -> Any:
    if json is None:
        return None

    # recursion ends here: nothing to map from, or nothing to map to
    if target_type is None or json is UNDEFINED:
        return UNDEFINED

    kind = classify(target_type)

    if kind is TypeKind.PRIMITIVE:
        return convert_scalar(target_type, json, parse_dates=params.parse_dates)

    if kind is TypeKind.ARRAY:
        item_type = element_type(target_type)
        if item_type is None:
            return json if is_array_value(json) else UNDEFINED
        return _deserialize_items(item_type, json, params)

    if not is_object_value(json):
        # scalar where an object was expected: may be a date
        date = parse_date(json)
        if date is None:
            logger.debug("Expected object for %s, got %r", target_type, json)
            return UNDEFINED
        return date

    cls = get_concrete_type(strip_optional(target_type))
    properties = get_properties(cls)

    if not properties:
        # nothing declared to map: take the JSON object as-is
        return json

    values = {
        name: map_from_json(cls, json, name, params=params) for name in properties
    }

    return _construct(cls, values)


def _deserialize_items(
    item_type: Any, json: Any, params: DeserializationParams
) -> list[Any] | Undefined:
    if not is_array_value(json):
        if json is not UNDEFINED:
            logger.debug("Expected array of %s, got %r", item_type, json)
        return UNDEFINED
    return [_deserialize(item_type, o, params) for o in json]


def _construct(cls: type, values: dict[str, Any]) -> Any:
    """
    Create a new instance with the given property values.
    """
    properties = get_properties(cls)
    is_dataclass = dataclasses.is_dataclass(cls)

    if is_dataclass:
        init_values = {k: v for k, v in values.items() if properties[k].init}
        instance = cls(**init_values)
    else:
        # __init__() is not called, properties are set below
        instance = cls.__new__(cls)

    for name, value in values.items():
        if properties[name].init:
            continue
        if is_dataclass:
            # non-init field, possibly of a frozen dataclass
            object.__setattr__(instance, name, value)
        else:
            setattr(instance, name, value)

    return instance
