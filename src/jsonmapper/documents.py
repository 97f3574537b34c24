"""
Layer to map JSON text (via `json`) and TOML text (via `tomlkit`) to/from typed
objects.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

import tomlkit
from tomlkit.exceptions import TOMLKitError

from ._types import UNDEFINED
from .deserializing import DeserializationParams, deserialize, deserialize_array
from .exceptions import DocumentError
from .inspecting.classifying import is_array_value
from .serializing import SerializationParams, serialize, serialize_array

__all__ = [
    "loads_json",
    "dumps_json",
    "loads_toml",
    "dumps_toml",
]


def loads_json(
    target_type: Any,
    text: str | bytes,
    /,
    *,
    params: DeserializationParams | None = None,
) -> Any:
    """
    Parse JSON text and map it to the target type. A top-level array is mapped
    element-wise.

    :raises DocumentError: If the text is not valid JSON
    """
    try:
        obj = json.loads(text)
    except json.JSONDecodeError as e:
        raise DocumentError(f"Invalid JSON document: {e}") from e

    if is_array_value(obj):
        return deserialize_array(target_type, obj, params=params)
    return deserialize(target_type, obj, params=params)


def dumps_json(
    obj: Any,
    /,
    *,
    params: SerializationParams | None = None,
    **kwargs: Any,
) -> str:
    """
    Serialize an object (or array of objects) to JSON text. `UNDEFINED` values left
    in arrays are written as `null`.

    :param kwargs: Passed to `json.dumps()`, e.g. `indent`
    """
    value = (
        serialize_array(obj, params=params)
        if is_array_value(obj)
        else serialize(obj, params=params)
    )
    return json.dumps(value, default=_encode_default, **kwargs)


def loads_toml(
    target_type: Any,
    text: str,
    /,
    *,
    params: DeserializationParams | None = None,
) -> Any:
    """
    Parse TOML text and map the document to the target type.

    :raises DocumentError: If the text is not valid TOML
    """
    try:
        document = tomlkit.parse(text)
    except TOMLKitError as e:
        raise DocumentError(f"Invalid TOML document: {e}") from e

    return deserialize(target_type, document.unwrap(), params=params)


def dumps_toml(obj: Any, /, *, params: SerializationParams | None = None) -> str:
    """
    Serialize an object to TOML text. `None` values are omitted from tables since
    TOML has no null.

    :raises DocumentError: If the object doesn't serialize to a table, or an array \
    contains `None`
    """
    value = serialize(obj, params=params)
    if not isinstance(value, Mapping):
        raise DocumentError(
            f"TOML document must be a table at the top level, got {type(value).__name__}"
        )
    return tomlkit.dumps(_strip_nulls(value))


def _strip_nulls(obj: Any) -> Any:
    """
    Recursively remove `None` from tables, and reject it in arrays.
    """
    if isinstance(obj, Mapping):
        return {
            k: _strip_nulls(v)
            for k, v in obj.items()
            if v is not None and v is not UNDEFINED
        }
    if is_array_value(obj):
        if any(o is None or o is UNDEFINED for o in obj):
            raise DocumentError(f"TOML arrays cannot contain null: {obj}")
        return [_strip_nulls(o) for o in obj]
    return obj


def _encode_default(obj: Any) -> Any:
    if obj is UNDEFINED:
        return None
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")
