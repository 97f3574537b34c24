"""
Bidirectional mapping between JSON values and typed object graphs, driven by
per-property metadata.
"""

from ._types import UNDEFINED, Undefined
from .converting import BaseCustomConverter, CustomConverter, FuncConverter
from .deserializing import (
    DeserializationParams,
    deserialize,
    deserialize_array,
    map_from_json,
)
from .exceptions import DocumentError, MappingError, MetadataError
from .model.base import JsonModel, ModelConfig
from .model.fields import JsonProperty, PropertyMetadata
from .serializing import (
    JsonValueType,
    SerializationParams,
    serialize,
    serialize_array,
    serialize_property,
)

__all__ = [
    "UNDEFINED",
    "Undefined",
    "BaseCustomConverter",
    "CustomConverter",
    "FuncConverter",
    "DeserializationParams",
    "deserialize",
    "deserialize_array",
    "map_from_json",
    "DocumentError",
    "MappingError",
    "MetadataError",
    "JsonModel",
    "ModelConfig",
    "JsonProperty",
    "PropertyMetadata",
    "JsonValueType",
    "SerializationParams",
    "serialize",
    "serialize_array",
    "serialize_property",
]
