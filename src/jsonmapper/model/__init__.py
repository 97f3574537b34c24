"""
Declaration of mappable properties and their metadata.

`JsonModel` lives in `jsonmapper.model.base` and is exported by the top-level
package, since it depends on the mapping engine which in turn depends on this
subpackage.
"""

from .fields import METADATA_KEY, JsonProperty, PropertyMetadata
from .registry import (
    PropertyInfo,
    get_declared_type,
    get_properties,
    get_property_metadata,
    get_property_names,
)

__all__ = [
    "METADATA_KEY",
    "JsonProperty",
    "PropertyMetadata",
    "PropertyInfo",
    "get_declared_type",
    "get_properties",
    "get_property_metadata",
    "get_property_names",
]
