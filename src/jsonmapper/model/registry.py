"""
Lookup of declared properties, their types and their mapping metadata.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from functools import cache
from types import MappingProxyType
from typing import Any, get_type_hints

from ..inspecting.annotations import ANY, Annotation
from ..inspecting.utils import safe_issubclass
from .fields import METADATA_KEY, PropertyMetadata

__all__ = [
    "PropertyInfo",
    "get_properties",
    "get_property_names",
    "get_declared_type",
    "get_property_metadata",
]


@dataclass(frozen=True)
class PropertyInfo:
    """
    Mappable property with its annotation resolved.
    """

    name: str
    """
    Attribute name.
    """

    annotation: Annotation
    """
    Declared type, with `Annotated[]` extras split off.
    """

    metadata: PropertyMetadata | None
    """
    Mapping metadata, if any was declared.
    """

    init: bool = True
    """
    Whether the property is passed to `__init__()` upon construction.
    """


def get_properties(class_or_instance: Any, /) -> MappingProxyType[str, PropertyInfo]:
    """
    Get mappable properties of a class, in declaration order:

    - Dataclasses: their fields
    - Other classes: their annotated attributes, excluding `ClassVar`s
    - Mappings and non-classes: none

    Results are cached per class.
    """
    cls = (
        class_or_instance
        if isinstance(class_or_instance, type)
        else type(class_or_instance)
    )
    return _get_properties(cls)


def get_property_names(class_or_instance: Any, /) -> tuple[str, ...]:
    """
    Get names of mappable properties in declaration order.
    """
    return tuple(get_properties(class_or_instance))


def get_declared_type(class_or_instance: Any, key: str, /) -> Any:
    """
    Get the declared type of a property, `Any` if undeclared.
    """
    info = get_properties(class_or_instance).get(key)
    return info.annotation.raw if info else ANY.raw


def get_property_metadata(
    class_or_instance: Any, key: str, /
) -> PropertyMetadata | None:
    """
    Get the mapping metadata attached to a property, if any.
    """
    info = get_properties(class_or_instance).get(key)
    return info.metadata if info else None


@cache
def _get_properties(cls: type) -> MappingProxyType[str, PropertyInfo]:
    if safe_issubclass(cls, Mapping):
        return MappingProxyType({})

    type_hints = get_type_hints(cls, include_extras=True)
    properties: dict[str, PropertyInfo] = {}

    if dataclasses.is_dataclass(cls):
        for f in _get_fields(cls):
            annotation = Annotation(type_hints.get(f.name, Any))
            metadata = f.metadata.get(METADATA_KEY) or _extract_metadata(annotation)
            assert metadata is None or isinstance(metadata, PropertyMetadata)
            properties[f.name] = PropertyInfo(
                f.name, annotation, metadata, init=f.init
            )
    else:
        for name, raw_annotation in type_hints.items():
            annotation = Annotation(raw_annotation)
            if annotation.is_class_var:
                continue
            properties[name] = PropertyInfo(
                name, annotation, _extract_metadata(annotation), init=False
            )

    return MappingProxyType(properties)


def _extract_metadata(annotation: Annotation) -> PropertyMetadata | None:
    """
    Get metadata passed via `Annotated[]`: a rename string or `PropertyMetadata`.
    Other extras are ignored as they may be meant for other libraries.
    """
    for extra in annotation.extras:
        if isinstance(extra, (str, PropertyMetadata)):
            return PropertyMetadata.from_declaration(extra)
    return None


def _get_fields(class_or_instance: Any) -> tuple[dataclasses.Field, ...]:
    """
    Wrapper for `dataclasses.fields()` to enable type checking in case type checkers
    aren't aware `class_or_instance` is actually a dataclass.
    """
    return dataclasses.fields(class_or_instance)
