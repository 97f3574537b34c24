"""
Classification of annotations into the kinds of values the mapping engine
distinguishes.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, time
from decimal import Decimal
from enum import Enum
from types import NoneType
from typing import Any

from .annotations import Annotation, flatten_union, strip_optional
from .utils import safe_issubclass

__all__ = [
    "TypeKind",
    "PRIMITIVE_TYPES",
    "ARRAY_TYPES",
    "classify",
    "is_primitive",
    "is_array",
    "is_composed",
    "element_type",
    "is_array_value",
    "is_object_value",
]

PRIMITIVE_TYPES: tuple[type, ...] = (str, int, float, bool, Decimal, date, time)
"""
Scalar types; subclasses are also primitive. `datetime` is covered by `date`.
"""

ARRAY_TYPES: tuple[type, ...] = (list, tuple)
"""
Native ordered sequence types; subclasses are also arrays.
"""


class TypeKind(Enum):
    """
    Kind of value an annotation describes.
    """

    PRIMITIVE = "primitive"
    """
    Scalar or enum passed through with at most a coercion, or an untyped value
    (`Any`, `object`, `Literal[]` or a union of several types).
    """

    ARRAY = "array"
    """
    Ordered sequence whose elements may be mapped individually.
    """

    COMPOSED = "composed"
    """
    User-defined type with its own mappable properties.
    """


def classify(annotation: Any, /) -> TypeKind:
    """
    Classify an annotation, unwrapping aliases, `Annotated[]` and `X | None`.

    Anything not recognized as a primitive or an array is considered composed, so
    the deserializer will attempt to map it as a nested object.
    """
    members = flatten_union(strip_optional(annotation))
    if len(members) != 1:
        # polymorphic unions are not mapped: pass through
        return TypeKind.PRIMITIVE

    ann = Annotation(members[0])

    if ann.is_any or ann.is_literal or ann.concrete_type is NoneType:
        return TypeKind.PRIMITIVE

    if safe_issubclass(ann.concrete_type, PRIMITIVE_TYPES + (Enum,)):
        return TypeKind.PRIMITIVE

    if safe_issubclass(ann.concrete_type, ARRAY_TYPES):
        return TypeKind.ARRAY

    if ann.concrete_type is object:
        # not a type, e.g. an unresolved forward reference
        return TypeKind.PRIMITIVE

    return TypeKind.COMPOSED


def is_primitive(annotation: Any, /) -> bool:
    return classify(annotation) is TypeKind.PRIMITIVE


def is_array(annotation: Any, /) -> bool:
    return classify(annotation) is TypeKind.ARRAY


def is_composed(annotation: Any, /) -> bool:
    return classify(annotation) is TypeKind.COMPOSED


def element_type(annotation: Any, /) -> Any | None:
    """
    Get the declared element type of an array annotation, or `None` if it has none:

    - `list[Item]` -> `Item`
    - `tuple[Item, ...]` -> `Item`
    - `tuple[Item, Item]` -> `Item` (all elements must share a type)
    - `list`, `list[Any]`, `tuple[int, str]` -> `None`
    """
    ann = Annotation(strip_optional(annotation))
    if not safe_issubclass(ann.concrete_type, ARRAY_TYPES):
        return None

    args = list(ann.args)
    if safe_issubclass(ann.concrete_type, tuple) and args and args[-1] is ...:
        args = args[:-1]

    if not args:
        return None

    first = args[0]
    if any(a != first for a in args[1:]):
        return None

    if Annotation(first).is_any:
        return None

    return first


def is_array_value(obj: Any, /) -> bool:
    """
    Check whether a value is array-shaped.
    """
    return isinstance(obj, ARRAY_TYPES)


def is_object_value(obj: Any, /) -> bool:
    """
    Check whether a value is object-shaped, i.e. a JSON object.
    """
    return isinstance(obj, Mapping)
