"""
Utilities to inspect type annotations.
"""

from __future__ import annotations

from functools import cached_property
from types import EllipsisType, GenericAlias, NoneType, UnionType
from typing import (
    Annotated,
    Any,
    ClassVar,
    Literal,
    TypeAliasType,
    TypeVar,
    Union,
    cast,
    get_args,
    get_origin,
)

__all__ = [
    "ANY",
    "Annotation",
    "is_union",
    "unwrap_alias",
    "split_annotated",
    "normalize_annotation",
    "flatten_union",
    "strip_optional",
    "get_concrete_type",
]

LiteralType = type(Literal["sentinel"])


class Annotation:
    """
    Normalized view of an annotation.

    Unwraps `TypeAlias` and `Annotated` if applicable.
    """

    raw: Any
    """
    Original annotation after stripping `Annotated[]` if applicable. May be a generic
    type.
    """

    extras: tuple[Any, ...]
    """
    Annotation extras, if `Annotated[]` was passed.
    """

    origin: Any
    """
    Origin, non-`None` if annotation is a generic type.
    """

    args: tuple[Any, ...]
    """
    Generic type parameters.
    """

    concrete_type: type
    """
    Concrete (non-generic) type, determined based on annotation:

    - `Any`, `Literal` or anything which is not a type: `object`
    - `None`: `NoneType`
    - `Ellipsis`: `EllipsisType`
    - `Union`: `UnionType`
    - Generic type: `get_origin(annotation)`
    - Otherwise: annotation itself
    """

    def __init__(self, annotation: Any, /):
        raw, extras = split_annotated(unwrap_alias(annotation))
        raw = unwrap_alias(raw)

        self.raw = raw
        self.extras = extras
        self.origin = get_origin(raw)
        self.args = get_args(raw)
        self.concrete_type = get_concrete_type(raw)

    def __repr__(self) -> str:
        raw = f"{self.raw}"
        extras = f"extras={self.extras}"
        concrete_type = f"concrete_type={self.concrete_type}"
        return f"Annotation({", ".join((raw, extras, concrete_type))})"

    def __eq__(self, other: Any, /) -> bool:
        if not isinstance(other, Annotation):
            return False
        return self.raw == other.raw and self.extras == other.extras

    def __hash__(self) -> int:
        return hash(self.raw)

    @cached_property
    def arg_annotations(self) -> tuple[Annotation, ...]:
        """
        Annotation info for generic type parameters, not applicable to `Literal[]`.

        Evaluated lazily so recursive type aliases don't recurse forever.
        """
        if self.is_literal:
            return cast(tuple[Annotation, ...], ())
        return tuple(Annotation(a) for a in self.args)

    @property
    def is_union(self) -> bool:
        return self.concrete_type is UnionType

    @property
    def is_literal(self) -> bool:
        return self.origin is Literal

    @property
    def is_any(self) -> bool:
        return self.raw is Any or self.raw is object

    @property
    def is_class_var(self) -> bool:
        return self.raw is ClassVar or self.origin is ClassVar


def is_union(annotation: Any, /) -> bool:
    """
    Check whether annotation is a union, accommodating both `int | str`
    and `Union[int, str]`.
    """
    return isinstance(annotation, UnionType) or get_origin(annotation) is Union


def unwrap_alias(annotation: Any, /) -> Any:
    """
    If annotation is a `TypeAlias`, extract the corresponding definition.
    """
    if isinstance(annotation, TypeAliasType):
        return annotation.__value__
    elif isinstance(annotation, GenericAlias):
        # might have e.g.:
        # type MyType[T] = list[T]
        # unwrap_alias(MyType[T])
        origin = get_origin(annotation)
        if isinstance(origin, TypeAliasType):
            # have e.g. MyType[T], return list[T]
            return origin.__value__
    return annotation


def split_annotated(annotation: Any, /) -> tuple[Any, tuple[Any, ...]]:
    """
    If annotation is an `Annotated`, split it into the wrapped annotation and extras.
    """
    if get_origin(annotation) is Annotated:
        args = get_args(annotation)
        assert len(args)
        return args[0], tuple(args[1:])
    return annotation, ()


def normalize_annotation(annotation: Any, /) -> Any:
    """
    Fully normalize annotation: unwrap aliases and `Annotated`, discarding extras.
    """
    annotation_ = unwrap_alias(annotation)
    if get_origin(annotation_) is Annotated:
        annotation_, _ = split_annotated(annotation_)
        annotation_ = unwrap_alias(annotation_)  # Annotated[] might wrap an alias
    return annotation_


def flatten_union(annotation: Any, /) -> tuple[Any, ...]:
    """
    If annotation is a union, recursively flatten it into its constituent types;
    otherwise return the annotation as-is.

    Unwraps aliases at each recursion.
    """
    return tuple(_recurse_union(annotation))


def strip_optional(annotation: Any, /) -> Any:
    """
    Remove `None` from a union, e.g. `Item | None` -> `Item`.

    Unions of several other members are returned as a (normalized) union without
    `None`; a bare `None` is returned as `NoneType`.
    """
    members = [a for a in flatten_union(annotation) if a not in (None, NoneType)]
    if not members:
        return NoneType
    if len(members) == 1:
        return members[0]
    return Union[tuple(members)]


def get_concrete_type(annotation: Any, /) -> type:
    """
    Get concrete type of parameterized annotation, or `object` if the annotation is
    a `Literal`, `Any` or otherwise not a type (e.g. an unresolved forward
    reference).

    Unwraps aliases and `Annotated`.
    """
    annotation_ = normalize_annotation(annotation)
    concrete_type = get_origin(annotation_) or annotation_

    if concrete_type is Literal:
        return cast(type, LiteralType)

    if concrete_type is Any:
        return object

    if isinstance(concrete_type, TypeVar):
        concrete_type = concrete_type.__bound__ or object

    # convert singletons to respective type so isinstance() works as expected
    singleton_map = {None: NoneType, Ellipsis: EllipsisType, Union: UnionType}
    concrete_type = singleton_map.get(concrete_type, concrete_type)

    if not isinstance(concrete_type, type):
        return object

    return concrete_type


def _recurse_union(annotation: Any, /) -> list[Any]:
    args: list[Any] = []
    annotation_ = normalize_annotation(annotation)

    if is_union(annotation_):
        for a in get_args(annotation_):
            args += _recurse_union(a)
    else:
        args.append(annotation_)

    return args


ANY = Annotation(Any)
"""
Annotation encapsulating `Any`.
"""
