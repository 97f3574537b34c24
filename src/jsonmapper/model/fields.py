from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import MISSING, dataclass
from typing import Any, Callable, overload

from ..converting import CustomConverter
from ..exceptions import MetadataError

__all__ = [
    "METADATA_KEY",
    "PropertyMetadata",
    "JsonProperty",
]

METADATA_KEY = "jsonmapper"
"""
Key under which `PropertyMetadata` is stored in a dataclass field's metadata.
"""


@dataclass(frozen=True, kw_only=True)
class PropertyMetadata:
    """
    Encapsulates mapping metadata for a property.
    """

    source_key: str | None = None
    """
    JSON key to read from when deserializing, and to write to when serializing if
    `output_key` is not set. Defaults to the property name.
    """

    nested_type: Any | None = None
    """
    Type to map a non-scalar value to; for arrays, the element type.
    """

    custom_converter: CustomConverter | None = None
    """
    Converter which fully overrides mapping of this property in both directions.
    """

    exclude_from_output: bool = False
    """
    Omit this property when serializing. Has no effect on deserializing.
    """

    output_key: str | None = None
    """
    JSON key to write to when serializing, taking precedence over `source_key`.
    """

    def __post_init__(self):
        for name in ("source_key", "output_key"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise MetadataError(
                    f"Property metadata '{name}' must be a string, got {type(value).__name__}: {value!r}"
                )

        if not isinstance(self.exclude_from_output, bool):
            raise MetadataError(
                f"Property metadata 'exclude_from_output' must be a bool, got {self.exclude_from_output!r}"
            )

        if self.custom_converter is not None and not isinstance(
            self.custom_converter, CustomConverter
        ):
            raise MetadataError(
                f"Custom converter must provide from_json() and to_json(): {self.custom_converter!r}"
            )

    @classmethod
    def from_declaration(
        cls, declaration: PropertyMetadata | Mapping[str, Any] | str, /
    ) -> PropertyMetadata:
        """
        Create metadata from a declaration, which is either a rename string or a
        record of metadata fields.

        :raises MetadataError: If the declaration is of any other type
        """
        if isinstance(declaration, PropertyMetadata):
            return declaration

        if isinstance(declaration, str):
            return cls(source_key=declaration)

        if isinstance(declaration, Mapping):
            unknown = set(declaration) - _FIELD_NAMES
            if unknown:
                raise MetadataError(
                    f"Unknown property metadata fields: {sorted(map(str, unknown))}"
                )
            return cls(**declaration)

        raise MetadataError(
            f"Property metadata must be a string or a mapping of metadata fields, got {type(declaration).__name__}: {declaration!r}"
        )

    @property
    def output_name(self) -> str | None:
        """
        Key to write to when serializing, if overridden.
        """
        return self.output_key or self.source_key


_FIELD_NAMES = frozenset(f.name for f in dataclasses.fields(PropertyMetadata))


@overload
def JsonProperty[T](
    metadata: PropertyMetadata | Mapping[str, Any] | str | None = None,
    /,
    *,
    default: T,
    source_key: str | None = None,
    nested_type: Any | None = None,
    custom_converter: CustomConverter | None = None,
    exclude_from_output: bool = False,
    output_key: str | None = None,
    init: bool = True,
    repr: bool = True,
    hash: bool | None = None,
    compare: bool = True,
) -> T: ...


@overload
def JsonProperty[T](
    metadata: PropertyMetadata | Mapping[str, Any] | str | None = None,
    /,
    *,
    default_factory: Callable[[], T],
    source_key: str | None = None,
    nested_type: Any | None = None,
    custom_converter: CustomConverter | None = None,
    exclude_from_output: bool = False,
    output_key: str | None = None,
    init: bool = True,
    repr: bool = True,
    hash: bool | None = None,
    compare: bool = True,
) -> T: ...


@overload
def JsonProperty(
    metadata: PropertyMetadata | Mapping[str, Any] | str | None = None,
    /,
    *,
    source_key: str | None = None,
    nested_type: Any | None = None,
    custom_converter: CustomConverter | None = None,
    exclude_from_output: bool = False,
    output_key: str | None = None,
    init: bool = True,
    repr: bool = True,
    hash: bool | None = None,
    compare: bool = True,
) -> Any: ...


def JsonProperty(
    metadata: Any = None,
    /,
    *,
    default: Any = MISSING,
    default_factory: Any = MISSING,
    source_key: str | None = None,
    nested_type: Any | None = None,
    custom_converter: CustomConverter | None = None,
    exclude_from_output: bool = False,
    output_key: str | None = None,
    init: bool = True,
    repr: bool = True,
    hash: bool | None = None,
    compare: bool = True,
) -> Any:
    """
    Create a new dataclass field carrying mapping metadata.

    Metadata can be passed positionally, either as a rename string or as a record
    (`PropertyMetadata` or a mapping of its fields), and/or as keyword arguments
    which take precedence over the positional record.

    :raises MetadataError: If the positional metadata is neither a string nor a record
    """
    overrides: dict[str, Any] = {
        k: v
        for k, v in (
            ("source_key", source_key),
            ("nested_type", nested_type),
            ("custom_converter", custom_converter),
            ("output_key", output_key),
        )
        if v is not None
    }
    if exclude_from_output:
        overrides["exclude_from_output"] = exclude_from_output

    if metadata is None:
        property_metadata = PropertyMetadata(**overrides)
    else:
        property_metadata = PropertyMetadata.from_declaration(metadata)
        if overrides:
            property_metadata = dataclasses.replace(property_metadata, **overrides)

    return dataclasses.field(
        default=default,
        default_factory=default_factory,
        init=init,
        repr=repr,
        hash=hash,
        compare=compare,
        metadata={METADATA_KEY: property_metadata},
    )
