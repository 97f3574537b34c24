"""
Custom converters which take over mapping of a single property in both directions.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Protocol, runtime_checkable

__all__ = [
    "CustomConverter",
    "BaseCustomConverter",
    "FuncConverter",
]


@runtime_checkable
class CustomConverter(Protocol):
    """
    Anything providing `from_json()` and `to_json()`.

    `from_json()` receives `UNDEFINED` if the property's key is absent from the JSON
    object. `to_json()` is never called with `None` or `UNDEFINED`.
    """

    def from_json(self, obj: Any, /) -> Any: ...

    def to_json(self, obj: Any, /) -> Any: ...


class BaseCustomConverter[SerializedT, ValidatedT](ABC):
    """
    Base class to encapsulate bidirectional conversion of a property.

    Subclass with type parameters to document the serialized and validated types,
    then implement the abstract methods. The class itself can be passed as the
    converter; it doesn't need to be instantiated.
    """

    @classmethod
    @abstractmethod
    def from_json(cls, obj: SerializedT, /) -> ValidatedT:
        """
        Convert from the JSON representation.

        :param obj: Raw JSON value, or `UNDEFINED` if absent
        :return: Value to set on the instance
        """
        ...

    @classmethod
    @abstractmethod
    def to_json(cls, obj: ValidatedT, /) -> SerializedT:
        """
        Convert to the JSON representation.

        :param obj: Property value
        :return: JSON-compatible value
        """
        ...


@dataclass(frozen=True)
class FuncConverter[SerializedT, ValidatedT]:
    """
    Converter built from a pair of functions.
    """

    from_func: Callable[[SerializedT], ValidatedT]
    """
    Function converting from JSON.
    """

    to_func: Callable[[ValidatedT], SerializedT]
    """
    Function converting to JSON.
    """

    def from_json(self, obj: SerializedT, /) -> ValidatedT:
        return self.from_func(obj)

    def to_json(self, obj: ValidatedT, /) -> SerializedT:
        return self.to_func(obj)
