"""
Types used throughout package.
"""

from __future__ import annotations

from typing import Any, Self

__all__ = [
    "Undefined",
    "UNDEFINED",
]


class Undefined:
    """
    Marks the absence of data, as opposed to `None` which is a JSON `null`.

    Only a single instance exists; compare with `is`.
    """

    __instance: Undefined | None = None

    def __new__(cls) -> Self:
        if cls.__instance is None:
            cls.__instance = super().__new__(cls)
        return cls.__instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> Self:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> Self:
        _ = memo
        return self

    def __reduce__(self) -> str:
        return "UNDEFINED"


UNDEFINED = Undefined()
"""
Value of properties whose JSON key was absent, and result of mapping when there is
no data to map.
"""
