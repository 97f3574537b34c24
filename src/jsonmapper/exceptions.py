"""
Exception classes.
"""

from __future__ import annotations

__all__ = [
    "MappingError",
    "MetadataError",
    "DocumentError",
]


class MappingError(Exception):
    """
    Base class for errors raised by this package.

    Mismatches between the shape of the data and the model are not errors: they
    resolve to `UNDEFINED` or `None`. Only mistakes in model declarations and
    unreadable documents are raised.
    """


class MetadataError(MappingError, TypeError):
    """
    Property metadata was declared with an invalid value, e.g. a number where a
    rename string or a mapping of metadata fields was expected.
    """


class DocumentError(MappingError, ValueError):
    """
    Document text could not be parsed, or a value cannot be represented in the
    document format.
    """
