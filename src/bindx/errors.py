"""Exceptions raised by bindx.

Everything derives from BindxError. Each class also inherits the builtin a
caller would naturally catch (LookupError, ValueError, ...), so code that does
not know about bindx still handles them sensibly.
"""

from __future__ import annotations


class BindxError(Exception):
    """Base class for all bindx errors."""


class PathError(BindxError, LookupError):
    """A property path could not be used against the data graph."""

    def __init__(self, message: str, path: str) -> None:
        super().__init__(message)
        self.path = path


class MissingSegmentError(PathError, KeyError):
    """A path segment is absent, or its parent is not a record."""

    def __init__(self, path: str, segment: str, index: int) -> None:
        super().__init__(f"{path!r}: no {segment!r} at segment {index}", path)
        self.segment = segment
        self.index = index

    # KeyError.__str__ would repr() the message.
    __str__ = BindxError.__str__


class PathSyntaxError(PathError, ValueError):
    """The path string is not a dot-joined sequence of identifiers."""


class NotificationDepthError(BindxError, RecursionError):
    """Nested notification passes exceeded the configured limit."""

    def __init__(self, limit: int) -> None:
        super().__init__(f"notification nested deeper than {limit} passes")
        self.limit = limit


class UnknownDirectiveError(BindxError, LookupError):
    """A binding site names a directive the director does not handle."""


class UnknownMethodError(BindxError, AttributeError):
    """An event site or lookup names a method that was never registered."""
