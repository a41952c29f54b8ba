"""Reactive graphs: data whose properties track their readers.

install() walks a data graph once and replaces the value stored under every
record key with a ReactiveProperty cell. Reading a cell while a Binding is
evaluating records that Binding in the cell's Dep; writing a different value
re-installs the new value and notifies the Dep.

Records are mutable mappings (normally dicts). Sequences (lists, tuples) are
walked element by element, but the sequence itself is not reactive: appending
or removing elements notifies nobody.
"""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any, Generic, TypeVar

from bindx import _tracking
from bindx.dep import Dep

T = TypeVar("T")

SEQUENCE_TYPES = (list, tuple)

# Immutable values compared by ==; everything else by identity.
PRIMITIVE_TYPES = (str, int, float, complex, bytes, bool, type(None))


def is_record(value: Any) -> bool:
    return isinstance(value, MutableMapping)


def is_sequence(value: Any) -> bool:
    return isinstance(value, SEQUENCE_TYPES)


def same_value(old: Any, new: Any) -> bool:
    """Strict comparison used by setters and Bindings.

    Primitives (str, int, float, bool, None, ...) of the exact same type
    compare with ==; everything else, records and sequences included, is the
    same only if it is the same object. So True is not 1, and an equal but
    distinct object counts as a change.
    """
    if old is new:
        return True
    if type(old) is not type(new) or not isinstance(old, PRIMITIVE_TYPES):
        return False
    return old == new


class ReactiveProperty(Generic[T]):
    """One intercepted record property: a value cell plus its Dep."""

    __slots__ = ("_value", "_dep")

    def __init__(self, value: T) -> None:
        self._value = value
        self._dep = Dep()

    @property
    def dep(self) -> Dep:
        return self._dep

    def get(self) -> T:
        """Read the value. If a Binding is evaluating, records it."""
        binding = _tracking.current()
        if binding is not None:
            self._dep.record(binding)
        return self._value

    def peek(self) -> T:
        """Read the value without recording anything."""
        return self._value

    def set(self, value: T) -> None:
        """Write a new value. Equal values are ignored."""
        if same_value(self._value, value):
            return
        install(value)
        self._value = value
        self._dep.notify()

    def __repr__(self) -> str:
        return f"ReactiveProperty({self._value!r})"


def install(root: T) -> T:
    """Make every property reachable from root reactive, in place.

    Nested values are installed before the key holding them is wrapped.
    Values that already are ReactiveProperty cells are left as they are.
    Returns root.
    """
    if is_record(root):
        for key in list(root):
            value = root[key]
            if isinstance(value, ReactiveProperty):
                continue
            install(value)
            root[key] = ReactiveProperty(value)
    elif is_sequence(root):
        for item in root:
            install(item)
    return root


def unwrap(value: Any) -> Any:
    """Plain deep copy of an installed graph, with every cell read through.

    Reads use peek(), so calling this inside an evaluation subscribes nothing.
    """
    if isinstance(value, ReactiveProperty):
        value = value.peek()
    if is_record(value):
        return {key: unwrap(item) for key, item in value.items()}
    if isinstance(value, list):
        return [unwrap(item) for item in value]
    if isinstance(value, tuple):
        return tuple(unwrap(item) for item in value)
    return value
