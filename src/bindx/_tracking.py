"""Dependency tracking engine: the heart of bindx.

Uses a contextvar to publish the Binding that is currently evaluating its
path. Any ReactiveProperty read while the slot is occupied records that
Binding in the property's Dep.

The slot only ever holds one occupant and is filled exclusively through the
active() guard, which restores the previous occupant on every exit path.

Notification depth: Dep.notify() passes nest whenever a reaction writes
reactive state. Unbounded by default; set_max_notify_depth() turns on a guard.
"""

from __future__ import annotations

import contextvars
import weakref
from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator

from bindx.errors import NotificationDepthError

if TYPE_CHECKING:
    from bindx.binding import Binding

# Weak reference to the Binding presently evaluating, or None.
_active_binding: contextvars.ContextVar[weakref.ref[Binding] | None] = contextvars.ContextVar(
    "active_binding", default=None
)

# Nesting depth of Dep.notify() passes on the current call stack.
_notify_depth: int = 0

# None means unbounded.
_max_notify_depth: int | None = None


@contextmanager
def active(binding: Binding) -> Iterator[Binding]:
    """Publish binding as the active binding for the duration of the block."""
    token = _active_binding.set(weakref.ref(binding))
    try:
        yield binding
    finally:
        _active_binding.reset(token)


def current() -> Binding | None:
    """The Binding currently evaluating, if any."""
    ref = _active_binding.get()
    return ref() if ref is not None else None


def set_max_notify_depth(limit: int | None) -> None:
    """Limit how deeply notification passes may nest.

    A reaction that writes the property it watches otherwise recurses until
    the interpreter's stack gives out. With a limit set, the pass that would
    exceed it raises NotificationDepthError instead. Pass None to remove it.
    """
    global _max_notify_depth
    if limit is not None and limit < 1:
        raise ValueError(f"notify depth limit must be positive, got {limit}")
    _max_notify_depth = limit


def get_max_notify_depth() -> int | None:
    return _max_notify_depth


@contextmanager
def notifying() -> Iterator[int]:
    """Count one nested notification pass. Yields the new depth."""
    global _notify_depth
    if _max_notify_depth is not None and _notify_depth >= _max_notify_depth:
        raise NotificationDepthError(_max_notify_depth)
    _notify_depth += 1
    try:
        yield _notify_depth
    finally:
        _notify_depth -= 1
