"""Bindings: a path in the data graph plus a reaction to run when it changes.

Constructing a Binding reads its path once, silently, to seed the cached
value and subscribe to every property on the way. From then on, any write to
one of those properties re-evaluates the path; the reaction fires only when
the resolved value actually differs from the cached one.

Every evaluation walks the path under the active-binding guard, so the
Binding is recorded again in each Dep it touches. Subscriptions are rebuilt
on each evaluation, never narrowed.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from bindx import _tracking
from bindx.observable import same_value
from bindx.path import resolve_read, split_path

logger = logging.getLogger("bindx.binding")

Reaction = Callable[[Any], None]


class Binding:
    """A live association between a path and a reaction callback."""

    __slots__ = ("_root", "_path", "_reaction", "_value", "__weakref__")

    def __init__(self, root: Any, path: str, reaction: Reaction) -> None:
        split_path(path)
        self._root = root
        self._path = path
        self._reaction = reaction
        self._value = self.evaluate()
        logger.debug("bound %r = %r", path, self._value)

    @property
    def path(self) -> str:
        return self._path

    @property
    def root(self) -> Any:
        return self._root

    @property
    def value(self) -> Any:
        """Value observed by the last evaluation that changed it."""
        return self._value

    def evaluate(self) -> Any:
        """Resolve the path with this Binding active, subscribing to what it reads."""
        with _tracking.active(self):
            return resolve_read(self._root, self._path)

    def reevaluate(self) -> bool:
        """Re-resolve the path; run the reaction if the value changed.

        Returns whether the reaction ran.
        """
        new_value = self.evaluate()
        if same_value(self._value, new_value):
            return False
        logger.debug("%r changed: %r -> %r", self._path, self._value, new_value)
        self._reaction(new_value)
        self._value = new_value
        return True

    def __repr__(self) -> str:
        return f"Binding({self._path!r}, value={self._value!r})"


def bind(root: Any, path: str, reaction: Reaction) -> Binding:
    """Create a Binding on path. The reaction does not run for the initial read.

    Usage:
        data = install({"user": {"name": "Ann"}})
        seen = []

        bind(data, "user.name", seen.append)
        # seen == []: the first read is silent

        resolve_write(data, "user.name", "Bea")
        # seen == ["Bea"]
    """
    return Binding(root, path, reaction)
