"""ViewModel: an installed data graph with computed properties and methods.

Top-level properties are aliased as attributes: vm.name reads through the
property's cell (tracked), vm.name = x writes through its setter. Computed
properties are recomputed on every read, so a Binding on a computed path
subscribes to whatever the computation reads.
"""

from __future__ import annotations

import functools
from typing import Any, Callable

from bindx.binding import Binding, Reaction, bind
from bindx.director import BindingDirector
from bindx.errors import UnknownMethodError
from bindx.observable import ReactiveProperty, install, unwrap
from bindx.path import resolve_read, resolve_write


class ComputedProperty(ReactiveProperty):
    """Read-only property whose value is fn(vm), evaluated on each read.

    It has no Dep of its own: Bindings reading it subscribe to whatever
    fn reads.
    """

    __slots__ = ("_fn", "_owner")

    def __init__(self, fn: Callable[[Any], Any], owner: Any) -> None:
        self._fn = fn
        self._owner = owner

    @property
    def dep(self) -> None:
        return None

    def get(self) -> Any:
        return self._fn(self._owner)

    def peek(self) -> Any:
        return self._fn(self._owner)

    def set(self, value: Any) -> None:
        raise AttributeError(f"computed property {self._fn.__name__!r} is read-only")

    def __repr__(self) -> str:
        return f"ComputedProperty({self._fn.__name__})"


class ViewModel:
    """Installed data, computed properties, methods and an optional director."""

    _INTERNAL = frozenset({"data", "methods", "director"})

    def __init__(
        self,
        data: dict[str, Any],
        *,
        computed: dict[str, Callable[[ViewModel], Any]] | None = None,
        methods: dict[str, Callable[..., Any]] | None = None,
        director: Callable[[ViewModel], BindingDirector] | None = None,
    ) -> None:
        object.__setattr__(self, "data", install(data))
        for key, fn in (computed or {}).items():
            if key in data:
                raise ValueError(f"computed property {key!r} collides with a data key")
            data[key] = ComputedProperty(fn, self)
        object.__setattr__(
            self,
            "methods",
            {name: functools.partial(fn, self) for name, fn in (methods or {}).items()},
        )
        object.__setattr__(self, "director", director(self) if director else None)

    # --- Paths ---

    def get(self, path: str) -> Any:
        return resolve_read(self.data, path)

    def set(self, path: str, value: Any) -> None:
        resolve_write(self.data, path, value)

    def update(self, values: dict[str, Any]) -> None:
        """Write several paths, one after another."""
        for path, value in values.items():
            self.set(path, value)

    def bind(self, path: str, reaction: Reaction) -> Binding:
        return bind(self.data, path, reaction)

    def method(self, name: str) -> Callable[..., Any]:
        try:
            return self.methods[name]
        except KeyError:
            raise UnknownMethodError(f"no method {name!r}") from None

    def mount(self, tree: Any) -> list[Binding]:
        """Compile tree with this ViewModel's director."""
        if self.director is None:
            raise RuntimeError("ViewModel has no director to mount with")
        return self.director.compile(tree)

    def snapshot(self) -> dict[str, Any]:
        """Plain copy of the data, computed properties included."""
        return unwrap(self.data)

    # --- Attribute aliasing ---

    def __getattr__(self, name: str) -> Any:
        data = self.__dict__.get("data")
        if data is not None and name in data:
            cell = data[name]
            return cell.get() if isinstance(cell, ReactiveProperty) else cell
        methods = self.__dict__.get("methods")
        if methods is not None and name in methods:
            return methods[name]
        raise AttributeError(f"{type(self).__name__!r} has no attribute {name!r}")

    def __setattr__(self, name: str, value: Any) -> None:
        if name not in self._INTERNAL and name in self.data:
            resolve_write(self.data, name, value)
        else:
            object.__setattr__(self, name, value)

    def __repr__(self) -> str:
        return f"ViewModel(keys={list(self.data)!r})"
