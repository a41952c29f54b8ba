"""Textual integration for bindx. Opt-in: requires textual.

Widgets declare binding sites with declare(); a TextualDirector walks a
widget tree and turns those sites into Bindings against an installed graph.
The App forwards widget messages to TextualDirector.handle() so edits and
events flow back into the graph.

Guard + NoMatches handling live here, not at callsites. Site declarations
and pause state are module-owned; widgets and apps are never mutated.
"""

from __future__ import annotations

import logging
import weakref
from contextlib import contextmanager
from typing import Any, Callable, Iterator

from textual.css.query import NoMatches

from bindx.director import BindingDirector, BindingSite

logger = logging.getLogger("bindx.textual")

# widget -> [(name, expression), ...]; entries vanish with their widget.
_declarations: weakref.WeakKeyDictionary[Any, list[tuple[str, str]]] = weakref.WeakKeyDictionary()

# Keyed by id(app) so multiple apps work in tests.
_paused_apps: set[int] = set()


def declare(widget: Any, name: str, expression: str) -> Any:
    """Declare a binding site on widget. Returns widget, for use in compose().

    Usage:
        yield declare(Input(id="name"), "model", "user.name")
        yield declare(Static(), "text", "Hello {{ user.name }}")
        yield declare(Button("Save"), "on:pressed", "save")
    """
    _declarations.setdefault(widget, []).append((name, expression))
    return widget


def declared(widget: Any) -> list[tuple[str, str]]:
    return list(_declarations.get(widget, ()))


@contextmanager
def pause(app):
    """Suspend widget reactions during widget replacement."""
    key = id(app)
    _paused_apps.add(key)
    try:
        yield
    finally:
        _paused_apps.discard(key)


def is_safe(app) -> bool:
    """Is the widget tree in a queryable state?"""
    return app.is_running and id(app) not in _paused_apps


def message_name(message: Any) -> str:
    """Event name of a Textual message: Input.Changed -> "changed"."""
    return type(message).__name__.lower()


class TextualDirector(BindingDirector):
    """Director over a Textual widget tree.

    model widgets (Input, Switch, ...) get widget.value; html and text
    widgets (Static, Label, ...) get widget.update(content).
    """

    def __init__(self, app, root: Any, methods: dict[str, Callable] | None = None) -> None:
        super().__init__(root, methods)
        self.app = app
        # Keyed by the widget itself; entries vanish with their widget.
        self._value_listeners: weakref.WeakKeyDictionary[Any, list[Callable[[Any], None]]] = (
            weakref.WeakKeyDictionary()
        )
        self._event_listeners: weakref.WeakKeyDictionary[
            Any, dict[str, list[Callable[[Any], None]]]
        ] = weakref.WeakKeyDictionary()

    def walk(self, tree) -> Iterator[Any]:
        yield tree
        yield from tree.walk_children()

    def sites(self, node) -> Iterator[BindingSite]:
        for name, expression in declared(node):
            yield BindingSite.parse(node, name, expression)

    def set_value(self, node, value) -> None:
        node.value = value

    def set_content(self, node, content) -> None:
        node.update(str(content))

    def listen_value(self, node, callback) -> None:
        self._value_listeners.setdefault(node, []).append(callback)

    def listen_event(self, node, event, callback) -> None:
        self._event_listeners.setdefault(node, {}).setdefault(event, []).append(callback)

    def guard(self, reaction):
        """Skip while paused or not running; swallow NoMatches only."""
        app = self.app

        def _guarded(value):
            if not is_safe(app):
                return
            try:
                reaction(value)
            except NoMatches:
                logger.debug("widget gone, skipped update to %r", value)

        return _guarded

    def handle(self, message) -> bool:
        """Route a widget message into the graph. Returns whether anything used it.

        Call from the App:
            def on_input_changed(self, event):
                self.director.handle(event)
        """
        control = getattr(message, "control", None)
        if control is None:
            return False
        name = message_name(message)
        handled = False
        if name == "changed":
            for callback in list(self._value_listeners.get(control, ())):
                callback(message.value)
                handled = True
        for callback in list(self._event_listeners.get(control, {}).get(name, ())):
            callback(message)
            handled = True
        return handled
