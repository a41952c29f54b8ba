"""Binding directors: turn binding sites in a widget tree into Bindings.

A director walks some external node tree, finds the binding sites each node
declares, and instantiates Bindings against an installed data graph. The
core knows nothing about nodes; a concrete director supplies the tree walk,
the site discovery and the hooks that touch nodes.

Built-in directives:
    model         two-way: node value follows the path, node edits write back
    html          node content follows the path
    text          "{{ path }}" placeholders in a template are kept rendered
    on:<event>    node event calls a named method
"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Iterable, Iterator, NamedTuple

from bindx.binding import Binding, Reaction
from bindx.errors import UnknownDirectiveError, UnknownMethodError
from bindx.path import resolve_read, resolve_write

logger = logging.getLogger("bindx.director")

_PLACEHOLDER = re.compile(r"\{\{(.+?)\}\}")

DIRECTIVE_PREFIX = "v-"


class BindingSite(NamedTuple):
    """One binding declaration on one node."""

    node: Any
    directive: str
    expression: str
    argument: str | None = None

    @classmethod
    def parse(cls, node: Any, name: str, expression: str) -> BindingSite:
        """Build a site from an attribute-style name: "model", "v-model", "v-on:click"."""
        if name.startswith(DIRECTIVE_PREFIX):
            name = name[len(DIRECTIVE_PREFIX):]
        directive, _, argument = name.partition(":")
        return cls(node, directive, expression, argument or None)


def placeholders(template: str) -> list[str]:
    """Paths named by "{{ path }}" placeholders, in order of appearance."""
    return [match.strip() for match in _PLACEHOLDER.findall(template)]


class BindingDirector:
    """Base director. Subclasses implement walk(), sites() and the node hooks."""

    def __init__(self, root: Any, methods: dict[str, Callable] | None = None) -> None:
        self.root = root
        self.methods: dict[str, Callable] = dict(methods or {})
        self.bindings: list[Binding] = []
        self._handlers: dict[str, Callable[[BindingSite], None]] = {
            "model": self._model,
            "html": self._html,
            "text": self._text,
            "on": self._on,
        }

    # --- Tree walking (subclass) ---

    def walk(self, tree: Any) -> Iterable[Any]:
        """Every node of tree, the tree itself included."""
        raise NotImplementedError

    def sites(self, node: Any) -> Iterable[BindingSite]:
        """Binding sites declared by node."""
        raise NotImplementedError

    # --- Node hooks (subclass) ---

    def set_value(self, node: Any, value: Any) -> None:
        raise NotImplementedError

    def set_content(self, node: Any, content: Any) -> None:
        raise NotImplementedError

    def listen_value(self, node: Any, callback: Callable[[Any], None]) -> None:
        """Arrange for callback(new_value) whenever the user edits node."""
        raise NotImplementedError

    def listen_event(self, node: Any, event: str, callback: Callable[[Any], None]) -> None:
        """Arrange for callback(event) whenever node emits event."""
        raise NotImplementedError

    def guard(self, reaction: Reaction) -> Reaction:
        """Wrap every reaction that touches a node. Identity by default."""
        return reaction

    # --- Compilation ---

    def register_directive(self, name: str, handler: Callable[[BindingSite], None]) -> None:
        self._handlers[name] = handler

    def compile(self, tree: Any) -> list[Binding]:
        """Apply every site found under tree. Returns the Bindings created."""
        start = len(self.bindings)
        count = 0
        for node in self.walk(tree):
            for site in self.sites(node):
                self.apply(site)
                count += 1
        created = self.bindings[start:]
        logger.info("Compiled %d sites into %d bindings", count, len(created))
        return created

    def apply(self, site: BindingSite) -> None:
        handler = self._handlers.get(site.directive)
        if handler is None:
            raise UnknownDirectiveError(f"no directive {site.directive!r} for {site.expression!r}")
        logger.debug("apply %s=%r on %r", site.directive, site.expression, site.node)
        handler(site)

    def bind(self, path: str, reaction: Reaction) -> Binding:
        binding = Binding(self.root, path, self.guard(reaction))
        self.bindings.append(binding)
        return binding

    def read(self, path: str) -> Any:
        return resolve_read(self.root, path)

    def write(self, path: str, value: Any) -> None:
        resolve_write(self.root, path, value)

    def method(self, name: str) -> Callable:
        try:
            return self.methods[name]
        except KeyError:
            raise UnknownMethodError(f"no method {name!r}") from None

    def render(self, template: str) -> str:
        """template with every placeholder replaced by the value at its path."""
        return _PLACEHOLDER.sub(lambda m: str(self.read(m.group(1).strip())), template)

    # --- Directives ---

    def _model(self, site: BindingSite) -> None:
        node, path = site.node, site.expression
        self.bind(path, lambda value: self.set_value(node, value))
        self.listen_value(node, lambda value: self.write(path, value))
        self.set_value(node, self.read(path))

    def _html(self, site: BindingSite) -> None:
        node, path = site.node, site.expression
        self.bind(path, lambda value: self.set_content(node, value))
        self.set_content(node, self.read(path))

    def _text(self, site: BindingSite) -> None:
        node, template = site.node, site.expression

        def rerender(_value: Any) -> None:
            self.set_content(node, self.render(template))

        for path in dict.fromkeys(placeholders(template)):
            self.bind(path, rerender)
        self.set_content(node, self.render(template))

    def _on(self, site: BindingSite) -> None:
        if not site.argument:
            raise UnknownDirectiveError(f"'on' needs an event name for {site.expression!r}")
        handler = self.method(site.expression)
        self.listen_event(site.node, site.argument, handler)


class StaticDirector(BindingDirector):
    """Director over nodes that carry their sites up front.

    Nodes are any objects; sites come from a mapping of node -> iterable of
    (name, expression) pairs, and children from a mapping of node -> nodes.
    Node hooks are plain callables, which is all a headless consumer needs.
    """

    def __init__(
        self,
        root: Any,
        declarations: dict[Any, Iterable[tuple[str, str]]],
        children: dict[Any, Iterable[Any]] | None = None,
        *,
        set_value: Callable[[Any, Any], None],
        set_content: Callable[[Any, Any], None] | None = None,
        methods: dict[str, Callable] | None = None,
    ) -> None:
        super().__init__(root, methods)
        self._declarations = declarations
        self._children = children or {}
        self._set_value = set_value
        self._set_content = set_content or set_value
        self._value_listeners: dict[Any, list[Callable[[Any], None]]] = {}
        self._event_listeners: dict[tuple[Any, str], list[Callable[[Any], None]]] = {}

    def walk(self, tree: Any) -> Iterator[Any]:
        yield tree
        for child in self._children.get(tree, ()):
            yield from self.walk(child)

    def sites(self, node: Any) -> Iterator[BindingSite]:
        for name, expression in self._declarations.get(node, ()):
            yield BindingSite.parse(node, name, expression)

    def set_value(self, node: Any, value: Any) -> None:
        self._set_value(node, value)

    def set_content(self, node: Any, content: Any) -> None:
        self._set_content(node, content)

    def listen_value(self, node: Any, callback: Callable[[Any], None]) -> None:
        self._value_listeners.setdefault(node, []).append(callback)

    def listen_event(self, node: Any, event: str, callback: Callable[[Any], None]) -> None:
        self._event_listeners.setdefault((node, event), []).append(callback)

    def input(self, node: Any, value: Any) -> None:
        """Simulate the user editing node."""
        for callback in list(self._value_listeners.get(node, ())):
            callback(value)

    def emit(self, node: Any, event: str, payload: Any = None) -> None:
        """Simulate node emitting event."""
        for callback in list(self._event_listeners.get((node, event), ())):
            callback(payload)
