"""Dep: the subscription registry owned by each reactive property.

A Dep remembers every Binding that read its property while evaluating, and
re-evaluates them when the property is written. There is no unsubscription:
Bindings accumulate for the lifetime of the property.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from bindx import _tracking

if TYPE_CHECKING:
    from bindx.binding import Binding

logger = logging.getLogger("bindx.dep")


class Dep:
    """Bindings depending on one reactive property, in recording order."""

    __slots__ = ("_subs",)

    def __init__(self) -> None:
        self._subs: list[Binding] = []

    @property
    def subscribers(self) -> tuple[Binding, ...]:
        """Every recording, duplicates included."""
        return tuple(self._subs)

    def record(self, binding: Binding) -> bool:
        """Record binding if it is the active binding. Returns whether it was."""
        if binding is None or _tracking.current() is not binding:
            return False
        self._subs.append(binding)
        return True

    def notify(self) -> None:
        """Re-evaluate every recorded Binding, each at most once per pass.

        Works on a snapshot: Bindings re-recorded while the pass runs are
        not visited again until the next write.
        """
        batch = list(dict.fromkeys(self._subs))
        with _tracking.notifying() as depth:
            logger.debug("notify depth=%d bindings=%d", depth, len(batch))
            for binding in batch:
                binding.reevaluate()

    def __len__(self) -> int:
        return len(self._subs)

    def __repr__(self) -> str:
        return f"Dep({len(self._subs)} recorded)"
