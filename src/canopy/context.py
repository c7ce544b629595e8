"""Shared context for the nodes of one visual tree.

Every VisualNode of a tree holds the same LayoutContext. It is immutable
and handed from parent to child at construction.
"""

from dataclasses import dataclass

from .config import LayoutConfig
from .events import EventEmitter, LayoutEvent
from .scheduler import Scheduler
from .surface import Surface


@dataclass(frozen=True)
class LayoutContext:
    """Immutable per-tree collaborators.

    Attributes:
        config: Geometry constants for the tree.
        surface: Factory for representation and connector elements.
        scheduler: Where deferred refresh continuations run.
        emitter: Optional observer for layout events.
    """

    config: LayoutConfig
    surface: Surface
    scheduler: Scheduler
    emitter: EventEmitter | None = None

    def emit(self, event: LayoutEvent) -> None:
        """Emit an event if an emitter is configured."""
        if self.emitter is not None:
            self.emitter.emit(event)
