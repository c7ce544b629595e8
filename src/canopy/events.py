"""Event types for observing tree layout.

Events describe what happened to the visual tree (a node expanded, the
root redrew) and are delivered to an optional EventEmitter. Observers such
as the visualizer use them to learn when the surface changed.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Protocol


class EventEmitter(Protocol):
    """Protocol for objects that can receive layout events.

    Any object with an emit(LayoutEvent) method satisfies it.
    """

    def emit(self, event: "LayoutEvent") -> None:
        """Emit an event. Must not raise exceptions."""
        ...


def _now() -> datetime:
    """Get current UTC timestamp."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class LayoutEvent:
    """Base layout event.

    Subclasses fix event_type and override payload to expose their typed
    fields for serialization.
    """

    event_type: str
    path: str
    timestamp: datetime = field(default_factory=_now, init=False)

    @property
    def payload(self) -> dict[str, Any]:
        """Event-specific data as a dict for serialization."""
        return {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.event_type,
            "path": self.path,
            "timestamp": self.timestamp.isoformat(),
            **self.payload,
        }


@dataclass(frozen=True)
class NodeExpanded(LayoutEvent):
    """Emitted when a node materializes its children."""

    event_type: str = field(default="node_expanded", init=False)
    child_count: int = 0
    recursive: bool = False

    @property
    def payload(self) -> dict[str, Any]:
        return {"child_count": self.child_count, "recursive": self.recursive}


@dataclass(frozen=True)
class NodeCollapsed(LayoutEvent):
    """Emitted when a node discards its children."""

    event_type: str = field(default="node_collapsed", init=False)
    remove_self: bool = False

    @property
    def payload(self) -> dict[str, Any]:
        return {"remove_self": self.remove_self}


@dataclass(frozen=True)
class TreeRedrawn(LayoutEvent):
    """Emitted by the root after a full redraw pass."""

    event_type: str = field(default="tree_redrawn", init=False)
    node_count: int = 0
    duration_ms: float = 0.0

    @property
    def payload(self) -> dict[str, Any]:
        return {"node_count": self.node_count, "duration_ms": self.duration_ms}


@dataclass(frozen=True)
class RepresentationRefreshed(LayoutEvent):
    """Emitted when a node swaps in a freshly created representation."""

    event_type: str = field(default="representation_refreshed", init=False)


class ListEventEmitter:
    """A simple event emitter that collects events in a list.

    Useful for testing and debugging.
    """

    def __init__(self):
        self.events: list[LayoutEvent] = []

    def emit(self, event: LayoutEvent) -> None:
        """Append event to the list."""
        self.events.append(event)

    def of_type(self, event_type: str) -> list[LayoutEvent]:
        """Return the collected events with the given event_type."""
        return [event for event in self.events if event.event_type == event_type]

    def clear(self) -> None:
        """Remove all collected events."""
        self.events.clear()
