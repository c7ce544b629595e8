"""Render surface abstraction for tree drawing.

The layout engine never talks to a concrete UI toolkit. It consumes the
structural protocols defined here: an element that can be attached to and
detached from a container, carries a class name and absolute position/width
styling, and delivers pointer events to registered listeners.

MemorySurface is a complete in-memory implementation. It is what the
visualizer serves to browsers and what the tests draw into.
"""

from __future__ import annotations

import itertools
import weakref
from dataclasses import dataclass, field
from typing import Any, Callable, Protocol

PRESS = "press"
CLICK = "click"


@dataclass
class PointerEvent:
    """A pointer input delivered by the render surface.

    Attributes:
        kind: Either "press" or "click".
        modifier: Whether the modifier key was held.
        default_prevented: Set by listeners that suppress the surface's
            default behavior (text selection on press).
    """

    kind: str
    modifier: bool = False
    default_prevented: bool = field(default=False, init=False)

    def prevent_default(self) -> None:
        self.default_prevented = True


Listener = Callable[[PointerEvent], None]


class Element(Protocol):
    """Protocol for drawable elements.

    An element is also a container: the tree container, a node's
    representation, and connector bars all share this interface.
    """

    parent: "Element | None"
    class_name: str
    style: dict[str, float]

    def append(self, child: "Element") -> None:
        """Attach child as the last child of this element."""
        ...

    def detach(self) -> None:
        """Remove this element from its parent, if attached."""
        ...

    def clear(self) -> None:
        """Detach every child of this element."""
        ...

    def add_listener(self, kind: str, callback: Listener) -> None:
        """Subscribe callback to pointer events of the given kind."""
        ...

    def destroy(self) -> None:
        """Detach this element for good and stop delivering events to it."""
        ...


class Surface(Protocol):
    """Protocol for element factories."""

    def create_element(self, class_name: str = "", text: str = "") -> Element:
        """Create a new, detached element."""
        ...


class MemoryElement:
    """An element held entirely in memory.

    Attributes:
        element_id: Identifier unique within the owning surface.
        surface: The surface that created this element.
        text: Text content of the element.
        children: Attached child elements, in order.
    """

    def __init__(self, surface: MemorySurface, element_id: str, class_name: str, text: str):
        self.surface = surface
        self.element_id = element_id
        self.class_name = class_name
        self.text = text
        self.style: dict[str, float] = {}
        self.parent: MemoryElement | None = None
        self.children: list[MemoryElement] = []
        self.listeners: dict[str, list[Listener]] = {}

    def __repr__(self) -> str:
        return f"MemoryElement(id={self.element_id!r}, class={self.class_name!r}, text={self.text!r})"

    def append(self, child: MemoryElement) -> None:
        if child is self:
            raise ValueError("Cannot append an element to itself")
        if child.parent is not None:
            child.detach()
        child.parent = self
        self.children.append(child)

    def detach(self) -> None:
        if self.parent is None:
            return
        self.parent.children.remove(self)
        self.parent = None

    def clear(self) -> None:
        for child in list(self.children):
            child.detach()

    def add_listener(self, kind: str, callback: Listener) -> None:
        self.listeners.setdefault(kind, []).append(callback)

    def destroy(self) -> None:
        """Detach this element and unregister it and its descendants.

        A destroyed element keeps no listeners and can no longer be reached
        through MemorySurface.get() or dispatch().
        """
        self.detach()
        for element in self.walk():
            element.listeners.clear()
            self.surface.forget(element)

    def dispatch(self, event: PointerEvent) -> PointerEvent:
        """Deliver event to every listener registered for its kind."""
        for callback in list(self.listeners.get(event.kind, [])):
            callback(event)
        return event

    def walk(self):
        """Yield this element and all attached descendants, depth-first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-ready dictionary, including attached children."""
        return {
            "id": self.element_id,
            "class": self.class_name,
            "text": self.text,
            "style": dict(self.style),
            "children": [child.to_dict() for child in self.children],
        }


class MemorySurface:
    """Factory and registry for MemoryElement instances.

    Elements are tracked weakly, so discarded elements disappear from the
    registry once nothing references them. Destroyed elements are dropped
    at once.
    """

    def __init__(self, prefix: str = "e"):
        self._prefix = prefix
        self._ids = itertools.count(1)
        self._elements: weakref.WeakValueDictionary[str, MemoryElement] = (
            weakref.WeakValueDictionary()
        )

    def create_element(self, class_name: str = "", text: str = "") -> MemoryElement:
        element_id = f"{self._prefix}{next(self._ids)}"
        element = MemoryElement(self, element_id, class_name, text)
        self._elements[element_id] = element
        return element

    def forget(self, element: MemoryElement) -> None:
        """Remove element from the registry; unknown elements are ignored."""
        self._elements.pop(element.element_id, None)

    def create_container(self) -> MemoryElement:
        """Create a root element to draw a tree into."""
        return self.create_element("node-container")

    def get(self, element_id: str) -> MemoryElement:
        """Look up a live element by id.

        Raises:
            KeyError: If no live element has this id.
        """
        return self._elements[element_id]

    def dispatch(self, element_id: str, event: PointerEvent) -> PointerEvent:
        """Deliver a pointer event to the element with the given id."""
        return self.get(element_id).dispatch(event)
