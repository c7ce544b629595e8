"""Backing node capability interface.

A backing node is the external domain object behind a visual node. The
layout engine queries it for children exactly once per visual node and asks
it to create the node's visible content. It is never mutated, apart from
the optional remembered-expansion attribute named by EXPANDED_ATTR.
"""

from __future__ import annotations

from typing import Protocol, Sequence

from .surface import Element, Surface

EXPANDED_ATTR = "canopy_expanded"


class BackingNode(Protocol):
    """Protocol for objects that can back a visual tree node."""

    def get_children(self) -> Sequence["BackingNode"]:
        """Return the children of this node, in display order."""
        ...

    def create_representation(self, surface: Surface) -> Element:
        """Create the visible content for this node on the given surface."""
        ...


class StaticNode:
    """A backing node over plain in-memory data.

    Attributes:
        label: Text shown in the node's representation.
        children: Child backing nodes, in display order.
    """

    def __init__(self, label: str, children: Sequence[BackingNode] | None = None):
        self.label = label
        self.children: list[BackingNode] = list(children) if children is not None else []

    def __repr__(self) -> str:
        return f"StaticNode({self.label!r}, children={len(self.children)})"

    def get_children(self) -> Sequence[BackingNode]:
        return list(self.children)

    def create_representation(self, surface: Surface) -> Element:
        return surface.create_element(text=self.label)
