"""Top-down placement of node representations and connector bars.

Nodes are left-aligned in the slot their subtree's required width reserves.
A parent's child stem drops from its horizontal center, the horizontal span
runs from the center of the first child to the center of the last child,
and each child gets a parent link rising from its own center up to the span.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .connectors import ConnectorRole
from .surface import Element

if TYPE_CHECKING:
    from .node import VisualNode


@dataclass(frozen=True)
class Point:
    """A position inside a container, in pixels."""

    x: float = 0
    y: float = 0


def _place(element: Element, container: Element, left: float, top: float) -> None:
    """Position element and attach it to container unless already attached there."""
    element.style["left"] = left
    element.style["top"] = top
    if element.parent is not container:
        container.append(element)


def draw_node(node: VisualNode, container: Element, origin: Point) -> int:
    """Draw node and its materialized subtree with its top-left corner at origin.

    Args:
        node: The node to draw.
        container: The element to attach representations and connectors to.
        origin: Top-left corner of the node's slot.

    Returns:
        The number of nodes drawn.
    """
    node.last_container = container
    node.last_origin = origin
    config = node.context.config

    element = node.representation
    element.class_name = "node" if node.expanded else "node collapsed"
    _place(element, container, origin.x, origin.y)

    children = node.children
    if not children:
        return 1

    center_x = origin.x + config.min_node_width / 2
    _place(
        node.connectors.get(ConnectorRole.CHILD_STEM),
        container,
        center_x,
        origin.y + config.node_height,
    )

    span = node.connectors.get(ConnectorRole.HORIZONTAL_SPAN)
    span.style["width"] = node.required_width() - children[-1].required_width()
    _place(span, container, center_x, origin.y + config.node_height + config.margin_y / 2)

    count = 1
    x = origin.x
    y = origin.y + config.node_height + config.margin_y
    for child in children:
        _place(
            child.connectors.get(ConnectorRole.PARENT_LINK),
            container,
            x + config.min_node_width / 2,
            y - config.margin_y / 2,
        )
        count += child.draw(container, Point(x, y))
        x += child.required_width() + config.margin_x
    return count
