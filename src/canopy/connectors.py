"""Connector bars linking a node to its parent and children."""

from enum import Enum

from .surface import Element, Surface


class ConnectorRole(Enum):
    """Roles a connector bar can play for a node.

    Attributes:
        PARENT_LINK: Short vertical bar above the node, up to the parent's span.
        CHILD_STEM: Short vertical bar below the node, down to its children's span.
        HORIZONTAL_SPAN: Horizontal bar across the centers of the node's children.
    """

    PARENT_LINK = "parent_link"
    CHILD_STEM = "child_stem"
    HORIZONTAL_SPAN = "horizontal_span"


_CLASS_NAMES = {
    ConnectorRole.PARENT_LINK: "vertical",
    ConnectorRole.CHILD_STEM: "vertical",
    ConnectorRole.HORIZONTAL_SPAN: "horizontal",
}


class Connectors:
    """Lazily created connector elements owned by one node.

    An element is created on the first get() for its role and lives until
    discard() destroys and forgets it; the next get() creates a fresh one.
    """

    def __init__(self, surface: Surface):
        self._surface = surface
        self._elements: dict[ConnectorRole, Element] = {}

    def __contains__(self, role: ConnectorRole) -> bool:
        return role in self._elements

    def __len__(self) -> int:
        return len(self._elements)

    def get(self, role: ConnectorRole) -> Element:
        element = self._elements.get(role)
        if element is None:
            element = self._surface.create_element(_CLASS_NAMES[role])
            self._elements[role] = element
        return element

    def discard(self, *roles: ConnectorRole) -> None:
        for role in roles:
            element = self._elements.pop(role, None)
            if element is not None:
                element.destroy()
