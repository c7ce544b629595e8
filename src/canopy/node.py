"""Visual nodes: the materialized part of a lazily expanded tree.

A VisualNode wraps one backing node. It snapshots the backing node's
children once, at construction, and only turns them into child VisualNodes
when expanded. Each node caches the width its subtree needs; any structural
change marks the cache dirty on the way up to the root, and the root then
redraws the whole materialized tree.
"""

from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Sequence

from .backing import EXPANDED_ATTR, BackingNode
from .connectors import ConnectorRole, Connectors
from .context import LayoutContext
from .events import NodeCollapsed, NodeExpanded, RepresentationRefreshed, TreeRedrawn
from .render import Point, draw_node
from .surface import CLICK, PRESS, Element, PointerEvent

logger = logging.getLogger(__name__)


class NodeState(Enum):
    """Expansion states of a visual node.

    Attributes:
        LEAF: The backing node has no children. Always drawn as expanded.
        COLLAPSED: Children exist in the snapshot but are not materialized.
        EXPANDED: Children are materialized as visual nodes.
    """

    LEAF = "leaf"
    COLLAPSED = "collapsed"
    EXPANDED = "expanded"


class VisualNode:
    """One visible position in the tree.

    Attributes:
        backing: The backing node. Queried, never mutated apart from the
            remembered expansion attribute.
        context: Collaborators shared by every node of the tree.
        parent: The parent node, used only to bubble invalidation.
        path: Position label such as "root/0/2", for events and logs.
        snapshot: The backing node's children as seen at construction.
        children: Materialized child nodes; empty unless expanded.
        expanded: True for leaves and for nodes expanded since their last collapse.
        representation: The node's visible content element.
        connectors: Lazily created connector bars owned by this node.
        last_container: Container of the most recent draw.
        last_origin: Origin of the most recent draw.
        redraw_count: Number of redraw passes run from this node.
    """

    def __init__(
        self,
        backing: BackingNode,
        context: LayoutContext,
        parent: VisualNode | None = None,
        index: int = 0,
    ):
        self.backing = backing
        self.context = context
        self.parent = parent
        self.path = "root" if parent is None else f"{parent.path}/{index}"
        self.snapshot: Sequence[BackingNode] = tuple(backing.get_children())
        self.children: list[VisualNode] = []
        self.expanded: bool = not self.snapshot
        self.representation: Element | None = None
        self.connectors = Connectors(context.surface)
        self.last_container: Element | None = None
        self.last_origin: Point | None = None
        self.redraw_count: int = 0
        self._required_width: float | None = None

        self.create_representation()

        if getattr(backing, EXPANDED_ATTR, False):
            self.expand()

    def __repr__(self) -> str:
        return f"VisualNode(path={self.path!r}, state={self.state.value})"

    @property
    def state(self) -> NodeState:
        if not self.snapshot:
            return NodeState.LEAF
        return NodeState.EXPANDED if self.expanded else NodeState.COLLAPSED

    def create_representation(self) -> Element:
        """Create the representation and wire it to this node.

        The backing node's content gets a child-count indicator appended and
        the click and press listeners attached. Nothing else about it is
        altered.
        """
        surface = self.context.surface
        element = self.backing.create_representation(surface)
        element.append(surface.create_element("children", text=str(len(self.snapshot))))
        element.add_listener(CLICK, self.on_click)
        element.add_listener(PRESS, self.on_press)
        self.representation = element
        return element

    def expand(self, recursive: bool = False) -> None:
        """Materialize one child node per snapshot entry.

        Expanding a node that already has children keeps them as they are.
        With recursive=True the whole subtree below is expanded depth-first,
        including below children that already existed. The caller is
        responsible for not doing this on huge subtrees, and for calling
        invalidate() afterwards.

        Args:
            recursive: Whether to expand every descendant as well.
        """
        if self.children:
            logger.debug(f"{self.path} is already expanded, keeping its children")
        else:
            self.children = [
                VisualNode(child, self.context, self, index)
                for index, child in enumerate(self.snapshot)
            ]

        if recursive:
            for child in self.children:
                child.expand(recursive=True)

        self.expanded = True
        self._remember_expansion()
        self.context.emit(
            NodeExpanded(path=self.path, child_count=len(self.children), recursive=recursive)
        )

    def collapse(self, remove_self: bool = False) -> None:
        """Destroy the materialized subtree below this node.

        Args:
            remove_self: Also destroy this node's own representation and
                parent link, as done for every descendant of a collapsing node.
                A destroyed representation no longer delivers pointer input.
        """
        if remove_self:
            if self.representation is not None:
                self.representation.destroy()
            self.connectors.discard(ConnectorRole.PARENT_LINK)
        self.connectors.discard(ConnectorRole.CHILD_STEM, ConnectorRole.HORIZONTAL_SPAN)

        for child in self.children:
            child.collapse(remove_self=True)
        self.children = []

        self._required_width = None
        self.expanded = not self.snapshot
        self._remember_expansion()
        self.context.emit(NodeCollapsed(path=self.path, remove_self=remove_self))

    def _remember_expansion(self) -> None:
        try:
            setattr(self.backing, EXPANDED_ATTR, self.expanded)
        except AttributeError:
            logger.debug(f"{self.backing!r} cannot remember its expansion state")

    def invalidate(self) -> None:
        """Mark this node and its ancestors dirty, then redraw from the root."""
        node = self
        node._required_width = None
        while node.parent is not None:
            node = node.parent
            node._required_width = None
        node.redraw()

    def required_width(self) -> float:
        """Return the horizontal space this node's subtree needs."""
        if self._required_width is None:
            config = self.context.config
            width = sum(child.required_width() for child in self.children)
            if self.children:
                width += config.margin_x * (len(self.children) - 1)
            self._required_width = max(width, config.min_node_width)
        return self._required_width

    def draw(self, container: Element, origin: Point = Point()) -> int:
        """Draw this node and its subtree; see render.draw_node."""
        return draw_node(self, container, origin)

    def redraw(self) -> None:
        """Replay the last draw with the same container and origin.

        Raises:
            RuntimeError: If the node was never drawn.
        """
        if self.last_container is None or self.last_origin is None:
            raise RuntimeError(f"Node {self.path} cannot redraw before its first draw")

        start = time.perf_counter()
        count = self.draw(self.last_container, self.last_origin)
        duration_ms = (time.perf_counter() - start) * 1000
        self.redraw_count += 1

        logger.debug(f"Full redraw of {count} nodes took {duration_ms:.1f}ms")
        self.context.emit(TreeRedrawn(path=self.path, node_count=count, duration_ms=duration_ms))

    def refresh_representation(self) -> None:
        """Swap in fresh content for this node, then for its subtree later.

        The node's own swap happens now and keeps the old class and position
        so it does not visibly jump. Its children are refreshed by a
        continuation on a later scheduler turn, against whatever children
        exist by then. The continuation is scheduled before the swap, so a
        scheduler that cannot accept it leaves the node untouched.
        """
        self.context.scheduler.call_soon(self._refresh_children)

        old = self.representation
        if old is not None and old.parent is not None:
            container = old.parent
            class_name = old.class_name
            position = {key: old.style[key] for key in ("left", "top") if key in old.style}
            old.destroy()

            element = self.create_representation()
            container.append(element)
            element.class_name = class_name
            element.style.update(position)
            self.context.emit(RepresentationRefreshed(path=self.path))

    def _refresh_children(self) -> None:
        for child in list(self.children):
            child.refresh_representation()

    def on_click(self, event: PointerEvent) -> None:
        """Expand a collapsed node, or collapse an expanded one on modified click."""
        if not self.expanded:
            start = time.perf_counter()
            self.expand(recursive=event.modifier)
            logger.debug(f"Expansion of {self.path} took {time.perf_counter() - start:.3f}s")
            self.invalidate()
        elif event.modifier:
            self.collapse(remove_self=False)
            self.invalidate()

    def on_press(self, event: PointerEvent) -> None:
        if event.modifier:
            event.prevent_default()
