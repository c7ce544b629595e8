"""Shared test helpers for canopy tests.

This module provides reusable backing nodes and a small harness for
building trees on an in-memory surface with an explicit task queue.
"""

from canopy import (
    CLICK,
    PRESS,
    LayoutConfig,
    ListEventEmitter,
    MemorySurface,
    PointerEvent,
    StaticNode,
    TaskQueue,
    build,
)

# =============================================================================
# Backing Nodes
# =============================================================================


class CountingNode(StaticNode):
    """A static node that counts how often it is queried."""

    def __init__(self, label, children=None):
        super().__init__(label, children)
        self.get_children_calls = 0
        self.representations_created = 0

    def get_children(self):
        self.get_children_calls += 1
        return super().get_children()

    def create_representation(self, surface):
        self.representations_created += 1
        return super().create_representation(surface)


class VersionedNode(StaticNode):
    """A static node whose content changes when its version is bumped."""

    def __init__(self, label, children=None):
        super().__init__(label, children)
        self.version = 1

    def create_representation(self, surface):
        return surface.create_element(text=f"{self.label} v{self.version}")


class SlottedNode:
    """A backing node that cannot carry the remembered expansion attribute."""

    __slots__ = ("label", "children")

    def __init__(self, label, children=None):
        self.label = label
        self.children = list(children or [])

    def get_children(self):
        return list(self.children)

    def create_representation(self, surface):
        return surface.create_element(text=self.label)


class NoChildrenNode:
    """A backing node missing get_children."""

    def create_representation(self, surface):
        return surface.create_element(text="broken")


def leaf(label):
    return StaticNode(label)


def two_leaves():
    """Root with two leaf children."""
    return StaticNode("root", [leaf("a"), leaf("b")])


def with_grandchild():
    """Root with a child holding one grandchild, and a leaf child."""
    return StaticNode("root", [StaticNode("a", [leaf("g")]), leaf("b")])


def wide_tree():
    """A three level tree with uneven fan-out."""
    return StaticNode(
        "root",
        [
            StaticNode("a", [leaf("a0"), leaf("a1"), leaf("a2")]),
            StaticNode("b", [StaticNode("b0", [leaf("b00"), leaf("b01")])]),
            leaf("c"),
        ],
    )


# =============================================================================
# Harness
# =============================================================================


class Harness:
    """A tree drawn on a fresh MemorySurface with a TaskQueue scheduler."""

    def __init__(self, root, config=None):
        self.surface = MemorySurface()
        self.container = self.surface.create_container()
        self.queue = TaskQueue()
        self.emitter = ListEventEmitter()
        self.config = config if config is not None else LayoutConfig()
        self.handle = build(
            self.container,
            root,
            config=self.config,
            scheduler=self.queue,
            emitter=self.emitter,
        )

    @property
    def root(self):
        return self.handle.root

    def click(self, node, modifier=False):
        return node.representation.dispatch(PointerEvent(CLICK, modifier=modifier))

    def press(self, node, modifier=False):
        return node.representation.dispatch(PointerEvent(PRESS, modifier=modifier))


def walk(node):
    """Yield node and all materialized descendants, depth-first."""
    yield node
    for child in node.children:
        yield from walk(child)
