"""Canopy: incremental layout and rendering of wide, lazily expanded trees."""

__version__ = "0.1.0"

from .backing import EXPANDED_ATTR, BackingNode, StaticNode
from .config import LayoutConfig
from .connectors import ConnectorRole, Connectors
from .context import LayoutContext
from .events import (
    EventEmitter,
    LayoutEvent,
    ListEventEmitter,
    NodeCollapsed,
    NodeExpanded,
    RepresentationRefreshed,
    TreeRedrawn,
)
from .node import NodeState, VisualNode
from .render import Point, draw_node
from .scheduler import AsyncioScheduler, Scheduler, TaskQueue
from .surface import (
    CLICK,
    PRESS,
    Element,
    MemoryElement,
    MemorySurface,
    PointerEvent,
    Surface,
)
from .tree import TreeHandle, build

__all__ = [
    "__version__",
    "AsyncioScheduler",
    "BackingNode",
    "CLICK",
    "ConnectorRole",
    "Connectors",
    "EXPANDED_ATTR",
    "Element",
    "EventEmitter",
    "LayoutConfig",
    "LayoutContext",
    "LayoutEvent",
    "ListEventEmitter",
    "MemoryElement",
    "MemorySurface",
    "NodeCollapsed",
    "NodeExpanded",
    "NodeState",
    "PRESS",
    "Point",
    "PointerEvent",
    "RepresentationRefreshed",
    "Scheduler",
    "StaticNode",
    "Surface",
    "TaskQueue",
    "TreeHandle",
    "TreeRedrawn",
    "VisualNode",
    "build",
    "draw_node",
]
