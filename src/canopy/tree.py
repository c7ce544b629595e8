"""Entry point for drawing a lazily expanded tree into a container."""

import logging

from .backing import BackingNode
from .config import LayoutConfig
from .context import LayoutContext
from .events import EventEmitter
from .node import VisualNode
from .render import Point
from .scheduler import AsyncioScheduler, Scheduler
from .surface import Element, Surface

logger = logging.getLogger(__name__)


class TreeHandle:
    """Handle to a drawn tree.

    Attributes:
        root: The root visual node.
        container: The element the tree is drawn into.
    """

    def __init__(self, root: VisualNode, container: Element):
        self.root = root
        self.container = container

    def refresh_representation(self) -> None:
        """Recreate every node's content after the backing data changed.

        Use this when the content produced by backing nodes may differ but
        the structure did not. The root swaps immediately; descendants swap
        on later scheduler turns.
        """
        self.root.refresh_representation()


def build(
    container: Element,
    root: BackingNode,
    *,
    surface: Surface | None = None,
    config: LayoutConfig | None = None,
    scheduler: Scheduler | None = None,
    emitter: EventEmitter | None = None,
) -> TreeHandle:
    """Draw the tree rooted at a backing node into container.

    The container is emptied first. The root is drawn collapsed unless its
    backing node remembers being expanded.

    Args:
        container: Element to draw into.
        root: Backing node of the tree's root.
        surface: Element factory. Defaults to container.surface.
        config: Layout geometry. Defaults to LayoutConfig().
        scheduler: Where refresh continuations run. Defaults to an
            AsyncioScheduler, which needs a running loop by the time a
            refresh is requested; synchronous hosts pass a TaskQueue.
        emitter: Optional observer for layout events.

    Returns:
        A TreeHandle for the drawn tree.

    Raises:
        TypeError: If no surface is given and the container has none.
    """
    if surface is None:
        surface = getattr(container, "surface", None)
        if surface is None:
            raise TypeError("Container has no surface; pass surface= explicitly")

    context = LayoutContext(
        config=config if config is not None else LayoutConfig(),
        surface=surface,
        scheduler=scheduler if scheduler is not None else AsyncioScheduler(),
        emitter=emitter,
    )

    container.clear()
    container.class_name = "node-container"
    drawing_root = VisualNode(root, context)
    count = drawing_root.draw(container, Point(0, 0))
    logger.debug(f"Built tree with {count} visible nodes")
    return TreeHandle(drawing_root, container)
