"""Layout configuration for tree drawing."""

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class LayoutConfig:
    """Geometry constants for one tree instance.

    Every node of a tree shares the config it was built with, so several
    independently scaled trees can coexist.

    Attributes:
        min_node_width: Width of a node box, and the minimum width of any subtree.
        node_height: Height of a node box.
        margin_x: Horizontal gap between sibling subtrees.
        margin_y: Vertical gap between a node and its children.
    """

    min_node_width: float = 75
    node_height: float = 80
    margin_x: float = 10
    margin_y: float = 20

    def __post_init__(self):
        if self.min_node_width <= 0:
            raise ValueError(f"min_node_width must be positive, got {self.min_node_width}")
        if self.node_height <= 0:
            raise ValueError(f"node_height must be positive, got {self.node_height}")
        if self.margin_x < 0 or self.margin_y < 0:
            raise ValueError(
                f"Margins must not be negative, got margin_x={self.margin_x}, "
                f"margin_y={self.margin_y}"
            )

    def scaled(self, factor: float) -> "LayoutConfig":
        """Return a copy with every dimension multiplied by factor."""
        return replace(
            self,
            min_node_width=self.min_node_width * factor,
            node_height=self.node_height * factor,
            margin_x=self.margin_x * factor,
            margin_y=self.margin_y * factor,
        )
