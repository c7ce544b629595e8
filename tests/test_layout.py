"""Tests for required width computation."""

import pytest

from canopy import LayoutConfig, StaticNode

from .helpers import Harness, leaf, two_leaves, walk, wide_tree, with_grandchild


class TestRequiredWidth:
    """Test the bottom-up width fold."""

    def test_collapsed_root_has_minimum_width(self):
        harness = Harness(two_leaves())
        assert harness.root.required_width() == 75

    def test_leaf_root_has_minimum_width(self):
        harness = Harness(leaf("alone"))
        assert harness.root.required_width() == 75

    def test_two_leaf_children(self):
        """Root with two minimum-width leaves needs both plus one margin."""
        harness = Harness(two_leaves())
        harness.root.expand()
        harness.root.invalidate()

        assert harness.root.required_width() == 2 * 75 + 10

    def test_single_grandchild_does_not_widen(self):
        harness = Harness(with_grandchild())
        harness.root.expand()
        harness.root.invalidate()
        first = harness.root.children[0]

        first.expand()
        first.invalidate()

        assert first.required_width() == 75
        assert harness.root.required_width() == 160

    def test_width_grows_with_wide_descendants(self):
        harness = Harness(wide_tree())
        harness.root.expand(recursive=True)
        harness.root.invalidate()
        a, b, c = harness.root.children

        assert a.required_width() == 3 * 75 + 2 * 10
        assert b.required_width() == 2 * 75 + 10
        assert c.required_width() == 75
        assert harness.root.required_width() == 245 + 160 + 75 + 2 * 10

    def test_every_node_matches_fold(self):
        harness = Harness(wide_tree())
        harness.root.expand(recursive=True)
        harness.root.invalidate()

        for node in walk(harness.root):
            widths = [child.required_width() for child in node.children]
            expected = sum(widths) + 10 * (len(widths) - 1) if widths else 0
            assert node.required_width() == max(75, expected)
            assert node.required_width() >= 75

    def test_custom_config(self):
        config = LayoutConfig(min_node_width=40, margin_x=4)
        harness = Harness(StaticNode("root", [leaf(str(i)) for i in range(5)]), config)
        harness.root.expand()
        harness.root.invalidate()

        assert harness.root.required_width() == 5 * 40 + 4 * 4

    def test_width_is_cached_until_invalidated(self):
        harness = Harness(two_leaves())
        assert harness.root.required_width() == 75

        # Expanding alone leaves the cache alone; invalidate() clears it
        harness.root.expand()
        assert harness.root.required_width() == 75

        harness.root.invalidate()
        assert harness.root.required_width() == 160

    def test_collapse_marks_width_dirty(self):
        harness = Harness(two_leaves())
        harness.root.expand()
        harness.root.invalidate()
        assert harness.root.required_width() == 160

        harness.root.collapse()
        assert harness.root.required_width() == 75


class TestLayoutConfig:
    """Test layout configuration values."""

    def test_defaults(self):
        config = LayoutConfig()
        assert config.min_node_width == 75
        assert config.node_height == 80
        assert config.margin_x == 10
        assert config.margin_y == 20

    def test_scaled(self):
        config = LayoutConfig().scaled(2)
        assert config == LayoutConfig(
            min_node_width=150, node_height=160, margin_x=20, margin_y=40
        )

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"min_node_width": 0},
            {"node_height": -1},
            {"margin_x": -1},
            {"margin_y": -0.5},
        ],
    )
    def test_rejects_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            LayoutConfig(**kwargs)

    def test_is_immutable(self):
        config = LayoutConfig()
        with pytest.raises(AttributeError):
            config.margin_x = 3
