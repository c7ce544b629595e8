#!/usr/bin/env python3
"""Example printing the computed layout of a small tree.

Builds a tree on an in-memory surface, expands it the way a user would by
clicking, and prints where every element ended up.

Usage:
    python examples/print_layout.py
"""

import logging

from canopy import (
    CLICK,
    ListEventEmitter,
    MemorySurface,
    PointerEvent,
    StaticNode,
    TaskQueue,
    build,
)


def make_tree() -> StaticNode:
    return StaticNode(
        "world",
        [
            StaticNode("europe", [StaticNode("paris"), StaticNode("rome"), StaticNode("oslo")]),
            StaticNode("asia", [StaticNode("tokyo")]),
            StaticNode("oceania"),
        ],
    )


def main():
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    surface = MemorySurface()
    container = surface.create_container()
    emitter = ListEventEmitter()
    handle = build(container, make_tree(), scheduler=TaskQueue(), emitter=emitter)

    # Ctrl+click the root to expand everything below it
    handle.root.representation.dispatch(PointerEvent(CLICK, modifier=True))

    print(f"{'class':<18} {'left':>6} {'top':>6} {'width':>6}  text")
    for element in container.children:
        style = element.style
        width = style.get("width", "")
        print(
            f"{element.class_name:<18} {style['left']:>6.1f} {style['top']:>6.1f} "
            f"{width:>6}  {element.text}"
        )

    print()
    for event in emitter.events:
        print(event.to_dict())


if __name__ == "__main__":
    main()
