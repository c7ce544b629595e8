#!/usr/bin/env python3
"""Example serving a filesystem directory as an expandable tree.

Directories are listed only when their node is expanded, so even a huge
tree opens instantly. Click a collapsed node to expand it, ctrl+click to
expand its whole subtree, and ctrl+click an expanded node to collapse it.

Usage:
    python examples/directory_tree.py ~/projects --port 8000
"""

import argparse
from pathlib import Path

import uvicorn

from canopy import LayoutConfig
from canopy.visualizer import server


class PathNode:
    """Backing node over a filesystem path."""

    def __init__(self, path: Path):
        self.path = path

    def __repr__(self) -> str:
        return f"PathNode({str(self.path)!r})"

    def get_children(self):
        # Symlinked directories are shown as leaves to keep the tree acyclic.
        if self.path.is_symlink() or not self.path.is_dir():
            return []
        try:
            entries = sorted(self.path.iterdir(), key=lambda p: (not p.is_dir(), p.name))
        except PermissionError:
            return []
        return [PathNode(entry) for entry in entries]

    def create_representation(self, surface):
        name = self.path.name or str(self.path)
        return surface.create_element(text=name + ("/" if self.path.is_dir() else ""))


def main():
    parser = argparse.ArgumentParser(description="Browse a directory as a wide tree")
    parser.add_argument("root", nargs="?", default=".", help="Directory to browse")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--scale", type=float, default=1.0, help="Layout scale factor")
    args = parser.parse_args()

    root = PathNode(Path(args.root).expanduser().resolve())
    server.configure(root, LayoutConfig().scaled(args.scale))

    print(f"Serving {root.path} at http://{args.host}:{args.port}/")
    uvicorn.run(server.app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
