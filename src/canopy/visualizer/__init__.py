"""Canopy Web Visualizer.

This package serves a lazily expanded tree to browsers.

To run the visualizer server with a directory tree:
    python examples/directory_tree.py .

Or, with a root installed by your own code:
    uvicorn canopy.visualizer.server:app --reload
"""

__all__: list[str] = []
