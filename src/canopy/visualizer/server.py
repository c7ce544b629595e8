"""Canopy Web Visualizer - FastAPI Backend.

This module hosts one lazily expanded tree on an in-memory surface and
serves it to browser viewers. Viewers receive element snapshots over a
WebSocket and send pointer input back, which drives expansion and
collapse exactly as a native render surface would.

Usage:
    uvicorn canopy.visualizer.server:app --reload

A root must be installed with configure() before viewers connect; see
examples/directory_tree.py.
"""

from __future__ import annotations

import asyncio
import json
import logging
from contextlib import asynccontextmanager
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.responses import HTMLResponse

from canopy.backing import BackingNode
from canopy.config import LayoutConfig
from canopy.events import LayoutEvent, RepresentationRefreshed
from canopy.scheduler import AsyncioScheduler
from canopy.surface import CLICK, PRESS, MemoryElement, MemorySurface, PointerEvent
from canopy.tree import TreeHandle, build

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@dataclass
class TreeSession:
    """Owns the hosted tree and the viewers watching it.

    Pointer input from any viewer mutates the single shared tree, and every
    viewer receives the resulting snapshot.
    """

    viewers: list[WebSocket] = field(default_factory=list)
    surface: MemorySurface | None = None
    container: MemoryElement | None = None
    handle: TreeHandle | None = None
    config: LayoutConfig | None = None
    _broadcast_pending: bool = False

    @property
    def configured(self) -> bool:
        return self.handle is not None

    def configure(self, root: BackingNode, config: LayoutConfig | None = None) -> None:
        """Build the tree for root on a fresh surface."""
        self.config = config if config is not None else LayoutConfig()
        self.surface = MemorySurface()
        self.container = self.surface.create_container()
        self.handle = build(
            self.container,
            root,
            surface=self.surface,
            config=self.config,
            scheduler=AsyncioScheduler(),
            emitter=self,
        )
        logger.info(f"Hosting tree rooted at {root!r}")

    def snapshot(self) -> dict[str, Any] | None:
        """Return the container's element tree, if a tree is hosted."""
        if self.container is None:
            return None
        return self.container.to_dict()

    def snapshot_message(self) -> dict[str, Any]:
        """Build the message viewers receive, with the geometry to draw it."""
        return {
            "type": "snapshot",
            "data": self.container.to_dict(),
            "layout": asdict(self.config),
        }

    def emit(self, event: LayoutEvent) -> None:
        """Schedule one broadcast for refresh swaps made on later loop turns."""
        if not isinstance(event, RepresentationRefreshed) or self._broadcast_pending:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        self._broadcast_pending = True
        loop.create_task(self._flush_broadcast())

    async def _flush_broadcast(self) -> None:
        self._broadcast_pending = False
        await self.broadcast_snapshot()

    async def connect_viewer(self, websocket: WebSocket) -> None:
        """Accept a new viewer connection and send it the current tree."""
        await websocket.accept()
        self.viewers.append(websocket)
        logger.info(f"Viewer connected. Total viewers: {len(self.viewers)}")
        if self.container is not None:
            await websocket.send_json(self.snapshot_message())

    def disconnect_viewer(self, websocket: WebSocket) -> None:
        """Remove a viewer connection."""
        if websocket in self.viewers:
            self.viewers.remove(websocket)
            logger.info(f"Viewer disconnected. Total viewers: {len(self.viewers)}")

    async def broadcast_snapshot(self) -> None:
        """Send the current tree to all connected viewers."""
        if self.container is None:
            return
        message = self.snapshot_message()
        disconnected = []
        for viewer in self.viewers:
            try:
                await viewer.send_json(message)
            except Exception:
                disconnected.append(viewer)

        for viewer in disconnected:
            self.disconnect_viewer(viewer)

    def handle_pointer(self, message: dict[str, Any]) -> bool:
        """Deliver a viewer's pointer message to the surface.

        Returns:
            True if the event reached a live element.
        """
        if self.surface is None:
            return False
        element_id = message.get("element_id")
        event = PointerEvent(kind=message["type"], modifier=bool(message.get("modifier")))
        try:
            self.surface.dispatch(element_id, event)
        except KeyError:
            logger.warning(f"Pointer event for unknown element: {element_id}")
            return False
        return True

    def refresh(self) -> bool:
        if self.handle is None:
            return False
        self.handle.refresh_representation()
        return True


# Global session
session = TreeSession()


def configure(root: BackingNode, config: LayoutConfig | None = None) -> None:
    """Install the tree served by the global app."""
    session.configure(root, config)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info("Canopy Visualizer starting...")
    yield
    logger.info("Canopy Visualizer shutting down...")


app = FastAPI(
    title="Canopy Visualizer",
    description="Interactive view of lazily expanded trees",
    version="0.1.0",
    lifespan=lifespan,
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "viewers": len(session.viewers),
        "configured": session.configured,
    }


@app.get("/api/tree")
async def get_tree():
    """Get the current element snapshot."""
    snapshot = session.snapshot()
    if snapshot is None:
        raise HTTPException(status_code=404, detail="No tree configured")
    return snapshot


@app.post("/api/refresh")
async def refresh_tree():
    """Recreate node content; descendants update on later loop turns."""
    if not session.refresh():
        raise HTTPException(status_code=404, detail="No tree configured")
    return {"status": "refreshing"}


@app.get("/", response_class=HTMLResponse)
async def index():
    """Serve the viewer page."""
    return HTMLResponse(content=VIEWER_HTML)


@app.websocket("/ws/viewer")
async def viewer_websocket(websocket: WebSocket):
    """WebSocket endpoint for browser viewers."""
    await session.connect_viewer(websocket)
    try:
        while True:
            data = await websocket.receive_text()
            message = json.loads(data)
            message_type = message.get("type")
            logger.debug(f"Viewer sent: {message}")

            if message_type == CLICK:
                if session.handle_pointer(message):
                    await session.broadcast_snapshot()
            elif message_type == PRESS:
                session.handle_pointer(message)
            elif message_type == "refresh":
                # Swaps are broadcast through emit
                if not session.refresh():
                    logger.warning("Refresh requested before a tree was configured")
            else:
                logger.warning(f"Ignoring viewer message: {message_type}")
    except WebSocketDisconnect:
        session.disconnect_viewer(websocket)
    except Exception as e:
        logger.error(f"Viewer error: {e}")
        session.disconnect_viewer(websocket)


VIEWER_HTML = """
<!DOCTYPE html>
<html>
<head>
    <title>Canopy Visualizer</title>
    <style>
        body { font-family: system-ui, sans-serif; margin: 0; padding: 20px; }
        .node-container { position: relative; }
        .node-container > div { position: absolute; }
        .node { border: 1px solid #64748b;
                box-sizing: border-box; overflow: hidden; cursor: pointer; font-size: 12px; }
        .node.collapsed { background: #e2e8f0; }
        .node .children { font-size: 10px; color: #64748b; }
        .vertical { width: 1px; background: #64748b; }
        .horizontal { height: 1px; background: #64748b; }
    </style>
</head>
<body>
    <div id="tree"></div>
    <script>
        const socket = new WebSocket(`ws://${location.host}/ws/viewer`);
        function render(data, layout) {
            const el = document.createElement("div");
            el.className = data.class;
            if (data.text) el.appendChild(document.createTextNode(data.text));
            for (const key of ["left", "top", "width"]) {
                if (key in data.style) el.style[key] = data.style[key] + "px";
            }
            for (const child of data.children) el.appendChild(render(child, layout));
            const kind = data.class.split(" ")[0];
            if (kind === "vertical") el.style.height = layout.margin_y / 2 + "px";
            if (kind !== "node") return el;
            el.style.width = layout.min_node_width + "px";
            el.style.height = layout.node_height + "px";
            for (const input of ["mousedown", "click"]) {
                el.addEventListener(input, (e) => {
                    if (input === "mousedown" && e.ctrlKey) e.preventDefault();
                    socket.send(JSON.stringify({
                        type: input === "click" ? "click" : "press",
                        element_id: data.id,
                        modifier: e.ctrlKey,
                    }));
                });
            }
            return el;
        }
        socket.onmessage = (message) => {
            const payload = JSON.parse(message.data);
            if (payload.type !== "snapshot") return;
            const tree = document.getElementById("tree");
            tree.replaceChildren(render(payload.data, payload.layout));
        };
    </script>
</body>
</html>
"""


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
