from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from canopy import LayoutConfig, StaticNode
from canopy.visualizer import server


def _tree() -> StaticNode:
    return StaticNode(
        "root",
        [StaticNode("a", [StaticNode("a0")]), StaticNode("b")],
    )


def _nodes(snapshot: dict) -> list[dict]:
    return [el for el in snapshot["children"] if el["class"].split(" ")[0] == "node"]


@pytest.fixture()
def session(monkeypatch):
    fresh = server.TreeSession()
    monkeypatch.setattr(server, "session", fresh)
    return fresh


@pytest.fixture()
def client(session):
    with TestClient(server.app) as test_client:
        yield test_client


def test_health_unconfigured(client):
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["configured"] is False
    assert body["viewers"] == 0


def test_tree_requires_configuration(client):
    assert client.get("/api/tree").status_code == 404
    assert client.post("/api/refresh").status_code == 404


def test_tree_snapshot(session, client):
    session.configure(_tree())

    response = client.get("/api/tree")
    assert response.status_code == 200
    snapshot = response.json()
    assert snapshot["class"] == "node-container"

    nodes = _nodes(snapshot)
    assert len(nodes) == 1
    assert nodes[0]["class"] == "node collapsed"
    assert nodes[0]["text"] == "root"
    assert nodes[0]["children"][0]["text"] == "2"


def test_refresh_endpoint(session, client):
    session.configure(_tree())
    response = client.post("/api/refresh")
    assert response.status_code == 200
    assert response.json() == {"status": "refreshing"}


def test_index_page(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "/ws/viewer" in response.text


def test_viewer_click_expands(session, client):
    session.configure(_tree())

    with client.websocket_connect("/ws/viewer") as ws:
        message = ws.receive_json()
        assert message["type"] == "snapshot"
        root = _nodes(message["data"])[0]

        ws.send_json({"type": "click", "element_id": root["id"], "modifier": False})
        message = ws.receive_json()

        nodes = _nodes(message["data"])
        assert [node["text"] for node in nodes] == ["root", "a", "b"]
        assert nodes[0]["class"] == "node"
        assert nodes[1]["style"] == {"left": 0, "top": 100}


def test_viewer_modified_click_expands_recursively(session, client):
    session.configure(_tree())

    with client.websocket_connect("/ws/viewer") as ws:
        root = _nodes(ws.receive_json()["data"])[0]
        ws.send_json({"type": "click", "element_id": root["id"], "modifier": True})
        nodes = _nodes(ws.receive_json()["data"])

    assert sorted(node["text"] for node in nodes) == ["a", "a0", "b", "root"]
    assert session.handle.root.children[0].expanded is True


def test_unknown_element_is_ignored(session, client):
    session.configure(_tree())

    with client.websocket_connect("/ws/viewer") as ws:
        root = _nodes(ws.receive_json()["data"])[0]
        ws.send_json({"type": "click", "element_id": "nope", "modifier": False})
        ws.send_json({"type": "click", "element_id": root["id"], "modifier": False})
        message = ws.receive_json()

    assert len(_nodes(message["data"])) == 3


def test_viewer_refresh_message(session, client):
    session.configure(_tree())

    with client.websocket_connect("/ws/viewer") as ws:
        ws.receive_json()
        old_root = session.handle.root.representation
        ws.send_json({"type": "refresh"})
        message = ws.receive_json()

        assert message["type"] == "snapshot"
        assert session.handle.root.representation is not old_root
        root = _nodes(message["data"])[0]
        assert root["id"] == session.handle.root.representation.element_id

        # The next frame answers the click, not a second copy of the refresh
        ws.send_json({"type": "click", "element_id": root["id"], "modifier": False})
        nodes = _nodes(ws.receive_json()["data"])

    assert [node["text"] for node in nodes] == ["root", "a", "b"]


def test_viewer_press_sends_no_snapshot(session, client):
    session.configure(_tree())

    with client.websocket_connect("/ws/viewer") as ws:
        root = _nodes(ws.receive_json()["data"])[0]
        ws.send_json({"type": "press", "element_id": root["id"], "modifier": True})
        ws.send_json({"type": "click", "element_id": root["id"], "modifier": False})
        message = ws.receive_json()

    assert len(_nodes(message["data"])) == 3


def test_snapshot_carries_layout(session, client):
    session.configure(_tree(), LayoutConfig().scaled(2))

    with client.websocket_connect("/ws/viewer") as ws:
        message = ws.receive_json()
        root = _nodes(message["data"])[0]
        ws.send_json({"type": "click", "element_id": root["id"], "modifier": False})
        nodes = _nodes(ws.receive_json()["data"])

    assert message["layout"] == {
        "min_node_width": 150,
        "node_height": 160,
        "margin_x": 20,
        "margin_y": 40,
    }
    assert nodes[2]["style"] == {"left": 170, "top": 200}


def test_index_page_takes_geometry_from_snapshot(client):
    html = client.get("/").text
    assert "75px" not in html
    assert "layout.node_height" in html


def test_viewer_tracked(session, client):
    session.configure(_tree())

    with client.websocket_connect("/ws/viewer") as ws:
        ws.receive_json()
        assert client.get("/health").json()["viewers"] == 1
