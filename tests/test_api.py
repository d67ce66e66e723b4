"""Tests for FastAPI endpoints."""

import pytest
from fastapi.testclient import TestClient

from main import app

client = TestClient(app)


SAMPLE_TRACE = {
    "nodes": [{"id": "A"}, {"id": "B"}, {"id": "C"}],
    "edges": [
        {"from": "A", "to": "B", "weight": 4},
        {"from": "A", "to": "C", "weight": 1},
        {"from": "C", "to": "B", "weight": 1},
    ],
    "source": "A",
    "destination": "B",
    "algorithm": "dijkstra",
}


@pytest.fixture
def clean_workspace():
    client.post("/api/workspace/reset")
    client.delete("/api/workspace")
    client.put("/api/workspace/algorithm", json={"algorithm": "dijkstra"})
    yield
    client.post("/api/workspace/reset")
    client.delete("/api/workspace")


def test_root():
    resp = client.get("/")
    assert resp.status_code == 200
    data = resp.json()
    assert data["name"] == "PathTrace"
    assert data["status"] == "running"


def test_algorithms():
    resp = client.get("/api/algorithms")
    assert resp.status_code == 200
    assert resp.json()["algorithms"] == ["dijkstra", "bellman-ford"]


def test_trace_dijkstra():
    resp = client.post("/api/trace", json=SAMPLE_TRACE)
    assert resp.status_code == 200
    data = resp.json()
    assert data["total"] == len(data["steps"])
    assert data["steps"][0]["tag"] == "init"

    final = data["steps"][-1]
    assert final["tag"] == "complete"
    assert final["path"] == ["A", "C", "B"]
    assert final["distances"]["B"] == 2
    assert final["activeEdges"] == [["A", "C"], ["C", "B"]]


def test_trace_rejects_negative_weight_for_dijkstra():
    payload = dict(SAMPLE_TRACE)
    payload["edges"] = SAMPLE_TRACE["edges"][:2] + [{"from": "C", "to": "B", "weight": -1}]
    resp = client.post("/api/trace", json=payload)
    assert resp.status_code == 400

    payload["algorithm"] = "bellman-ford"
    resp = client.post("/api/trace", json=payload)
    assert resp.status_code == 200
    assert resp.json()["steps"][-1]["distances"]["B"] == 0


def test_trace_negative_cycle():
    payload = {
        "nodes": [{"id": "A"}, {"id": "B"}],
        "edges": [
            {"from": "A", "to": "B", "weight": 1},
            {"from": "B", "to": "A", "weight": -3},
        ],
        "source": "A",
        "destination": "B",
        "algorithm": "bellman-ford",
    }
    resp = client.post("/api/trace", json=payload)
    assert resp.status_code == 200
    final = resp.json()["steps"][-1]
    assert final["tag"] == "negative-cycle"
    assert final["edge"] == {"from": "A", "to": "B", "weight": 1}


def test_trace_missing_destination():
    payload = dict(SAMPLE_TRACE)
    payload["destination"] = None
    resp = client.post("/api/trace", json=payload)
    assert resp.status_code == 400


def test_trace_unknown_algorithm():
    payload = dict(SAMPLE_TRACE)
    payload["algorithm"] = "a-star"
    resp = client.post("/api/trace", json=payload)
    assert resp.status_code == 400


def test_workspace_authoring_and_playback(clean_workspace):
    ids = [client.post("/api/workspace/nodes", json={"x": i, "y": i}).json()["id"] for i in range(3)]
    assert ids == ["N0", "N1", "N2"]

    resp = client.post(
        "/api/workspace/edges",
        json={"source": "N0", "target": "N1", "weight": "4", "direction": "bi"},
    )
    assert resp.status_code == 201
    assert resp.json() == [
        {"from": "N0", "to": "N1", "weight": 4},
        {"from": "N1", "to": "N0", "weight": 4},
    ]

    assert client.put("/api/workspace/source", json={"node_id": "N0"}).status_code == 200
    assert client.put("/api/workspace/destination", json={"node_id": "N1"}).status_code == 200

    resp = client.post("/api/workspace/run")
    assert resp.status_code == 200
    playback = resp.json()["playback"]
    assert playback["index"] == 0
    assert playback["step"]["tag"] == "init"

    # editing is locked while playing
    assert client.post("/api/workspace/nodes", json={}).status_code == 409

    for _ in range(playback["total"]):
        resp = client.post("/api/workspace/next")
    state = resp.json()
    assert state["playback"]["finished"] is True
    assert state["playback"]["step"]["path"] == ["N0", "N1"]


def test_workspace_rejects_negative_weight(clean_workspace):
    client.post("/api/workspace/nodes", json={})
    client.post("/api/workspace/nodes", json={})
    resp = client.post(
        "/api/workspace/edges",
        json={"source": "N0", "target": "N1", "weight": "-2"},
    )
    assert resp.status_code == 400
    assert client.get("/api/workspace").json()["graph"]["edges"] == []


def test_workspace_run_without_selection(clean_workspace):
    resp = client.post("/api/workspace/run")
    assert resp.status_code == 400


def test_workspace_delete_node(clean_workspace):
    client.post("/api/workspace/nodes", json={})
    client.post("/api/workspace/nodes", json={})
    client.post(
        "/api/workspace/edges",
        json={"source": "N0", "target": "N1", "weight": 3, "direction": "bi"},
    )
    resp = client.delete("/api/workspace/nodes/N1")
    assert resp.status_code == 200
    assert resp.json()["removed_edges"] == 2

    resp = client.delete("/api/workspace/nodes/N1")
    assert resp.status_code == 404


def test_workspace_algorithm_switch(clean_workspace):
    resp = client.put("/api/workspace/algorithm", json={"algorithm": "bellman-ford"})
    assert resp.status_code == 200
    assert resp.json()["algorithm"] == "bellman-ford"

    client.post("/api/workspace/nodes", json={})
    client.post("/api/workspace/nodes", json={})
    client.post(
        "/api/workspace/edges",
        json={"source": "N0", "target": "N1", "weight": -1},
    )
    resp = client.put("/api/workspace/algorithm", json={"algorithm": "dijkstra"})
    assert resp.status_code == 400


@pytest.mark.parametrize("weight", [True, False, 2.5, [1]])
def test_workspace_rejects_non_integer_weight(clean_workspace, weight):
    client.post("/api/workspace/nodes", json={})
    client.post("/api/workspace/nodes", json={})
    resp = client.post(
        "/api/workspace/edges",
        json={"source": "N0", "target": "N1", "weight": weight},
    )
    assert resp.status_code == 400
    assert client.get("/api/workspace").json()["graph"]["edges"] == []


def test_trace_and_workspace_agree_on_integral_float(clean_workspace):
    payload = dict(SAMPLE_TRACE)
    payload["edges"] = [{"from": "A", "to": "B", "weight": 3.0}]
    resp = client.post("/api/trace", json=payload)
    assert resp.status_code == 200
    assert resp.json()["steps"][-1]["distance"] == 3

    client.post("/api/workspace/nodes", json={})
    client.post("/api/workspace/nodes", json={})
    resp = client.post(
        "/api/workspace/edges",
        json={"source": "N0", "target": "N1", "weight": 3.0},
    )
    assert resp.status_code == 201
    assert resp.json()[0]["weight"] == 3


def test_workspace_reports_reachable_nodes(clean_workspace):
    for _ in range(3):
        client.post("/api/workspace/nodes", json={})
    client.post("/api/workspace/edges", json={"source": "N0", "target": "N1", "weight": 1})
    assert client.get("/api/workspace").json()["reachable"] == []

    resp = client.put("/api/workspace/source", json={"node_id": "N0"})
    assert resp.json()["reachable"] == ["N0", "N1"]
