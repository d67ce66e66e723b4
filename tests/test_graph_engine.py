"""Tests for GraphEngine — end-to-end from a JSON graph payload."""

import pytest

from app.core.errors import InvalidInput, UnknownAlgorithm
from app.engine.graph_engine import GraphEngine


def test_dijkstra_on_sample(sample_json):
    """Shortest A→E route goes through C and F."""
    engine = GraphEngine()
    steps = engine.run(sample_json, "A", "E", "dijkstra")

    assert steps.algorithm == "dijkstra"
    assert steps.final.tag == "complete"
    assert steps.final.path == ("A", "C", "F", "E")
    assert steps.final.distance == 20


def test_bellman_ford_matches_dijkstra_on_sample(sample_json):
    engine = GraphEngine()
    bf = engine.run(sample_json, "A", "E", "bellman-ford").final
    dj = engine.run(sample_json, "A", "E", "dijkstra").final

    assert bf.path == dj.path
    assert bf.distance == dj.distance
    # Dijkstra stops early, so only compare what it finalized
    for entry in dj.permanent:
        assert bf.distances[entry.node] == entry.distance


def test_unknown_algorithm(sample_json):
    with pytest.raises(UnknownAlgorithm):
        GraphEngine().run(sample_json, "A", "E", "floyd-warshall")


def test_missing_source_rejected(sample_json):
    with pytest.raises(InvalidInput):
        GraphEngine().run(sample_json, None, "E", "bellman-ford")


def test_dangling_edge_rejected():
    payload = {"nodes": [{"id": "A"}], "edges": [{"from": "A", "to": "Q", "weight": 1}]}
    with pytest.raises(InvalidInput):
        GraphEngine().run(payload, "A", "A", "dijkstra")


def test_run_graph_does_not_share_state(sample_graph):
    engine = GraphEngine()
    first = engine.run_graph(sample_graph, "A", "E", "dijkstra")
    sample_graph.delete_node("F")
    second = engine.run_graph(sample_graph, "A", "E", "dijkstra")

    assert first.final.path == ("A", "C", "F", "E")
    assert "F" in first.final.distances
    assert second.final.path == ("A", "C", "D", "E")
    assert "F" not in second.final.distances


def test_algorithms():
    assert GraphEngine.algorithms() == ["dijkstra", "bellman-ford"]
