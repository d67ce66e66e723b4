"""Tests for BellmanFordTracer — passes, early exit and negative cycles."""

import pytest

from app.core.errors import InvalidInput
from app.core.graph import Edge, Graph
from app.core.steps import (
    IterationEndStep,
    NegativeCycleStep,
    ShowEdgesStep,
    SkipStep,
    UpdateStep,
)
from app.solver.bellman_ford import BellmanFordTracer


def _make_graph(node_ids, edges):
    g = Graph()
    for node_id in node_ids:
        g.add_node(node_id=node_id)
    for source, target, weight in edges:
        g.add_edge(source, target, weight)
    return g


def _example_two():
    """A → B (4), A → C (1), C → B (-1)."""
    return _make_graph("ABC", [("A", "B", 4), ("A", "C", 1), ("C", "B", -1)])


def test_example_two_converges():
    steps = BellmanFordTracer().trace(_example_two(), "A", "B")
    final = steps.final

    assert final.tag == "complete"
    assert final.distances == {"A": 0, "B": 0, "C": 1}
    assert final.distance == 0
    assert final.path == ("A", "C", "B")
    assert final.active_edges == (("A", "C"), ("C", "B"))


def test_example_two_step_tags():
    steps = BellmanFordTracer().trace(_example_two(), "A", "B")
    assert steps.tags() == [
        "show-edges",
        "init",
        "iteration-start",
        "update",
        "update",
        "update",
        "iteration-end",
        "iteration-start",
        "no-update",
        "no-update",
        "no-update",
        "iteration-end",
        "complete",
    ]


def test_show_edges_lists_every_edge_once():
    show = BellmanFordTracer().trace(_example_two(), "A", "B")[0]
    assert isinstance(show, ShowEdgesStep)
    assert show.iteration == 0
    assert show.edges == (Edge("A", "B", 4), Edge("A", "C", 1), Edge("C", "B", -1))
    assert show.message == "Graph has 3 edges: A→B(4), A→C(1), C→B(-1)"


def test_update_step_carries_edge_context():
    update = BellmanFordTracer().trace(_example_two(), "A", "B")[5]
    assert isinstance(update, UpdateStep)
    assert update.iteration == 1
    assert update.edge == Edge("C", "B", -1)
    assert update.edge_number == 3
    assert update.updated == "B"
    assert update.previous_distance == 4
    assert update.active_edges == (("C", "B"),)
    assert "B distance updated from 4 to 0" in update.message


def test_iteration_end_records_relaxation():
    ends = BellmanFordTracer().trace(_example_two(), "A", "B").of_tag("iteration-end")
    assert [e.updated for e in ends] == [True, False]
    assert all(isinstance(e, IterationEndStep) for e in ends)
    assert "can terminate early" in ends[-1].message


def test_skip_when_edge_source_unreached():
    g = _make_graph("ABC", [("B", "C", 2), ("A", "B", 1)])
    steps = BellmanFordTracer().trace(g, "A", "C")
    skip = steps[3]
    assert isinstance(skip, SkipStep)
    assert skip.edge == Edge("B", "C", 2)
    assert skip.edge_number == 1
    assert "source B unreachable" in skip.message
    assert steps.final.distance == 3


def test_at_most_v_minus_one_passes():
    # chain with edges listed backwards needs every pass
    g = _make_graph("ABCD", [("C", "D", 1), ("B", "C", 1), ("A", "B", 1)])
    steps = BellmanFordTracer().trace(g, "A", "D")
    starts = steps.of_tag("iteration-start")
    assert [s.iteration for s in starts] == [1, 2, 3]
    assert steps.final.distance == 3


def test_example_three_negative_cycle():
    g = _make_graph("AB", [("A", "B", 1), ("B", "A", -3)])
    steps = BellmanFordTracer().trace(g, "A", "B")
    final = steps.final

    assert isinstance(final, NegativeCycleStep)
    assert steps.outcome == "negative-cycle"
    assert "complete" not in steps.tags()
    assert final.edge == Edge("A", "B", 1)
    assert final.active_edges == (("A", "B"),)
    assert set(final.cycle) == {"A", "B"}
    assert "Negative cycle detected!" in final.message


@pytest.mark.parametrize("source, destination", [("A", "B"), ("B", "A"), ("A", "A"), ("B", "B")])
def test_example_three_any_endpoints(source, destination):
    g = _make_graph("AB", [("A", "B", 1), ("B", "A", -3)])
    steps = BellmanFordTracer().trace(g, source, destination)
    assert steps.final.tag == "negative-cycle"


def test_unreachable_negative_cycle_is_ignored():
    g = _make_graph("ABCD", [("A", "B", 2), ("C", "D", 1), ("D", "C", -5)])
    steps = BellmanFordTracer().trace(g, "A", "B")
    assert steps.final.tag == "complete"
    assert steps.final.distances["C"] is None
    assert steps.final.path == ("A", "B")


def test_example_four_no_edges():
    g = _make_graph("AB", [])
    steps = BellmanFordTracer().trace(g, "A", "B")
    final = steps.final
    assert final.tag == "complete"
    assert final.path == ()
    assert final.distances["B"] is None
    assert "No path exists" in final.message


def test_single_node_runs_no_passes():
    g = _make_graph("A", [])
    steps = BellmanFordTracer().trace(g, "A", "A")
    assert steps.tags() == ["show-edges", "init", "complete"]
    assert steps.final.path == ("A",)


def test_cycle_recovery_longer_cycle():
    g = _make_graph(
        "SABC",
        [("S", "A", 1), ("A", "B", 1), ("B", "C", 1), ("C", "A", -4)],
    )
    final = BellmanFordTracer().trace(g, "S", "C").final
    assert final.tag == "negative-cycle"
    assert set(final.cycle) == {"A", "B", "C"}


@pytest.mark.parametrize(
    "source, destination",
    [(None, "B"), ("A", None), ("A", "Z")],
)
def test_rejects_bad_endpoints(source, destination):
    with pytest.raises(InvalidInput):
        BellmanFordTracer().trace(_example_two(), source, destination)


def test_earlier_steps_keep_their_distances():
    steps = BellmanFordTracer().trace(_example_two(), "A", "B")
    assert steps[1].distances["B"] is None
    assert steps[3].distances["B"] == 4
    assert steps.final.distances["B"] == 0
