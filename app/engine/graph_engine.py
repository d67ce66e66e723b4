"""
GraphEngine — Top-level orchestrator.

Accepts a JSON graph payload, builds the Graph model, looks up the
tracer for the requested algorithm and returns the finished
StepSequence for an external renderer to play back.
"""

from __future__ import annotations

import logging
from typing import Any

from app.config import DEFAULT_ALGORITHM
from app.core.graph import Graph
from app.core.steps import StepSequence
from app.solver.registry import create_tracer, list_algorithms

logger = logging.getLogger(__name__)


class GraphEngine:
    """
    Main entry-point for trace computation.

    Each call builds its own graph, distance table and heap, so nothing
    is shared between runs.

    Usage
    -----
    >>> engine = GraphEngine()
    >>> steps = engine.run(graph_json, "A", "B", "dijkstra")
    >>> print(steps.final.path)
    """

    # ── Public API ─────────────────────────────────────────────────

    def run(
        self,
        graph_json: dict[str, Any],
        source: str | None,
        destination: str | None,
        algorithm: str = DEFAULT_ALGORITHM,
    ) -> StepSequence:
        """
        Parse a JSON graph payload and trace *algorithm* over it.

        Parameters
        ----------
        graph_json : dict
            Must contain "nodes" and "edges" keys (see Graph.from_dict).
        source, destination : str
            Node ids; both must be present in the graph.
        algorithm : str
            "dijkstra" or "bellman-ford".

        Raises
        ------
        InvalidInput (or a subclass) before any step is computed.
        """
        graph = Graph.from_dict(graph_json)
        return self.run_graph(graph, source, destination, algorithm)

    def run_graph(
        self,
        graph: Graph,
        source: str | None,
        destination: str | None,
        algorithm: str = DEFAULT_ALGORITHM,
    ) -> StepSequence:
        """Trace *algorithm* over an already-built graph."""
        tracer = create_tracer(algorithm)
        logger.info(
            "Tracing %s on %r from %s to %s", algorithm, graph, source, destination
        )
        # Endpoints are validated by the tracer.
        return tracer.trace(graph.copy(), source, destination)  # type: ignore[arg-type]

    @staticmethod
    def algorithms() -> list[str]:
        return list_algorithms()
