"""
EdgeValidator — checks a user-proposed edge before it reaches the graph.

The authoring UI hands over the raw weight text, the endpoints and the
direction; the validator parses the weight, applies the rules of the
active algorithm and only then builds the edge(s).  A rejected edge
never touches the graph.
"""

from __future__ import annotations

import logging

from app.config import BIDIRECTIONAL, DIJKSTRA, DIRECTIONS, UNIDIRECTIONAL
from app.core.errors import (
    InvalidDirection,
    InvalidWeight,
    NegativeWeightNotAllowed,
)
from app.core.graph import Edge, Graph, parse_weight
from app.solver.registry import get_tracer_class

logger = logging.getLogger(__name__)


class EdgeValidator:
    """
    Validates weights and direction for the currently selected algorithm.

    Usage
    -----
    >>> v = EdgeValidator("dijkstra")
    >>> v.validate("4")
    4
    >>> v.validate("-1")          # raises NegativeWeightNotAllowed
    """

    def __init__(self, algorithm: str = DIJKSTRA) -> None:
        get_tracer_class(algorithm)
        self.algorithm = algorithm

    # ── Weight checks ──────────────────────────────────────────────

    @staticmethod
    def parse_weight(raw: object) -> int:
        """Parse *raw* into an integer weight (see app.core.graph.parse_weight)."""
        return parse_weight(raw)

    def validate(self, raw_weight: object) -> int:
        """Parse the weight and apply the algorithm-specific sign rule."""
        weight = self.parse_weight(raw_weight)
        if self.algorithm == DIJKSTRA and weight < 0:
            raise NegativeWeightNotAllowed(
                "Dijkstra's algorithm must have positive weight edges only."
            )
        return weight

    # ── Edge construction ──────────────────────────────────────────

    def build_edges(
        self,
        source: str,
        target: str,
        raw_weight: object,
        direction: str = UNIDIRECTIONAL,
    ) -> list[Edge]:
        """Validate everything first, then return one or two edges."""
        if direction not in DIRECTIONS:
            raise InvalidDirection(
                f"Unknown direction {direction!r}. Expected one of {list(DIRECTIONS)}."
            )
        weight = self.validate(raw_weight)
        edges = [Edge(source, target, weight)]
        if direction == BIDIRECTIONAL:
            edges.append(Edge(target, source, weight))
        return edges

    def apply(
        self,
        graph: Graph,
        source: str,
        target: str,
        raw_weight: object,
        direction: str = UNIDIRECTIONAL,
    ) -> list[Edge]:
        """
        Validate a proposed edge and insert it into *graph*.

        Returns the inserted edges.  On any failure the graph is left
        exactly as it was.
        """
        try:
            proposed = self.build_edges(source, target, raw_weight, direction)
        except InvalidWeight as exc:
            logger.warning("Rejected edge %s→%s: %s", source, target, exc)
            raise
        return graph.add_edge(source, target, proposed[0].weight, direction)

    # ── Algorithm switching ────────────────────────────────────────

    @staticmethod
    def check_algorithm_switch(graph: Graph, algorithm: str) -> None:
        """
        Refuse to select Dijkstra while the graph holds a negative edge.
        """
        get_tracer_class(algorithm)
        if algorithm == DIJKSTRA and graph.has_negative_weight():
            raise NegativeWeightNotAllowed(
                "Dijkstra's algorithm can only contain positive edge weight. "
                "Please clear before selecting"
            )
