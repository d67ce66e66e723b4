"""
DijkstraTracer — Dijkstra's algorithm with a lazily-updated min-heap,
recording a step for every extraction and every edge inspection.
"""

from __future__ import annotations

import logging

from app.config import DIJKSTRA
from app.core.errors import InvalidInput
from app.core.graph import Edge, EdgeKey, Graph
from app.core.state import DistanceTable, format_distance, is_shorter
from app.core.steps import (
    CompleteStep,
    Entry,
    ExtractStep,
    InitStep,
    NoUpdateStep,
    Step,
    StepSequence,
    UpdateStep,
)
from app.solver.interface import TracerInterface
from app.solver.priority_queue import MinHeap

logger = logging.getLogger(__name__)


class DijkstraTracer(TracerInterface):
    """
    Tracer for non-negative graphs.

    Stops as soon as the destination is extracted; nodes still in the
    tentative set at that point are never finalized.
    """

    name = DIJKSTRA

    # ── Public API ─────────────────────────────────────────────────

    def trace(self, graph: Graph, source: str, destination: str) -> StepSequence:
        self._validate(graph, source, destination)

        table = DistanceTable(graph.node_ids(), source)
        heap = MinHeap()
        permanent: dict[str, int] = {}
        steps: list[Step] = []

        heap.push(source, 0)
        steps.append(
            InitStep(
                **self._maps(table),
                current=None,
                permanent=(),
                tentative=heap.snapshot(),
                message="Initialize: Set source distance to 0, add to tentative set",
            )
        )

        while not heap.is_empty():
            current, _priority = heap.pop_min()

            # Lazy deletion: an older, more expensive entry for a finalized node
            if current in permanent:
                continue

            current_distance = table.distance(current)
            permanent[current] = current_distance
            outgoing = graph.outgoing(current)
            exploring = [e for e in outgoing if e.target not in permanent]

            steps.append(
                ExtractStep(
                    **self._maps(table),
                    current=current,
                    permanent=self._entries(permanent),
                    tentative=heap.snapshot(),
                    neighbors=tuple(e.target for e in outgoing),
                    active_edges=_unique_keys(exploring),
                    message=(
                        f"Move {current} from tentative to permanent "
                        f"(distance: {format_distance(current_distance)})"
                    ),
                )
            )
            logger.debug("Extracted %s at distance %s", current, current_distance)

            if current == destination:
                break

            for edge in exploring:
                steps.append(
                    self._relax(edge, current_distance, table, heap, permanent)
                )

        path = table.path_to(destination)
        dest_distance = table.distance(destination)
        if path:
            message = (
                f"Path found! Distance: {dest_distance}, "
                f"Path: {' → '.join(path)}"
            )
        else:
            message = "No path exists"

        steps.append(
            CompleteStep(
                **self._maps(table),
                path=tuple(path),
                distance=dest_distance,
                permanent=self._entries(permanent),
                tentative=(),
                active_edges=tuple(zip(path, path[1:])),
                message=message,
            )
        )

        logger.info(
            "Dijkstra %s→%s: %d steps, %d nodes finalized, distance=%s",
            source,
            destination,
            len(steps),
            len(permanent),
            format_distance(dest_distance),
        )
        return StepSequence(steps, self.name, source, destination)

    # ── Relaxation ─────────────────────────────────────────────────

    def _relax(
        self,
        edge: Edge,
        current_distance: int,
        table: DistanceTable,
        heap: MinHeap,
        permanent: dict[str, int],
    ) -> Step:
        """Inspect one edge out of the current node and build its step."""
        current, neighbor = edge.source, edge.target
        candidate = current_distance + edge.weight
        recorded = table.distance(neighbor)

        if is_shorter(candidate, recorded):
            table.relax(neighbor, candidate, via=current)
            heap.push(neighbor, candidate)
            return UpdateStep(
                **self._maps(table),
                updated=neighbor,
                previous_distance=recorded,
                current=current,
                permanent=self._entries(permanent),
                tentative=heap.snapshot(),
                active_edges=(edge.key,),
                message=(
                    f"Relax edge {current}→{neighbor}: Update distance to "
                    f"{candidate}, add to tentative set"
                ),
            )

        return NoUpdateStep(
            **self._maps(table),
            target=neighbor,
            candidate=candidate,
            current=current,
            permanent=self._entries(permanent),
            tentative=heap.snapshot(),
            active_edges=(edge.key,),
            message=(
                f"Edge {current}→{neighbor}: No improvement "
                f"({candidate} ≥ {format_distance(recorded)})"
            ),
        )

    # ── Helpers ────────────────────────────────────────────────────

    def _validate(self, graph: Graph, source: str, destination: str) -> None:
        self.check_endpoints(graph, source, destination)
        if not graph.edges:
            raise InvalidInput("The graph has no edges.")
        negative = [e for e in graph.edges if e.weight < 0]
        if negative:
            raise InvalidInput(
                "Dijkstra's algorithm requires non-negative edge weights; "
                f"found {', '.join(str(e) for e in negative)}."
            )

    @staticmethod
    def _entries(permanent: dict[str, int]) -> tuple[Entry, ...]:
        return tuple(Entry(node, dist) for node, dist in permanent.items())


def _unique_keys(edges: list[Edge]) -> tuple[EdgeKey, ...]:
    """Edge keys in stored order, parallel edges collapsed."""
    return tuple(dict.fromkeys(e.key for e in edges))
