"""
BellmanFordTracer — Bellman-Ford with early termination on convergence
and negative-cycle detection, recording a step for every edge of every
relaxation pass.
"""

from __future__ import annotations

import logging

from app.config import BELLMAN_FORD
from app.core.graph import Edge, Graph
from app.core.state import DistanceTable, format_distance, is_shorter
from app.core.steps import (
    CompleteStep,
    InitStep,
    IterationEndStep,
    IterationStartStep,
    NegativeCycleStep,
    NoUpdateStep,
    ShowEdgesStep,
    SkipStep,
    Step,
    StepSequence,
    UpdateStep,
)
from app.solver.interface import TracerInterface

logger = logging.getLogger(__name__)


class BellmanFordTracer(TracerInterface):
    """
    Tracer that tolerates negative weights.

    Runs at most ``|V| - 1`` passes over the edges in stored order and
    stops after the first pass that relaxes nothing.  One extra scan
    then decides between a ``negative-cycle`` and a ``complete`` ending.
    """

    name = BELLMAN_FORD

    # ── Public API ─────────────────────────────────────────────────

    def trace(self, graph: Graph, source: str, destination: str) -> StepSequence:
        self.check_endpoints(graph, source, destination)

        table = DistanceTable(graph.node_ids(), source)
        edges = list(graph.edges)
        steps: list[Step] = []

        steps.append(
            ShowEdgesStep(
                **self._maps(table),
                iteration=0,
                edges=tuple(edges),
                message=(
                    f"Graph has {len(edges)} edges: "
                    f"{', '.join(str(e) for e in edges)}"
                ),
            )
        )
        steps.append(
            InitStep(
                **self._maps(table),
                iteration=0,
                message=f"Initialize: Set distance[{source}] = 0, all others = ∞",
            )
        )

        passes = 0
        for iteration in range(1, len(graph.nodes)):
            passes = iteration
            relaxed = self._run_pass(iteration, edges, table, steps)
            logger.debug("Pass %d: relaxed=%s", iteration, relaxed)
            if not relaxed:
                break

        offending = self._find_relaxable_edge(edges, table)
        if offending is not None:
            cycle = table.cycle_through(offending.target, via=offending.source)
            steps.append(
                NegativeCycleStep(
                    **self._maps(table),
                    edge=offending,
                    cycle=tuple(cycle),
                    active_edges=(offending.key,),
                    message=(
                        f"Negative cycle detected! Edge {offending.source}→"
                        f"{offending.target} can still be relaxed. "
                        "Shortest paths undefined."
                    ),
                )
            )
            logger.info(
                "Bellman-Ford %s→%s: negative cycle via %s after %d passes",
                source,
                destination,
                offending,
                passes,
            )
            return StepSequence(steps, self.name, source, destination)

        path = table.path_to(destination)
        dest_distance = table.distance(destination)
        if path:
            message = (
                f"Algorithm complete! Shortest path from {source} to "
                f"{destination}: {' → '.join(path)} (Distance: {dest_distance})"
            )
        else:
            message = (
                f"Algorithm complete! No path exists from {source} to {destination}"
            )

        steps.append(
            CompleteStep(
                **self._maps(table),
                path=tuple(path),
                distance=dest_distance,
                active_edges=tuple(zip(path, path[1:])),
                message=message,
            )
        )

        logger.info(
            "Bellman-Ford %s→%s: %d steps, %d passes, distance=%s",
            source,
            destination,
            len(steps),
            passes,
            format_distance(dest_distance),
        )
        return StepSequence(steps, self.name, source, destination)

    # ── Relaxation passes ──────────────────────────────────────────

    def _run_pass(
        self,
        iteration: int,
        edges: list[Edge],
        table: DistanceTable,
        steps: list[Step],
    ) -> bool:
        """Relax every edge once; return True if any distance improved."""
        steps.append(
            IterationStartStep(
                **self._maps(table),
                iteration=iteration,
                message=f"Iteration {iteration}: Relaxing all {len(edges)} edges",
            )
        )

        relaxed = False
        for number, edge in enumerate(edges, start=1):
            label = f"Edge {number} ({edge.source}→{edge.target})"
            context = {
                "iteration": iteration,
                "edge": edge,
                "edge_number": number,
                "active_edges": (edge.key,),
            }
            source_distance = table.distance(edge.source)

            if source_distance is None:
                steps.append(
                    SkipStep(
                        **self._maps(table),
                        **context,
                        message=f"{label}: Skip (source {edge.source} unreachable)",
                    )
                )
                continue

            candidate = source_distance + edge.weight
            recorded = table.distance(edge.target)
            if is_shorter(candidate, recorded):
                table.relax(edge.target, candidate, via=edge.source)
                relaxed = True
                steps.append(
                    UpdateStep(
                        **self._maps(table),
                        **context,
                        updated=edge.target,
                        previous_distance=recorded,
                        message=(
                            f"{label}: Relax! {edge.target} distance updated "
                            f"from {format_distance(recorded)} to {candidate}"
                        ),
                    )
                )
            else:
                steps.append(
                    NoUpdateStep(
                        **self._maps(table),
                        **context,
                        target=edge.target,
                        candidate=candidate,
                        message=(
                            f"{label}: No update "
                            f"({candidate} ≥ {format_distance(recorded)})"
                        ),
                    )
                )

        steps.append(
            IterationEndStep(
                **self._maps(table),
                iteration=iteration,
                updated=relaxed,
                message=(
                    f"Iteration {iteration} complete: Distances updated"
                    if relaxed
                    else f"Iteration {iteration} complete: No changes, can terminate early"
                ),
            )
        )
        return relaxed

    # ── Negative cycle check ───────────────────────────────────────

    @staticmethod
    def _find_relaxable_edge(edges: list[Edge], table: DistanceTable) -> Edge | None:
        """First edge (stored order) that could still be relaxed, if any."""
        for edge in edges:
            source_distance = table.distance(edge.source)
            if source_distance is None:
                continue
            if is_shorter(source_distance + edge.weight, table.distance(edge.target)):
                return edge
        return None
