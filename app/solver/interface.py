"""
Tracer Interface — abstract base for all shortest-path tracers.

Design: Strategy pattern.  The GraphEngine delegates to whichever
TracerInterface implementation the algorithm selector names, so a new
algorithm only needs a subclass and a registry entry.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from app.core.errors import InvalidInput
from app.core.graph import Graph
from app.core.state import DistanceTable
from app.core.steps import StepSequence


class TracerInterface(ABC):
    """
    Abstract tracer that runs one algorithm to completion and records
    every state transition as a step.
    """

    #: selector string this tracer answers to (e.g. "dijkstra")
    name: str = ""

    @abstractmethod
    def trace(self, graph: Graph, source: str, destination: str) -> StepSequence:
        """
        Run the algorithm from *source* and trace it.

        Parameters
        ----------
        graph : the graph to search; not mutated
        source : id of the start node
        destination : id of the node whose path is reconstructed

        Returns
        -------
        StepSequence ending in a ``complete`` or ``negative-cycle`` step.

        Raises
        ------
        InvalidInput before any step is produced when the run's
        preconditions do not hold.
        """
        ...

    @staticmethod
    def _maps(table: DistanceTable) -> dict[str, Any]:
        """Fresh (distances, previous) copies as step keyword arguments."""
        distances, previous = table.snapshot()
        return {"distances": distances, "previous": previous}

    @staticmethod
    def check_endpoints(graph: Graph, source: str | None, destination: str | None) -> None:
        """Shared precondition: both endpoints set and present in *graph*."""
        if not source or not destination:
            raise InvalidInput("Source and destination nodes must both be selected.")
        for role, node_id in (("Source", source), ("Destination", destination)):
            if not graph.has_node(node_id):
                raise InvalidInput(f"{role} node {node_id!r} is not in the graph.")
