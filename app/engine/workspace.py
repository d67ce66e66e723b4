"""
Workspace — one authoring + playback session.

Holds the graph being edited, the selected algorithm, the source and
destination selections and, after a run, the playback cursor.  Graph
edits are refused while a playback is in progress; once it has
finished (or been reset) any edit discards the stale trace.
"""

from __future__ import annotations

import logging
from typing import Any

from app.authoring.validator import EdgeValidator
from app.config import DEFAULT_ALGORITHM, UNIDIRECTIONAL
from app.core.errors import InvalidInput, PlaybackActive, UnknownNode
from app.core.graph import Edge, Graph
from app.core.steps import Step
from app.engine.graph_engine import GraphEngine
from app.engine.playback import Playback

logger = logging.getLogger(__name__)


class Workspace:
    """
    Usage
    -----
    >>> ws = Workspace()
    >>> a, b = ws.add_node(), ws.add_node()
    >>> ws.add_edge(a, b, "3")
    >>> ws.set_source(a); ws.set_destination(b)
    >>> ws.run().current.tag
    'init'
    """

    def __init__(
        self,
        engine: GraphEngine | None = None,
        algorithm: str = DEFAULT_ALGORITHM,
    ) -> None:
        self.engine = engine or GraphEngine()
        self.graph = Graph()
        self.validator = EdgeValidator(algorithm)
        self.source: str | None = None
        self.destination: str | None = None
        self.playback: Playback | None = None

    @property
    def algorithm(self) -> str:
        return self.validator.algorithm

    @property
    def is_playing(self) -> bool:
        return self.playback is not None and self.playback.is_active

    # ── Authoring ──────────────────────────────────────────────────

    def add_node(self, x: float | None = None, y: float | None = None) -> str:
        self._before_edit()
        return self.graph.add_node(x, y)

    def add_edge(
        self,
        source: str,
        target: str,
        raw_weight: object,
        direction: str = UNIDIRECTIONAL,
    ) -> list[Edge]:
        self._before_edit()
        return self.validator.apply(self.graph, source, target, raw_weight, direction)

    def delete_node(self, node_id: str) -> list[Edge]:
        """Delete a node; a source/destination pointing at it is unset."""
        self._before_edit()
        removed = self.graph.delete_node(node_id)
        if self.source == node_id:
            self.source = None
        if self.destination == node_id:
            self.destination = None
        return removed

    def set_source(self, node_id: str) -> None:
        self._before_edit()
        self._require_node(node_id)
        self.source = node_id

    def set_destination(self, node_id: str) -> None:
        self._before_edit()
        self._require_node(node_id)
        self.destination = node_id

    def set_algorithm(self, algorithm: str) -> None:
        self._before_edit()
        EdgeValidator.check_algorithm_switch(self.graph, algorithm)
        self.validator = EdgeValidator(algorithm)

    # ── Running / playback ─────────────────────────────────────────

    def run(self) -> Playback:
        """Trace the selected algorithm and start playback at step one."""
        if self.is_playing:
            raise PlaybackActive("A trace is already being played back.")
        if not self.source or not self.destination or not self.graph.edges:
            raise InvalidInput(
                "Please select source node, destination node and make sure "
                "graph contains edges."
            )

        if self.destination not in self.reachable():
            logger.info(
                "Destination %s is not reachable from %s", self.destination, self.source
            )

        sequence = self.engine.run_graph(
            self.graph, self.source, self.destination, self.algorithm
        )
        self.playback = Playback(sequence)
        return self.playback

    def next_step(self) -> Step:
        return self._require_playback().next()

    def previous_step(self) -> Step:
        return self._require_playback().previous()

    def reset(self) -> None:
        """Drop the current trace; the graph is kept."""
        self.playback = None

    def clear(self) -> None:
        """Drop everything: graph, selections and trace."""
        self._before_edit()
        self.graph.clear()
        self.source = None
        self.destination = None
        self.playback = None

    def reachable(self) -> list[str]:
        """Node ids reachable from the selected source, in graph order."""
        if self.source is None:
            return []
        reach = self.graph.reachable_from(self.source)
        return [n for n in self.graph.node_ids() if n in reach]

    # ── Serialization ──────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "graph": self.graph.to_dict(),
            "algorithm": self.algorithm,
            "source": self.source,
            "destination": self.destination,
            "reachable": self.reachable(),
            "playback": None,
        }
        if self.playback is not None:
            data["playback"] = {
                "index": self.playback.index,
                "total": self.playback.total,
                "finished": self.playback.is_finished,
                "step": self.playback.current.to_dict(),
            }
        return data

    # ── Helpers ────────────────────────────────────────────────────

    def _before_edit(self) -> None:
        if self.is_playing:
            raise PlaybackActive(
                "The graph cannot be edited while a trace is playing. Reset first."
            )
        if self.playback is not None:
            logger.debug("Discarding finished trace before edit")
            self.playback = None

    def _require_node(self, node_id: str) -> None:
        if not self.graph.has_node(node_id):
            raise UnknownNode(f"Node {node_id!r} not found.")

    def _require_playback(self) -> Playback:
        if self.playback is None:
            raise InvalidInput("No trace has been run yet.")
        return self.playback
