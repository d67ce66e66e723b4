"""
DistanceTable — working distance/predecessor maps for one tracer run.

Holds the DistanceMap and PreviousMap that a tracer mutates while it
runs, and hands out read-only copies of them for each emitted step so
later relaxations can never reach back into an earlier snapshot.

Unreached nodes have distance ``None`` rather than a float infinity.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping

Distance = int | None


def is_shorter(candidate: int, current: Distance) -> bool:
    """True when *candidate* strictly improves on *current* (None = unreached)."""
    return current is None or candidate < current


def format_distance(value: Distance) -> str:
    """Render a distance for trace messages; unreached is shown as ∞."""
    return "∞" if value is None else str(value)


class DistanceTable:
    """
    Distance and predecessor bookkeeping for every node of a graph.

    Created fresh per run; never shared across tracer invocations.
    """

    def __init__(self, node_ids: Iterable[str], source: str) -> None:
        self._distances: dict[str, Distance] = {n: None for n in node_ids}
        self._previous: dict[str, str | None] = {n: None for n in self._distances}
        self._distances[source] = 0

    # ── Read / Write ───────────────────────────────────────────────

    def distance(self, node_id: str) -> Distance:
        """Current best-known distance of *node_id* (None if unreached)."""
        return self._distances[node_id]

    def predecessor(self, node_id: str) -> str | None:
        return self._previous[node_id]

    def is_reached(self, node_id: str) -> bool:
        return self._distances[node_id] is not None

    def relax(self, node_id: str, distance: int, via: str) -> None:
        """Record a cheaper *distance* for *node_id*, reached from *via*."""
        self._distances[node_id] = distance
        self._previous[node_id] = via

    # ── Snapshots ──────────────────────────────────────────────────

    def snapshot(self) -> tuple[Mapping[str, Distance], Mapping[str, str | None]]:
        """Return read-only copies of (distances, previous) as they are now."""
        return (
            MappingProxyType(dict(self._distances)),
            MappingProxyType(dict(self._previous)),
        )

    # ── Path reconstruction ────────────────────────────────────────

    def path_to(self, destination: str) -> list[str]:
        """
        Walk predecessors back from *destination* to the source.

        Returns an empty list when the destination is unreached.
        """
        if not self.is_reached(destination):
            return []

        path: list[str] = []
        seen: set[str] = set()
        node: str | None = destination
        while node is not None and node not in seen:
            seen.add(node)
            path.append(node)
            node = self.predecessor(node)
        path.reverse()
        return path

    def cycle_through(self, node_id: str, via: str) -> list[str]:
        """
        Recover one predecessor cycle, pretending *node_id* was just
        relaxed from *via*.

        Walks back at most ``len(nodes)`` times to land inside the cycle,
        then collects it.  Returns the cycle in edge order, or an empty
        list when the predecessor chain reaches the source first.
        """
        previous = dict(self._previous)
        previous[node_id] = via

        node: str | None = node_id
        for _ in range(len(previous)):
            if node is None:
                return []
            node = previous[node]
        if node is None:
            return []

        cycle = [node]
        walker = previous[node]
        while walker is not None and walker != node:
            cycle.append(walker)
            walker = previous[walker]
        if walker is None:
            return []
        cycle.reverse()
        return cycle

    # ── Dunder helpers ─────────────────────────────────────────────

    def __repr__(self) -> str:
        items = ", ".join(
            f"{k}={format_distance(v)}" for k, v in self._distances.items()
        )
        return f"DistanceTable({items})"

    def __len__(self) -> int:
        return len(self._distances)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._distances
