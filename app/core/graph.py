"""
Graph model — the node/edge container the tracers run over.

Nodes carry only their id as far as the algorithms are concerned; the
optional x/y position belongs to the authoring UI and is passed through
untouched.  Edges are directed and parallel edges are kept.

Every mutation keeps the invariant that no edge references a node that
is not in the graph.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Iterator

import networkx as nx

from app.config import BIDIRECTIONAL, DIRECTIONS, NODE_ID_PREFIX, UNIDIRECTIONAL
from app.core.errors import (
    DuplicateNode,
    InvalidDirection,
    InvalidInput,
    InvalidWeight,
    UnknownNode,
)

logger = logging.getLogger(__name__)

EdgeKey = tuple[str, str]

_INTEGER_RE = re.compile(r"[+-]?\d+")


def parse_weight(raw: object) -> int:
    """
    Parse *raw* into an integer weight.

    Accepts ints, integral floats and base-10 integer strings
    (surrounding whitespace allowed).  Anything else raises
    InvalidWeight.
    """
    if isinstance(raw, bool):
        raise InvalidWeight(f"Weight must be an integer, got {raw!r}.")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        if raw.is_integer():
            return int(raw)
        raise InvalidWeight(f"Weight must be an integer, got {raw!r}.")
    if isinstance(raw, str) and _INTEGER_RE.fullmatch(raw.strip()):
        return int(raw.strip())
    raise InvalidWeight(f"Weight must be an integer, got {raw!r}.")


@dataclass(frozen=True)
class Node:
    """A graph vertex.  Identity is the id."""

    id: str
    x: float | None = None
    y: float | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"id": self.id}
        if self.x is not None:
            data["x"] = self.x
        if self.y is not None:
            data["y"] = self.y
        return data


@dataclass(frozen=True)
class Edge:
    """A directed, weighted edge ``source → target``."""

    source: str
    target: str
    weight: int

    @property
    def key(self) -> EdgeKey:
        """The (source, target) pair used to highlight this edge."""
        return (self.source, self.target)

    def to_dict(self) -> dict[str, Any]:
        return {"from": self.source, "to": self.target, "weight": self.weight}

    def __str__(self) -> str:
        return f"{self.source}→{self.target}({self.weight})"


class Graph:
    """
    Ordered sequence of nodes plus ordered sequence of edges.

    Usage
    -----
    >>> g = Graph()
    >>> a, b = g.add_node(), g.add_node()
    >>> g.add_edge(a, b, 4, direction="bi")
    >>> g.delete_node(a)     # also removes both edges
    """

    def __init__(self) -> None:
        self.nodes: list[Node] = []
        self.edges: list[Edge] = []
        self._node_counter = 0

    # ── Node operations ────────────────────────────────────────────

    def add_node(
        self,
        x: float | None = None,
        y: float | None = None,
        node_id: str | None = None,
    ) -> str:
        """
        Append a node and return its id.

        When *node_id* is omitted a fresh id ``N<k>`` is generated; the
        counter skips ids already in use so ids stay unique after deletes.
        """
        if node_id is None:
            node_id = self._next_node_id()
        elif self.has_node(node_id):
            raise DuplicateNode(f"Node {node_id!r} already exists.")

        self.nodes.append(Node(id=node_id, x=x, y=y))
        return node_id

    def delete_node(self, node_id: str) -> list[Edge]:
        """
        Remove *node_id* and every edge that starts or ends at it.

        Returns the edges that were removed along with the node.
        """
        if not self.has_node(node_id):
            raise UnknownNode(f"Node {node_id!r} not found.")

        removed = [e for e in self.edges if node_id in (e.source, e.target)]
        self.nodes = [n for n in self.nodes if n.id != node_id]
        self.edges = [e for e in self.edges if node_id not in (e.source, e.target)]

        logger.debug(
            "Deleted node %s (cascaded %d edges)", node_id, len(removed)
        )
        return removed

    def get_node(self, node_id: str) -> Node:
        for node in self.nodes:
            if node.id == node_id:
                return node
        raise UnknownNode(f"Node {node_id!r} not found.")

    def has_node(self, node_id: str) -> bool:
        return any(n.id == node_id for n in self.nodes)

    def node_ids(self) -> list[str]:
        return [n.id for n in self.nodes]

    # ── Edge operations ────────────────────────────────────────────

    def add_edge(
        self,
        source: str,
        target: str,
        weight: int,
        direction: str = UNIDIRECTIONAL,
    ) -> list[Edge]:
        """
        Insert ``source → target`` (and ``target → source`` for ``bi``).

        Both edges of a bidirectional pair are inserted together or not
        at all.  Returns the inserted edges.
        """
        if direction not in DIRECTIONS:
            raise InvalidDirection(
                f"Unknown direction {direction!r}. Expected one of {list(DIRECTIONS)}."
            )
        for node_id in (source, target):
            if not self.has_node(node_id):
                raise UnknownNode(f"Node {node_id!r} not found.")

        new_edges = [Edge(source, target, weight)]
        if direction == BIDIRECTIONAL:
            new_edges.append(Edge(target, source, weight))

        self.edges.extend(new_edges)
        return new_edges

    def outgoing(self, node_id: str) -> list[Edge]:
        """Edges leaving *node_id*, in stored order."""
        return [e for e in self.edges if e.source == node_id]

    def has_negative_weight(self) -> bool:
        return any(e.weight < 0 for e in self.edges)

    # ── Bulk operations ────────────────────────────────────────────

    def clear(self) -> None:
        self.nodes.clear()
        self.edges.clear()
        self._node_counter = 0

    def copy(self) -> Graph:
        """Independent copy (nodes and edges are immutable, lists are not)."""
        clone = Graph()
        clone.nodes = list(self.nodes)
        clone.edges = list(self.edges)
        clone._node_counter = self._node_counter
        return clone

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }

    @classmethod
    def from_dict(cls, graph_json: dict[str, Any]) -> Graph:
        """
        Build a graph from a JSON payload.

        Expected format (``source``/``target`` are accepted in place of
        ``from``/``to``, and a React Flow ``position`` in place of x/y):
        {
          "nodes": [{"id": "A", "x": 120, "y": 80}, ...],
          "edges": [{"from": "A", "to": "B", "weight": 4}, ...]
        }
        """
        graph = cls()

        for raw in graph_json.get("nodes", []):
            if "id" not in raw:
                raise InvalidInput(f"Node without an id: {raw!r}")
            position = raw.get("position") or {}
            try:
                graph.add_node(
                    x=raw.get("x", position.get("x")),
                    y=raw.get("y", position.get("y")),
                    node_id=str(raw["id"]),
                )
            except DuplicateNode as exc:
                raise InvalidInput(str(exc)) from exc

        for raw in graph_json.get("edges", []):
            source = raw.get("from", raw.get("source"))
            target = raw.get("to", raw.get("target"))
            weight = raw.get("weight")
            if source is None or target is None:
                raise InvalidInput(f"Edge without endpoints: {raw!r}")
            try:
                weight = parse_weight(weight)
            except InvalidWeight as exc:
                raise InvalidInput(
                    f"Edge {source}→{target} has a non-integer weight {weight!r}."
                ) from exc
            try:
                graph.add_edge(str(source), str(target), weight)
            except UnknownNode as exc:
                raise InvalidInput(
                    f"Edge {source}→{target} references a missing node: {exc}"
                ) from exc

        logger.info(
            "Parsed graph: %d nodes, %d edges", len(graph.nodes), len(graph.edges)
        )
        return graph

    def to_networkx(self) -> nx.MultiDiGraph:
        """Build a NetworkX MultiDiGraph (parallel edges preserved)."""
        g = nx.MultiDiGraph()
        g.add_nodes_from(self.node_ids())
        for edge in self.edges:
            g.add_edge(edge.source, edge.target, weight=edge.weight)
        return g

    def reachable_from(self, node_id: str) -> set[str]:
        """Ids reachable from *node_id* (including itself)."""
        if not self.has_node(node_id):
            raise UnknownNode(f"Node {node_id!r} not found.")
        return set(nx.descendants(self.to_networkx(), node_id)) | {node_id}

    # ── Helpers ────────────────────────────────────────────────────

    def _next_node_id(self) -> str:
        while True:
            candidate = f"{NODE_ID_PREFIX}{self._node_counter}"
            self._node_counter += 1
            if not self.has_node(candidate):
                return candidate

    # ── Dunder helpers ─────────────────────────────────────────────

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, node_id: object) -> bool:
        return isinstance(node_id, str) and self.has_node(node_id)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def __repr__(self) -> str:
        return f"Graph(nodes={len(self.nodes)}, edges={len(self.edges)})"
