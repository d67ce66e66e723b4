"""
Tracer Registry — maps algorithm selector strings to tracer classes.

This is the single extensibility point for adding new algorithms.
"""

from __future__ import annotations

from typing import Type

from app.config import BELLMAN_FORD, DIJKSTRA
from app.core.errors import UnknownAlgorithm
from app.solver.bellman_ford import BellmanFordTracer
from app.solver.dijkstra import DijkstraTracer
from app.solver.interface import TracerInterface

# ── Default registry ───────────────────────────────────────────────

_REGISTRY: dict[str, Type[TracerInterface]] = {
    DIJKSTRA: DijkstraTracer,
    BELLMAN_FORD: BellmanFordTracer,
}


def register_tracer(algorithm: str, cls: Type[TracerInterface]) -> None:
    """Register a new tracer (or override an existing one)."""
    _REGISTRY[algorithm] = cls


def get_tracer_class(algorithm: str) -> Type[TracerInterface]:
    """
    Look up the tracer class for an algorithm selector.

    Raises UnknownAlgorithm if the name is not registered.
    """
    if algorithm not in _REGISTRY:
        raise UnknownAlgorithm(
            f"Unknown algorithm {algorithm!r}. "
            f"Registered algorithms: {list(_REGISTRY.keys())}"
        )
    return _REGISTRY[algorithm]


def list_algorithms() -> list[str]:
    """Return all registered algorithm names."""
    return list(_REGISTRY.keys())


def create_tracer(algorithm: str) -> TracerInterface:
    """Factory: instantiate a tracer by its selector string."""
    return get_tracer_class(algorithm)()
