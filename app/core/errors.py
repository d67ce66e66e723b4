"""
Named failure kinds raised by the graph model, the authoring validator
and the tracers.

Only input problems are exceptions.  Negative cycles and unreachable
destinations are ordinary terminal steps of a trace.
"""

from __future__ import annotations


class PathTraceError(Exception):
    """Base class for every error raised by this package."""


# ── Run preconditions ──────────────────────────────────────────────

class InvalidInput(PathTraceError):
    """A tracer refused to run (missing endpoints, empty or bad edge set)."""


class UnknownAlgorithm(InvalidInput):
    """The algorithm selector names no registered tracer."""


# ── Edge authoring ─────────────────────────────────────────────────

class InvalidWeight(PathTraceError):
    """A proposed edge weight does not parse to an integer."""


class NegativeWeightNotAllowed(InvalidWeight):
    """A negative weight was proposed while Dijkstra is selected."""


class InvalidDirection(PathTraceError):
    """Edge direction is neither ``uni`` nor ``bi``."""


# ── Graph model ────────────────────────────────────────────────────

class UnknownNode(PathTraceError, KeyError):
    """A node id is not present in the graph."""

    def __str__(self) -> str:
        # KeyError.__str__ would wrap the message in quotes
        return str(self.args[0]) if self.args else ""


class DuplicateNode(PathTraceError):
    """An explicit node id is already taken."""


# ── Playback / session ─────────────────────────────────────────────

class PlaybackActive(PathTraceError):
    """The graph cannot be edited while a trace is being played back."""


class EmptyQueue(PathTraceError, IndexError):
    """pop_min() was called on an empty priority queue."""
