"""
Pydantic schemas for the FastAPI endpoints.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from app.config import DEFAULT_ALGORITHM, UNIDIRECTIONAL


# ── Stateless trace ────────────────────────────────────────────────

class TraceInput(BaseModel):
    """Graph JSON + endpoints + algorithm selector."""

    nodes: list[dict[str, Any]] = Field(..., description="Nodes array: {id, x?, y?}")
    edges: list[dict[str, Any]] = Field(..., description="Edges array: {from, to, weight}")
    source: str | None = Field(default=None, description="Start node id")
    destination: str | None = Field(default=None, description="Destination node id")
    algorithm: str = Field(
        default=DEFAULT_ALGORITHM, description="dijkstra or bellman-ford"
    )


class TraceResult(BaseModel):
    """A complete step sequence, ready for playback."""

    algorithm: str
    source: str
    destination: str
    total: int
    steps: list[dict[str, Any]]


# ── Workspace authoring ────────────────────────────────────────────

class NodeInput(BaseModel):
    """Position of a new node (opaque to the tracers)."""

    x: float | None = None
    y: float | None = None


class NodeCreated(BaseModel):
    id: str


class EdgeInput(BaseModel):
    """A proposed edge; the weight is validated for the active algorithm."""

    source: str
    target: str
    weight: Any = Field(..., description="Integer or integer text, parsed by the validator")
    direction: str = Field(default=UNIDIRECTIONAL, description="uni or bi")


class EdgeOut(BaseModel):
    source: str = Field(..., serialization_alias="from")
    target: str = Field(..., serialization_alias="to")
    weight: int


class SelectInput(BaseModel):
    node_id: str


class AlgorithmInput(BaseModel):
    algorithm: str


# ── Workspace state ────────────────────────────────────────────────

class PlaybackState(BaseModel):
    index: int
    total: int
    finished: bool
    step: dict[str, Any]


class WorkspaceState(BaseModel):
    """Everything an authoring UI needs to redraw itself."""

    graph: dict[str, Any]
    algorithm: str
    source: str | None
    destination: str | None
    reachable: list[str] = Field(default_factory=list)
    playback: PlaybackState | None = None
