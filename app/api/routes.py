"""
FastAPI routes for the PathTrace backend.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException

from app.api.schemas import (
    AlgorithmInput,
    EdgeInput,
    EdgeOut,
    NodeCreated,
    NodeInput,
    SelectInput,
    TraceInput,
    TraceResult,
    WorkspaceState,
)
from app.core.errors import (
    DuplicateNode,
    PathTraceError,
    PlaybackActive,
    UnknownNode,
)
from app.engine.graph_engine import GraphEngine
from app.engine.workspace import Workspace

logger = logging.getLogger(__name__)

router = APIRouter()

# ── Shared instances ───────────────────────────────────────────────
# In production you'd use dependency injection; here we keep it simple.

engine = GraphEngine()
workspace = Workspace(engine)


def _http_error(exc: PathTraceError) -> HTTPException:
    """Translate a domain error into the matching HTTP status."""
    if isinstance(exc, UnknownNode):
        status = 404
    elif isinstance(exc, (PlaybackActive, DuplicateNode)):
        status = 409
    else:
        status = 400
    logger.warning("Request rejected (%d): %s", status, exc)
    return HTTPException(status_code=status, detail=str(exc))


# ── Stateless trace ────────────────────────────────────────────────

@router.get("/algorithms")
async def list_algorithms() -> dict[str, list[str]]:
    """Algorithm selectors accepted by /trace and /workspace/algorithm."""
    return {"algorithms": engine.algorithms()}


@router.post("/trace", response_model=TraceResult)
async def trace_graph(payload: TraceInput) -> TraceResult:
    """
    Accept a graph with source, destination and algorithm and return
    the full step sequence for playback.
    """
    try:
        graph_json = {"nodes": payload.nodes, "edges": payload.edges}
        sequence = engine.run(
            graph_json, payload.source, payload.destination, payload.algorithm
        )
        return TraceResult(**sequence.to_dict())
    except PathTraceError as exc:
        raise _http_error(exc)
    except Exception as exc:
        logger.exception("Trace failed")
        raise HTTPException(status_code=500, detail=str(exc))


# ── Workspace: authoring ───────────────────────────────────────────

@router.get("/workspace", response_model=WorkspaceState)
async def get_workspace() -> WorkspaceState:
    return WorkspaceState(**workspace.to_dict())


@router.post("/workspace/nodes", response_model=NodeCreated, status_code=201)
async def add_node(payload: NodeInput) -> NodeCreated:
    try:
        return NodeCreated(id=workspace.add_node(payload.x, payload.y))
    except PathTraceError as exc:
        raise _http_error(exc)


@router.delete("/workspace/nodes/{node_id}")
async def delete_node(node_id: str) -> dict[str, Any]:
    """Remove a node and every edge touching it."""
    try:
        removed = workspace.delete_node(node_id)
    except PathTraceError as exc:
        raise _http_error(exc)
    return {
        "message": f"Node '{node_id}' removed.",
        "removed_edges": len(removed),
    }


@router.post("/workspace/edges", response_model=list[EdgeOut], status_code=201)
async def add_edge(payload: EdgeInput) -> list[EdgeOut]:
    """Validate a proposed edge and insert it (two edges for ``bi``)."""
    try:
        edges = workspace.add_edge(
            payload.source, payload.target, payload.weight, payload.direction
        )
    except PathTraceError as exc:
        raise _http_error(exc)
    return [EdgeOut(source=e.source, target=e.target, weight=e.weight) for e in edges]


@router.put("/workspace/source", response_model=WorkspaceState)
async def set_source(payload: SelectInput) -> WorkspaceState:
    try:
        workspace.set_source(payload.node_id)
    except PathTraceError as exc:
        raise _http_error(exc)
    return WorkspaceState(**workspace.to_dict())


@router.put("/workspace/destination", response_model=WorkspaceState)
async def set_destination(payload: SelectInput) -> WorkspaceState:
    try:
        workspace.set_destination(payload.node_id)
    except PathTraceError as exc:
        raise _http_error(exc)
    return WorkspaceState(**workspace.to_dict())


@router.put("/workspace/algorithm", response_model=WorkspaceState)
async def set_algorithm(payload: AlgorithmInput) -> WorkspaceState:
    try:
        workspace.set_algorithm(payload.algorithm)
    except PathTraceError as exc:
        raise _http_error(exc)
    return WorkspaceState(**workspace.to_dict())


@router.delete("/workspace", response_model=WorkspaceState)
async def clear_workspace() -> WorkspaceState:
    """Empty the graph and forget source, destination and trace."""
    try:
        workspace.clear()
    except PathTraceError as exc:
        raise _http_error(exc)
    return WorkspaceState(**workspace.to_dict())


# ── Workspace: playback ────────────────────────────────────────────

@router.post("/workspace/run", response_model=WorkspaceState)
async def run_workspace() -> WorkspaceState:
    """Trace the selected algorithm and start playback at step one."""
    try:
        workspace.run()
    except PathTraceError as exc:
        raise _http_error(exc)
    except Exception as exc:
        logger.exception("Run failed")
        raise HTTPException(status_code=500, detail=str(exc))
    return WorkspaceState(**workspace.to_dict())


@router.post("/workspace/next", response_model=WorkspaceState)
async def next_step() -> WorkspaceState:
    try:
        workspace.next_step()
    except PathTraceError as exc:
        raise _http_error(exc)
    return WorkspaceState(**workspace.to_dict())


@router.post("/workspace/previous", response_model=WorkspaceState)
async def previous_step() -> WorkspaceState:
    try:
        workspace.previous_step()
    except PathTraceError as exc:
        raise _http_error(exc)
    return WorkspaceState(**workspace.to_dict())


@router.post("/workspace/reset", response_model=WorkspaceState)
async def reset_playback() -> WorkspaceState:
    workspace.reset()
    return WorkspaceState(**workspace.to_dict())
