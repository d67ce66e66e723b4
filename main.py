"""
PathTrace — Shortest-Path Trace Backend
=======================================

FastAPI entry point.
Start with:  uvicorn main:app --reload
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import router
from app.config import APP_TITLE, APP_VERSION, CORS_ORIGINS, LOG_LEVEL

# ── Logging ────────────────────────────────────────────────────────
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)

# ── App ────────────────────────────────────────────────────────────
app = FastAPI(
    title=APP_TITLE,
    description=(
        "Shortest-path trace backend.  Runs Dijkstra or Bellman-Ford over "
        "an authored graph and returns one immutable snapshot per state "
        "transition, for a renderer to play back step by step."
    ),
    version=APP_VERSION,
)

# CORS: allow the canvas frontend to connect
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount all routes
app.include_router(router, prefix="/api")


@app.get("/")
async def root():
    return {
        "name": APP_TITLE,
        "version": APP_VERSION,
        "status": "running",
        "docs": "/docs",
    }
