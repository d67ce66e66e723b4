"""
Configuration constants for the PathTrace backend.

Tunable settings live here as module-level constants. A few can be
overridden through environment variables for deployment.
"""

import os

# =============================================================================
# Service
# =============================================================================

APP_TITLE = "PathTrace"
APP_VERSION = "0.1.0"

# Logging level for the root logger configured in main.py
LOG_LEVEL = os.environ.get("PATHTRACE_LOG_LEVEL", "INFO").upper()

# Comma-separated list of allowed CORS origins for the renderer frontend
CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get("PATHTRACE_CORS_ORIGINS", "*").split(",")
    if origin.strip()
]

# =============================================================================
# Algorithms
# =============================================================================

DIJKSTRA = "dijkstra"
BELLMAN_FORD = "bellman-ford"

# Algorithm selected in a fresh workspace
DEFAULT_ALGORITHM = os.environ.get("PATHTRACE_DEFAULT_ALGORITHM", DIJKSTRA)

# =============================================================================
# Graph authoring
# =============================================================================

# Generated node ids look like N0, N1, N2, ...
NODE_ID_PREFIX = "N"

# Edge directions accepted by Graph.add_edge
UNIDIRECTIONAL = "uni"
BIDIRECTIONAL = "bi"
DIRECTIONS = (UNIDIRECTIONAL, BIDIRECTIONAL)
