"""
Pytest configuration and shared fixtures.
"""

import json
from pathlib import Path

import pytest

from app.core.graph import Graph


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def sample_json(project_root: Path) -> dict:
    """The six-node sample graph as a JSON payload."""
    with open(project_root / "samples" / "sample_graph.json") as f:
        return json.load(f)


@pytest.fixture
def sample_graph(sample_json: dict) -> Graph:
    return Graph.from_dict(sample_json)
