"""Shared fixtures and helpers for graph store tests."""

import pathlib
import shutil
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]  # project root
sys.path.insert(0, str(ROOT))

from labgraph.core.graph import Graph  # noqa: E402

# ======================================================================
# FIXTURES
# ======================================================================


@pytest.fixture
def simple_graph():
    """Three vertices, edges 0->1 (5) and 1->2 (3)."""
    G = Graph(n=3)
    G.add_edge(0, 1, 5)
    G.add_edge(1, 2, 3)
    return G


@pytest.fixture
def dense_graph():
    """Four vertices with a self-loop, an asymmetric pair and a negative weight."""
    G = Graph(n=4)
    G.add_edge(0, 0, 7)
    G.add_edge(0, 1, 2)
    G.add_edge(1, 0, 9)
    G.add_edge(2, 3, -4)
    G.add_edge(3, 1, 0)
    return G


@pytest.fixture
def tmpdir_fixture():
    """Temporary directory for file I/O (input/output) tests."""
    tmpdir = Path(tempfile.mkdtemp())
    yield tmpdir
    shutil.rmtree(tmpdir)


# ======================================================================
# HELPERS
# ======================================================================


def assert_graphs_equal(G1, G2):
    """Assert two graphs have the same vertex-number set and edge set."""
    assert set(G1.vertices()) == set(G2.vertices()), "Vertex sets differ"
    assert G1.number_of_edges() == G2.number_of_edges(), "Edge counts differ"
    e1 = {(e.source, e.target, e.weight) for e in G1.edges()}
    e2 = {(e.source, e.target, e.weight) for e in G2.edges()}
    assert e1 == e2, f"Edge sets differ: {e1 ^ e2}"


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
