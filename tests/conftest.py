import sys
from pathlib import Path

import numpy as np
import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from sccdag.graph import Graph  # noqa: E402


@pytest.fixture
def chain_dag() -> Graph:
    """0->1->2->3->4 with the shortcut 0->2 (weight 4)."""
    return Graph.from_edges(5, [(0, 1, 1.0), (1, 2, 2.0), (2, 3, 3.0), (3, 4, 1.0), (0, 2, 4.0)])


@pytest.fixture
def heavy_shortcut_dag() -> Graph:
    """Same chain, shortcut 0->2 weighs 10, plus 1->4."""
    return Graph.from_edges(
        5, [(0, 1, 1.0), (1, 2, 2.0), (2, 3, 3.0), (3, 4, 1.0), (0, 2, 10.0), (1, 4, 2.0)]
    )


@pytest.fixture
def cycle_graph() -> Graph:
    """Ring 0->1->2->0 feeding the tail 2->3->4."""
    return Graph.from_edges(5, [(0, 1, 1.0), (1, 2, 1.0), (2, 0, 1.0), (2, 3, 2.0), (3, 4, 3.0)])


@pytest.fixture
def disconnected_graph() -> Graph:
    return Graph.from_edges(4, [(0, 1, 1.0), (2, 3, 1.0)])


def make_random_graph(rng: np.random.Generator, n: int, m: int) -> Graph:
    """Random digraph, self-loops and parallel edges allowed."""
    g = Graph(n)
    for _ in range(m):
        u, v = rng.integers(0, n, size=2)
        g.add_edge(int(u), int(v), float(np.round(rng.uniform(-5.0, 10.0), 1)))
    return g


def make_random_dag(rng: np.random.Generator, n: int, p: float = 0.3) -> Graph:
    """Random DAG on shuffled labels, at most one edge per vertex pair."""
    labels = rng.permutation(n)
    g = Graph(n)
    for i in range(n):
        for j in range(i + 1, n):
            if rng.random() < p:
                g.add_edge(int(labels[i]), int(labels[j]), float(np.round(rng.uniform(-3.0, 9.0), 1)))
    return g


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(12345)


@pytest.fixture
def random_graph():
    return make_random_graph


@pytest.fixture
def random_dag():
    return make_random_dag
