from __future__ import annotations

import math
from typing import Iterable, List, NamedTuple, Tuple

import numpy as np

from .errors import InvalidArgumentError, VertexOutOfBoundsError


class Edge(NamedTuple):
    """Directed weighted edge ``src -> dst``."""

    src: int
    dst: int
    w: float


def check_vertex(v: int, n: int, what: str = "vertex") -> int:
    """Return ``v`` as an int in ``[0, n)``; reject non-integers and bools."""
    if isinstance(v, bool) or not isinstance(v, (int, np.integer)):
        raise InvalidArgumentError(f"{what} must be an int, got {v!r}")
    if not 0 <= v < n:
        raise VertexOutOfBoundsError(v, n, what)
    return int(v)


class Graph:
    """Weighted directed graph over dense vertex IDs ``0..n-1``.

    Edges are appended with :meth:`add_edge` and never removed. Every
    algorithm in this package treats a built graph as read-only.

    Parameters
    ----------
    n:
        number of vertices (>= 0).
    """

    __slots__ = ("_n", "_out", "_edges")

    def __init__(self, n: int) -> None:
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
            raise InvalidArgumentError(f"vertex count must be an int, got {type(n).__name__}")
        if n < 0:
            raise InvalidArgumentError(f"vertex count must be >= 0, got {n}")
        self._n = int(n)
        self._out: List[List[Edge]] = [[] for _ in range(self._n)]
        self._edges: List[Edge] = []

    @classmethod
    def from_edges(cls, n: int, edges: Iterable[Tuple[int, int, float]]) -> "Graph":
        """Build a graph from ``(src, dst, w)`` triples (``w`` may be omitted)."""
        g = cls(n)
        for e in edges:
            g.add_edge(*e)
        return g

    @property
    def n(self) -> int:
        return self._n

    @property
    def num_edges(self) -> int:
        return len(self._edges)

    def _check(self, v: int, what: str = "vertex") -> int:
        return check_vertex(v, self._n, what)

    def add_edge(self, src: int, dst: int, w: float = 1.0) -> Edge:
        src = self._check(src, "edge source")
        dst = self._check(dst, "edge target")
        w = float(w)
        if not math.isfinite(w):
            raise InvalidArgumentError(f"edge weight must be finite, got {w}")
        edge = Edge(src, dst, w)
        self._out[src].append(edge)
        self._edges.append(edge)
        return edge

    def adjacent(self, v: int) -> Tuple[Edge, ...]:
        """Edges leaving ``v`` in insertion order."""
        return tuple(self._out[self._check(v)])

    def edges(self) -> List[Edge]:
        """All edges in insertion order."""
        return list(self._edges)

    def edge_arrays(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Parallel ``(src, dst, w)`` arrays aligned with :meth:`edges`."""
        m = len(self._edges)
        src = np.fromiter((e.src for e in self._edges), dtype=np.int64, count=m)
        dst = np.fromiter((e.dst for e in self._edges), dtype=np.int64, count=m)
        w = np.fromiter((e.w for e in self._edges), dtype=np.float64, count=m)
        return src, dst, w

    def in_degrees(self) -> np.ndarray:
        # full scan over the edge list, O(E)
        indeg = np.zeros(self._n, dtype=np.int64)
        for e in self._edges:
            indeg[e.dst] += 1
        return indeg

    def out_degrees(self) -> np.ndarray:
        return np.fromiter((len(nbrs) for nbrs in self._out), dtype=np.int64, count=self._n)

    def __len__(self) -> int:
        return self._n

    def __repr__(self) -> str:
        return f"Graph(n={self._n}, edges={len(self._edges)})"
