from __future__ import annotations

import logging
import operator
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterator, List, Optional, Sequence

import numpy as np
from tqdm.auto import tqdm

from .errors import InvalidArgumentError
from .graph import Edge, Graph, check_vertex
from .metrics import Metrics, ensure_metrics
from .topo import TopoResult, kahn_toposort

logger = logging.getLogger(__name__)


class Direction(Enum):
    """Optimisation direction of a DAG path search."""

    MIN = "min"
    MAX = "max"

    @property
    def sentinel(self) -> float:
        """Distance of a vertex the source does not reach."""
        return float("inf") if self is Direction.MIN else float("-inf")

    @property
    def improves(self) -> Callable[[float, float], bool]:
        return operator.lt if self is Direction.MIN else operator.gt


@dataclass(frozen=True)
class PathResult:
    """Single-source distances and parent links over a DAG.

    ``distance[v]`` holds the direction's sentinel when ``v`` is unreached;
    ``parent[v]`` is -1 for the source and for unreached vertices.
    """

    distance: np.ndarray
    parent: np.ndarray
    source: int
    direction: Direction = Direction.MIN
    metrics: Optional[Metrics] = field(default=None, repr=False, compare=False)

    @property
    def n(self) -> int:
        return len(self.distance)

    def reachable(self, v: int) -> bool:
        v = check_vertex(v, self.n, "target")
        return bool(np.isfinite(self.distance[v]))

    def path_to(self, target: int) -> Optional[List[int]]:
        return reconstruct_path(self, target)


@dataclass(frozen=True)
class CriticalPathResult:
    """Longest path of the whole DAG, over every possible source.

    ``result`` is the longest-path run from ``source`` that reached the
    global maximum ``length`` at ``end_vertex``. Empty (``result is None``,
    ``length == -inf``) when the graph is cyclic or has no vertices.
    """

    result: Optional[PathResult]
    source: int
    end_vertex: int
    length: float
    metrics: Optional[Metrics] = field(default=None, repr=False, compare=False)

    @property
    def found(self) -> bool:
        return self.result is not None

    @property
    def path(self) -> Optional[List[int]]:
        if self.result is None:
            return None
        return reconstruct_path(self.result, self.end_vertex)


def reconstruct_path(result: PathResult, target: int) -> Optional[List[int]]:
    """Vertices from ``result.source`` to ``target``; None if unreached."""
    if result is None:
        raise InvalidArgumentError("path result must not be None")
    target = check_vertex(target, result.n, "target")
    if not np.isfinite(result.distance[target]):
        return None
    path = []
    v = int(target)
    while v != -1:
        path.append(v)
        v = int(result.parent[v])
    path.reverse()
    return path


def path_edges(graph: Graph, path: Sequence[int]) -> Iterator[Edge]:
    """Edges along a vertex path, the first matching ``u -> v`` edge per hop."""
    for u, v in zip(path, path[1:]):
        for e in graph.adjacent(u):
            if e.dst == v:
                yield e
                break
        else:
            raise InvalidArgumentError(f"no edge {u} -> {v} in graph")


def path_weight(graph: Graph, path: Sequence[int]) -> float:
    """Sum of edge weights along ``path``."""
    total = 0.0
    for e in path_edges(graph, path):
        total += e.w
    return total


def _relax(graph: Graph, source: int, order: Sequence[int], direction: Direction, m: Metrics) -> PathResult:
    n = graph.n
    unreached = direction.sentinel
    better = direction.improves
    dist = np.full(n, unreached, dtype=np.float64)
    parent = np.full(n, -1, dtype=np.int64)
    dist[source] = 0.0

    # every predecessor of u precedes it in `order`, so dist[u] is final here
    for u in order:
        du = float(dist[u])
        if du == unreached:
            continue
        for _, v, w in graph.adjacent(u):
            cand = du + w
            m.relaxations += 1
            m.comparisons += 1
            if better(cand, dist[v]):
                dist[v] = cand
                parent[v] = u
                m.distance_updates += 1

    return PathResult(distance=dist, parent=parent, source=source, direction=direction, metrics=m)


def _check_topo(graph: Graph, topo: Optional[TopoResult]) -> TopoResult:
    # a partial order cannot be checked against the edges
    if topo is None or not topo.is_dag:
        return kahn_toposort(graph)
    n = graph.n
    if len(topo.order) != n:
        raise InvalidArgumentError(
            f"topological order has {len(topo.order)} vertices, graph has {n}"
        )
    pos = np.full(n, -1, dtype=np.int64)
    for i, v in enumerate(topo.order):
        if isinstance(v, bool) or not isinstance(v, (int, np.integer)) or not 0 <= v < n or pos[v] != -1:
            raise InvalidArgumentError("topological order is not a permutation of the graph's vertices")
        pos[v] = i
    for e in graph.edges():
        if pos[e.src] >= pos[e.dst]:
            raise InvalidArgumentError(
                f"topological order puts {e.dst} before {e.src} but the graph has edge {e.src} -> {e.dst}"
            )
    return topo


def dag_paths(
    graph: Graph,
    source: int,
    direction: Direction = Direction.MIN,
    *,
    topo: Optional[TopoResult] = None,
    metrics: Optional[Metrics] = None,
) -> Optional[PathResult]:
    """Single-source shortest (MIN) or longest (MAX) paths on a DAG.

    Parameters
    ----------
    graph:
        weighted directed graph.
    source:
        start vertex in ``[0, n)``.
    direction:
        :attr:`Direction.MIN` or :attr:`Direction.MAX`.
    topo:
        Kahn order previously computed for this very graph. When omitted the
        graph is sorted (and thereby checked for cycles) on every call.
    metrics:
        optional recorder to fill.

    Returns
    -------
    PathResult or None
        None if ``graph`` contains a cycle.
    """
    if graph is None:
        raise InvalidArgumentError("graph must not be None")
    source = check_vertex(source, graph.n, "source")
    name = "DAG-ShortestPath" if direction is Direction.MIN else "DAG-LongestPath"
    m = ensure_metrics(metrics, name, "path")
    m.start()

    topo = _check_topo(graph, topo)
    if not topo.is_dag:
        m.stop()
        logger.debug("%s: graph has a cycle, no result for source %d", name, source)
        return None

    res = _relax(graph, source, topo.order, direction, m)
    m.stop()
    return res


def shortest_paths(
    graph: Graph,
    source: int,
    *,
    topo: Optional[TopoResult] = None,
    metrics: Optional[Metrics] = None,
) -> Optional[PathResult]:
    return dag_paths(graph, source, Direction.MIN, topo=topo, metrics=metrics)


def longest_paths(
    graph: Graph,
    source: int,
    *,
    topo: Optional[TopoResult] = None,
    metrics: Optional[Metrics] = None,
) -> Optional[PathResult]:
    return dag_paths(graph, source, Direction.MAX, topo=topo, metrics=metrics)


def critical_path(
    graph: Graph,
    *,
    topo: Optional[TopoResult] = None,
    metrics: Optional[Metrics] = None,
    progress: bool = False,
) -> CriticalPathResult:
    """Globally longest path: longest-path search from every vertex.

    The graph is sorted once and the order shared by all ``n`` runs, so the
    cost is one Kahn pass plus O(V * (V + E)) relaxation. Ties keep the
    first maximum met (lowest source, then lowest end vertex). Metrics
    accumulate over all runs.
    """
    if graph is None:
        raise InvalidArgumentError("graph must not be None")
    m = ensure_metrics(metrics, "DAG-LongestPath", "path")
    m.start()

    n = graph.n
    empty = CriticalPathResult(result=None, source=-1, end_vertex=-1, length=float("-inf"), metrics=m)
    topo = _check_topo(graph, topo)
    if n == 0 or not topo.is_dag:
        m.stop()
        if not topo.is_dag:
            logger.debug("critical_path: graph has a cycle, no critical path")
        return empty

    best_len = float("-inf")
    best_src = -1
    best_end = -1
    best_res: Optional[PathResult] = None

    for s in tqdm(range(n), desc="Critical path: longest paths per source", disable=not progress):
        res = _relax(graph, s, topo.order, Direction.MAX, m)
        # unreached vertices sit at -inf, dist[s] == 0 keeps argmax finite
        v = int(np.argmax(res.distance))
        if res.distance[v] > best_len:
            best_len = float(res.distance[v])
            best_src, best_end, best_res = s, v, res

    m.stop()
    logger.debug(
        "critical_path: length=%s from %d to %d over %d sources in %.3f ms",
        best_len, best_src, best_end, n, m.elapsed_ms,
    )
    return CriticalPathResult(result=best_res, source=best_src, end_vertex=best_end, length=best_len, metrics=m)
