from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Optional

import numpy as np

from .errors import InvalidArgumentError
from .graph import Graph
from .metrics import Metrics, ensure_metrics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TopoResult:
    """Kahn order of a graph.

    ``order`` is a permutation of ``0..n-1`` when ``is_dag`` is true. On a
    cyclic graph it is a strict prefix holding every vertex not trapped in
    or downstream of a cycle.
    """

    order: List[int]
    is_dag: bool
    metrics: Optional[Metrics] = field(default=None, repr=False, compare=False)

    def positions(self, n: Optional[int] = None) -> np.ndarray:
        """``pos[v]`` = index of ``v`` in ``order``, or -1 if absent."""
        size = len(self.order) if n is None else int(n)
        pos = np.full(size, -1, dtype=np.int64)
        for i, v in enumerate(self.order):
            pos[v] = i
        return pos


def kahn_toposort(graph: Graph, *, metrics: Optional[Metrics] = None) -> TopoResult:
    """Topological order via Kahn's algorithm, with cycle detection.

    Zero in-degree vertices seed a FIFO queue in ID order; a target joins the
    queue the moment its in-degree drops to zero. ``is_dag`` is true iff all
    ``n`` vertices were emitted.
    """
    if graph is None:
        raise InvalidArgumentError("graph must not be None")
    m = ensure_metrics(metrics, "Kahn-TS", "topo")
    m.start()

    n = graph.n
    if n == 0:
        m.stop()
        return TopoResult(order=[], is_dag=True, metrics=m)

    indeg = graph.in_degrees()
    queue: Deque[int] = deque()
    for v in range(n):
        if indeg[v] == 0:
            queue.append(v)
            m.queue_operations += 1

    order: List[int] = []
    while queue:
        u = queue.popleft()
        m.queue_operations += 1
        order.append(u)
        for _, v, _ in graph.adjacent(u):
            indeg[v] -= 1
            m.indegree_updates += 1
            if indeg[v] == 0:
                queue.append(v)
                m.queue_operations += 1

    m.stop()
    is_dag = len(order) == n
    if not is_dag:
        logger.debug("kahn_toposort: cycle detected, %d of %d vertices ordered", len(order), n)
    return TopoResult(order=order, is_dag=is_dag, metrics=m)


topological_sort = kahn_toposort
