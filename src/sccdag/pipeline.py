"""Four-stage analysis of one weighted digraph.

Graph -> Tarjan SCC -> condensation DAG -> Kahn order -> DAG shortest paths
from the source's component, and the critical (longest) path of the DAG.
Each stage result carries the :class:`~sccdag.metrics.Metrics` of its call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from .condensation import Condensation, build_condensation
from .errors import InvalidArgumentError
from .graph import Graph, check_vertex
from .metrics import Metrics
from .paths import CriticalPathResult, PathResult, critical_path, path_weight, shortest_paths
from .scc import SCCResult, tarjan_scc
from .topo import TopoResult, kahn_toposort

logger = logging.getLogger(__name__)

PATH_KINDS = ("shortest", "longest")


@dataclass(frozen=True)
class ShortestPathSummary:
    path: List[int]
    length: float


@dataclass(frozen=True)
class GraphAnalysis:
    graph: Graph
    source: int
    scc: SCCResult
    condensation: Condensation
    topo: TopoResult
    dag_source: int
    shortest: Optional[PathResult]
    critical: CriticalPathResult
    shortest_metrics: Metrics
    longest_metrics: Metrics

    @property
    def dag(self) -> Graph:
        return self.condensation.graph

    def stage_metrics(self) -> Dict[str, Metrics]:
        return {
            "scc": self.scc.metrics,
            "topo": self.topo.metrics,
            "shortest": self.shortest_metrics,
            "longest": self.longest_metrics,
        }

    def _path_metrics(self, kind: str) -> Metrics:
        if kind not in PATH_KINDS:
            raise InvalidArgumentError(f"kind must be one of {PATH_KINDS}, got {kind!r}")
        return self.shortest_metrics if kind == "shortest" else self.longest_metrics

    def total_operations(self, kind: str) -> int:
        """SCC + topological sort + path stage operation count."""
        pm = self._path_metrics(kind)
        return self.scc.metrics.total_operations() + self.topo.metrics.total_operations() + pm.total_operations()

    def total_time_ms(self, kind: str) -> float:
        pm = self._path_metrics(kind)
        return self.scc.metrics.elapsed_ms + self.topo.metrics.elapsed_ms + pm.elapsed_ms

    def shortest_path_summary(self) -> Optional[ShortestPathSummary]:
        """Longest parent chain reached from the DAG source, with its weight.

        Among reached vertices other than the source the one with the most
        hops wins (lowest vertex ID on ties); just ``[dag_source]`` if the
        source reaches nothing.
        """
        if self.shortest is None:
            return None
        best = [self.dag_source]
        for v in range(self.dag.n):
            if v == self.dag_source:
                continue
            p = self.shortest.path_to(v)
            if p is not None and len(p) > len(best):
                best = p
        return ShortestPathSummary(path=best, length=path_weight(self.dag, best))


def analyze(
    graph: Graph,
    source: int = 0,
    *,
    weight_policy: str = "first",
    progress: bool = False,
) -> GraphAnalysis:
    """Run the full pipeline on ``graph``.

    ``source`` is a vertex of the original graph; shortest paths start at its
    component in the condensation. For an empty graph the shortest-path
    stage is skipped and the critical path is empty.
    """
    if graph is None:
        raise InvalidArgumentError("graph must not be None")
    if graph.n > 0:
        source = check_vertex(source, graph.n, "source")

    scc = tarjan_scc(graph)
    cond = build_condensation(graph, scc, weight_policy=weight_policy)
    topo = kahn_toposort(cond.graph)

    sp_metrics = Metrics(algorithm="DAG-ShortestPath", category="path")
    lp_metrics = Metrics(algorithm="DAG-LongestPath", category="path")

    dag_source = -1
    shortest = None
    if graph.n > 0:
        dag_source = scc.component_of(source)
        shortest = shortest_paths(cond.graph, dag_source, topo=topo, metrics=sp_metrics)
    critical = critical_path(cond.graph, topo=topo, metrics=lp_metrics, progress=progress)

    logger.debug(
        "analyze: n=%d m=%d sccs=%d dag_edges=%d critical=%s",
        graph.n, graph.num_edges, scc.num_components, cond.graph.num_edges, critical.length,
    )
    return GraphAnalysis(
        graph=graph,
        source=source,
        scc=scc,
        condensation=cond,
        topo=topo,
        dag_source=dag_source,
        shortest=shortest,
        critical=critical,
        shortest_metrics=sp_metrics,
        longest_metrics=lp_metrics,
    )
