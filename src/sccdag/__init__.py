"""SCC condensation and DAG path analysis of weighted digraphs.

This package provides:
- a dense-ID weighted digraph (``Graph``),
- strongly connected components via Tarjan,
- the condensation DAG of an SCC partition,
- topological order and cycle detection via Kahn,
- DAG shortest / longest paths and the critical path,
- per-call operation counters and timing (``Metrics``),
- the four-stage pipeline, JSON suite I/O, reports and a graph generator.
"""

from .errors import GraphError, GraphFormatError, InvalidArgumentError, VertexOutOfBoundsError
from .graph import Edge, Graph
from .metrics import Metrics
from .scc import SCCResult, find_scc, tarjan_scc
from .condensation import Condensation, build_condensation
from .topo import TopoResult, kahn_toposort, topological_sort
from .paths import (
    CriticalPathResult,
    Direction,
    PathResult,
    critical_path,
    dag_paths,
    longest_paths,
    path_edges,
    path_weight,
    reconstruct_path,
    shortest_paths,
)
from .pipeline import GraphAnalysis, analyze

__all__ = [
    "GraphError",
    "GraphFormatError",
    "InvalidArgumentError",
    "VertexOutOfBoundsError",
    "Edge",
    "Graph",
    "Metrics",
    "SCCResult",
    "find_scc",
    "tarjan_scc",
    "Condensation",
    "build_condensation",
    "TopoResult",
    "kahn_toposort",
    "topological_sort",
    "CriticalPathResult",
    "Direction",
    "PathResult",
    "critical_path",
    "dag_paths",
    "longest_paths",
    "path_edges",
    "path_weight",
    "reconstruct_path",
    "shortest_paths",
    "GraphAnalysis",
    "analyze",
]
