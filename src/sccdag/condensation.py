from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Tuple

from .errors import InvalidArgumentError
from .graph import Graph, check_vertex
from .scc import SCCResult

logger = logging.getLogger(__name__)

WEIGHT_POLICIES = ("first", "min", "max")


@dataclass(frozen=True)
class Condensation:
    """Quotient graph with one vertex per SCC.

    ``graph`` has ``scc.num_components`` vertices and at most one edge per
    ordered pair of distinct components.
    """

    graph: Graph
    scc: SCCResult
    weight_policy: str = "first"

    def is_dag(self) -> bool:
        # A cycle through two components would have merged them into one SCC.
        return True

    @property
    def num_components(self) -> int:
        return self.scc.num_components

    def component_of(self, v: int) -> int:
        return self.scc.component_of(v)

    def members(self, c: int) -> List[int]:
        return list(self.scc.components[check_vertex(c, self.graph.n, "component")])


def build_condensation(graph: Graph, scc: SCCResult, *, weight_policy: str = "first") -> Condensation:
    """Collapse each SCC of ``graph`` into a single vertex.

    Parameters
    ----------
    graph:
        the original graph.
    scc:
        its SCC partition (as returned by :func:`sccdag.scc.tarjan_scc`).
    weight_policy:
        weight kept when several edges join the same ordered component pair:
        ``"first"`` (first one in edge insertion order), ``"min"`` or ``"max"``.

    Edges inside one component are dropped. Condensation edges appear in the
    order their component pair is first met in ``graph.edges()``.
    """
    if graph is None or scc is None:
        raise InvalidArgumentError("graph and scc result must not be None")
    if len(scc.comp_id) != graph.n:
        raise InvalidArgumentError(
            f"scc result covers {len(scc.comp_id)} vertices, graph has {graph.n}"
        )
    if weight_policy not in WEIGHT_POLICIES:
        raise InvalidArgumentError(
            f"unknown weight policy {weight_policy!r}; expected one of {WEIGHT_POLICIES}"
        )

    comp = scc.comp_id
    best: Dict[Tuple[int, int], float] = {}
    for e in graph.edges():
        ci = int(comp[e.src])
        cj = int(comp[e.dst])
        if ci == cj:
            continue
        key = (ci, cj)
        prev = best.get(key)
        if prev is None:
            best[key] = e.w
        elif weight_policy == "min" and e.w < prev:
            best[key] = e.w
        elif weight_policy == "max" and e.w > prev:
            best[key] = e.w

    # dict preserves first-insertion order of each component pair
    dag = Graph(scc.num_components)
    for (ci, cj), w in best.items():
        dag.add_edge(ci, cj, w)

    logger.debug(
        "build_condensation: %d vertices/%d edges -> %d components/%d edges (policy=%s)",
        graph.n, graph.num_edges, dag.n, dag.num_edges, weight_policy,
    )
    return Condensation(graph=dag, scc=scc, weight_policy=weight_policy)
