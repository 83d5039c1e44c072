"""Graph-suite JSON reading and CSV / JSON report writing.

Input::

    {"graphs": [{"id": 1, "n": 6, "source": 0, "density": "sparse",
                 "variant": "pure_dag", "edges": [{"u": 0, "v": 1, "w": 2.5}, ...]}]}

The CSV report has one row per (graph, path algorithm); the JSON report
holds the full per-graph breakdown under ``"results"``.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Sequence

import pandas as pd

from . import config
from .errors import GraphFormatError, InvalidArgumentError, VertexOutOfBoundsError
from .graph import Graph
from .paths import path_edges
from .pipeline import GraphAnalysis

logger = logging.getLogger(__name__)

CSV_COLUMNS = [
    "graph_id",
    "vertices",
    "edges",
    "density",
    "variant",
    "algorithm",
    "total_operations_count",
    "total_execution_time_ms",
    "path_length",
]


@dataclass(frozen=True)
class GraphSpec:
    """One graph of an input suite plus its descriptive labels."""

    id: int
    graph: Graph
    source: int = 0
    density: str = "unknown"
    variant: str = "unknown"


def _field(obj: dict, key: str, where: str) -> Any:
    if key not in obj:
        raise GraphFormatError(f"{where}: missing field {key!r}")
    return obj[key]


def _as_int(value: Any, where: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise GraphFormatError(f"{where}: expected an integer, got {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise GraphFormatError(f"{where}: expected an integer, got {value!r}")
    return int(value)


def _as_float(value: Any, where: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise GraphFormatError(f"{where}: expected a number, got {value!r}")
    return float(value)


def parse_graph(obj: dict) -> GraphSpec:
    if not isinstance(obj, dict):
        raise GraphFormatError(f"graph entry must be an object, got {type(obj).__name__}")
    gid = _as_int(_field(obj, "id", "graph"), "graph.id")
    where = f"graph {gid}"
    n = _as_int(_field(obj, "n", where), f"{where}.n")
    if n <= 0:
        raise GraphFormatError(f"{where}: vertex count must be > 0, got {n}")

    source = _as_int(obj.get("source", 0), f"{where}.source")
    if not 0 <= source < n:
        raise GraphFormatError(f"{where}: source {source} out of bounds for n={n}")

    g = Graph(n)
    for i, e in enumerate(obj.get("edges") or []):
        ew = f"{where}.edges[{i}]"
        if not isinstance(e, dict):
            raise GraphFormatError(f"{ew}: edge must be an object")
        u = _as_int(_field(e, "u", ew), f"{ew}.u")
        v = _as_int(_field(e, "v", ew), f"{ew}.v")
        w = _as_float(_field(e, "w", ew), f"{ew}.w")
        try:
            g.add_edge(u, v, w)
        except (VertexOutOfBoundsError, InvalidArgumentError) as exc:
            raise GraphFormatError(f"{ew}: {exc}") from exc

    return GraphSpec(
        id=gid,
        graph=g,
        source=source,
        density=str(obj.get("density", "unknown")),
        variant=str(obj.get("variant", "unknown")),
    )


def parse_graph_suite(doc: Any) -> list[GraphSpec]:
    if not isinstance(doc, dict):
        raise GraphFormatError("input document must be a JSON object")
    graphs = doc.get("graphs")
    if not isinstance(graphs, list):
        raise GraphFormatError("no 'graphs' array in input document")
    return [parse_graph(obj) for obj in graphs]


def load_graph_suite(path: str | Path) -> list[GraphSpec]:
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        try:
            doc = json.load(f)
        except json.JSONDecodeError as exc:
            raise GraphFormatError(f"{path}: invalid JSON ({exc})") from exc
    specs = parse_graph_suite(doc)
    logger.info("Loaded %d graphs from %s", len(specs), path)
    return specs


def _finite_or_none(x: float) -> float | None:
    return float(x) if math.isfinite(x) else None


def _path_edges(dag: Graph, path: Sequence[int]) -> list[dict]:
    return [{"u": e.src, "v": e.dst, "w": e.w} for e in path_edges(dag, path)]


def results_frame(analyses: Iterable[tuple[GraphSpec, GraphAnalysis]]) -> pd.DataFrame:
    """One row per (graph, path algorithm), matching :data:`CSV_COLUMNS`."""
    rows = []
    for spec, a in analyses:
        base = {
            "graph_id": spec.id,
            "vertices": a.graph.n,
            "edges": a.graph.num_edges,
            "density": spec.density,
            "variant": spec.variant,
        }
        summary = a.shortest_path_summary()
        if summary is not None:
            rows.append({
                **base,
                "algorithm": "DAG-ShortestPath",
                "total_operations_count": a.total_operations("shortest"),
                "total_execution_time_ms": round(a.total_time_ms("shortest"), config.CSV_TIME_DECIMALS),
                "path_length": round(summary.length, config.CSV_LENGTH_DECIMALS),
            })
        rows.append({
            **base,
            "algorithm": "DAG-LongestPath",
            "total_operations_count": a.total_operations("longest"),
            "total_execution_time_ms": round(a.total_time_ms("longest"), config.CSV_TIME_DECIMALS),
            "path_length": round(a.critical.length, config.CSV_LENGTH_DECIMALS),
        })
    return pd.DataFrame(rows, columns=CSV_COLUMNS)


def write_csv_report(path: str | Path, analyses: Iterable[tuple[GraphSpec, GraphAnalysis]]) -> pd.DataFrame:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df = results_frame(analyses)
    df.to_csv(path, sep=config.CSV_SEP, index=False)
    logger.info("Wrote %d report rows to %s", len(df), path)
    return df


def analysis_to_dict(spec: GraphSpec, a: GraphAnalysis) -> dict:
    sm = a.stage_metrics()
    out: dict[str, Any] = {
        "graph_id": spec.id,
        "input_stats": {
            "vertices": a.graph.n,
            "edges": a.graph.num_edges,
            "density": spec.density,
            "variant": spec.variant,
            "source": spec.source,
        },
        "tarjan_scc": {
            "num_sccs": a.scc.num_components,
            "sccs": [[int(v) for v in c] for c in a.scc.components],
            "operations_count": sm["scc"].total_operations(),
            "execution_time_ms": sm["scc"].elapsed_ms,
        },
        "condensation_graph": {
            "vertices": a.dag.n,
            "edges": a.dag.num_edges,
            "weight_policy": a.condensation.weight_policy,
        },
        "topological_sort": {
            "topological_order": [int(v) for v in a.topo.order],
            "operations_count": sm["topo"].total_operations(),
            "execution_time_ms": sm["topo"].elapsed_ms,
        },
    }

    summary = a.shortest_path_summary()
    if summary is not None:
        out["shortest_path"] = {
            "source": spec.source,
            "dag_source": a.dag_source,
            "path": [int(v) for v in summary.path],
            "edges": _path_edges(a.dag, summary.path),
            "path_length": summary.length,
            "operations_count": sm["shortest"].total_operations(),
            "execution_time_ms": sm["shortest"].elapsed_ms,
            "total_operations_count": a.total_operations("shortest"),
            "total_execution_time_ms": a.total_time_ms("shortest"),
        }

    lp: dict[str, Any] = {"critical_path_length": _finite_or_none(a.critical.length)}
    cp = a.critical.path
    if cp is not None:
        lp["critical_path"] = [int(v) for v in cp]
        lp["edges"] = _path_edges(a.dag, cp)
    lp.update({
        "operations_count": sm["longest"].total_operations(),
        "execution_time_ms": sm["longest"].elapsed_ms,
        "total_operations_count": a.total_operations("longest"),
        "total_execution_time_ms": a.total_time_ms("longest"),
    })
    out["longest_path"] = lp
    return out


def write_json_report(path: str | Path, analyses: Iterable[tuple[GraphSpec, GraphAnalysis]]) -> dict:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    doc = {"results": [analysis_to_dict(spec, a) for spec, a in analyses]}
    with open(path, "w", encoding="utf-8") as f:
        json.dump(doc, f, indent=2)
    logger.info("Wrote %d results to %s", len(doc["results"]), path)
    return doc
