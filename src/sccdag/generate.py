"""Synthetic graph suites for exercising the pipeline.

Variants:

- ``pure_dag``: vertices spread over ~sqrt(n) levels, edges only go up a level.
- ``one_cycle``: the ring ``0 -> 1 -> ... -> n-1 -> 0`` plus random chords.
- ``two_cycles``: two rings joined by one edge, chords stay inside a ring.
- ``mixed`` / ``many_sccs``: 3-5 / 5-10 ring-shaped SCCs chained into a DAG.
"""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path

import numpy as np

from . import config
from .errors import InvalidArgumentError

logger = logging.getLogger(__name__)

VARIANTS = ("pure_dag", "one_cycle", "two_cycles", "mixed", "many_sccs")


class _EdgeSet:
    """Edge list without duplicate (u, v) pairs; weights in [1, 10], 1 decimal."""

    def __init__(self, rng: np.random.Generator) -> None:
        self.rng = rng
        self.seen: set[tuple[int, int]] = set()
        self.edges: list[dict] = []

    def add(self, u: int, v: int) -> None:
        key = (int(u), int(v))
        if key in self.seen:
            return
        w = config.WEIGHT_LOW + self.rng.random() * (config.WEIGHT_HIGH - config.WEIGHT_LOW)
        self.edges.append({"u": key[0], "v": key[1], "w": round(float(w), 1)})
        self.seen.add(key)

    def __len__(self) -> int:
        return len(self.edges)


def target_edge_count(n: int, dense: bool) -> int:
    if dense:
        return min(n * config.DENSE_EDGE_FACTOR, n * (n - 1) // 3)
    return int(n * config.SPARSE_EDGE_FACTOR)


def _pure_dag(n: int, target: int, es: _EdgeSet) -> None:
    rng = es.rng
    num_levels = max(3, int(math.sqrt(n)))
    level = [(i * num_levels) // n for i in range(n)]

    # chain every vertex to the first vertex of a higher level
    for i in range(n - 1):
        for j in range(i + 1, n):
            if level[j] > level[i]:
                es.add(i, j)
                break

    for _ in range(config.MAX_ATTEMPTS):
        if len(es) >= target:
            break
        u, v = (int(x) for x in rng.integers(0, n, size=2))
        if u < v and level[u] < level[v]:
            es.add(u, v)


def _one_cycle(n: int, target: int, es: _EdgeSet) -> None:
    rng = es.rng
    for i in range(n - 1):
        es.add(i, i + 1)
    es.add(n - 1, 0)
    for _ in range(config.MAX_ATTEMPTS):
        if len(es) >= target:
            break
        u, v = (int(x) for x in rng.integers(0, n, size=2))
        if u != v:
            es.add(u, v)


def _two_cycles(n: int, target: int, es: _EdgeSet) -> None:
    rng = es.rng
    split = n // 2
    for lo, hi in ((0, split), (split, n)):
        for i in range(lo, hi - 1):
            es.add(i, i + 1)
        es.add(hi - 1, lo)
    es.add(int(rng.integers(0, split)), split + int(rng.integers(0, n - split)))

    for _ in range(config.MAX_ATTEMPTS):
        if len(es) >= target:
            break
        u, v = (int(x) for x in rng.integers(0, n, size=2))
        same_ring = (u < split) == (v < split)
        if u != v and same_ring:
            es.add(u, v)


def _several_sccs(n: int, target: int, es: _EdgeSet, lo: int, hi: int) -> int:
    rng = es.rng
    k = min(int(rng.integers(lo, hi + 1)), n // 2)
    base, rem = divmod(n, k)
    groups: list[list[int]] = []
    cur = 0
    for i in range(k):
        size = base + (1 if i < rem else 0)
        groups.append(list(range(cur, cur + size)))
        cur += size

    for g in groups:
        if len(g) == 1:
            continue
        for a, b in zip(g, g[1:]):
            es.add(a, b)
        es.add(g[-1], g[0])

    def pick(g: list[int]) -> int:
        return g[int(rng.integers(0, len(g)))]

    # consecutive groups chained, plus forward skips; never backwards
    for i in range(k - 1):
        es.add(pick(groups[i]), pick(groups[i + 1]))
    for i in range(k - 1):
        for j in range(i + 2, k):
            if len(es) >= target * 0.8:
                break
            if rng.random() < 0.5:
                es.add(pick(groups[i]), pick(groups[j]))

    for _ in range(config.MAX_ATTEMPTS):
        if len(es) >= target:
            break
        g = groups[int(rng.integers(0, k))]
        if len(g) > 1:
            u, v = pick(g), pick(g)
            if u != v:
                es.add(u, v)
    return k


def default_source(n: int, variant: str) -> int:
    return max(0, n // 3) if variant == "many_sccs" else 0


def generate_graph(
    graph_id: int,
    n: int,
    variant: str,
    dense: bool = False,
    rng: np.random.Generator | None = None,
) -> dict:
    """One graph entry in the input-suite JSON layout (see :mod:`sccdag.io`)."""
    if variant not in VARIANTS:
        raise InvalidArgumentError(f"unknown variant {variant!r}; expected one of {VARIANTS}")
    min_n = 4 if variant in ("two_cycles", "mixed", "many_sccs") else 2
    if n < min_n:
        raise InvalidArgumentError(f"variant {variant!r} needs n >= {min_n}, got {n}")
    rng = rng if rng is not None else np.random.default_rng()

    es = _EdgeSet(rng)
    target = target_edge_count(n, dense)
    if variant == "pure_dag":
        _pure_dag(n, target, es)
    elif variant == "one_cycle":
        _one_cycle(n, target, es)
    elif variant == "two_cycles":
        _two_cycles(n, target, es)
    elif variant == "mixed":
        _several_sccs(n, target, es, 3, 5)
    else:
        _several_sccs(n, target, es, 5, 10)

    return {
        "id": int(graph_id),
        "directed": True,
        "n": int(n),
        "edges": es.edges,
        "source": default_source(n, variant),
        "weight_model": "edge",
        "density": "dense" if dense else "sparse",
        "variant": variant,
    }


def generate_suite(dense: bool = False, seed: int | None = 0) -> dict:
    rng = np.random.default_rng(seed)
    graphs = [
        generate_graph(i, n, variant, dense=dense, rng=rng)
        for i, (n, variant) in enumerate(config.SUITE_SIZES, start=1)
    ]
    return {"graphs": graphs}


def write_suite(path: str | Path, dense: bool = False, seed: int | None = 0) -> dict:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    doc = generate_suite(dense=dense, seed=seed)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(doc, f, indent=2)
    logger.info("Wrote %d %s graphs to %s", len(doc["graphs"]), "dense" if dense else "sparse", path)
    return doc
