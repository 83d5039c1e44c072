"""Per-invocation operation counters and wall-clock timing.

A :class:`Metrics` instance belongs to exactly one algorithm call. The call
resets it, starts the timer, bumps the counters of its category and stops
the timer when it returns; afterwards the instance is only read (by the
report writers in :mod:`sccdag.io`).
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field, fields
from typing import Dict, Optional, Tuple

from .errors import InvalidArgumentError

# counters summed by total_operations(), per algorithm category
CATEGORY_COUNTERS: Dict[str, Tuple[str, ...]] = {
    "scc": ("dfs_visits", "edge_explorations", "stack_pushes", "stack_pops", "lowlink_updates"),
    "topo": ("queue_operations", "indegree_updates"),
    "path": ("relaxations", "distance_updates", "comparisons"),
}


@dataclass
class Metrics:
    algorithm: str
    category: str

    # Tarjan SCC
    dfs_visits: int = 0
    edge_explorations: int = 0
    stack_pushes: int = 0
    stack_pops: int = 0
    lowlink_updates: int = 0

    # Kahn topological sort
    queue_operations: int = 0
    indegree_updates: int = 0

    # DAG shortest / longest paths
    relaxations: int = 0
    distance_updates: int = 0
    comparisons: int = 0

    elapsed_ms: float = 0.0
    _t0: Optional[float] = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.category not in CATEGORY_COUNTERS:
            raise InvalidArgumentError(
                f"unknown metrics category {self.category!r}; "
                f"expected one of {sorted(CATEGORY_COUNTERS)}"
            )

    @classmethod
    def counter_names(cls) -> Tuple[str, ...]:
        return tuple(
            f.name for f in fields(cls)
            if f.name not in ("algorithm", "category", "elapsed_ms", "_t0")
        )

    def reset(self) -> None:
        for name in self.counter_names():
            setattr(self, name, 0)
        self.elapsed_ms = 0.0
        self._t0 = None

    def start(self) -> None:
        self._t0 = time.perf_counter()

    def stop(self) -> float:
        """Freeze the elapsed time; returns it in milliseconds."""
        if self._t0 is not None:
            self.elapsed_ms = (time.perf_counter() - self._t0) * 1000.0
            self._t0 = None
        return self.elapsed_ms

    def total_operations(self) -> int:
        return sum(getattr(self, name) for name in CATEGORY_COUNTERS[self.category])

    def as_dict(self) -> Dict[str, object]:
        out: Dict[str, object] = {"algorithm": self.algorithm, "category": self.category}
        for name in CATEGORY_COUNTERS[self.category]:
            out[name] = getattr(self, name)
        out["total_operations"] = self.total_operations()
        out["elapsed_ms"] = self.elapsed_ms
        return out


def ensure_metrics(metrics: Optional[Metrics], algorithm: str, category: str) -> Metrics:
    """Return ``metrics`` reset for a new run, or a fresh instance."""
    if metrics is None:
        return Metrics(algorithm=algorithm, category=category)
    if metrics.category != category:
        raise InvalidArgumentError(
            f"{algorithm} records {category!r} metrics, got a {metrics.category!r} recorder"
        )
    metrics.reset()
    return metrics
