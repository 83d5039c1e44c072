from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from pathlib import Path

from .condensation import WEIGHT_POLICIES
from .errors import InvalidArgumentError

DATA_DIR = Path("data")
OUTPUTS_DIR = Path("outputs")

SPARSE_INPUT = "input_sparse.json"
DENSE_INPUT = "input_dense.json"
CSV_REPORT = "output.csv"

# report layout
CSV_SEP = ";"
CSV_TIME_DECIMALS = 3
CSV_LENGTH_DECIMALS = 2

WARMUP_ROUNDS = 3
WEIGHT_POLICY = "first"

# generator: target edge counts and weight range
SPARSE_EDGE_FACTOR = 1.8
DENSE_EDGE_FACTOR = 4
WEIGHT_LOW = 1.0
WEIGHT_HIGH = 10.0
MAX_ATTEMPTS = 10_000
SUITE_SIZES = (
    (6, "pure_dag"),
    (8, "one_cycle"),
    (10, "two_cycles"),
    (12, "mixed"),
    (16, "mixed"),
    (20, "mixed"),
    (25, "many_sccs"),
    (35, "pure_dag"),
    (50, "many_sccs"),
)


@dataclass
class RunConfig:
    """Settings for one suite run (see ``scripts/run_pipeline.py``)."""

    inputs: list[Path] = field(
        default_factory=lambda: [DATA_DIR / SPARSE_INPUT, DATA_DIR / DENSE_INPUT]
    )
    outputs_dir: Path = OUTPUTS_DIR
    warmup_rounds: int = WARMUP_ROUNDS
    weight_policy: str = WEIGHT_POLICY
    progress: bool = False

    def __post_init__(self) -> None:
        self.inputs = [Path(p) for p in self.inputs]
        self.outputs_dir = Path(self.outputs_dir)
        if not self.inputs:
            raise InvalidArgumentError("at least one input file is required")
        if self.warmup_rounds < 0:
            raise InvalidArgumentError(f"warmup_rounds must be >= 0, got {self.warmup_rounds}")
        if self.weight_policy not in WEIGHT_POLICIES:
            raise InvalidArgumentError(
                f"weight_policy must be one of {WEIGHT_POLICIES}, got {self.weight_policy!r}"
            )

    @property
    def csv_path(self) -> Path:
        return self.outputs_dir / CSV_REPORT

    def json_path(self, input_path: Path) -> Path:
        # data/input_sparse.json -> outputs/output_sparse.json
        stem = Path(input_path).stem
        if stem.startswith("input_"):
            stem = "output_" + stem[len("input_"):]
        else:
            stem = f"{stem}_results"
        return self.outputs_dir / f"{stem}.json"

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "RunConfig":
        return cls(
            inputs=list(args.inputs),
            outputs_dir=args.outputs_dir,
            warmup_rounds=args.warmup,
            weight_policy=args.weight_policy,
            progress=args.progress,
        )
