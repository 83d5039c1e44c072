#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from sccdag import config
from sccdag.generate import write_suite


def main() -> None:
    ap = argparse.ArgumentParser(description="Generate sparse and dense graph suites for run_pipeline.py.")
    ap.add_argument("--data-dir", type=Path, default=config.DATA_DIR, help="Where to write the JSON suites.")
    ap.add_argument("--seed", type=int, default=0, help="RNG seed (the dense suite uses seed + 1).")
    args = ap.parse_args()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    write_suite(args.data_dir / config.SPARSE_INPUT, dense=False, seed=args.seed)
    write_suite(args.data_dir / config.DENSE_INPUT, dense=True, seed=args.seed + 1)


if __name__ == "__main__":
    main()
