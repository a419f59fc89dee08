#!/usr/bin/env python3
"""
Run one stage of the payment notification pipeline.

Usage:
    python scripts/run_workflow.py generate [--run-date 2026-10-01] [--dry-run]
    python scripts/run_workflow.py distribute [--dry-run]

Generation renders a PDF for every eligible row of the current period and
marks it pending approval. Distribution emails every approved PDF and
marks the row sent. Only one run should be active against a sheet at a
time.
"""

from __future__ import annotations

import argparse
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

from loguru import logger

# Ensure src/ is on sys.path when running the script directly
REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = REPO_ROOT / "src"
if SRC_PATH.exists():
    sys.path.append(str(SRC_PATH))

from paynotify.config import config  # noqa: E402
from paynotify.logging import configure_logging  # noqa: E402
from paynotify.observability import write_metrics_file  # noqa: E402
from paynotify.orchestrator import orchestrator  # noqa: E402
from paynotify.workflows.registry import WORKFLOW_ALIASES  # noqa: E402


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("stage", choices=sorted(WORKFLOW_ALIASES))
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Select and report records without writing, rendering or sending",
    )
    parser.add_argument(
        "--run-date",
        type=date.fromisoformat,
        default=None,
        help="Generate for the month of this date (YYYY-MM-DD) instead of today",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    configure_logging(config.log_level)

    params = {"dry_run": args.dry_run}
    if args.stage == "generate":
        params["run_date"] = args.run_date
    elif args.run_date is not None:
        logger.warning("--run-date only applies to generate; ignoring it")

    try:
        result = orchestrator.run(args.stage, **params)
    except Exception:
        logger.exception(f"Unable to run {args.stage}")
        return 1
    finally:
        if config.metrics_file:
            write_metrics_file(config.metrics_file)

    summary = result.results.get("summary")
    if summary is not None:
        prefix = "[dry run] " if summary.dry_run else ""
        logger.info(f"{prefix}{args.stage} summary: {summary.describe()}")
        for row_number, message in sorted(summary.failures.items()):
            logger.warning(f"row {row_number} needs attention: {message}")

    if not result.succeeded:
        for step_name, error in result.errors.items():
            logger.error(f"{step_name}: {error.splitlines()[0]}")
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
