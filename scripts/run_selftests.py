"""CLI entry point for the cipher self-test report.

Usage:
    python scripts/run_selftests.py                       # full run, default output dir
    python scripts/run_selftests.py --vectors 50 -v       # quicker, verbose
    python scripts/run_selftests.py --output-dir out/     # custom report location

Writes encryption-test-report.{csv,html,json} and exits non-zero when any
check fails.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Ensure project root is on path
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from cipherchain.cipher.registry import EngineRegistry
from cipherchain.config import load_settings
from cipherchain.evaluation.catalog import run_catalog
from cipherchain.evaluation.report import EvaluationReport
from cipherchain.evaluation.roundtrip import run_all_engines
from cipherchain.evaluation.table_analysis import analyze_tables
from cipherchain.utils.repro import make_report_paths, set_global_seed, write_json, write_text


def _cli_progress(stage_type: str, current: int, total: int) -> None:
    """Print progress to stderr."""
    print(f"  [{current + 1}/{total}] roundtrip {stage_type}", file=sys.stderr)


def main() -> int:
    settings = load_settings()

    parser = argparse.ArgumentParser(description="Run cipher self-tests and write reports")
    parser.add_argument(
        "--vectors", type=int, default=settings.roundtrip_vectors,
        help=f"Roundtrip vectors per engine (default: {settings.roundtrip_vectors})",
    )
    parser.add_argument(
        "--seed", type=int, default=settings.global_seed,
        help=f"Random seed (default: {settings.global_seed})",
    )
    parser.add_argument(
        "--output-dir", type=str, default=settings.reports_dir,
        help=f"Report directory (default: {settings.reports_dir})",
    )
    parser.add_argument(
        "--block-mode", choices=["codebook", "single"], default=settings.block_mode,
        help=f"Block engine message mode (default: {settings.block_mode})",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    set_global_seed(args.seed)
    registry = EngineRegistry(block_mode=args.block_mode)

    report = EvaluationReport(
        catalog=run_catalog(),
        roundtrip_results=run_all_engines(
            num_vectors=args.vectors,
            seed=args.seed,
            registry=registry,
            progress_callback=_cli_progress,
        ),
        table_analysis=analyze_tables(),
    )

    paths = make_report_paths(args.output_dir)
    write_text(paths.csv, report.to_csv())
    write_text(paths.html, report.to_html())
    write_json(paths.json, report.to_dict())

    print(report.to_summary())
    print(f"\nCSV report saved to {paths.csv}")
    print(f"HTML report saved to {paths.html}")
    print(f"JSON report saved to {paths.json}")

    return 0 if report.all_passed else 1


if __name__ == "__main__":
    sys.exit(main())
