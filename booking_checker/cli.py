"""Command line interface for checking a spreadsheet of bookings."""
from __future__ import annotations

import argparse
import logging
import sys
import threading
from pathlib import Path

from .config import ConfigurationError, load_settings
from .ingestion import check_export_path, export_results, parse_rows
from .orchestrator import BatchOrchestrator, summarize


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser(prog: str | None = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        description="Check whether booked flights were cancelled or rescheduled by their carrier",
    )
    parser.add_argument("input", help="Path to the bookings spreadsheet (CSV or XLSX)")
    parser.add_argument("output", help="Path where the results should be written (CSV or XLSX)")
    parser.add_argument(
        "--config",
        default=None,
        help="Optional configuration file (YAML or JSON); AAT_HEADER_GOL and AZUL_KEY are read from the environment",
    )
    parser.add_argument(
        "--max-workers",
        type=_positive_int,
        default=None,
        help="Maximum number of bookings checked at the same time (default: 5)",
    )
    parser.add_argument(
        "--progress-interval",
        type=float,
        default=5.0,
        help="Seconds between progress log lines; 0 disables progress reporting",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING)",
    )
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def _report_progress(orchestrator: BatchOrchestrator, interval: float, stop: threading.Event) -> None:
    while not stop.wait(interval):
        progress = orchestrator.get_progress()
        logging.info("Progress: %s/%s (%s%%)", progress["current"], progress["total"], progress["percentage"])


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))

    try:
        settings = load_settings(args.config)
        if args.max_workers is not None:
            settings.max_workers = args.max_workers
        check_export_path(args.output)
        rows = parse_rows(args.input)
    except (ConfigurationError, ValueError, FileNotFoundError) as exc:
        logging.error("%s", exc)
        return 1

    orchestrator = BatchOrchestrator.from_settings(settings)

    stop = threading.Event()
    reporter = None
    if args.progress_interval > 0:
        reporter = threading.Thread(
            target=_report_progress,
            args=(orchestrator, args.progress_interval, stop),
            name="progress-reporter",
            daemon=True,
        )
        reporter.start()
    try:
        results = orchestrator.run_batch(rows)
    finally:
        stop.set()
        if reporter is not None:
            reporter.join()

    try:
        export_results(results, args.output)
    except (ValueError, OSError) as exc:
        logging.error("Could not write results to %s: %s", args.output, exc)
        return 1
    summary = summarize(results)
    logging.info("Processed %s bookings: %s", len(results), ", ".join(f"{k}={v}" for k, v in summary.items()))
    logging.info("Results written to %s", Path(args.output).resolve())
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
