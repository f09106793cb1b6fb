from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from issueflow import __version__
from issueflow.app import integrate_report
from issueflow.config import ConfigurationError, configure_logging, get_branch_settings

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from issueflow.config import BranchSettings

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Integrate analysis issues with their history")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log per-component details",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    integrate = subparsers.add_parser("integrate", help="Integrate the issues of a report")
    integrate.add_argument(
        "report",
        type=Path,
        help="Path to the JSON analysis report",
    )
    integrate.add_argument(
        "--branch",
        type=str,
        help="Analysed branch name (defaults to ISSUEFLOW_BRANCH_NAME or the main branch)",
    )
    integrate.add_argument(
        "--target",
        type=str,
        help="Long-lived branch a short-lived branch merges into",
    )
    integrate.add_argument(
        "--long-lived-pattern",
        type=str,
        help="Regular expression matching long-lived branch names",
    )
    integrate.add_argument(
        "--incremental",
        action="store_true",
        help="Reuse persisted issues of unchanged files instead of tracking them",
    )
    integrate.add_argument(
        "--database-uri",
        type=str,
        help="SQLAlchemy database URI (defaults to DATABASE_URI or the data directory)",
    )

    return parser.parse_args(list(argv))


def _branch_settings(args: argparse.Namespace) -> BranchSettings:
    settings = get_branch_settings()
    overrides: dict[str, object] = {}
    if args.branch is not None:
        overrides["name"] = args.branch
    if args.target is not None:
        overrides["target"] = args.target
    if args.long_lived_pattern is not None:
        overrides["long_lived_pattern"] = args.long_lived_pattern
    if args.incremental:
        overrides["incremental"] = True
    return replace(settings, **overrides)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        configure_logging(verbose=parsed_args.verbose)
        settings = _branch_settings(parsed_args)
        if not parsed_args.report.is_file():
            raise ValueError(f"Report not found: {parsed_args.report}")  # noqa: TRY301
    except (ValueError, ConfigurationError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        result = integrate_report(
            parsed_args.report,
            settings=settings,
            database_uri=parsed_args.database_uri,
        )
        log.info(
            "Run %s on branch %s: %s issues persisted",
            result.run_id,
            result.branch.name,
            result.persisted,
        )
    except Exception:
        log.exception("Fatal error during issue integration")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
