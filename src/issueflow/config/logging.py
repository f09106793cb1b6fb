"""Logging setup for the command line entry point."""

from __future__ import annotations

import logging
from typing import Final

LOG_FORMAT: Final[str] = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# third-party loggers that drown the integration summary at DEBUG
NOISY_LOGGERS: Final[tuple[str, ...]] = ("alembic", "sqlalchemy.engine")


def configure_logging(*, verbose: bool = False, force: bool = False) -> None:
    """Configure the root logger for CLI output.

    ``verbose`` switches issueflow to DEBUG (per-component tracking details)
    while migrations and SQL stay at WARNING. ``force`` replaces handlers set
    up earlier, e.g. by a test runner.
    """

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        force=force,
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
