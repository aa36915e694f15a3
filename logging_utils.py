"""Shared logging configuration helpers for the imgprep command line.

All reporting (per-file results, tables, colors) goes through the root
logger on stdout. Pillow's plugins log every decoded chunk at DEBUG, so
library loggers stay at WARNING unless -vv is given.
"""

from __future__ import annotations

import logging
import sys
from typing import Iterable

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}

LOG_LEVEL_CHOICES: Iterable[str] = tuple(LOG_LEVELS.keys())

# Third-party loggers that are only useful when debugging the libraries themselves
LIBRARY_LOGGERS = ("PIL",)


def add_logging_args(parser) -> None:
    """Add --log-level, -v and -q to an argparse parser."""
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVEL_CHOICES,
        help="Set log verbosity explicitly (overrides -v/-q)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v per-step details, -vv library debug output)",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="count",
        default=0,
        help="Reduce log verbosity (-q hides progress, -qq errors only)",
    )


def resolve_log_level(
    log_level: str | None = None,
    verbose: int = 0,
    quiet: int = 0,
) -> int:
    """Map an explicit level name, or the -v/-q balance, to a logging level."""
    if log_level:
        return LOG_LEVELS[log_level.lower()]

    offset = verbose - quiet
    if offset > 0:
        return logging.DEBUG
    return {0: logging.INFO, -1: logging.WARNING}.get(offset, logging.ERROR)


def library_log_level(level: int, verbose: int = 0, quiet: int = 0) -> int:
    """Level for LIBRARY_LOGGERS: never chattier than WARNING below -vv."""
    if verbose - quiet >= 2:
        return level
    return max(level, logging.WARNING)


def configure_logging(
    log_level: str | None = None,
    verbose: int = 0,
    quiet: int = 0,
) -> int:
    """Configure root logging once and return the active level.

    Calling it again only adjusts levels on the existing handlers.
    """
    level = resolve_log_level(log_level=log_level, verbose=verbose, quiet=quiet)
    for name in LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(library_log_level(level, verbose, quiet))

    root_logger = logging.getLogger()
    if root_logger.handlers:
        root_logger.setLevel(level)
        for handler in root_logger.handlers:
            handler.setLevel(level)
        return level

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
    )
    return level
