"""Logging setup for repo-risk.

Every module logs under the "repo_risk" namespace. Records go to stderr via
rich, so --json output on stdout stays machine-readable.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "repo_risk"

_FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

_LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}


def _file_handler(path: str) -> logging.Handler:
    handler = logging.FileHandler(path, mode="a", encoding="utf-8")
    handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))
    return handler


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """Install a rich stderr handler (and optionally a log file).

    Args:
        verbose: Show debug records, with source paths and traceback locals
        quiet: Only show errors. Wins over verbose.
        log_file: Also append plain-text records to this file

    Returns:
        The package logger
    """
    verbosity = "quiet" if quiet else "verbose" if verbose else "normal"
    level = _LEVELS[verbosity]

    rich_handler = RichHandler(
        console=Console(stderr=True),
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        show_path=verbose,
    )
    handlers: list[logging.Handler] = [rich_handler]
    if log_file:
        handlers.append(_file_handler(log_file))

    # Replaces handlers left by an earlier call in the same process
    logging.basicConfig(level=level, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True)

    package_logger = logging.getLogger(LOGGER_NAME)
    package_logger.setLevel(level)
    return package_logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger for a module, always inside the repo_risk namespace.

    >>> get_logger("repo_risk.risk.hotspots").name
    'repo_risk.risk.hotspots'
    >>> get_logger("custom").name
    'repo_risk.custom'
    """
    if not name:
        return logging.getLogger(LOGGER_NAME)
    if name == LOGGER_NAME or name.startswith(LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
