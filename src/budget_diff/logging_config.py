"""
Logging for Budget Diff.

Diagnostics go to stderr through rich so that stdout carries only the
report (a CSV or JSON export can be piped straight into another tool).
Every module logs under the ``budget_diff`` namespace via ``get_logger``.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "budget_diff"

FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def _level_for(verbose: bool, quiet: bool) -> int:
    # --quiet beats --verbose
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.DEBUG
    return logging.WARNING


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Route ``budget_diff`` log records to the terminal and optionally a file.

    Calling it again replaces the handlers installed by the previous call,
    so a long-lived process can change verbosity between commands.

    Args:
        verbose: Log at DEBUG and show source paths and locals in tracebacks
        quiet: Only log errors
        log_file: Also append plain-text records to this file

    Returns:
        The ``budget_diff`` package logger
    """
    level = _level_for(verbose, quiet)

    terminal = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        # Line names come from user data and may contain [brackets]
        markup=False,
        show_path=verbose,
    )
    handlers: list[logging.Handler] = [terminal]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handlers.append(file_handler)

    logger = logging.getLogger(PACKAGE_LOGGER)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    for handler in handlers:
        handler.setLevel(level)
        logger.addHandler(handler)
    logger.setLevel(level)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger for a module, always inside the ``budget_diff`` namespace.

    ``get_logger(__name__)`` inside the package returns the module's own
    logger; a bare name such as ``"engine"`` becomes ``budget_diff.engine``.
    """
    if name is None:
        return logging.getLogger(PACKAGE_LOGGER)

    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"

    return logging.getLogger(name)
