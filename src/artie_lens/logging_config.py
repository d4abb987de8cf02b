"""
Logging for artie-lens.

Everything logs under the ``artie_lens`` logger. The CLI attaches a single
rich handler writing to stderr, so ``--format json`` on stdout stays
parseable; library callers that never call setup_logging get no output
beyond Python's last-resort handler.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "artie_lens"


def log_level(verbose: bool = False, quiet: bool = False) -> int:
    """``quiet`` wins over ``verbose``."""
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.DEBUG
    return logging.WARNING


def setup_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """
    Attach a rich stderr handler to the artie_lens logger.

    Calling it again replaces the handler instead of stacking a second one.

    Args:
        verbose: DEBUG level, with source paths and locals in tracebacks
        quiet: ERROR level only

    Returns:
        The artie_lens logger
    """
    level = log_level(verbose, quiet)
    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        show_path=verbose,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    logger = logging.getLogger(ROOT_LOGGER)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger under the artie_lens namespace (``engine`` -> ``artie_lens.engine``)."""
    if name is None:
        return logging.getLogger(ROOT_LOGGER)
    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
