"""Logging setup. Log records go to stderr so stdout stays clean for --json."""

from __future__ import annotations

import logging

from rich.logging import RichHandler

from taxjar_cli.ui.console import err_console


def setup_logging(verbose: bool = False) -> None:
    """Route the taxjar_cli and httpx loggers through Rich on stderr."""
    handler = RichHandler(
        console=err_console,
        show_path=False,
        show_time=verbose,
        markup=False,
        rich_tracebacks=verbose,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    levels = {
        "taxjar_cli": logging.DEBUG if verbose else logging.WARNING,
        # httpx logs every request at INFO
        "httpx": logging.INFO if verbose else logging.WARNING,
    }
    for name, level in levels.items():
        logger = logging.getLogger(name)
        logger.handlers[:] = [handler]
        logger.setLevel(level)
        logger.propagate = False
