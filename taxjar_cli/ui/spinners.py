"""Progress spinner shown while a request is outstanding."""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager

from rich.markup import escape

from taxjar_cli.ui.console import err_console

SPINNER_STYLES = {
    "default": "dots",
    "loading": "dots12",
}


@contextmanager
def create_spinner(message: str, style: str = "default") -> Generator[None, None, None]:
    """Context manager for showing a transient spinner on stderr.

    Nothing is drawn when stderr is not an interactive terminal.
    """
    if not err_console.is_terminal or err_console.is_dumb_terminal:
        yield
        return

    with err_console.status(
        f"[primary]{escape(message)}[/primary]",
        spinner=SPINNER_STYLES.get(style, "dots"),
        spinner_style="spinner",
    ):
        yield
