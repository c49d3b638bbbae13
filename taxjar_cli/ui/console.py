"""Rich console instances and message helpers.

Results go to stdout; progress, errors and logs go to stderr so that
`--json` output can be piped straight into another tool.
"""

from __future__ import annotations

import json
from typing import Any

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from taxjar_cli.ui.theme import get_theme

console = Console(theme=get_theme().to_rich_theme(), highlight=False)
err_console = Console(theme=get_theme().to_rich_theme(), stderr=True, highlight=False)


def print_error(message: str, title: str = "Error", hint: str = "") -> None:
    """Print an error box on stderr."""
    content = Text()
    content.append(message, style="#FF5252")
    if hint:
        content.append("\n")
        content.append(hint, style="warning")

    err_console.print(Panel(
        content,
        title=f"[#FF5252 bold]✖ {title}[/#FF5252 bold]",
        title_align="left",
        border_style="#FF5252",
        box=box.ROUNDED,
        padding=(0, 2),
    ))


def print_success(message: str) -> None:
    """Print a one-line success mark."""
    text = Text()
    text.append("✔ ", style="success")
    text.append(message)
    console.print(text)


def print_status(message: str, ok: bool = True) -> None:
    """Print the final state of a progress indicator on stderr."""
    text = Text()
    text.append("  ✔ " if ok else "  ✖ ", style="success" if ok else "error")
    text.append(message, style="text" if ok else "error")
    err_console.print(text)


def print_hint(message: str) -> None:
    """Print a dim follow-up hint."""
    console.print(Text(message, style="dim"))


def print_json(data: Any) -> None:
    """Print data as indented JSON, nothing else."""
    console.print_json(json.dumps(data, indent=2))
