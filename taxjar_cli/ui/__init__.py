"""UI components for the TaxJar CLI."""

from taxjar_cli.ui.console import (
    console,
    err_console,
    print_error,
    print_hint,
    print_json,
    print_status,
    print_success,
)
from taxjar_cli.ui.spinners import create_spinner
from taxjar_cli.ui.tables import (
    format_money,
    format_rate,
    print_fields,
    print_heading,
    print_table,
    yes_no,
)
from taxjar_cli.ui.theme import Theme, get_theme

__all__ = [
    # Theme
    "Theme",
    "get_theme",
    # Console
    "console",
    "err_console",
    "print_error",
    "print_success",
    "print_status",
    "print_hint",
    "print_json",
    # Spinners
    "create_spinner",
    # Tables
    "print_table",
    "print_fields",
    "print_heading",
    "format_money",
    "format_rate",
    "yes_no",
]
