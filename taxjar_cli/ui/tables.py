"""Plain-text tables and labeled field listings for human-mode output."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Sequence

from rich.text import Text

from taxjar_cli.ui.console import console

NO_RESULTS = "No results found."
COLUMN_GAP = "  "

# (label, value, style)
Field = tuple[str, str, str]


def lookup(row: Any, key: str) -> Any:
    """Resolve a dotted key such as `minimum_rate.rate` against nested dicts."""
    value = row
    for part in key.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


def cell(value: Any) -> str:
    """Render one table cell."""
    if value is None:
        return ""
    return str(value)


def column_widths(rows: Sequence[Any], columns: Sequence[tuple[str, str]]) -> list[int]:
    """Width of each column: the longest of its label and its values."""
    return [
        max([len(label)] + [len(cell(lookup(row, key))) for row in rows])
        for key, label in columns
    ]


def print_table(
    rows: Sequence[Any],
    columns: Sequence[tuple[str, str]],
    empty_message: str = NO_RESULTS,
) -> None:
    """Print rows as a column-aligned table: header, separator, then rows.

    Args:
        rows: Result dicts, in the order the API returned them
        columns: (key, label) pairs; keys may be dotted paths
        empty_message: Printed instead of a table when there are no rows
    """
    if not rows:
        console.print(Text(empty_message, style="warning"))
        return

    widths = column_widths(rows, columns)
    header = COLUMN_GAP.join(label.ljust(width) for (_, label), width in zip(columns, widths))
    separator = COLUMN_GAP.join("-" * width for width in widths)

    console.print(Text(header, style="table.header"), soft_wrap=True)
    console.print(Text(separator, style="table.separator"), soft_wrap=True)
    for row in rows:
        line = COLUMN_GAP.join(
            cell(lookup(row, key)).ljust(width) for (key, _), width in zip(columns, widths)
        )
        console.print(Text(line), soft_wrap=True)


def print_heading(title: str) -> None:
    """Bold title over a rule of the same length."""
    console.print(Text(title, style="heading"), soft_wrap=True)
    console.print(Text("─" * len(title), style="dim"))


def print_fields(fields: Sequence[Field], title: Optional[str] = None) -> None:
    """Print a labeled field listing with the values aligned in one column."""
    if title:
        console.print()
        print_heading(title)
    if not fields:
        return

    width = max(len(label) for label, _, _ in fields) + 2
    for label, value, style in fields:
        text = Text(f"{label}:".ljust(width), style="muted")
        text.append(value, style=style)
        console.print(text, soft_wrap=True)


def _decimal(value: Any) -> Optional[Decimal]:
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    return number if number.is_finite() else None


def format_money(value: Any) -> str:
    """`8.88` -> `$8.88`, `-5` -> `-$5.00`."""
    if value is None or value == "":
        return "N/A"
    number = _decimal(value)
    if number is None:
        return f"${value}"
    amount = abs(number).quantize(Decimal("0.01"))
    return f"-${amount}" if number < 0 else f"${amount}"


def format_rate(value: Any) -> str:
    """`0.08875` -> `8.8750%`."""
    if value is None or value == "":
        return "N/A"
    number = _decimal(value)
    if number is None:
        return str(value)
    return f"{(number * 100).quantize(Decimal('0.0001'))}%"


def yes_no(value: Any) -> str:
    return "Yes" if value else "No"


def format_location(record: dict, prefix: str) -> str:
    """`Brooklyn, NY 11201 US` out of a record's to_* / from_* fields."""
    city = record.get(f"{prefix}_city") or ""
    state = record.get(f"{prefix}_state") or ""
    zip_code = record.get(f"{prefix}_zip") or ""
    country = record.get(f"{prefix}_country") or ""
    region = " ".join(part for part in (state, zip_code, country) if part)
    return ", ".join(part for part in (city, region) if part)
