"""Theme and color definitions for the CLI."""

from __future__ import annotations

from dataclasses import dataclass
from rich.style import Style
from rich.theme import Theme as RichTheme


@dataclass
class Theme:
    """Color theme for the CLI - TaxJar green with cyan accents."""

    # Primary colors
    primary: str = "#00C389"      # TaxJar green
    secondary: str = "#00CED1"    # Cyan - values and identifiers

    # Status colors
    success: str = "#00E676"      # Bright green
    error: str = "#FF5252"        # Red
    warning: str = "#FFB347"      # Orange-yellow

    # Text colors
    text: str = "#E8E8E8"         # Light gray
    muted: str = "#888888"        # Muted gray
    dim: str = "#555555"          # Dim gray

    def to_rich_theme(self) -> RichTheme:
        """Convert to Rich theme."""
        return RichTheme({
            # Core styles
            "primary": Style(color=self.primary),
            "secondary": Style(color=self.secondary),

            # Status styles
            "success": Style(color=self.success, bold=True),
            "error": Style(color=self.error, bold=True),
            "warning": Style(color=self.warning),

            # Text styles
            "text": Style(color=self.text),
            "muted": Style(color=self.muted),
            "dim": Style(color=self.dim),
            "heading": Style(bold=True),

            # Semantic styles
            "path": Style(color=self.muted),
            "money": Style(color=self.text),
            "money.total": Style(color=self.success, bold=True),
            "rate": Style(color=self.secondary),
            "rate.total": Style(color=self.success, bold=True),
            "id": Style(color=self.secondary),

            # Table styles
            "table.header": Style(color=self.secondary, bold=True),
            "table.separator": Style(color=self.dim),

            # Spinner
            "spinner": Style(color=self.primary),
        })


# Default theme instance
_theme = Theme()


def get_theme() -> Theme:
    """Get the current theme."""
    return _theme
