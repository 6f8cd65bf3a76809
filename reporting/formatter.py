"""
Text report for asset size diffs.

Renders one line per asset, names right-aligned into a single column:

     app.*******.js ⏤  25 kB (+25 kB)
    vendor.****.css ⏤  4.81 kB

Sizes are colored by severity tier. Large increases make the size bold and
the delta red, meaningful decreases make the delta green.
"""

import io
import math
from typing import Sequence

from rich.console import Console
from rich.text import Text

from diffing.size_diff import DeltaEmphasis, DiffEntry, SeverityTier

ARROW = "⏤"

# Decimal units, as pretty-bytes prints them
BYTE_UNITS = ["B", "kB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB"]

TIER_STYLES = {
    SeverityTier.CRITICAL: "red",
    SeverityTier.HIGH: "yellow",
    SeverityTier.MEDIUM: "cyan",
    SeverityTier.LOW: "green",
}


def pretty_bytes(number: int, signed: bool = False) -> str:
    """
    Convert a byte count to a human-readable string.

    Uses decimal units and three significant digits, e.g. ``1.23 MB``.

    Args:
        number: Byte count, may be negative
        signed: Prefix positive values with ``+``

    Returns:
        Formatted size
    """
    if number < 0:
        prefix = "-"
    elif signed and number > 0:
        prefix = "+"
    else:
        prefix = ""

    number = abs(number)
    if number < 1:
        return f"{prefix}{number} B"

    exponent = min(int(math.log10(number) // 3), len(BYTE_UNITS) - 1)
    value = float(f"{number / 1000 ** exponent:.3g}")
    return f"{prefix}{value:g} {BYTE_UNITS[exponent]}"


class ReportFormatter:
    """Formats diff entries into an aligned, tier-colored text block."""

    def __init__(self, color: bool = True):
        """
        Initialize report formatter.

        Args:
            color: Emit ANSI styles; plain text otherwise
        """
        self.color = color

    def render_line(self, entry: DiffEntry, width: int) -> Text:
        line = Text(" " * (width - len(entry.name) + 1) + entry.name + f" {ARROW}  ")

        size_style = TIER_STYLES[entry.tier]
        if entry.emphasis is DeltaEmphasis.INCREASE:
            size_style = f"bold {size_style}"
        line.append(pretty_bytes(entry.size), style=size_style)

        if entry.delta_significant:
            delta_style = None
            if entry.emphasis is DeltaEmphasis.INCREASE:
                delta_style = "red"
            elif entry.emphasis is DeltaEmphasis.DECREASE:
                delta_style = "green"
            line.append(" (")
            line.append(pretty_bytes(entry.delta, signed=True), style=delta_style)
            line.append(")")

        line.append("\n")
        return line

    def render(self, entries: Sequence[DiffEntry]) -> Text:
        """Build the styled report; empty when there are no entries."""
        report = Text()
        if not entries:
            return report

        width = max(len(entry.name) for entry in entries)
        for entry in entries:
            report.append_text(self.render_line(entry, width))
        return report

    def format(self, entries: Sequence[DiffEntry]) -> str:
        """
        Format diff entries as text.

        Args:
            entries: Diff entries in display order

        Returns:
            Report text, or an empty string when there is nothing to report
        """
        if not entries:
            return ""

        report = self.render(entries)
        if not self.color:
            return report.plain

        buffer = io.StringIO()
        console = Console(
            file=buffer,
            force_terminal=True,
            color_system="standard",
            highlight=False,
            soft_wrap=True
        )
        console.print(report, end="")
        return buffer.getvalue()


def format_report(entries: Sequence[DiffEntry], color: bool = True) -> str:
    """Format diff entries as text, empty when there are none."""
    return ReportFormatter(color=color).format(entries)
