"""
Tests for report formatting.
"""

import pytest

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


class TestPrettyBytes:
    """Tests for human-readable byte formatting."""

    @pytest.mark.parametrize("number,expected", [
        (0, "0 B"),
        (50, "50 B"),
        (999, "999 B"),
        (1000, "1 kB"),
        (1500, "1.5 kB"),
        (25000, "25 kB"),
        (4810, "4.81 kB"),
        (1234567, "1.23 MB"),
        (-50, "-50 B"),
        (-25000, "-25 kB"),
    ])
    def test_pretty_bytes(self, number, expected):
        """Test unit selection and rounding."""
        from reporting.formatter import pretty_bytes

        assert pretty_bytes(number) == expected

    def test_signed(self):
        """Test explicit sign for positive deltas."""
        from reporting.formatter import pretty_bytes

        assert pretty_bytes(25000, signed=True) == "+25 kB"
        assert pretty_bytes(-50, signed=True) == "-50 B"
        assert pretty_bytes(0, signed=True) == "0 B"


class TestReportFormatter:
    """Tests for ReportFormatter."""

    def test_new_asset_line(self):
        """Test that a new asset shows size and full-size delta."""
        from diffing.size_diff import diff
        from reporting.formatter import format_report

        text = format_report(diff({"app.js": 25000}, {}), color=False)

        assert text == " app.js ⏤  25 kB (+25 kB)\n"

    def test_unchanged_asset_has_no_delta(self):
        """Test that an insignificant delta is not rendered."""
        from diffing.size_diff import diff
        from reporting.formatter import format_report

        text = format_report(diff({"app.js": 25000}, {"app.js": 25000}), color=False)

        assert text == " app.js ⏤  25 kB\n"
        assert "(" not in text

    def test_decrease_line(self):
        """Test that decreases are shown with a minus sign."""
        from diffing.size_diff import diff
        from reporting.formatter import format_report

        text = format_report(diff({"app.js": 25000}, {"app.js": 25050}), color=False)

        assert text == " app.js ⏤  25 kB (-50 B)\n"

    def test_empty_report(self):
        """Test that no entries produce no text."""
        from reporting.formatter import format_report

        assert format_report([], color=False) == ""
        assert format_report([], color=True) == ""

    def test_columns_aligned(self):
        """Test that names are right-aligned to the longest name."""
        from diffing.size_diff import diff
        from reporting.formatter import format_report, ARROW

        current = {"a.js": 100, "vendor.****.js": 50000, "styles.css": 3000}
        lines = format_report(diff(current, {}), color=False).splitlines()

        assert len(lines) == 3
        assert lines[0].startswith(" " * 11 + "a.js ")
        assert len({line.index(ARROW) for line in lines}) == 1

    def test_color_output_matches_plain(self):
        """Test that colored output carries ANSI codes over the same text."""
        from diffing.size_diff import diff
        from reporting.formatter import ReportFormatter

        entries = diff({"app.js": 150000, "small.css": 100}, {"app.js": 100000})
        formatter = ReportFormatter(color=True)

        colored = formatter.format(entries)

        assert "\x1b[" in colored
        assert formatter.render(entries).plain == ReportFormatter(color=False).format(entries)

    def test_increase_styles(self):
        """Test that a large increase is bold and its delta red."""
        from diffing.size_diff import diff
        from reporting.formatter import ReportFormatter

        text = ReportFormatter().render(diff({"app.js": 150000}, {"app.js": 100000}))
        styles = [str(span.style) for span in text.spans]

        assert "bold red" in styles  # critical tier, emphasized
        assert "red" in styles  # delta

    def test_decrease_styles(self):
        """Test that a meaningful decrease has a green delta."""
        from diffing.size_diff import diff
        from reporting.formatter import ReportFormatter

        text = ReportFormatter().render(diff({"app.js": 25000}, {"app.js": 25050}))
        styles = [str(span.style) for span in text.spans]

        assert styles == ["cyan", "green"]

    @pytest.mark.parametrize("size,style", [
        (1000, "green"),
        (30000, "cyan"),
        (50000, "yellow"),
        (200000, "red"),
    ])
    def test_tier_colors(self, size, style):
        """Test size color per tier."""
        from diffing.size_diff import diff
        from reporting.formatter import ReportFormatter

        text = ReportFormatter().render(diff({"app.js": size}, {"app.js": size}))

        assert [str(span.style) for span in text.spans] == [style]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
