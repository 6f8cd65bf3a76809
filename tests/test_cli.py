"""
Tests for the command-line host.
"""

import json
import pytest

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


class TestCollectAssets:
    """Tests for reading a build directory."""

    def test_relative_posix_names(self, tmp_path):
        """Test that nested files are keyed by their relative path."""
        from cli import collect_assets

        (tmp_path / "js").mkdir()
        (tmp_path / "js" / "app.3f2a9c1.js").write_bytes(b"console.log(1)")
        (tmp_path / "index.html").write_bytes(b"<html></html>")

        assets = collect_assets(tmp_path)

        assert sorted(assets) == ["index.html", "js/app.3f2a9c1.js"]
        assert assets["js/app.3f2a9c1.js"]() == b"console.log(1)"


class TestReportCommand:
    """Tests for the report and show commands."""

    def test_report_prints_and_saves(self, tmp_path, capsys):
        """Test that report prints sizes and writes the snapshot."""
        from cli import cmd_report

        build_dir = tmp_path / "dist"
        build_dir.mkdir()
        (build_dir / "app.3f2a9c1.js").write_bytes(b"let x = 1;\n" * 100)
        (build_dir / "logo.png").write_bytes(b"\x89PNG")
        json_file = tmp_path / "cache" / "sizes.json"

        code = cmd_report(build_dir, json_file=json_file, color=False)

        out = capsys.readouterr().out
        assert code == 0
        assert "app.*******.js ⏤" in out
        assert "logo.png" not in out
        assert list(json.loads(json_file.read_text(encoding="utf-8"))) == ["app.*******.js"]

    def test_missing_build_dir_does_not_fail(self, tmp_path, capsys):
        """Test that a missing directory is logged, not raised."""
        from cli import cmd_report

        code = cmd_report(tmp_path / "nope", json_file=tmp_path / "sizes.json", color=False)

        assert code == 0
        assert capsys.readouterr().out == ""

    def test_invalid_pattern_does_not_fail(self, tmp_path, capsys):
        """Test that a malformed regex is logged and the command still exits 0."""
        from cli import cmd_report

        build_dir = tmp_path / "dist"
        build_dir.mkdir()
        (build_dir / "app.js").write_bytes(b"let x = 1;")
        json_file = tmp_path / "sizes.json"

        code = cmd_report(build_dir, pattern="(", json_file=json_file, color=False)

        assert code == 0
        assert capsys.readouterr().out == ""
        assert not json_file.exists()

    def test_unusable_snapshot_dir_does_not_fail(self, tmp_path, capsys):
        """Test that a file blocking the snapshot directory is logged, not raised."""
        from cli import cmd_report

        build_dir = tmp_path / "dist"
        build_dir.mkdir()
        (build_dir / "app.js").write_bytes(b"let x = 1;")
        (tmp_path / "cache").write_text("not a directory", encoding="utf-8")

        code = cmd_report(build_dir, json_file=tmp_path / "cache" / "sizes.json", color=False)

        assert code == 0
        assert capsys.readouterr().out == ""

    def test_show_snapshot(self, tmp_path, capsys):
        """Test that show prints the stored sizes without deltas."""
        from cli import cmd_show

        json_file = tmp_path / "sizes.json"
        json_file.write_text(json.dumps({"app.js": 25000}), encoding="utf-8")

        cmd_show(json_file, color=False)

        assert capsys.readouterr().out == "\n app.js ⏤  25 kB\n\n"

    def test_show_without_snapshot(self, tmp_path, capsys):
        """Test the hint printed when no snapshot exists."""
        from cli import cmd_show

        cmd_show(tmp_path / "sizes.json", color=False)

        assert "No size snapshot found" in capsys.readouterr().out


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
