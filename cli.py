#!/usr/bin/env python3
"""
CLI runner for asset size reporting.

Provides command-line interface for:
- Reporting compressed asset sizes of a build output directory
- Showing the stored size snapshot

Usage:
    python cli.py report dist                  # Report sizes of files under dist/
    python cli.py report dist --no-color       # Plain text output
    python cli.py report dist --pattern '\\.js$'
    python cli.py show                         # Show stored snapshot
"""

import argparse
import logging
import re
import sys
from pathlib import Path
from typing import Callable, Optional

import structlog

from config import settings
from diffing.size_diff import diff
from reporting.formatter import format_report
from services.size_reporter import ReporterOptions, SizeReporter
from storage.snapshot_store import SnapshotStore

logger = structlog.get_logger()


def configure_logging(level: str = settings.LOG_LEVEL) -> None:
    """Configure structlog console output on stderr, keeping stdout for the report."""
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.dev.ConsoleRenderer()
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper(), logging.INFO)
        ),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr)
    )


def collect_assets(build_dir: Path) -> dict[str, Callable[[], bytes]]:
    """
    Collect build outputs as lazily read assets.

    Args:
        build_dir: Build output directory

    Returns:
        Mapping of POSIX path relative to build_dir -> bytes accessor
    """
    assets = {}
    for path in sorted(build_dir.rglob("*")):
        if path.is_file():
            assets[path.relative_to(build_dir).as_posix()] = path.read_bytes
    return assets


def cmd_report(
    build_dir: Path,
    pattern: Optional[str] = None,
    json_file: Optional[Path] = None,
    color: bool = True
) -> int:
    """Report asset sizes of a build directory."""
    issues = settings.validate()
    if issues:
        for issue in issues:
            logger.warning(f"Configuration issue: {issue}")

    if not build_dir.is_dir():
        logger.error("Build directory not found", path=str(build_dir))
        return 0

    options = ReporterOptions(
        json_file=json_file or settings.SIZE_REPORT_JSON_FILE,
        pattern=pattern or settings.SIZE_REPORT_PATTERN,
        color=color
    )
    try:
        reporter = SizeReporter(options)
    except (re.error, OSError, TypeError) as e:
        logger.error("Size reporter could not be set up", error=str(e))
        return 0

    reporter.after_emit(collect_assets(build_dir))

    # Size reporting never fails the build
    return 0


def cmd_show(json_file: Optional[Path] = None, color: bool = True) -> int:
    """Show stored snapshot."""
    store = SnapshotStore(json_file or settings.SIZE_REPORT_JSON_FILE)
    table = store.load()

    if not table:
        print(f"No size snapshot found at {store.path}. Run 'python cli.py report <dir>' first.")
        return 0

    print("\n" + format_report(diff(table, table), color=color))
    return 0


def main() -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Asset Size Report CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  report    Measure a build directory and report size changes
  show      Show the stored size snapshot

Examples:
  python cli.py report dist
  python cli.py report dist --json-file .cache/sizes.json
  python cli.py show
        """
    )

    parser.add_argument(
        "command",
        choices=["report", "show"],
        help="Command to execute"
    )

    parser.add_argument(
        "build_dir",
        nargs="?",
        type=Path,
        help="Build output directory (for 'report' command)"
    )

    parser.add_argument(
        "--pattern",
        help=f"Regex selecting assets to measure (default: {settings.SIZE_REPORT_PATTERN})"
    )

    parser.add_argument(
        "--json-file",
        type=Path,
        help=f"Size snapshot path (default: {settings.SIZE_REPORT_JSON_FILE})"
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output"
    )

    args = parser.parse_args()
    configure_logging()
    color = settings.SIZE_REPORT_COLOR and not args.no_color

    if args.command == "report":
        if args.build_dir is None:
            parser.error("the 'report' command requires a build directory")
        return cmd_report(args.build_dir, args.pattern, args.json_file, color)
    elif args.command == "show":
        return cmd_show(args.json_file, color)
    return 0


if __name__ == "__main__":
    sys.exit(main())
