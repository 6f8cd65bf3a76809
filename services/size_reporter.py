"""
Size Reporter Service

Runs one reporting round for a finished build:
1. Load the previous size snapshot
2. Select and measure matching assets (gzip size, in parallel)
3. Normalize content hashes out of asset names
4. Diff against the previous snapshot and format the report
5. Persist the new snapshot for the next build

`after_emit` wraps a round for use as a build hook: failures are logged and
never propagate to the build.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Mapping, Optional, Union
import structlog

from config import settings
from diffing.normalizer import HashNormalizer, StripperLike
from diffing.size_diff import DiffEntry, SizeDiffEngine, SizeTable
from diffing.size_estimator import AssetSource, SizeEstimator, compile_pattern, select_assets
from reporting.formatter import ReportFormatter
from storage.snapshot_store import SnapshotStore, SnapshotWriteError

logger = structlog.get_logger()


@dataclass
class ReporterOptions:
    """Host-supplied configuration for the size reporter."""
    json_file: Union[str, Path] = field(default_factory=lambda: settings.SIZE_REPORT_JSON_FILE)
    pattern: Union[str, re.Pattern] = field(default_factory=lambda: settings.SIZE_REPORT_PATTERN)
    strip_hash: Optional[StripperLike] = None  # custom name normalizer
    color: bool = field(default_factory=lambda: settings.SIZE_REPORT_COLOR)


@dataclass
class SizeReport:
    """Result of one reporting round."""
    entries: list[DiffEntry]
    text: str  # empty when no asset matched
    snapshot_path: Path

    @property
    def is_empty(self) -> bool:
        return not self.entries


class ReportPersistError(Exception):
    """Raised when the report was computed but the snapshot could not be saved."""

    def __init__(self, report: SizeReport, cause: SnapshotWriteError):
        super().__init__(str(cause))
        self.report = report
        self.cause = cause


class SizeReporter:
    """
    Measures build assets and reports size changes since the previous build.

    One instance owns one snapshot file; independent instances with
    different paths do not share any state.
    """

    def __init__(
        self,
        options: Optional[ReporterOptions] = None,
        estimator: Optional[SizeEstimator] = None
    ):
        """
        Initialize size reporter.

        Args:
            options: Reporter options (defaults from settings)
            estimator: Size estimator to measure assets with
        """
        self.options = options or ReporterOptions()
        self.pattern = compile_pattern(self.options.pattern)
        self.normalizer = HashNormalizer(self.options.strip_hash)
        self.estimator = estimator or SizeEstimator()
        self.store = SnapshotStore(self.options.json_file)
        self.engine = SizeDiffEngine()
        self.formatter = ReportFormatter(color=self.options.color)

        logger.info(
            "SizeReporter initialized",
            pattern=self.pattern.pattern,
            json_file=str(self.store.path)
        )

    def measure(self, assets: Mapping[str, AssetSource]) -> SizeTable:
        """
        Measure the matching assets of a build.

        Args:
            assets: Mapping of raw asset name to buffer or buffer accessor

        Returns:
            Normalized name -> gzip size, in discovery order

        Raises:
            AssetMeasurementError: If any matching asset cannot be measured
        """
        selected = select_assets(assets, self.pattern)
        sizes = self.estimator.estimate_all(selected)

        table: SizeTable = {}
        for name, size in sizes.items():
            table[self.normalizer.normalize(name)] = size
        return table

    def run_round(self, assets: Mapping[str, AssetSource]) -> SizeReport:
        """
        Run a full reporting round.

        Args:
            assets: Mapping of raw asset name to buffer or buffer accessor

        Returns:
            SizeReport with diff entries and formatted text

        Raises:
            AssetMeasurementError: If any matching asset cannot be measured
            ReportPersistError: If the new snapshot cannot be written
        """
        prior = self.store.load()
        current = self.measure(assets)

        entries = self.engine.diff(current, prior)
        report = SizeReport(
            entries=entries,
            text=self.formatter.format(entries),
            snapshot_path=self.store.path
        )

        try:
            self.store.save(current)
        except SnapshotWriteError as e:
            raise ReportPersistError(report, e) from e

        logger.info(
            "Size report complete",
            assets=len(entries),
            changed=sum(1 for e in entries if e.delta_significant)
        )

        return report

    def after_emit(
        self,
        assets: Mapping[str, AssetSource],
        display: Callable[[str], None] = print
    ) -> Optional[SizeReport]:
        """
        Build hook: run a round and display the report.

        Nothing is displayed when no asset matched. Errors are logged and
        swallowed so the build is never blocked by size reporting.

        Args:
            assets: Mapping of raw asset name to buffer or buffer accessor
            display: Callable receiving the text to show

        Returns:
            The SizeReport, or None if the round failed
        """
        try:
            report = self.run_round(assets)
        except ReportPersistError as e:
            logger.error("Size snapshot not saved", path=str(e.cause.path), error=str(e.cause.cause))
            report = e.report
        except Exception as e:
            logger.error("Size report failed", error=str(e))
            return None

        if report.text:
            display("\n" + report.text)
        return report
