"""
Compressed size estimation for build assets.

The reported size of an asset is its gzip size, which approximates what a
compression-aware server actually sends over the network.
"""

import gzip
import re
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Mapping, Optional, Union
import structlog

from config import settings

logger = structlog.get_logger()

DEFAULT_PATTERN = r"\.(mjs|js|css|html)$"

BufferLike = Union[bytes, bytearray, memoryview, str]
AssetSource = Union[BufferLike, Callable[[], BufferLike]]


class AssetMeasurementError(Exception):
    """Raised when an asset cannot be read or measured."""

    def __init__(self, asset_name: str, cause: BaseException):
        super().__init__(f"Failed to measure {asset_name!r}: {cause}")
        self.asset_name = asset_name
        self.cause = cause


def compile_pattern(pattern: Union[str, re.Pattern, None]) -> re.Pattern:
    """Compile an asset filter pattern, falling back to the configured default."""
    if pattern is None:
        pattern = settings.SIZE_REPORT_PATTERN or DEFAULT_PATTERN
    if isinstance(pattern, str):
        return re.compile(pattern)
    return pattern


def select_assets(
    assets: Mapping[str, AssetSource],
    pattern: Union[str, re.Pattern, None] = None
) -> dict[str, AssetSource]:
    """
    Keep only the assets whose name matches the filter pattern.

    Args:
        assets: Mapping of asset name to buffer or buffer accessor
        pattern: Regex (string or compiled) searched in each asset name

    Returns:
        Matching assets, in their original order
    """
    regex = compile_pattern(pattern)
    selected = {name: source for name, source in assets.items() if regex.search(name)}

    logger.debug(
        "Assets selected",
        total=len(assets),
        selected=len(selected),
        pattern=regex.pattern
    )

    return selected


def read_source(source: AssetSource) -> bytes:
    """Resolve an asset source into raw bytes."""
    if callable(source):
        source = source()
    if isinstance(source, str):
        return source.encode("utf-8")
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)
    raise TypeError(f"Asset source must be bytes or str, got {type(source).__name__}")


class SizeEstimator:
    """
    Estimates delivered asset size with gzip.

    Uses a fixed compression level and a zeroed header mtime so identical
    input always yields the identical size.
    """

    def __init__(
        self,
        level: Optional[int] = None,
        max_workers: Optional[int] = None
    ):
        """
        Initialize size estimator.

        Args:
            level: gzip compression level (default from settings)
            max_workers: Upper bound on parallel measurements (default from settings)
        """
        self.level = settings.GZIP_LEVEL if level is None else level
        self.max_workers = settings.MAX_WORKERS if max_workers is None else max_workers

    def estimate(self, buffer: AssetSource) -> int:
        """
        Compute the gzip size of a buffer.

        Args:
            buffer: Raw asset content

        Returns:
            Size in bytes after compression
        """
        data = read_source(buffer)
        return len(gzip.compress(data, compresslevel=self.level, mtime=0))

    def _measure(self, name: str, source: AssetSource) -> int:
        try:
            return self.estimate(source)
        except Exception as e:
            logger.error("Asset measurement failed", asset=name, error=str(e))
            raise AssetMeasurementError(name, e) from e

    def estimate_all(self, assets: Mapping[str, AssetSource]) -> dict[str, int]:
        """
        Measure many assets, concurrently when more than one worker is allowed.

        Args:
            assets: Mapping of asset name to buffer or buffer accessor

        Returns:
            Mapping of asset name to gzip size, in input order

        Raises:
            AssetMeasurementError: If any single asset fails
        """
        if not assets:
            return {}

        names = list(assets)
        max_workers = min(self.max_workers, len(names))

        if len(names) > 1 and max_workers > 1:
            logger.debug("Measuring assets in parallel", total=len(names), workers=max_workers)
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                futures = [executor.submit(self._measure, name, assets[name]) for name in names]
                sizes = [future.result() for future in futures]
        else:
            logger.debug("Measuring assets sequentially", total=len(names))
            sizes = [self._measure(name, assets[name]) for name in names]

        return dict(zip(names, sizes))
