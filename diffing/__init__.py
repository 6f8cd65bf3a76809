"""Diffing module for asset size comparison."""

from diffing.normalizer import HashNormalizer, DefaultHashStripper, CallableHashStripper, normalize
from diffing.size_estimator import SizeEstimator, AssetMeasurementError, select_assets
from diffing.size_diff import SizeDiffEngine, DiffEntry, SeverityTier, DeltaEmphasis, diff

__all__ = [
    "HashNormalizer",
    "DefaultHashStripper",
    "CallableHashStripper",
    "normalize",
    "SizeEstimator",
    "AssetMeasurementError",
    "select_assets",
    "SizeDiffEngine",
    "DiffEntry",
    "SeverityTier",
    "DeltaEmphasis",
    "diff",
]
