"""
Size diffing between the current build and the previous snapshot.

Joins current measurements against the prior size table by normalized name,
computes signed deltas and classifies every asset:
- Severity tier from the absolute size (low / medium / high / critical)
- Whether the delta is significant (more than 1 byte either way)
- Emphasis for large increases (> 1 KiB) and meaningful decreases (> 10 bytes)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Mapping
import structlog

logger = structlog.get_logger()

SizeTable = dict[str, int]

KIB = 1024

# Tier thresholds, exclusive: a size must exceed the bound to enter the tier
CRITICAL_THRESHOLD = 100 * KIB
HIGH_THRESHOLD = 40 * KIB
MEDIUM_THRESHOLD = 20 * KIB

# Delta thresholds
NOISE_THRESHOLD = 1
INCREASE_THRESHOLD = 1024
DECREASE_THRESHOLD = -10


class SeverityTier(str, Enum):
    """Absolute size bucket of an asset."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class DeltaEmphasis(str, Enum):
    """How a significant delta should stand out in the report."""
    NONE = "none"
    INCREASE = "increase"
    DECREASE = "decrease"


def classify_tier(size: int) -> SeverityTier:
    """Map an absolute size in bytes to its severity tier."""
    if size > CRITICAL_THRESHOLD:
        return SeverityTier.CRITICAL
    if size > HIGH_THRESHOLD:
        return SeverityTier.HIGH
    if size > MEDIUM_THRESHOLD:
        return SeverityTier.MEDIUM
    return SeverityTier.LOW


def is_significant(delta: int) -> bool:
    """Deltas of a single byte are measurement noise."""
    return abs(delta) > NOISE_THRESHOLD


def classify_emphasis(delta: int) -> DeltaEmphasis:
    if not is_significant(delta):
        return DeltaEmphasis.NONE
    if delta > INCREASE_THRESHOLD:
        return DeltaEmphasis.INCREASE
    if delta < DECREASE_THRESHOLD:
        return DeltaEmphasis.DECREASE
    return DeltaEmphasis.NONE


@dataclass(frozen=True)
class DiffEntry:
    """Size comparison for one normalized asset name."""
    name: str
    size_before: int  # 0 when the asset is new
    size: int
    delta: int  # size - size_before
    tier: SeverityTier
    delta_significant: bool

    @property
    def emphasis(self) -> DeltaEmphasis:
        return classify_emphasis(self.delta)

    @property
    def is_new(self) -> bool:
        return self.size_before == 0


class SizeDiffEngine:
    """
    Compares a freshly measured size table with the previous one.

    Entries follow the insertion order of the current table. Names present
    only in the previous table are removed assets and are not reported.
    """

    def diff(self, current: Mapping[str, int], prior: Mapping[str, int]) -> list[DiffEntry]:
        """
        Compute diff entries for every asset of the current build.

        Args:
            current: Normalized name -> size for this build
            prior: Normalized name -> size from the previous snapshot

        Returns:
            One DiffEntry per current asset, in discovery order
        """
        entries = []

        for name, size in current.items():
            size_before = prior.get(name, 0)
            delta = size - size_before
            entries.append(DiffEntry(
                name=name,
                size_before=size_before,
                size=size,
                delta=delta,
                tier=classify_tier(size),
                delta_significant=is_significant(delta)
            ))

        logger.debug(
            "Size diff computed",
            assets=len(entries),
            new=sum(1 for e in entries if e.is_new),
            changed=sum(1 for e in entries if e.delta_significant)
        )

        return entries


def diff(current: Mapping[str, int], prior: Mapping[str, int]) -> list[DiffEntry]:
    """Compute diff entries for the current table against the prior one."""
    return SizeDiffEngine().diff(current, prior)
