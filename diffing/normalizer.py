"""
Asset name normalization for cross-build matching.

Bundlers embed a content hash in emitted filenames (``app.3f2a9c1.js``) so the
same logical asset gets a new name on every build. Replacing the hash with a
placeholder of the same length gives a stable key (``app.*******.js``) that
can be joined against the previous build's sizes.
"""

import re
from typing import Callable, Optional, Protocol, Union
import structlog

logger = structlog.get_logger()

PLACEHOLDER_CHAR = "*"

# Trailing lowercase alphanumeric run followed by the final extension
HASH_PATTERN = re.compile(r"([a-z0-9]+)(\.\w+)\Z", re.ASCII)


class HashStripper(Protocol):
    """Strategy that maps an asset name to its normalized name."""

    def strip(self, name: str) -> str:
        ...


class DefaultHashStripper:
    """
    Replaces the trailing hash-like run before the extension with placeholders.

    A name that is nothing but ``<hash>.<ext>`` (``main.js``, ``deadbeef.js``)
    is returned unchanged, otherwise every such name would collapse to the
    same key.
    """

    def __init__(self, placeholder: str = PLACEHOLDER_CHAR):
        self.placeholder = placeholder

    def strip(self, name: str) -> str:
        def _replace(match: re.Match) -> str:
            hash_part, ext = match.group(1), match.group(2)
            if hash_part + ext == name:
                return match.group(0)
            return self.placeholder * len(hash_part) + ext

        return HASH_PATTERN.sub(_replace, name, count=1)


class CallableHashStripper:
    """Adapts a plain ``name -> name`` function supplied by the host."""

    def __init__(self, func: Callable[[str], str]):
        self.func = func

    def strip(self, name: str) -> str:
        return self.func(name)


StripperLike = Union[HashStripper, Callable[[str], str]]


def as_stripper(stripper: Optional[StripperLike]) -> HashStripper:
    """Resolve an optional stripper or callable into a HashStripper."""
    if stripper is None:
        return DefaultHashStripper()
    if isinstance(stripper, (str, bytes)):
        raise TypeError(f"Unsupported hash stripper: {stripper!r}")
    if callable(getattr(stripper, "strip", None)):
        return stripper
    if callable(stripper):
        return CallableHashStripper(stripper)
    raise TypeError(f"Unsupported hash stripper: {stripper!r}")


class HashNormalizer:
    """Normalizes asset names with the stripper chosen at construction."""

    def __init__(self, stripper: Optional[StripperLike] = None):
        self.stripper = as_stripper(stripper)
        logger.debug(
            "HashNormalizer initialized",
            stripper=type(self.stripper).__name__
        )

    def normalize(self, name: str) -> str:
        return self.stripper.strip(name)


def normalize(name: str, custom_stripper: Optional[StripperLike] = None) -> str:
    """
    Normalize an asset name.

    Args:
        name: Raw asset name as emitted by the build
        custom_stripper: Optional host-supplied stripper; when given, its result
            is returned unmodified

    Returns:
        Name with the content hash replaced by placeholders
    """
    return as_stripper(custom_stripper).strip(name)
