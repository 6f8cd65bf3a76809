"""
Persistent size snapshot for the asset size reporter.

The snapshot is a flat JSON object mapping normalized asset names to their
compressed size in bytes:

    {
      "app.*******.js": 25000,
      "styles.********.css": 4810
    }

It is the only state carried from one build to the next.
"""

import json
from pathlib import Path
from typing import Optional, Union
import structlog

from config import settings
from diffing.size_diff import SizeTable

logger = structlog.get_logger()


class SnapshotWriteError(Exception):
    """Raised when the size snapshot cannot be written."""

    def __init__(self, path: Path, cause: BaseException):
        super().__init__(f"Failed to write size snapshot {path}: {cause}")
        self.path = path
        self.cause = cause


def _is_valid_table(data: object) -> bool:
    if not isinstance(data, dict):
        return False
    for name, size in data.items():
        if not isinstance(name, str):
            return False
        # bool is an int subclass but never a size
        if isinstance(size, bool) or not isinstance(size, int) or size < 0:
            return False
    return True


class SnapshotStore:
    """
    Local filesystem storage for the size snapshot.

    Loading never fails: a missing, unreadable or malformed file is the
    same as an empty snapshot. Saving overwrites the file.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        """
        Initialize snapshot store.

        Args:
            path: Snapshot file path. Uses config default if not provided.
        """
        self.path = Path(path) if path is not None else settings.SIZE_REPORT_JSON_FILE
        self.path.parent.mkdir(parents=True, exist_ok=True)

        logger.debug("SnapshotStore initialized", path=str(self.path))

    def load(self) -> SizeTable:
        """
        Load the size table written by the previous run.

        Returns:
            Normalized name -> size, or an empty table if none is usable
        """
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.debug("No previous size snapshot", path=str(self.path))
            return {}
        except (OSError, ValueError) as e:
            logger.warning("Unreadable size snapshot, starting fresh", path=str(self.path), error=str(e))
            return {}

        if not _is_valid_table(data):
            logger.warning("Malformed size snapshot, starting fresh", path=str(self.path))
            return {}

        return dict(data)

    def save(self, table: SizeTable) -> Path:
        """
        Write the size table, replacing any previous snapshot.

        Args:
            table: Normalized name -> size for the current build

        Returns:
            Path to the written file

        Raises:
            SnapshotWriteError: If the file cannot be written
        """
        try:
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump(table, f, indent=2)
        except OSError as e:
            logger.error("Failed to write size snapshot", path=str(self.path), error=str(e))
            raise SnapshotWriteError(self.path, e) from e

        logger.debug("Stored size snapshot", dest=str(self.path), assets=len(table))
        return self.path
