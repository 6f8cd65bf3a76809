"""
Configuration management for the asset size reporter.
Loads settings from environment variables with sensible defaults.
"""

import os
import re
from pathlib import Path
from dotenv import load_dotenv

# Load .env file if present
load_dotenv()


class Settings:
    """Application settings loaded from environment."""

    # Asset selection
    # Only assets whose name matches this pattern are measured and reported
    SIZE_REPORT_PATTERN: str = os.getenv("SIZE_REPORT_PATTERN", r"\.(mjs|js|css|html)$")

    # Snapshot
    # Sizes from the previous build are read from (and the new ones written to) this file
    SIZE_REPORT_JSON_FILE: Path = Path(os.getenv("SIZE_REPORT_JSON_FILE", "data/asset-sizes.json"))

    # Measurement
    # gzip level used to estimate the transferred size (9 matches gzip-size)
    GZIP_LEVEL: int = int(os.getenv("GZIP_LEVEL", "9"))

    # Parallel Processing
    # Maximum number of parallel workers for measuring assets
    # Set to 1 to disable parallel processing
    MAX_WORKERS: int = int(os.getenv("MAX_WORKERS", "8"))

    # Output
    SIZE_REPORT_COLOR: bool = os.getenv("SIZE_REPORT_COLOR", "True").lower() == "true"

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Application
    APP_NAME: str = "Asset Size Report"
    APP_VERSION: str = "1.0.0"

    @classmethod
    def validate(cls) -> list[str]:
        """Validate settings. Returns list of missing/invalid settings."""
        issues = []

        try:
            re.compile(cls.SIZE_REPORT_PATTERN)
        except re.error as e:
            issues.append(f"SIZE_REPORT_PATTERN is not a valid regular expression: {e}")

        if not 0 <= cls.GZIP_LEVEL <= 9:
            issues.append("GZIP_LEVEL must be between 0 and 9")

        if cls.MAX_WORKERS < 1:
            issues.append("MAX_WORKERS must be at least 1")

        return issues


settings = Settings()
