"""Runtime configuration for civic_triage, read from the environment."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

ENV_FILE = Path(__file__).parent.parent / ".env"


def _parse_env_int(name: str, default: int, min_val: int, max_val: int) -> int:
    """Parse an integer environment variable with bounds checking.

    Returns the default (with a warning) when the value is missing,
    not an integer, or out of bounds.
    """
    try:
        val = int(os.getenv(name, str(default)))
        if not (min_val <= val <= max_val):
            logger.warning(f"{name}={val} out of bounds [{min_val}, {max_val}], using {default}")
            return default
        return val
    except ValueError:
        logger.warning(f"{name} invalid, using {default}")
        return default


@dataclass
class EngineConfig:
    """Knobs for the pipeline and outer surfaces. Scoring thresholds are not configurable."""

    # How many of the most recent stored records duplicate detection compares against
    duplicate_snapshot_limit: int = 50

    # Max hotspots returned by the insights view
    hotspot_limit: int = 5

    log_level: str = "INFO"
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "EngineConfig":
        """Build from CIVIC_* environment variables (and the project .env, if present)."""
        if load_env_file:
            load_dotenv(ENV_FILE)

        return cls(
            duplicate_snapshot_limit=_parse_env_int("CIVIC_DUPLICATE_SNAPSHOT_LIMIT", 50, 1, 10_000),
            hotspot_limit=_parse_env_int("CIVIC_HOTSPOT_LIMIT", 5, 1, 100),
            log_level=os.getenv("CIVIC_LOG_LEVEL", "INFO").upper(),
            log_file=os.getenv("CIVIC_LOG_FILE") or None,
        )

    @property
    def log_level_value(self) -> int:
        """Numeric logging level; unknown names fall back to INFO."""
        level = logging.getLevelName(self.log_level)
        return level if isinstance(level, int) else logging.INFO
