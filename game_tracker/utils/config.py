"""Runtime configuration. Defaults come from constants, overrides from the environment."""

import logging
import os
from typing import Optional

from dotenv import load_dotenv

from .constants import (
    DEFAULT_DATA_DIR, DEFAULT_HALF_LENGTH_MIN, DEFAULT_LOG_LEVEL,
    MAX_HALF_LENGTH_MIN, MIN_HALF_LENGTH_MIN,
)

load_dotenv()

logger = logging.getLogger(__name__)


def get_data_dir() -> str:
    """Return the directory holding persisted JSON documents."""
    return os.environ.get("GAME_TRACKER_DATA_DIR") or DEFAULT_DATA_DIR


def get_default_half_seconds() -> int:
    """Return the default half length in seconds, clamped to the supported range."""
    raw = os.environ.get("GAME_TRACKER_HALF_MINUTES")
    minutes = DEFAULT_HALF_LENGTH_MIN
    if raw:
        try:
            minutes = int(raw)
        except ValueError:
            logger.warning("Ignoring invalid GAME_TRACKER_HALF_MINUTES=%r", raw)
    minutes = max(MIN_HALF_LENGTH_MIN, min(MAX_HALF_LENGTH_MIN, minutes))
    return minutes * 60


def configure_logging(level: Optional[str] = None) -> None:
    """Install a basic logging configuration for hosts embedding the tracker."""
    name = (level or os.environ.get("GAME_TRACKER_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
