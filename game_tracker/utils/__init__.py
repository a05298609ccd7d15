"""
Utilities package for the Soccer Game Tracker.

This package contains utility functions and constants used throughout the package.
"""
from .time_utils import fmt_mmss, now_ts
from .constants import (
    APP_TITLE, DEFAULT_HALF_LENGTH_MIN, TIMER_TICK_SECONDS, UNKNOWN_PLAYER_NAME,
    GAME_SCHEMA_VERSION
)
from .config import configure_logging, get_data_dir, get_default_half_seconds

__all__ = [
    "fmt_mmss", "now_ts", "APP_TITLE", "DEFAULT_HALF_LENGTH_MIN",
    "TIMER_TICK_SECONDS", "UNKNOWN_PLAYER_NAME", "GAME_SCHEMA_VERSION",
    "configure_logging", "get_data_dir", "get_default_half_seconds"
]
