"""
Constants for the Soccer Game Tracker.

This module contains configuration constants used throughout the package.
"""

# Application metadata
APP_TITLE = "Soccer Game Tracker"

# Game timing defaults
DEFAULT_HALF_LENGTH_MIN = 25
MIN_HALF_LENGTH_MIN = 1
MAX_HALF_LENGTH_MIN = 60
TIMER_TICK_SECONDS = 1.0

# Defaults for names the roster and games fall back to
DEFAULT_HOME_TEAM_NAME = "HOME"
UNKNOWN_PLAYER_NAME = "Unknown Player"

# Persistence keys (one JSON document per key)
ROSTER_KEY = "SoccerRoster"
HOME_TEAM_NAME_KEY = "SoccerHomeTeamName"
TEAM_FORMAT_KEY = "SoccerTeamFormat"
IS_HOME_TEAM_KEY = "SoccerIsHomeTeam"
SAVED_GAMES_KEY = "SavedGames"

# Serialized game layout version; v1 saves lack actions, home flag and phase
GAME_SCHEMA_VERSION = 2

DEFAULT_DATA_DIR = "data"
DEFAULT_LOG_LEVEL = "INFO"
