"""
Models package for the Soccer Game Tracker.

This package contains the core data models used throughout the package.
"""
from .player import Player, Position
from .team_format import TeamFormat
from .player_stats import PlayerStats
from .game_action import ActionType, GameAction, GameHalf
from .game import Game, GamePhase
from .game_report import GameSummary
from .errors import GameTrackerError, InvalidTransitionError, GameAlreadyActiveError

__all__ = [
    "Player", "Position", "TeamFormat", "PlayerStats",
    "ActionType", "GameAction", "GameHalf", "Game", "GamePhase", "GameSummary",
    "GameTrackerError", "InvalidTransitionError", "GameAlreadyActiveError"
]
