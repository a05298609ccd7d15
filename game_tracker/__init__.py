"""
Soccer Game Tracker

A match-tracking library for a single device: team roster, live game clock,
scoring and discipline events, per-player statistics, and a history of
completed games with CSV export.

Front ends (desktop, mobile, web) drive it through the services package.
"""
from .models import (
    Player, Position, TeamFormat, PlayerStats, ActionType, GameAction, GameHalf,
    Game, GamePhase, GameTrackerError, InvalidTransitionError, GameAlreadyActiveError
)
from .services import (
    PersistenceService, TimerService, GameService, RosterService,
    GameHistoryService, GameLifecycleManager, GameCSVExporter, ServiceFactory
)
from .utils import fmt_mmss, now_ts, APP_TITLE

__version__ = "2.0.0"
__author__ = "Soccer Game Tracker Development Team"

__all__ = [
    "Player", "Position", "TeamFormat", "PlayerStats", "ActionType", "GameAction",
    "GameHalf", "Game", "GamePhase", "GameTrackerError", "InvalidTransitionError",
    "GameAlreadyActiveError", "PersistenceService", "TimerService", "GameService",
    "RosterService", "GameHistoryService", "GameLifecycleManager", "GameCSVExporter",
    "ServiceFactory", "fmt_mmss", "now_ts", "APP_TITLE"
]
