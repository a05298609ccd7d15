"""
Services package for the Soccer Game Tracker.

This package contains service classes that handle business logic.
Includes factory for dependency injection.
"""
from .persistence_service import PersistenceService
from .timer_service import TimerService, TickScheduler, AsyncioTickScheduler
from .game_service import GameService
from .roster_service import RosterService, RosterResult, RosterOutcome
from .history_service import GameHistoryService
from .lifecycle_service import GameLifecycleManager
from .export_service import GameCSVExporter
from .service_factory import ServiceFactory

__all__ = [
    "PersistenceService", "TimerService", "TickScheduler", "AsyncioTickScheduler",
    "GameService", "RosterService", "RosterResult", "RosterOutcome",
    "GameHistoryService", "GameLifecycleManager", "GameCSVExporter", "ServiceFactory"
]
