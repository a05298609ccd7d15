"""
Service Factory for dependency injection.

This module wires the roster, lifecycle, history and export services together
with constructor injection, so the roster holds only a non-owning handle to the
lifecycle manager.
"""
from typing import Dict, Optional

from .export_service import GameCSVExporter
from .history_service import GameHistoryService
from .lifecycle_service import GameLifecycleManager
from .persistence_service import PersistenceService
from .roster_service import RosterService
from .timer_service import TickScheduler


class ServiceFactory:
    """
    Factory for creating service instances with their dependencies injected.

    Services that keep state are created once per factory and shared.
    """

    def __init__(self, data_dir: Optional[str] = None, scheduler: Optional[TickScheduler] = None):
        """
        Initialize factory.

        Args:
            data_dir: Directory for persisted documents (defaults to configured data dir)
            scheduler: Tick source for game timers (None: host calls tick)
        """
        self.data_dir = data_dir
        self.scheduler = scheduler
        self._persistence_service: Optional[PersistenceService] = None
        self._history_service: Optional[GameHistoryService] = None
        self._game_manager: Optional[GameLifecycleManager] = None
        self._roster_service: Optional[RosterService] = None
        self._export_service: Optional[GameCSVExporter] = None

    def get_persistence_service(self) -> PersistenceService:
        """Get singleton persistence service."""
        if self._persistence_service is None:
            self._persistence_service = PersistenceService(self.data_dir)
        return self._persistence_service

    def get_history_service(self) -> GameHistoryService:
        """Get singleton history service."""
        if self._history_service is None:
            self._history_service = GameHistoryService(self.get_persistence_service())
        return self._history_service

    def get_game_manager(self) -> GameLifecycleManager:
        """Get singleton lifecycle manager."""
        if self._game_manager is None:
            self._game_manager = GameLifecycleManager(
                history_service=self.get_history_service(),
                scheduler=self.scheduler,
            )
        return self._game_manager

    def get_roster_service(self) -> RosterService:
        """Get singleton roster service, linked to the lifecycle manager."""
        if self._roster_service is None:
            self._roster_service = RosterService(
                persistence_service=self.get_persistence_service(),
                game_manager=self.get_game_manager(),
            )
        return self._roster_service

    def get_export_service(self) -> GameCSVExporter:
        """Get singleton export service."""
        if self._export_service is None:
            self._export_service = GameCSVExporter()
        return self._export_service

    def create_complete_service_suite(self) -> Dict[str, object]:
        """
        Create the full set of services.

        Returns:
            Dictionary containing all configured services
        """
        return {
            "persistence": self.get_persistence_service(),
            "history": self.get_history_service(),
            "games": self.get_game_manager(),
            "roster": self.get_roster_service(),
            "export": self.get_export_service(),
        }

    def configure_custom_export_service(self, exporter: GameCSVExporter) -> None:
        """Replace the export service, e.g. with a different column layout."""
        self._export_service = exporter
