"""History of completed games for the Soccer Game Tracker."""

import logging
from typing import Iterable, List, Optional

from ..models import Game
from ..utils.constants import SAVED_GAMES_KEY
from .persistence_service import PersistenceService

logger = logging.getLogger(__name__)


class GameHistoryService:
    """
    Append-only collection of completed games, newest game date first.

    Games are persisted as one document after every change.
    """

    def __init__(self, persistence_service: Optional[PersistenceService] = None):
        self.persistence_service = persistence_service or PersistenceService()
        self.completed_games: List[Game] = []
        self.load_games()

    def load_games(self) -> None:
        """Reload completed games from storage, skipping unreadable entries."""
        raw = self.persistence_service.load(SAVED_GAMES_KEY)
        games: List[Game] = []
        for data in raw if isinstance(raw, list) else []:
            try:
                games.append(Game.from_dict(data))
            except (KeyError, ValueError, TypeError, AttributeError) as e:
                logger.warning("Skipping unreadable saved game: %s", e)
        self.completed_games = games
        self._sort()

    def save_game(self, game: Game) -> None:
        """Add a finished game to the history."""
        game.is_timer_running = False
        self.completed_games.append(game)
        self._sort()
        self._save()
        logger.info("Saved game %s vs %s to history", game.id, game.opponent_name)

    def delete_games(self, game_ids: Iterable[str]) -> int:
        """
        Delete games by id.

        Returns:
            Number of games removed
        """
        ids = set(game_ids)
        kept = [g for g in self.completed_games if g.id not in ids]
        removed = len(self.completed_games) - len(kept)
        if removed:
            self.completed_games = kept
            self._save()
        return removed

    def get_game(self, game_id: str) -> Optional[Game]:
        for game in self.completed_games:
            if game.id == game_id:
                return game
        return None

    def _sort(self) -> None:
        self.completed_games.sort(key=lambda g: g.game_date, reverse=True)

    def _save(self) -> None:
        self.persistence_service.save(
            SAVED_GAMES_KEY, [g.to_dict() for g in self.completed_games]
        )
