"""
Game lifecycle management for the Soccer Game Tracker.

This module owns the single active game slot: it starts games from a roster
snapshot, ends them and hands finished games to the history.
"""
import logging
from datetime import datetime
from typing import Iterable, Optional

from ..models import Game, GameAlreadyActiveError, GamePhase, Player
from ..utils import get_default_half_seconds
from .game_service import GameService
from .history_service import GameHistoryService
from .timer_service import TickScheduler, TimerService

logger = logging.getLogger(__name__)


class GameLifecycleManager:
    """
    Holds at most one active game and the services driving it.

    Attributes:
        current_game: The active game, or None
        game_service: State machine for the active game
        timer_service: Countdown for the active game
    """

    def __init__(
        self,
        history_service: Optional[GameHistoryService] = None,
        scheduler: Optional[TickScheduler] = None,
    ):
        """
        Initialize GameLifecycleManager.

        Args:
            history_service: Receives finished games
            scheduler: Tick source for game timers (None: host calls tick)
        """
        self.history_service = history_service
        self.scheduler = scheduler
        self.current_game: Optional[Game] = None
        self.game_service: Optional[GameService] = None
        self.timer_service: Optional[TimerService] = None

    @property
    def is_game_active(self) -> bool:
        return self.current_game is not None

    @property
    def is_roster_locked(self) -> bool:
        """
        Whether roster edits should be blocked.

        Locked for the whole first half and while the second-half clock runs;
        editable before kick-off and at a paused second half.
        """
        game = self.current_game
        if game is None:
            return False
        if game.phase is GamePhase.FIRST_HALF:
            return True
        return game.phase is GamePhase.SECOND_HALF and game.is_timer_running

    def start_game(
        self,
        our_team_name: str,
        opponent_name: str,
        is_home_team: bool,
        game_date: datetime,
        location: str,
        players: Iterable[Player],
        half_duration_seconds: Optional[int] = None,
    ) -> Game:
        """
        Start a new game from a snapshot of roster players.

        Args:
            half_duration_seconds: Length of each half (defaults to the
                configured half length)

        Raises:
            GameAlreadyActiveError: If another game is still active
        """
        if self.current_game is not None:
            raise GameAlreadyActiveError(
                f"Game {self.current_game.id} vs {self.current_game.opponent_name} is still active"
            )

        game = Game.create(
            opponent_name=opponent_name,
            game_date=game_date,
            location=location,
            players=players,
            half_duration_seconds=half_duration_seconds or get_default_half_seconds(),
            our_team_name=our_team_name,
            is_home_team=is_home_team,
        )
        self.timer_service = TimerService(game, scheduler=self.scheduler)
        self.game_service = GameService(game, self.timer_service)
        self.current_game = game
        logger.info("Started game %s: %s vs %s (%d players, %ds halves)", game.id,
                    our_team_name, opponent_name, len(game.player_stats), game.half_duration_seconds)
        return game

    def end_game(self) -> Optional[Game]:
        """
        End the active game and move it to the history.

        A game already ended through its game service is still saved and
        released.

        Returns:
            The finished game, or None if no game was active

        Raises:
            InvalidTransitionError: If the game is not in its second half
        """
        if self.current_game is None or self.game_service is None:
            return None

        if self.current_game.is_finished:
            self.game_service.timer.stop()
            game = self.current_game
        else:
            game = self.game_service.end_game()
        if self.history_service is not None:
            self.history_service.save_game(game)

        self._release()
        return game

    def discard_game(self) -> Optional[Game]:
        """
        Abandon the active game without saving it to the history.

        Returns:
            The discarded game, or None if no game was active
        """
        game = self.current_game
        if game is None:
            return None

        if self.timer_service is not None:
            self.timer_service.stop()
        self._release()
        logger.info("Discarded game %s vs %s (%s)", game.id, game.opponent_name, game.phase.value)
        return game

    def sync_player_to_game(self, player: Player) -> bool:
        """
        Copy a roster player's name, number and position into the live game.

        Returns:
            True if the active game has a matching player
        """
        if self.current_game is None:
            return False
        stats = self.current_game.get_player_stats(player.id)
        if stats is None:
            return False
        stats.apply_display_fields(player)
        return True

    def _release(self) -> None:
        self.current_game = None
        self.game_service = None
        self.timer_service = None
