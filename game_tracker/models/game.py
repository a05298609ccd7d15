"""
Game model for the Soccer Game Tracker.

This module contains the Game dataclass which represents the complete state of
one match: teams, clock, score, per-player stats and the action log, along with
versioned persistence methods.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from .game_action import GameAction, GameHalf
from .player import Player, new_id
from .player_stats import PlayerStats
from ..utils import GAME_SCHEMA_VERSION, fmt_mmss
from ..utils.constants import DEFAULT_HOME_TEAM_NAME

logger = logging.getLogger(__name__)


class GamePhase(Enum):
    """Lifecycle phase of a game."""
    NOT_STARTED = "not_started"
    FIRST_HALF = "first_half"
    SECOND_HALF = "second_half"
    ENDED = "ended"


@dataclass
class Game:
    """
    Represents the complete state of a soccer game.

    Attributes:
        opponent_name: Name of the opposing team
        game_date: Scheduled date/time of the game
        location: Where the game is played
        half_duration_seconds: Configured length of each half
        our_team_name: Name of our team
        is_home_team: Whether our team is the home side
        phase: Lifecycle phase (not started, first/second half, ended)
        current_half: Half the clock currently belongs to
        remaining_seconds: Countdown for the current half
        is_timer_running: Whether the countdown is ticking
        our_score: Goals for our team (including unknown scorers)
        opponent_score: Goals for the opponent
        unknown_goals: Our goals not credited to a specific player
        player_stats: One entry per player selected at game start
        actions: Action log in recording order
        id: Opaque unique identifier
    """
    opponent_name: str
    game_date: datetime
    location: str
    half_duration_seconds: int
    our_team_name: str = DEFAULT_HOME_TEAM_NAME
    is_home_team: bool = True
    phase: GamePhase = GamePhase.NOT_STARTED
    current_half: GameHalf = GameHalf.FIRST
    remaining_seconds: Optional[int] = None
    is_timer_running: bool = False
    our_score: int = 0
    opponent_score: int = 0
    unknown_goals: int = 0
    player_stats: List[PlayerStats] = field(default_factory=list)
    actions: List[GameAction] = field(default_factory=list)
    id: str = field(default_factory=new_id)

    def __post_init__(self):
        """Start the countdown at a full half unless restored from a save."""
        self.half_duration_seconds = max(1, int(self.half_duration_seconds))
        if self.remaining_seconds is None:
            self.remaining_seconds = self.half_duration_seconds

    @classmethod
    def create(
        cls,
        opponent_name: str,
        game_date: datetime,
        location: str,
        players: Iterable[Player],
        half_duration_seconds: int,
        our_team_name: str = DEFAULT_HOME_TEAM_NAME,
        is_home_team: bool = True,
    ) -> 'Game':
        """
        Build a new game with one stats entry per supplied roster player.

        The players are copied; later roster edits only reach the game through
        explicit synchronisation.
        """
        return cls(
            opponent_name=opponent_name,
            game_date=game_date,
            location=location,
            half_duration_seconds=half_duration_seconds,
            our_team_name=our_team_name,
            is_home_team=is_home_team,
            player_stats=[PlayerStats.from_player(p) for p in players],
        )

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------
    @property
    def is_finished(self) -> bool:
        return self.phase is GamePhase.ENDED

    @property
    def elapsed_seconds(self) -> int:
        """Seconds played in the current half."""
        return self.half_duration_seconds - self.remaining_seconds

    @property
    def result(self) -> str:
        """W, L or T from our team's point of view."""
        if self.our_score > self.opponent_score:
            return "W"
        if self.our_score < self.opponent_score:
            return "L"
        return "T"

    @property
    def home_team_name(self) -> str:
        return self.our_team_name if self.is_home_team else self.opponent_name

    @property
    def away_team_name(self) -> str:
        return self.opponent_name if self.is_home_team else self.our_team_name

    def time_string(self) -> str:
        """Remaining time in the current half as MM:SS."""
        return fmt_mmss(self.remaining_seconds)

    def get_player_stats(self, player_id: Optional[str]) -> Optional[PlayerStats]:
        """Find the stats entry for a player id, or None."""
        if player_id is None:
            return None
        for stats in self.player_stats:
            if stats.id == player_id:
                return stats
        return None

    def actions_by_half(self) -> Dict[GameHalf, List[GameAction]]:
        """
        Partition the action log by half, each sorted by elapsed time.

        The sort is stable, so actions recorded at the same elapsed second keep
        their recording order. This is for display only.
        """
        grouped: Dict[GameHalf, List[GameAction]] = {half: [] for half in GameHalf}
        for action in self.actions:
            grouped[action.half].append(action)
        for half_actions in grouped.values():
            half_actions.sort(key=lambda a: a.elapsed_seconds)
        return grouped

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        """
        Convert game to dictionary for JSON serialization.

        Returns:
            Dictionary representation suitable for JSON serialization
        """
        return {
            "schema_version": GAME_SCHEMA_VERSION,
            "id": self.id,
            "our_team_name": self.our_team_name,
            "opponent_name": self.opponent_name,
            "is_home_team": self.is_home_team,
            "game_date": self.game_date.isoformat(),
            "location": self.location,
            "half_duration_seconds": self.half_duration_seconds,
            "phase": self.phase.value,
            "current_half": self.current_half.value,
            "remaining_seconds": self.remaining_seconds,
            "our_score": self.our_score,
            "opponent_score": self.opponent_score,
            "unknown_goals": self.unknown_goals,
            "player_stats": [s.to_dict() for s in self.player_stats],
            "actions": [a.to_dict() for a in self.actions],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Game':
        """
        Create game from dictionary for JSON deserialization.

        Fields introduced after the first save format are filled with defaults
        when missing. A restored game never has a running timer.

        Args:
            data: Dictionary with game data

        Returns:
            New Game instance

        Raises:
            KeyError: If a required field is missing
            ValueError: If a field holds an invalid value
        """
        version = int(data.get("schema_version", 1))
        if version > GAME_SCHEMA_VERSION:
            logger.warning(
                "Game %s was saved with newer schema %d; loading known fields",
                data.get("id"), version,
            )

        half_duration = int(data["half_duration_seconds"])
        actions: List[GameAction] = []
        for raw in data.get("actions", []) or []:
            try:
                actions.append(GameAction.from_dict(raw))
            except (KeyError, ValueError, TypeError):
                logger.warning("Skipping unreadable action in game %s", data.get("id"))

        return cls(
            id=data["id"],
            our_team_name=data.get("our_team_name", DEFAULT_HOME_TEAM_NAME),
            opponent_name=data["opponent_name"],
            is_home_team=bool(data.get("is_home_team", True)),
            game_date=datetime.fromisoformat(data["game_date"]),
            location=data.get("location", ""),
            half_duration_seconds=half_duration,
            phase=GamePhase(data.get("phase", GamePhase.ENDED.value)),
            current_half=GameHalf(data.get("current_half", GameHalf.FIRST.value)),
            remaining_seconds=int(data.get("remaining_seconds", half_duration)),
            is_timer_running=False,
            our_score=max(0, int(data.get("our_score", 0))),
            opponent_score=max(0, int(data.get("opponent_score", 0))),
            unknown_goals=max(0, int(data.get("unknown_goals", 0))),
            player_stats=[PlayerStats.from_dict(s) for s in data.get("player_stats", [])],
            actions=actions,
        )
