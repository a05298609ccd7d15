"""
Game action log entries for the Soccer Game Tracker.

Each recorded event during a match (goal, card, save, shot) becomes an
immutable GameAction. Score and player counters are updated alongside the log;
the log records what happened and when.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional

from .player import new_id
from ..utils import fmt_mmss, now_ts


class GameHalf(Enum):
    """The two fixed-length playing periods."""
    FIRST = "First Half"
    SECOND = "Second Half"

    @property
    def short_name(self) -> str:
        return "1st" if self is GameHalf.FIRST else "2nd"


class ActionType(Enum):
    """Kinds of match events that can be recorded."""
    TEAM_GOAL = "Team Goal"
    TEAM_GOAL_WITH_ASSIST = "Team Goal (Assist)"
    UNKNOWN_GOAL = "Unknown Goal"
    OPPONENT_GOAL = "Opponent Goal"
    YELLOW_CARD = "Yellow Card"
    RED_CARD = "Red Card"
    SAVE = "Save"
    SHOT = "Shot"

    @property
    def is_team_goal(self) -> bool:
        return self in TEAM_GOAL_TYPES


TEAM_GOAL_TYPES: FrozenSet[ActionType] = frozenset({
    ActionType.TEAM_GOAL, ActionType.TEAM_GOAL_WITH_ASSIST, ActionType.UNKNOWN_GOAL,
})
SCORER_GOAL_TYPES: FrozenSet[ActionType] = frozenset({
    ActionType.TEAM_GOAL, ActionType.TEAM_GOAL_WITH_ASSIST,
})

# Player counter affected by each single-player action type
PLAYER_COUNTERS: Dict[ActionType, str] = {
    ActionType.TEAM_GOAL: "goals",
    ActionType.TEAM_GOAL_WITH_ASSIST: "goals",
    ActionType.YELLOW_CARD: "yellow_cards",
    ActionType.RED_CARD: "red_cards",
    ActionType.SAVE: "saves",
    ActionType.SHOT: "total_shots",
}


@dataclass(frozen=True)
class GameAction:
    """
    One immutable entry in a game's action log.

    Attributes:
        half: Half in which the action happened
        elapsed_seconds: Seconds into that half when recorded
        action_type: Kind of event
        player_name: Scorer/actor display name (opponent or unknown label for
            goals not credited to one of our players)
        player_id: Roster id of the actor, None for unknown/opponent goals
        player_number: Jersey number of the actor, if any
        assist_player_id, assist_player_name, assist_player_number: Assisting player
        timestamp: Wall-clock epoch seconds when recorded
        id: Opaque unique identifier
    """
    half: GameHalf
    elapsed_seconds: int
    action_type: ActionType
    player_name: str
    player_id: Optional[str] = None
    player_number: Optional[int] = None
    assist_player_id: Optional[str] = None
    assist_player_name: Optional[str] = None
    assist_player_number: Optional[int] = None
    timestamp: float = field(default_factory=now_ts)
    id: str = field(default_factory=new_id)

    def involves(self, player_id: str) -> bool:
        """Return True if the player is the actor or the assister."""
        return player_id in (self.player_id, self.assist_player_id)

    def time_string(self) -> str:
        """Elapsed time in the half as MM:SS."""
        return fmt_mmss(self.elapsed_seconds)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "half": self.half.value,
            "elapsed_seconds": self.elapsed_seconds,
            "action_type": self.action_type.value,
            "player_id": self.player_id,
            "player_name": self.player_name,
            "player_number": self.player_number,
            "assist_player_id": self.assist_player_id,
            "assist_player_name": self.assist_player_name,
            "assist_player_number": self.assist_player_number,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GameAction':
        """Create from dictionary for JSON deserialization."""
        return cls(
            id=data["id"],
            timestamp=float(data["timestamp"]),
            half=GameHalf(data.get("half", GameHalf.FIRST.value)),
            elapsed_seconds=int(data.get("elapsed_seconds", 0)),
            action_type=ActionType(data["action_type"]),
            player_id=data.get("player_id"),
            player_name=data.get("player_name", ""),
            player_number=data.get("player_number"),
            assist_player_id=data.get("assist_player_id"),
            assist_player_name=data.get("assist_player_name"),
            assist_player_number=data.get("assist_player_number"),
        )
