"""
Per-game player statistics for the Soccer Game Tracker.

A PlayerStats entry is created for every roster player selected when a game
starts. Display fields are copied from the roster, counters are driven by the
game's action log.
"""
from dataclasses import dataclass
from typing import Any, Dict

from .player import LEGACY_SUBSTITUTE_POSITION, Player, Position

COUNTER_FIELDS = ("goals", "assists", "yellow_cards", "red_cards", "saves", "total_shots")


def _parse_position(value: Any) -> Position:
    if value is None or value == LEGACY_SUBSTITUTE_POSITION:
        return Position.FORWARD
    return Position(value)


@dataclass
class PlayerStats:
    """
    Statistics for one player in one game.

    Attributes:
        id: Mirrors the roster Player id
        name: Display name (kept in sync with the roster during the game)
        number: Jersey number (kept in sync with the roster during the game)
        position: Position (kept in sync with the roster during the game)
        goals, assists, yellow_cards, red_cards, saves, total_shots: Counters, never negative
        is_substitute: Started the game on the bench; frozen at game start
        is_substituted: Left the field during the game
    """
    id: str
    name: str
    number: int
    position: Position
    goals: int = 0
    assists: int = 0
    yellow_cards: int = 0
    red_cards: int = 0
    saves: int = 0
    total_shots: int = 0
    is_substitute: bool = False
    is_substituted: bool = False

    @classmethod
    def from_player(cls, player: Player) -> 'PlayerStats':
        """Snapshot a roster player into a fresh stats entry."""
        return cls(
            id=player.id,
            name=player.name,
            number=player.number,
            position=player.position,
            is_substitute=player.is_substitute,
        )

    def increment(self, counter: str) -> None:
        """Add one to the named counter."""
        setattr(self, counter, getattr(self, counter) + 1)

    def decrement(self, counter: str) -> None:
        """Subtract one from the named counter, never going below zero."""
        setattr(self, counter, max(0, getattr(self, counter) - 1))

    def apply_display_fields(self, player: Player) -> None:
        """Copy name, number and position from a roster player."""
        self.name = player.name
        self.number = player.number
        self.position = player.position

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "number": self.number,
            "position": self.position.value,
            "goals": self.goals,
            "assists": self.assists,
            "yellow_cards": self.yellow_cards,
            "red_cards": self.red_cards,
            "saves": self.saves,
            "total_shots": self.total_shots,
            "is_substitute": self.is_substitute,
            "is_substituted": self.is_substituted,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PlayerStats':
        """Create from dictionary for JSON deserialization."""
        stats = cls(
            id=data["id"],
            name=data["name"],
            number=int(data.get("number", 0)),
            position=_parse_position(data.get("position")),
            is_substitute=(
                bool(data.get("is_substitute", False))
                or data.get("position") == LEGACY_SUBSTITUTE_POSITION
            ),
            is_substituted=bool(data.get("is_substituted", False)),
        )
        for counter in COUNTER_FIELDS:
            setattr(stats, counter, max(0, int(data.get(counter, 0))))
        return stats
