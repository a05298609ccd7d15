"""
Player model for the Soccer Game Tracker.

This module contains the Player dataclass which represents a roster entry,
and the Position enumeration used by both the roster and live game stats.
"""
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict

# Older saves stored bench players under a dedicated position value
LEGACY_SUBSTITUTE_POSITION = "Substitute (SUB)"


class Position(Enum):
    """Player positions."""
    GOALKEEPER = "Goalkeeper"
    DEFENDER = "Defender"
    MIDFIELDER = "Midfielder"
    FORWARD = "Forward"

    @property
    def abbreviation(self) -> str:
        """Short code shown next to jersey numbers."""
        return {
            Position.GOALKEEPER: "GK",
            Position.DEFENDER: "DEF",
            Position.MIDFIELDER: "MID",
            Position.FORWARD: "FWD",
        }[self]


def new_id() -> str:
    """Generate an opaque unique identifier."""
    return uuid.uuid4().hex


@dataclass
class Player:
    """
    Represents a soccer player on the team roster.

    Attributes:
        name: Player's display name
        number: Jersey number (unique by convention, not enforced)
        position: Nominal position on the field
        is_substitute: True if the player starts on the bench
        id: Opaque unique identifier
    """
    name: str
    number: int
    position: Position = Position.FORWARD
    is_substitute: bool = False
    id: str = field(default_factory=new_id)

    @property
    def is_starter(self) -> bool:
        return not self.is_substitute

    @property
    def is_starting_goalkeeper(self) -> bool:
        return self.position is Position.GOALKEEPER and not self.is_substitute

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert player to dictionary for JSON serialization.

        Returns:
            Dictionary representation of the player
        """
        return {
            "id": self.id,
            "name": self.name,
            "number": self.number,
            "position": self.position.value,
            "is_substitute": self.is_substitute,
        }

    @staticmethod
    def is_legacy_record(data: Dict[str, Any]) -> bool:
        """Return True if the record still uses the old substitute position."""
        return data.get("position") == LEGACY_SUBSTITUTE_POSITION

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Player':
        """
        Create player from dictionary for JSON deserialization.

        Records tagged with the legacy substitute position are rewritten to a
        bench Forward.

        Args:
            data: Dictionary representation of player

        Returns:
            Player instance

        Raises:
            KeyError: If a required field is missing
            ValueError: If the position value is unknown
        """
        is_substitute = bool(data.get("is_substitute", False))
        if cls.is_legacy_record(data):
            position = Position.FORWARD
            is_substitute = True
        else:
            position = Position(data.get("position", Position.FORWARD.value))

        return cls(
            id=data["id"],
            name=data["name"],
            number=int(data.get("number", 0)),
            position=position,
            is_substitute=is_substitute,
        )
