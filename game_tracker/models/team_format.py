"""Team format (players per side) for the Soccer Game Tracker."""
from enum import Enum


class TeamFormat(Enum):
    """Supported small-sided and full-sided formats."""
    FIVE_V_FIVE = "5v5"
    SEVEN_V_SEVEN = "7v7"
    ELEVEN_V_ELEVEN = "11v11"

    @property
    def max_players(self) -> int:
        """Maximum number of players in the starting lineup."""
        return int(self.value.split("v")[0])

    @property
    def description(self) -> str:
        return f"{self.max_players} players per side"
