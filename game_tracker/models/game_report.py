"""Dataclasses describing summaries of finished games."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List


@dataclass
class GameSummary:
    """Team totals for one game, as shown in the game history list."""

    game_id: str
    opponent_name: str
    game_date: datetime
    result: str
    our_score: int
    opponent_score: int
    total_goals: int
    total_assists: int
    total_cards: int
    total_saves: int
    total_shots: int
    scorers: List[str] = field(default_factory=list)
