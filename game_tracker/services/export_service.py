"""CSV export and summaries of games for the Soccer Game Tracker."""

from __future__ import annotations

import csv
import io
import logging
from typing import Iterable, List

from ..models import Game
from ..models.game_report import GameSummary
from ..utils import UNKNOWN_PLAYER_NAME

logger = logging.getLogger(__name__)

HISTORY_HEADER = [
    "Date", "Opponent", "Location", "Result", "Our Score", "Opponent Score",
    "Player Name", "Player Number", "Position", "Goals", "Assists",
    "Yellow Cards", "Red Cards", "Saves", "Shots", "Substituted",
]
SUMMARY_HEADER = ["Name", "Number", "Position", "Goals", "Shots", "Assists", "Saves"]
CSV_DATE_FORMAT = "%Y-%m-%d"


class GameCSVExporter:
    """Flatten finished games into CSV tables - follows SRP."""

    def history_rows(self, game: Game) -> List[list]:
        """One row per player in the game plus one for unattributed goals."""
        date_text = game.game_date.strftime(CSV_DATE_FORMAT)
        prefix = [
            date_text, game.opponent_name, game.location, game.result,
            game.our_score, game.opponent_score,
        ]
        rows = [
            prefix + [
                stats.name,
                stats.number,
                stats.position.value,
                stats.goals,
                stats.assists,
                stats.yellow_cards,
                stats.red_cards,
                stats.saves,
                stats.total_shots,
                "true" if stats.is_substituted else "false",
            ]
            for stats in game.player_stats
        ]
        if game.unknown_goals > 0:
            rows.append(prefix + [UNKNOWN_PLAYER_NAME, 0, "Unknown", game.unknown_goals,
                                  0, 0, 0, 0, 0, "false"])
        return rows

    def export_games(self, games: Iterable[Game]) -> str:
        """Return the history table for several games as CSV text."""
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(HISTORY_HEADER)
        for game in games:
            writer.writerows(self.history_rows(game))

        csv_text = buffer.getvalue()
        buffer.close()
        return csv_text

    def export_game(self, game: Game) -> str:
        """Return the history table for a single game as CSV text."""
        return self.export_games([game])

    def export_game_summary(self, game: Game) -> str:
        """Return the short per-player table shown after a game."""
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(SUMMARY_HEADER)
        for stats in game.player_stats:
            writer.writerow([stats.name, stats.number, stats.position.value,
                             stats.goals, stats.total_shots, stats.assists, stats.saves])
        csv_text = buffer.getvalue()
        buffer.close()
        return csv_text

    def write_csv(self, games: Iterable[Game], file_path: str) -> None:
        """
        Write the history table to a file.

        Raises:
            OSError: If the file cannot be written
        """
        games = list(games)
        with open(file_path, "w", encoding="utf-8", newline="") as f:
            f.write(self.export_games(games))
        logger.info("Exported %d games to %s", len(games), file_path)

    @staticmethod
    def summarize(game: Game) -> GameSummary:
        """Build team totals for a game."""
        stats = game.player_stats
        scorers = [
            f"#{s.number} {s.name}" + (f" ({s.goals})" if s.goals > 1 else "")
            for s in sorted(stats, key=lambda s: (-s.goals, s.number))
            if s.goals > 0
        ]
        return GameSummary(
            game_id=game.id,
            opponent_name=game.opponent_name,
            game_date=game.game_date,
            result=game.result,
            our_score=game.our_score,
            opponent_score=game.opponent_score,
            total_goals=sum(s.goals for s in stats) + game.unknown_goals,
            total_assists=sum(s.assists for s in stats),
            total_cards=sum(s.yellow_cards + s.red_cards for s in stats),
            total_saves=sum(s.saves for s in stats),
            total_shots=sum(s.total_shots for s in stats),
            scorers=scorers,
        )
