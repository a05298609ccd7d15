"""Tests for game CSV export and summaries."""

import csv
import io
from datetime import datetime

import pytest

from game_tracker.models import Game, GamePhase, Player, Position
from game_tracker.services import GameCSVExporter, GameService
from game_tracker.services.export_service import HISTORY_HEADER, SUMMARY_HEADER


@pytest.fixture
def finished_game():
    striker = Player(name="Sam", number=9, position=Position.FORWARD)
    winger = Player(name="Alex", number=7, position=Position.MIDFIELDER)
    keeper = Player(name="Gina", number=1, position=Position.GOALKEEPER)
    game = Game.create("Rivals, FC", datetime(2025, 9, 6, 10, 30), "Field 3",
                       [striker, winger, keeper], 1500)
    service = GameService(game)

    service.record_goal(striker.id, assist_player_id=winger.id)
    service.record_goal(striker.id)
    service.record_goal(winger.id)
    service.record_unknown_goal()
    service.record_opponent_goal()
    service.record_save(keeper.id)
    service.record_yellow_card(winger.id)
    service.record_shot(striker.id)
    service.set_substituted(winger.id)
    service.end_half()
    service.end_game()
    return game


def parse(text):
    return list(csv.reader(io.StringIO(text)))


def test_history_rows_include_unknown_goals(finished_game):
    rows = parse(GameCSVExporter().export_game(finished_game))

    assert rows[0] == HISTORY_HEADER
    assert len(rows) == 1 + 3 + 1

    sam = rows[1]
    assert sam[:6] == ["2025-09-06", "Rivals, FC", "Field 3", "W", "4", "1"]
    assert sam[6:] == ["Sam", "9", "Forward", "2", "0", "0", "0", "0", "1", "false"]

    alex = rows[2]
    assert alex[6:] == ["Alex", "7", "Midfielder", "1", "1", "1", "0", "0", "0", "true"]

    unknown = rows[-1]
    assert unknown[6:] == ["Unknown Player", "0", "Unknown", "1", "0", "0", "0", "0", "0", "false"]


def test_no_unknown_row_without_unknown_goals(finished_game):
    finished_game.unknown_goals = 0

    rows = GameCSVExporter().history_rows(finished_game)

    assert len(rows) == 3
    assert all(row[6] != "Unknown Player" for row in rows)


def test_export_several_games_shares_header(finished_game):
    rows = parse(GameCSVExporter().export_games([finished_game, finished_game]))

    assert rows.count(HISTORY_HEADER) == 1
    assert len(rows) == 1 + 2 * 4


def test_export_game_summary(finished_game):
    rows = parse(GameCSVExporter().export_game_summary(finished_game))

    assert rows[0] == SUMMARY_HEADER
    assert rows[1] == ["Sam", "9", "Forward", "2", "1", "0", "0"]
    assert rows[3] == ["Gina", "1", "Goalkeeper", "0", "0", "0", "1"]


def test_write_csv(tmp_path, finished_game):
    target = tmp_path / "history.csv"

    GameCSVExporter().write_csv([finished_game], str(target))

    rows = parse(target.read_text(encoding="utf-8"))
    assert rows[0] == HISTORY_HEADER
    assert len(rows) == 5


def test_summarize(finished_game):
    summary = GameCSVExporter.summarize(finished_game)

    assert finished_game.phase is GamePhase.ENDED
    assert summary.game_id == finished_game.id
    assert summary.result == "W"
    assert (summary.our_score, summary.opponent_score) == (4, 1)
    assert summary.total_goals == 4
    assert summary.total_assists == 1
    assert summary.total_cards == 1
    assert summary.total_saves == 1
    assert summary.total_shots == 1
    assert summary.scorers == ["#9 Sam (2)", "#7 Alex"]
