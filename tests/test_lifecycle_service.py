"""
Unit tests for GameLifecycleManager, GameHistoryService and ServiceFactory.

Tests the single active game slot, handing finished games to the history
and the roster lock rules.
"""
import os
import tempfile
import unittest
from dataclasses import replace
from datetime import datetime
from unittest.mock import patch

from game_tracker.models import (
    Game, GameAlreadyActiveError, GamePhase, InvalidTransitionError, Player, Position,
)
from game_tracker.services import (
    GameCSVExporter, GameHistoryService, GameLifecycleManager, PersistenceService,
    ServiceFactory,
)


def play_to_second_half(manager: GameLifecycleManager) -> None:
    manager.game_service.kick_off()
    manager.game_service.end_half()


class TestGameLifecycleManager(unittest.TestCase):

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.history = GameHistoryService(PersistenceService(self._tmp.name))
        self.manager = GameLifecycleManager(self.history)
        self.keeper = Player(name="Gina", number=1, position=Position.GOALKEEPER)
        self.players = [self.keeper, Player(name="Dev", number=2, position=Position.DEFENDER)]

    def start(self, opponent: str = "Rivals", date: datetime = datetime(2025, 9, 6)) -> Game:
        return self.manager.start_game("Hawks", opponent, True, date, "Field 1", self.players, 900)

    def test_start_game(self) -> None:
        game = self.start()

        self.assertTrue(self.manager.is_game_active)
        self.assertIs(self.manager.current_game, game)
        self.assertIs(self.manager.game_service.game, game)
        self.assertIs(self.manager.timer_service.game, game)
        self.assertEqual(game.our_team_name, "Hawks")
        self.assertEqual(game.half_duration_seconds, 900)
        self.assertEqual(len(game.player_stats), 2)

    def test_only_one_active_game(self) -> None:
        first = self.start()

        with self.assertRaises(GameAlreadyActiveError):
            self.start("Other Team")
        self.assertIs(self.manager.current_game, first)

    def test_end_game_moves_game_to_history(self) -> None:
        game = self.start()
        play_to_second_half(self.manager)

        ended = self.manager.end_game()

        self.assertIs(ended, game)
        self.assertEqual(ended.phase, GamePhase.ENDED)
        self.assertFalse(self.manager.is_game_active)
        self.assertIsNone(self.manager.game_service)
        self.assertEqual(self.history.completed_games, [game])

        # Slot is free again
        self.start("Next Opponent")
        self.assertTrue(self.manager.is_game_active)

    def test_end_game_after_game_service_ended_it(self) -> None:
        """A game ended on its own service still reaches history and frees the slot."""
        game = self.start()
        play_to_second_half(self.manager)
        self.manager.game_service.start_timer()
        self.manager.game_service.end_game()

        ended = self.manager.end_game()

        self.assertIs(ended, game)
        self.assertFalse(self.manager.is_game_active)
        self.assertEqual(self.history.completed_games, [game])
        self.assertFalse(game.is_timer_running)
        self.start("Next Opponent")

    def test_discard_game_before_second_half(self) -> None:
        game = self.start()
        self.manager.game_service.start_timer()
        self.manager.game_service.record_opponent_goal()

        discarded = self.manager.discard_game()

        self.assertIs(discarded, game)
        self.assertFalse(game.is_timer_running)
        self.assertFalse(self.manager.is_game_active)
        self.assertIsNone(self.manager.timer_service)
        self.assertEqual(self.history.completed_games, [])
        self.start("Rescheduled")
        self.assertTrue(self.manager.is_game_active)

    def test_discard_without_active_game(self) -> None:
        self.assertIsNone(self.manager.discard_game())

    def test_default_half_length_from_config(self) -> None:
        with patch.dict(os.environ, {"GAME_TRACKER_HALF_MINUTES": "20"}):
            game = self.manager.start_game("Hawks", "Rivals", True, datetime(2025, 9, 6),
                                           "Field 1", self.players)

        self.assertEqual(game.half_duration_seconds, 1200)
        self.assertEqual(game.remaining_seconds, 1200)

    def test_end_game_before_second_half_rejected(self) -> None:
        game = self.start()

        with self.assertRaises(InvalidTransitionError):
            self.manager.end_game()
        self.assertIs(self.manager.current_game, game)
        self.assertEqual(self.history.completed_games, [])

    def test_end_game_without_active_game(self) -> None:
        self.assertIsNone(self.manager.end_game())

    def test_roster_lock(self) -> None:
        self.assertFalse(self.manager.is_roster_locked)

        self.start()
        self.assertFalse(self.manager.is_roster_locked)

        self.manager.game_service.kick_off()
        self.assertTrue(self.manager.is_roster_locked)

        self.manager.game_service.end_half()
        self.assertFalse(self.manager.is_roster_locked)

        self.manager.game_service.start_timer()
        self.assertTrue(self.manager.is_roster_locked)

        self.manager.game_service.pause_timer()
        self.assertFalse(self.manager.is_roster_locked)

    def test_sync_player_to_game(self) -> None:
        self.assertFalse(self.manager.sync_player_to_game(self.keeper))

        game = self.start()
        renamed = replace(self.keeper, name="Gina R.", number=12)

        self.assertTrue(self.manager.sync_player_to_game(renamed))
        self.assertEqual(game.get_player_stats(self.keeper.id).name, "Gina R.")
        self.assertFalse(self.manager.sync_player_to_game(Player(name="New", number=30)))


class TestGameHistoryService(unittest.TestCase):

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.persistence = PersistenceService(self._tmp.name)
        self.history = GameHistoryService(self.persistence)

    def make_game(self, opponent: str, day: int) -> Game:
        game = Game.create(opponent, datetime(2025, 9, day), "Field", [], 600)
        game.phase = GamePhase.ENDED
        return game

    def test_newest_game_first(self) -> None:
        early = self.make_game("Early", 1)
        late = self.make_game("Late", 20)
        middle = self.make_game("Middle", 10)

        for game in (early, late, middle):
            self.history.save_game(game)

        self.assertEqual([g.opponent_name for g in self.history.completed_games],
                         ["Late", "Middle", "Early"])

    def test_reload_from_storage(self) -> None:
        game = self.make_game("Rivals", 6)
        game.our_score = 3
        self.history.save_game(game)

        reloaded = GameHistoryService(self.persistence)

        self.assertEqual(len(reloaded.completed_games), 1)
        restored = reloaded.get_game(game.id)
        self.assertEqual(restored.our_score, 3)
        self.assertEqual(restored.phase, GamePhase.ENDED)

    def test_delete_games(self) -> None:
        keep = self.make_game("Keep", 1)
        drop = self.make_game("Drop", 2)
        self.history.save_game(keep)
        self.history.save_game(drop)

        self.assertEqual(self.history.delete_games([drop.id, "unknown"]), 1)
        self.assertEqual(self.history.delete_games(["unknown"]), 0)
        self.assertIsNone(self.history.get_game(drop.id))
        self.assertEqual(GameHistoryService(self.persistence).completed_games[0].id, keep.id)

    def test_unreadable_entries_skipped(self) -> None:
        good = self.make_game("Good", 3)
        self.persistence.save("SavedGames", [{"id": "broken"}, good.to_dict()])

        self.history.load_games()

        self.assertEqual([g.id for g in self.history.completed_games], [good.id])

    def test_failed_write_keeps_games_in_memory(self) -> None:
        blocker = os.path.join(self._tmp.name, "not-a-dir")
        with open(blocker, "w", encoding="utf-8") as fh:
            fh.write("x")
        history = GameHistoryService(PersistenceService(os.path.join(blocker, "data")))
        game = self.make_game("Rivals", 4)

        history.save_game(game)

        self.assertEqual(history.completed_games, [game])
        self.assertEqual(history.delete_games([game.id]), 1)
        self.assertEqual(history.completed_games, [])


class TestServiceFactory(unittest.TestCase):

    def test_services_share_dependencies(self) -> None:
        with tempfile.TemporaryDirectory() as data_dir:
            factory = ServiceFactory(data_dir)
            suite = factory.create_complete_service_suite()

            self.assertIs(suite["roster"].game_manager, suite["games"])
            self.assertIs(suite["games"].history_service, suite["history"])
            self.assertIs(suite["history"].persistence_service, suite["persistence"])
            self.assertIs(factory.get_roster_service(), suite["roster"])
            self.assertEqual(suite["persistence"].data_dir, data_dir)

    def test_custom_export_service(self) -> None:
        class SummaryOnlyExporter(GameCSVExporter):
            def export_game(self, game):
                return self.export_game_summary(game)

        exporter = SummaryOnlyExporter()
        with tempfile.TemporaryDirectory() as data_dir:
            factory = ServiceFactory(data_dir)
            factory.configure_custom_export_service(exporter)

            self.assertIs(factory.get_export_service(), exporter)
            self.assertIs(factory.create_complete_service_suite()["export"], exporter)


if __name__ == "__main__":
    unittest.main()
