"""
Game service for the Soccer Game Tracker.

This module drives one live game: the half/timer state machine and the action
log. Recording an action appends it to the log and applies its effect to the
score and player counters; removing an action applies the exact inverse,
clamped at zero.
"""
import logging
from typing import Iterable, Optional, Union

from ..models import (
    ActionType, Game, GameAction, GameHalf, GamePhase, InvalidTransitionError,
)
from ..models.game_action import PLAYER_COUNTERS, SCORER_GOAL_TYPES
from ..utils import UNKNOWN_PLAYER_NAME, now_ts
from .timer_service import TimerService

logger = logging.getLogger(__name__)

ActionRef = Union[GameAction, str]


class GameService:
    """
    State machine and action log operations for a single game.

    Phases advance NOT_STARTED -> FIRST_HALF -> SECOND_HALF -> ENDED and never
    go back. Transitions that are not allowed raise InvalidTransitionError;
    references to unknown players or actions are no-ops.
    """

    def __init__(self, game: Game, timer_service: Optional[TimerService] = None):
        """
        Initialize GameService.

        Args:
            game: Game to drive
            timer_service: Countdown for the game (created if not supplied)
        """
        self.game = game
        self.timer = timer_service or TimerService(game)

    # ------------------------------------------------------------------
    # Phase transitions
    # ------------------------------------------------------------------
    def kick_off(self) -> None:
        """Move a new game into the first half with a paused full-length clock."""
        if self.game.phase is not GamePhase.NOT_STARTED:
            raise InvalidTransitionError("kick off", self.game.phase)

        self.timer.stop()
        self.game.phase = GamePhase.FIRST_HALF
        self.game.current_half = GameHalf.FIRST
        self.game.remaining_seconds = self.game.half_duration_seconds
        self.game.our_score = 0
        self.game.opponent_score = 0
        logger.info("Game %s vs %s kicked off", self.game.id, self.game.opponent_name)

    def start_timer(self) -> bool:
        """Start the countdown, kicking off first if the game has not started."""
        if self.game.phase is GamePhase.NOT_STARTED:
            self.kick_off()
        return self.timer.start()

    def pause_timer(self) -> None:
        self.timer.pause()

    def toggle_timer(self) -> bool:
        """Start or pause the countdown. Returns the new running state."""
        if self.game.is_timer_running:
            self.timer.pause()
            return False
        return self.start_timer()

    def end_half(self) -> None:
        """
        End the first half.

        Stops the timer, restores a full countdown and moves to the second half.

        Raises:
            InvalidTransitionError: If the game is not in the first half
        """
        if self.game.phase is not GamePhase.FIRST_HALF:
            raise InvalidTransitionError("end the half", self.game.phase)

        self.timer.stop()
        self.game.remaining_seconds = self.game.half_duration_seconds
        self.game.current_half = GameHalf.SECOND
        self.game.phase = GamePhase.SECOND_HALF
        logger.info("Half time in game %s: %d-%d", self.game.id,
                    self.game.our_score, self.game.opponent_score)

    def end_game(self) -> Game:
        """
        End the game from the second half.

        The timer is stopped before the phase changes so no tick can touch the
        finished game.

        Raises:
            InvalidTransitionError: If the game is not in the second half
        """
        if self.game.phase is not GamePhase.SECOND_HALF:
            raise InvalidTransitionError("end the game", self.game.phase)

        self.timer.stop()
        self.game.phase = GamePhase.ENDED
        logger.info("Game %s ended %d-%d (%s)", self.game.id, self.game.our_score,
                    self.game.opponent_score, self.game.result)
        return self.game

    # ------------------------------------------------------------------
    # Recording actions
    # ------------------------------------------------------------------
    def record_action(
        self,
        action_type: ActionType,
        player_id: Optional[str] = None,
        assist_player_id: Optional[str] = None,
    ) -> Optional[GameAction]:
        """
        Append an action to the log and apply its effect.

        Args:
            action_type: Kind of event
            player_id: Actor for player actions (ignored for unknown/opponent goals)
            assist_player_id: Assisting player for TEAM_GOAL_WITH_ASSIST

        Returns:
            The recorded action, or None if a referenced player is not in the game

        Raises:
            InvalidTransitionError: If the game has ended
            ValueError: If a required player reference is missing
        """
        self._ensure_editable("record an action")
        if self.game.phase is GamePhase.NOT_STARTED:
            self.kick_off()

        if action_type is ActionType.UNKNOWN_GOAL:
            action = self._new_action(action_type, player_name=UNKNOWN_PLAYER_NAME)
        elif action_type is ActionType.OPPONENT_GOAL:
            action = self._new_action(action_type, player_name=self.game.opponent_name)
        else:
            action = self._player_action(action_type, player_id, assist_player_id)
            if action is None:
                return None

        self._apply(action)
        self.game.actions.append(action)
        logger.debug("Recorded %s (%s) at %s %s", action.action_type.value,
                     action.player_name, action.half.short_name, action.time_string())
        return action

    def record_goal(self, scorer_id: str, assist_player_id: Optional[str] = None) -> Optional[GameAction]:
        """Record a goal for one of our players, optionally with an assist."""
        if assist_player_id is None:
            return self.record_action(ActionType.TEAM_GOAL, scorer_id)
        return self.record_action(ActionType.TEAM_GOAL_WITH_ASSIST, scorer_id, assist_player_id)

    def record_unknown_goal(self) -> GameAction:
        return self.record_action(ActionType.UNKNOWN_GOAL)

    def record_opponent_goal(self) -> GameAction:
        return self.record_action(ActionType.OPPONENT_GOAL)

    def record_yellow_card(self, player_id: str) -> Optional[GameAction]:
        return self.record_action(ActionType.YELLOW_CARD, player_id)

    def record_red_card(self, player_id: str) -> Optional[GameAction]:
        return self.record_action(ActionType.RED_CARD, player_id)

    def record_save(self, player_id: str) -> Optional[GameAction]:
        return self.record_action(ActionType.SAVE, player_id)

    def record_shot(self, player_id: str) -> Optional[GameAction]:
        return self.record_action(ActionType.SHOT, player_id)

    # ------------------------------------------------------------------
    # Removing actions
    # ------------------------------------------------------------------
    def remove_action(self, action: ActionRef) -> Optional[GameAction]:
        """
        Remove an action from the log and undo its effect.

        Args:
            action: The action or its id

        Returns:
            The removed action, or None if it is not in the log
        """
        self._ensure_editable("remove an action")
        action_id = action if isinstance(action, str) else action.id

        for index, logged in enumerate(self.game.actions):
            if logged.id == action_id:
                del self.game.actions[index]
                self._retract(logged)
                logger.debug("Removed %s (%s)", logged.action_type.value, logged.player_name)
                return logged

        logger.warning("Action %s not found in game %s", action_id, self.game.id)
        return None

    def find_latest_action(
        self,
        action_types: Iterable[ActionType],
        player_id: Optional[str] = None,
    ) -> Optional[GameAction]:
        """
        Find the most recently recorded action matching the criteria.

        Args:
            action_types: Acceptable action types
            player_id: Actor to match, or None to match any actor

        Returns:
            Matching action with the greatest timestamp (later log entry on
            ties), or None
        """
        wanted = set(action_types)
        latest: Optional[GameAction] = None
        for action in self.game.actions:
            if action.action_type not in wanted:
                continue
            if player_id is not None and action.player_id != player_id:
                continue
            if latest is None or action.timestamp >= latest.timestamp:
                latest = action
        return latest

    def remove_latest_action(
        self,
        action_types: Iterable[ActionType],
        player_id: Optional[str] = None,
    ) -> Optional[GameAction]:
        """Remove the most recent action matching the criteria, if any."""
        action = self.find_latest_action(action_types, player_id)
        if action is None:
            return None
        return self.remove_action(action)

    def remove_latest_goal(self, player_id: str) -> Optional[GameAction]:
        """Remove a player's most recent goal, assisted or not."""
        return self.remove_latest_action(SCORER_GOAL_TYPES, player_id)

    # ------------------------------------------------------------------
    # Substitutions
    # ------------------------------------------------------------------
    def set_substituted(self, player_id: str, substituted: bool = True) -> bool:
        """
        Mark whether a player has left the field during the game.

        Returns:
            True if the player is in the game
        """
        self._ensure_editable("change substitutions")
        stats = self.game.get_player_stats(player_id)
        if stats is None:
            logger.warning("Player %s not in game %s", player_id, self.game.id)
            return False
        stats.is_substituted = substituted
        return True

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _ensure_editable(self, operation: str) -> None:
        if self.game.phase is GamePhase.ENDED:
            raise InvalidTransitionError(operation, self.game.phase)

    def _new_action(self, action_type: ActionType, **kwargs) -> GameAction:
        return GameAction(
            half=self.game.current_half,
            elapsed_seconds=self.game.elapsed_seconds,
            action_type=action_type,
            timestamp=now_ts(),
            **kwargs,
        )

    def _player_action(
        self,
        action_type: ActionType,
        player_id: Optional[str],
        assist_player_id: Optional[str],
    ) -> Optional[GameAction]:
        if player_id is None:
            raise ValueError(f"{action_type.value} requires a player")

        player = self.game.get_player_stats(player_id)
        if player is None:
            logger.warning("Player %s not in game %s; %s not recorded",
                           player_id, self.game.id, action_type.value)
            return None

        if action_type is not ActionType.TEAM_GOAL_WITH_ASSIST:
            return self._new_action(
                action_type,
                player_id=player.id,
                player_name=player.name,
                player_number=player.number,
            )

        if assist_player_id is None:
            raise ValueError("An assisted goal requires an assisting player")
        if assist_player_id == player_id:
            raise ValueError("A player cannot assist their own goal")

        assister = self.game.get_player_stats(assist_player_id)
        if assister is None:
            logger.warning("Assisting player %s not in game %s; goal not recorded",
                           assist_player_id, self.game.id)
            return None

        return self._new_action(
            action_type,
            player_id=player.id,
            player_name=player.name,
            player_number=player.number,
            assist_player_id=assister.id,
            assist_player_name=assister.name,
            assist_player_number=assister.number,
        )

    def _apply(self, action: GameAction) -> None:
        game = self.game
        if action.action_type.is_team_goal:
            game.our_score += 1
        if action.action_type is ActionType.UNKNOWN_GOAL:
            game.unknown_goals += 1
        elif action.action_type is ActionType.OPPONENT_GOAL:
            game.opponent_score += 1

        counter = PLAYER_COUNTERS.get(action.action_type)
        player = game.get_player_stats(action.player_id)
        if counter and player is not None:
            player.increment(counter)

        assister = game.get_player_stats(action.assist_player_id)
        if action.action_type is ActionType.TEAM_GOAL_WITH_ASSIST and assister is not None:
            assister.increment("assists")

    def _retract(self, action: GameAction) -> None:
        game = self.game
        if action.action_type.is_team_goal:
            game.our_score = max(0, game.our_score - 1)
        if action.action_type is ActionType.UNKNOWN_GOAL:
            game.unknown_goals = max(0, game.unknown_goals - 1)
        elif action.action_type is ActionType.OPPONENT_GOAL:
            game.opponent_score = max(0, game.opponent_score - 1)

        counter = PLAYER_COUNTERS.get(action.action_type)
        player = game.get_player_stats(action.player_id)
        if counter and player is not None:
            player.decrement(counter)

        assister = game.get_player_stats(action.assist_player_id)
        if action.action_type is ActionType.TEAM_GOAL_WITH_ASSIST and assister is not None:
            assister.decrement("assists")
