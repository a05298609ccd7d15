"""Countdown timer service for the Soccer Game Tracker."""

import asyncio
import logging
from typing import Any, Callable, Optional, Protocol

from ..models import Game, GamePhase, InvalidTransitionError
from ..utils import TIMER_TICK_SECONDS

logger = logging.getLogger(__name__)


class TickScheduler(Protocol):
    """Interface for the host's timer facility - supports DIP."""

    def schedule(self, delay: float, callback: Callable[[], None]) -> Any:
        """Run callback once after delay seconds and return a cancel handle."""
        ...

    def cancel(self, handle: Any) -> None:
        """Cancel a pending callback so it never runs."""
        ...


class AsyncioTickScheduler:
    """Schedules ticks on an asyncio event loop with ``call_later``."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def schedule(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)

    def cancel(self, handle: asyncio.TimerHandle) -> None:
        handle.cancel()


class TimerService:
    """
    Service for the per-half countdown of a game.

    Without a scheduler the host calls :meth:`tick` once per second itself.
    With a scheduler the service re-arms a one-shot callback after every tick
    and cancels the pending callback when stopped, so no tick fires after
    :meth:`stop` returns.
    """

    def __init__(
        self,
        game: Game,
        scheduler: Optional[TickScheduler] = None,
        interval: float = TIMER_TICK_SECONDS,
        on_tick: Optional[Callable[[Game], None]] = None,
        on_half_ended: Optional[Callable[[Game], None]] = None,
    ):
        self.game = game
        self.scheduler = scheduler
        self.interval = interval
        self.on_tick = on_tick
        self.on_half_ended = on_half_ended
        self._handle: Any = None

    @property
    def is_running(self) -> bool:
        return self.game.is_timer_running

    # ------------------------------------------------------------------
    # Core timer controls
    # ------------------------------------------------------------------
    def start(self) -> bool:
        """
        Start or resume the countdown.

        Returns:
            True if the timer is running afterwards, False if the half has no
            time left

        Raises:
            InvalidTransitionError: If the game has not kicked off or has ended
        """
        if self.game.phase in (GamePhase.NOT_STARTED, GamePhase.ENDED):
            raise InvalidTransitionError("start the timer", self.game.phase)

        if self.game.is_timer_running:
            return True
        if self.game.remaining_seconds <= 0:
            return False

        self.game.is_timer_running = True
        self._schedule_next()
        return True

    def stop(self) -> None:
        """Stop the countdown and cancel any pending tick."""
        if self._handle is not None and self.scheduler is not None:
            self.scheduler.cancel(self._handle)
        self._handle = None
        self.game.is_timer_running = False

    def pause(self) -> None:
        """Pause the countdown without changing the half."""
        self.stop()

    def toggle(self) -> bool:
        """Start if paused, pause if running. Returns the new running state."""
        if self.game.is_timer_running:
            self.pause()
            return False
        return self.start()

    def reset(self) -> None:
        """Stop the countdown and restore a full half."""
        self.stop()
        self.game.remaining_seconds = self.game.half_duration_seconds

    def tick(self) -> bool:
        """
        Advance the countdown by one second.

        Ticks while stopped are ignored. When the countdown reaches zero the
        timer stops and ``on_half_ended`` is called; halves never advance here.

        Returns:
            True if this tick ended the half
        """
        if not self.game.is_timer_running:
            return False

        if self.game.remaining_seconds > 0:
            self.game.remaining_seconds -= 1

        if self.on_tick is not None:
            self.on_tick(self.game)

        if self.game.remaining_seconds > 0:
            return False

        self.stop()
        logger.info("%s over for game %s", self.game.current_half.value, self.game.id)
        if self.on_half_ended is not None:
            self.on_half_ended(self.game)
        return True

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _schedule_next(self) -> None:
        if self.scheduler is None:
            return
        self._handle = self.scheduler.schedule(self.interval, self._on_scheduled_tick)

    def _on_scheduled_tick(self) -> None:
        self._handle = None
        if not self.game.is_timer_running:
            return
        self.tick()
        if self.game.is_timer_running:
            self._schedule_next()
