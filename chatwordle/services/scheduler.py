"""
Timer Scheduling

Cancellable one-shot and periodic timers running as Flask-SocketIO background
tasks. The game engine only depends on ``call_later`` and ``call_every``, so
tests can swap in a manual clock.
"""

from typing import Callable

from ..utils.game_logger import game_logger

CANCEL_POLL_SECONDS = 0.25
"""Longest a cancelled timer's background task keeps sleeping before it exits."""


class TimerHandle:
    """Cooperative cancellation token for a scheduled callback."""

    def __init__(self, name: str = ""):
        self.name = name
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class SocketIOScheduler:
    """
    Scheduler backed by ``socketio.start_background_task`` and ``socketio.sleep``,
    so timers follow whichever async mode Flask-SocketIO runs in.

    Each timer is one background task. Delays are slept in slices of at most
    ``poll_interval`` seconds, so a cancelled timer's task ends within one slice
    instead of holding a thread for its whole delay.
    """

    def __init__(self, socketio, poll_interval: float = CANCEL_POLL_SECONDS):
        self.socketio = socketio
        self.poll_interval = poll_interval

    def _wait(self, handle: TimerHandle, delay: float) -> bool:
        """
        Sleep for ``delay`` seconds unless the handle is cancelled first.

        Returns:
            True if the full delay elapsed without cancellation
        """
        remaining = delay
        while True:
            if handle.cancelled:
                return False
            step = min(remaining, self.poll_interval)
            self.socketio.sleep(step)
            remaining -= step
            if remaining <= 0:
                return not handle.cancelled

    def call_later(self, delay: float, callback: Callable[[], None], name: str = "") -> TimerHandle:
        handle = TimerHandle(name)

        def _worker():
            if not self._wait(handle, delay):
                return
            try:
                callback()
            except Exception as e:
                game_logger.logger.error(f"Timer '{handle.name}' failed: {e}")

        self.socketio.start_background_task(_worker)
        return handle

    def call_every(self, interval: float, callback: Callable[[], None], name: str = "") -> TimerHandle:
        handle = TimerHandle(name)

        def _worker():
            while self._wait(handle, interval):
                try:
                    callback()
                except Exception as e:
                    game_logger.logger.error(f"Periodic timer '{handle.name}' failed: {e}")

        self.socketio.start_background_task(_worker)
        return handle
