"""
Round Session

One object per round holding the target word, countdown, guess bookkeeping
and every timer the round has scheduled. All timer scheduling and
cancellation goes through the session so a round can always be torn down
in one place.
"""

from collections import deque
from typing import Callable, Deque, Dict, Optional, Set

from ..config.game_settings import PENDING_GUESS_LIMIT, RECENT_GUESS_LIMIT
from ..models.game import ChatMessage, RoundOutcome, RoundState, RoundSummary
from ..models.player import Player
from .scheduler import TimerHandle
from .tracker import GuessTracker


class RoundSession:
    """
    State of a single round.

    Lifecycle: ``LOADING`` -> ``activate()`` -> ``ACTIVE`` -> ``finish()`` ->
    ``ENDED`` -> ``begin_restart()`` -> ``RESTARTING`` -> ``teardown()``.

    Scheduled callbacks run under the engine lock and are skipped once their
    handle is cancelled or the session has been torn down.
    """

    def __init__(self, round_id: int, scheduler, lock,
                 recent_limit: int = RECENT_GUESS_LIMIT,
                 pending_limit: int = PENDING_GUESS_LIMIT):
        self.round_id = round_id
        self.state = RoundState.LOADING
        self.target_word: Optional[str] = None
        self.remaining_seconds: Optional[int] = None
        self.outcome: Optional[RoundOutcome] = None
        self.winner: Optional[Player] = None
        self.summary: Optional[RoundSummary] = None
        self.game_message = ""
        self.load_failed = False

        self.tracker = GuessTracker(recent_limit)
        self.accepted_words: Set[str] = set()
        self.accepting = False
        self.pending: Deque[ChatMessage] = deque(maxlen=pending_limit)

        self.closed = False
        self._end_claimed = False
        self._scheduler = scheduler
        self._lock = lock
        self._timers: Dict[str, TimerHandle] = {}

    @property
    def is_active(self) -> bool:
        return self.state is RoundState.ACTIVE and not self.closed

    def activate(self, target_word: str, duration: int) -> None:
        self.target_word = target_word
        self.remaining_seconds = duration
        self.load_failed = False
        self.game_message = ""
        self.state = RoundState.ACTIVE

    def _guard(self, name: str, slot: Dict[str, TimerHandle], callback: Callable[[], None],
               one_shot: bool) -> Callable[[], None]:
        def _fire():
            with self._lock:
                handle = slot.get('handle')
                if self.closed or handle is None or handle.cancelled:
                    return
                if one_shot and self._timers.get(name) is handle:
                    del self._timers[name]
                callback()
        return _fire

    def schedule(self, name: str, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Schedule a one-shot callback, replacing any pending timer of the same name."""
        self.cancel(name)
        slot: Dict[str, TimerHandle] = {}
        handle = self._scheduler.call_later(delay, self._guard(name, slot, callback, True), name=name)
        slot['handle'] = handle
        self._timers[name] = handle
        return handle

    def schedule_repeating(self, name: str, interval: float, callback: Callable[[], None]) -> TimerHandle:
        """Schedule a periodic callback; only one timer per name exists at a time."""
        self.cancel(name)
        slot: Dict[str, TimerHandle] = {}
        handle = self._scheduler.call_every(interval, self._guard(name, slot, callback, False), name=name)
        slot['handle'] = handle
        self._timers[name] = handle
        return handle

    def cancel(self, name: str) -> None:
        handle = self._timers.pop(name, None)
        if handle is not None:
            handle.cancel()

    def cancel_all(self) -> None:
        for handle in self._timers.values():
            handle.cancel()
        self._timers.clear()

    def has_timer(self, name: str) -> bool:
        return name in self._timers

    def tick(self) -> bool:
        """
        Advance the countdown by one second.

        Returns:
            True when the countdown has reached zero
        """
        if not self.is_active or self.remaining_seconds is None:
            return False
        self.remaining_seconds = max(0, self.remaining_seconds - 1)
        return self.remaining_seconds == 0

    def claim_end(self) -> bool:
        """One-shot end token: only the first trigger of a round gets True."""
        if self._end_claimed or self.closed:
            return False
        self._end_claimed = True
        return True

    def finish(self, outcome: RoundOutcome, winner: Optional[Player] = None) -> None:
        self.cancel('countdown')
        self.cancel('cooldown')
        self.pending.clear()
        self.accepting = False
        self.outcome = outcome
        self.winner = winner
        if outcome is RoundOutcome.WIN:
            self.remaining_seconds = None
        self.state = RoundState.ENDED

    def begin_restart(self) -> None:
        self.cancel_all()
        self.pending.clear()
        self.accepting = False
        self.state = RoundState.RESTARTING

    def teardown(self) -> None:
        """Cancel every timer and make stale callbacks no-ops."""
        self.cancel_all()
        self.pending.clear()
        self.accepting = False
        self._end_claimed = True
        self.closed = True
