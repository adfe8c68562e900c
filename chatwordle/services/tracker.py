"""
Guess Tracker

Holds the best guess and a bounded most-recent-first history for one round.
"""

from collections import deque
from typing import Deque, List, Optional

from ..config.game_settings import RECENT_GUESS_LIMIT
from ..models.game import Guess


class GuessTracker:
    """
    Per-round guess bookkeeping.

    There is no removal operation; a new tracker is created for every round.
    """

    def __init__(self, recent_limit: int = RECENT_GUESS_LIMIT):
        self.best_guess: Optional[Guess] = None
        self._recent: Deque[Guess] = deque(maxlen=recent_limit)
        self.history: List[Guess] = []

    @property
    def recent_guesses(self) -> List[Guess]:
        """Most recent first."""
        return list(self._recent)

    def record(self, guess: Guess) -> None:
        self.history.append(guess)
        # appendleft on a bounded deque evicts from the right (oldest)
        self._recent.appendleft(guess)

        # Strict comparison keeps the first guess found on ties
        if self.best_guess is None or guess.score > self.best_guess.score:
            self.best_guess = guess
