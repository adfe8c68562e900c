"""
Scoring Service

Implements the Wordle letter evaluation and the scalar quality score used to
rank guesses within a round.
"""

from typing import List, Optional, Sequence

from ..models.game import Guess, LetterStatus
from ..models.player import Player


def evaluate(guess: str, target: str) -> List[LetterStatus]:
    """
    Implements the authentic Wordle letter evaluation algorithm.

    Exact matches are resolved first and consume their target letter, so a
    displaced match can only claim letters left over after the first pass.

    Raises:
        ValueError: If guess and target differ in length
    """
    if len(guess) != len(target):
        raise ValueError(f"Guess '{guess}' and target differ in length")

    statuses = [LetterStatus.ABSENT] * len(target)
    remaining: List[Optional[str]] = list(target)

    # First pass: exact position matches
    for i, letter in enumerate(guess):
        if remaining[i] == letter:
            statuses[i] = LetterStatus.CORRECT
            remaining[i] = None

    # Second pass: displaced letters from what is left
    for i, letter in enumerate(guess):
        if statuses[i] is LetterStatus.CORRECT:
            continue
        if letter in remaining:
            statuses[i] = LetterStatus.PRESENT
            remaining[remaining.index(letter)] = None

    return statuses


def score(statuses: Sequence[LetterStatus]) -> int:
    """Two points per correct letter, one per present letter."""
    total = 0
    for status in statuses:
        if status is LetterStatus.CORRECT:
            total += 2
        elif status is LetterStatus.PRESENT:
            total += 1
    return total


def build_guess(text: str, author: Player, target: str) -> Guess:
    """Evaluate an uppercase guess and wrap it in an immutable Guess record."""
    statuses = evaluate(text, target)
    return Guess(text=text, author=author, statuses=tuple(statuses), score=score(statuses))
