"""
Game Data Models

Contains all game-related data structures and enums.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .player import Player


class LetterStatus(Enum):
    """Per-letter outcome of a guess against the target word."""
    CORRECT = "correct"
    PRESENT = "present"
    ABSENT = "absent"
    EMPTY = "empty"  # Unfilled grid cell, never produced by the scorer


class RoundState(Enum):
    """Lifecycle of the single active round."""
    LOADING = "loading"
    ACTIVE = "active"
    ENDED = "ended"
    RESTARTING = "restarting"


class RoundOutcome(Enum):
    WIN = "win"
    TIMEOUT = "timeout"


@dataclass(frozen=True)
class Guess:
    """An accepted, scored guess. Immutable once created."""
    text: str
    author: Player
    statuses: Tuple[LetterStatus, ...]
    score: int

    def to_dict(self) -> Dict:
        # Raw scores only rank guesses; they are not shown to players
        return {
            'guess': self.text,
            'author': self.author.to_dict(),
            'statuses': [status.value for status in self.statuses]
        }


@dataclass(frozen=True)
class ChatMessage:
    """One chat event delivered by the chat source."""
    author: Player
    text: str
    message_id: Optional[str] = None

    @classmethod
    def from_payload(cls, data) -> Optional["ChatMessage"]:
        """
        Parse a chat event payload.

        Accepts the normalized shape ``{author: {...}, text}`` as well as the
        relay's native shape ``{uniqueId, nickname, profilePictureUrl, comment}``.

        Returns:
            ChatMessage or None if the payload is missing its text or author
        """
        if not isinstance(data, dict):
            return None

        if isinstance(data.get('author'), dict):
            author = Player.from_payload(data['author'])
            text = data.get('text')
        else:
            author = Player.from_payload(data)
            text = data.get('comment', data.get('text'))

        if author is None or not isinstance(text, str):
            return None

        message_id = data.get('msgId', data.get('messageId'))
        return cls(
            author=author,
            text=text,
            message_id=str(message_id) if message_id is not None else None
        )


@dataclass(frozen=True)
class RoundSummary:
    """Reveal payload shown once a round has ended."""
    round_id: int
    title: str
    word: str
    definitions: List[str] = field(default_factory=list)
    examples: List[str] = field(default_factory=list)
    winner: Optional[Player] = None

    def to_dict(self) -> Dict:
        return {
            'round_id': self.round_id,
            'title': self.title,
            'word': self.word,
            'definitions': list(self.definitions),
            'examples': list(self.examples),
            'winner': self.winner.to_dict() if self.winner else None
        }
