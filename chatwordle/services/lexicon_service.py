"""
Lexicon Service

Supplies target words, validates guesses and looks up definitions.
"""

import json
import os
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional

DEFAULT_LEXICON_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'config', 'lexicon.json'
)


class LexiconError(Exception):
    """Raised when the lexicon cannot load or cannot supply a word."""


@dataclass(frozen=True)
class LexiconEntry:
    """Definition lookup result for one word."""
    meanings: List[str] = field(default_factory=list)
    examples: List[str] = field(default_factory=list)


class LexiconService(ABC):
    """Interface the game engine consumes."""

    @abstractmethod
    def get_random_word(self, length: int) -> str:
        """Return a random uppercase target word of the given length."""

    @abstractmethod
    def is_valid_word(self, text: str) -> bool:
        """Return True if the text is an acceptable guess."""

    @abstractmethod
    def get_definition(self, word: str) -> Optional[LexiconEntry]:
        """Return the definition of a word, or None if unknown."""


class WordListLexicon(LexiconService):
    """
    Lexicon backed by a JSON word list.

    File format::

        {
            "answers": {"CRANE": {"meanings": [...], "examples": [...]}, ...},
            "allowed": ["AAHED", ...]
        }

    Answers are eligible as targets and as guesses; allowed words are only
    accepted as guesses.
    """

    def __init__(self, answers: Dict[str, LexiconEntry], allowed: Optional[List[str]] = None,
                 rng: Optional[random.Random] = None):
        self.answers: Dict[str, LexiconEntry] = {word.upper(): entry for word, entry in answers.items()}
        self.allowed = {word.upper() for word in (allowed or [])}
        self._valid = set(self.answers) | self.allowed
        self._rng = rng or random.Random()

    @classmethod
    def from_file(cls, path: Optional[str] = None, rng: Optional[random.Random] = None) -> "WordListLexicon":
        """
        Load a lexicon from a JSON file.

        Raises:
            LexiconError: If the file is missing, malformed or contains invalid words
        """
        json_file_path = path or DEFAULT_LEXICON_PATH

        try:
            with open(json_file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            raise LexiconError(f"Lexicon file not found: {json_file_path}")
        except json.JSONDecodeError as e:
            raise LexiconError(f"Invalid JSON in lexicon file {json_file_path}: {e}")

        if not isinstance(data, dict) or not isinstance(data.get('answers'), dict):
            raise LexiconError("Lexicon file must contain an 'answers' object")

        answers = {}
        for word, raw_entry in data['answers'].items():
            raw_entry = raw_entry or {}
            answers[word] = LexiconEntry(
                meanings=[str(m) for m in raw_entry.get('meanings', [])],
                examples=[str(e) for e in raw_entry.get('examples', [])]
            )

        allowed = data.get('allowed', [])
        if not isinstance(allowed, list):
            raise LexiconError("'allowed' must be an array of words")

        lexicon = cls(answers, allowed, rng=rng)
        lexicon.validate_integrity()
        return lexicon

    def get_random_word(self, length: int) -> str:
        candidates = sorted(word for word in self.answers if len(word) == length)
        if not candidates:
            raise LexiconError(f"No target words of length {length}")
        return self._rng.choice(candidates)

    def is_valid_word(self, text: str) -> bool:
        return isinstance(text, str) and text.strip().upper() in self._valid

    def get_definition(self, word: str) -> Optional[LexiconEntry]:
        entry = self.answers.get(word.upper())
        if entry is None or not entry.meanings:
            return None
        return entry

    def validate_integrity(self) -> bool:
        """
        Validates the integrity of the word database.

        Checks that the lexicon is not empty, that every word is alphabetic,
        and that no allowed word duplicates an answer.

        Raises:
            LexiconError: If any validation check fails
        """
        if not self.answers:
            raise LexiconError("Lexicon has no target words")

        for word in self._valid:
            if not word.isalpha() or not word.isascii():
                raise LexiconError(f"Word '{word}' contains non-alphabetic characters")

        duplicates = sorted(self.allowed & set(self.answers))
        if duplicates:
            raise LexiconError(f"Words listed both as answers and allowed: {duplicates}")

        return True

    def statistics(self) -> Dict:
        """
        Analyzes the target words for game balancing.

        Returns:
            dict with total_words, valid_words, avg_vowel_count and most_common_letters
        """
        if not self.answers:
            return {"error": "Lexicon is empty"}

        vowels = set('AEIOU')
        total_vowels = sum(len([char for char in word if char in vowels]) for word in self.answers)

        letter_frequency: Dict[str, int] = {}
        for word in self.answers:
            for char in word:
                letter_frequency[char] = letter_frequency.get(char, 0) + 1

        return {
            "total_words": len(self.answers),
            "valid_words": len(self._valid),
            "avg_vowel_count": round(total_vowels / len(self.answers), 2),
            "most_common_letters": sorted(letter_frequency.items(), key=lambda x: x[1], reverse=True)[:5]
        }
