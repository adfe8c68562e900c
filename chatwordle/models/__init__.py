"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import ChatMessage, Guess, LetterStatus, RoundOutcome, RoundState, RoundSummary
from .player import LeaderboardEntry, Player

__all__ = [
    'ChatMessage', 'Guess', 'LetterStatus', 'RoundOutcome', 'RoundState', 'RoundSummary',
    'LeaderboardEntry', 'Player'
]
