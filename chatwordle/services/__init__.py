"""
Services Package

Contains all business logic and service classes.
"""

from .chat_relay import ChatRelayClient, get_chat_relay, initialize_chat_relay
from .game_service import GameService, get_game_service, initialize_game_service
from .leaderboard_service import LeaderboardService
from .lexicon_service import LexiconEntry, LexiconError, LexiconService, WordListLexicon
from .scheduler import SocketIOScheduler, TimerHandle

__all__ = [
    'ChatRelayClient', 'get_chat_relay', 'initialize_chat_relay',
    'GameService', 'get_game_service', 'initialize_game_service',
    'LeaderboardService',
    'LexiconEntry', 'LexiconError', 'LexiconService', 'WordListLexicon',
    'SocketIOScheduler', 'TimerHandle'
]
