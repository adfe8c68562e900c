"""
Configuration Package

Contains all configuration-related files and settings.

This package separates two types of configuration:
- app_config.py: Flask application configuration (environment-based)
- game_settings.py: Game rules and timings (business logic)
"""

from .app_config import Config, DevelopmentConfig, ProductionConfig, TestingConfig, config
from .game_settings import (
    WORD_LENGTH, ROUND_DURATION_SECONDS, RECENT_GUESS_LIMIT, LEADERBOARD_SIZE,
    DEFINITION_FALLBACK, RoundTimings
)

__all__ = [
    # App configuration
    'Config', 'DevelopmentConfig', 'ProductionConfig', 'TestingConfig', 'config',
    # Game rules
    'WORD_LENGTH', 'ROUND_DURATION_SECONDS', 'RECENT_GUESS_LIMIT', 'LEADERBOARD_SIZE',
    'DEFINITION_FALLBACK', 'RoundTimings'
]
