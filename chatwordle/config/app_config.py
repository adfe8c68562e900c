"""
Configuration Management Module

Centralized configuration management following the 12-factor app methodology.
All configuration is loaded from environment variables with sensible defaults.
"""

import os
from dotenv import load_dotenv

from .game_settings import (
    ROUND_DURATION_SECONDS,
    SUMMARY_DELAY_SECONDS,
    AUTO_RESTART_DELAY_SECONDS,
    GUESS_COOLDOWN_SECONDS,
    NOTICE_DURATION_SECONDS,
)

# Load environment variables from config.env (optional)
load_dotenv(os.path.join(os.path.dirname(os.path.abspath(__file__)), 'config.env'))


class Config:
    """Base configuration class with all settings."""

    # Flask Settings
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'
    TESTING = False

    # Server Settings
    HOST = os.getenv('HOST', '127.0.0.1')
    PORT = int(os.getenv('PORT', 5000))

    # Chat Source Settings
    CHAT_RELAY_URL = os.getenv('CHAT_RELAY_URL', 'http://localhost:8081')
    CHAT_UNIQUE_ID = os.getenv('CHAT_UNIQUE_ID')

    # Host control: when set, manual restarts require this bearer token
    CONTROL_TOKEN = os.getenv('CONTROL_TOKEN')

    # Lexicon Settings
    LEXICON_PATH = os.getenv('LEXICON_PATH')

    # Round Timing Settings
    ROUND_DURATION_SECONDS = int(os.getenv('ROUND_DURATION_SECONDS', ROUND_DURATION_SECONDS))
    SUMMARY_DELAY_SECONDS = float(os.getenv('SUMMARY_DELAY_SECONDS', SUMMARY_DELAY_SECONDS))
    AUTO_RESTART_DELAY_SECONDS = float(os.getenv('AUTO_RESTART_DELAY_SECONDS', AUTO_RESTART_DELAY_SECONDS))
    GUESS_COOLDOWN_SECONDS = float(os.getenv('GUESS_COOLDOWN_SECONDS', GUESS_COOLDOWN_SECONDS))
    NOTICE_DURATION_SECONDS = float(os.getenv('NOTICE_DURATION_SECONDS', NOTICE_DURATION_SECONDS))

    # Logging Settings
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('LOG_DIR', 'logs')


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DEBUG = True
    CONTROL_TOKEN = None


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
