"""
Game Configuration Constants Module

Defines the rules and timings of a live-chat Wordle round. All game parameters
are centralized here so the engine and the Flask configuration share one source.
"""

from dataclasses import dataclass
from typing import Final

# Core Game Configuration Constants
WORD_LENGTH: Final[int] = 5
"""Number of letters in every target word and accepted guess."""

ROUND_DURATION_SECONDS: Final[int] = 300
"""Countdown length of one round (5 minutes)."""

TICK_INTERVAL_SECONDS: Final[float] = 1
SUMMARY_DELAY_SECONDS: Final[float] = 1.5
AUTO_RESTART_DELAY_SECONDS: Final[float] = 5
RESTART_TRANSITION_SECONDS: Final[float] = 0.5
GUESS_COOLDOWN_SECONDS: Final[float] = 0.25
NOTICE_DURATION_SECONDS: Final[float] = 3

RECENT_GUESS_LIMIT: Final[int] = 5
LEADERBOARD_SIZE: Final[int] = 3
PENDING_GUESS_LIMIT: Final[int] = 50

DEFINITION_FALLBACK: Final[str] = "Definition not found."


@dataclass(frozen=True)
class RoundTimings:
    """
    Timing values used by the game engine.

    Defaults mirror the module constants; the application factory builds an
    instance from the Flask config so deployments can override them.
    """
    round_duration: int = ROUND_DURATION_SECONDS
    tick_interval: float = TICK_INTERVAL_SECONDS
    summary_delay: float = SUMMARY_DELAY_SECONDS
    auto_restart_delay: float = AUTO_RESTART_DELAY_SECONDS
    restart_transition: float = RESTART_TRANSITION_SECONDS
    guess_cooldown: float = GUESS_COOLDOWN_SECONDS
    notice_duration: float = NOTICE_DURATION_SECONDS

    @classmethod
    def from_config(cls, config_class) -> "RoundTimings":
        """Build timings from a Config class, falling back to the defaults."""
        return cls(
            round_duration=int(getattr(config_class, 'ROUND_DURATION_SECONDS', ROUND_DURATION_SECONDS)),
            tick_interval=float(getattr(config_class, 'TICK_INTERVAL_SECONDS', TICK_INTERVAL_SECONDS)),
            summary_delay=float(getattr(config_class, 'SUMMARY_DELAY_SECONDS', SUMMARY_DELAY_SECONDS)),
            auto_restart_delay=float(getattr(config_class, 'AUTO_RESTART_DELAY_SECONDS', AUTO_RESTART_DELAY_SECONDS)),
            restart_transition=float(getattr(config_class, 'RESTART_TRANSITION_SECONDS', RESTART_TRANSITION_SECONDS)),
            guess_cooldown=float(getattr(config_class, 'GUESS_COOLDOWN_SECONDS', GUESS_COOLDOWN_SECONDS)),
            notice_duration=float(getattr(config_class, 'NOTICE_DURATION_SECONDS', NOTICE_DURATION_SECONDS)),
        )
