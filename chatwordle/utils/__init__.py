"""
Utilities Package

Contains utility functions, decorators, and helper modules.
"""

from .decorators import require_control_token, websocket_control_required
from .helpers import format_time, get_bearer_token
from .game_logger import game_logger

__all__ = [
    'require_control_token', 'websocket_control_required',
    'format_time', 'get_bearer_token', 'game_logger'
]
