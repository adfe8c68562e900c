"""
Game Logger Module

This module provides structured logging for chat guesses, round lifecycle
events, HTTP responses and errors.
"""

import logging
import json
from datetime import datetime
from typing import Dict, Any, Optional
from pathlib import Path

from ..config.app_config import Config


class GameLogger:
    """
    Centralized logging system for the chat Wordle server.

    Features:
    - Chat guess tracking with the author's identity
    - Round lifecycle events (start, win, timeout, restart)
    - Server response logging
    - JSON structured logs for easy parsing
    """

    def __init__(self, log_dir: str = "logs", level: str = "INFO"):
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.level = getattr(logging, str(level).upper(), logging.INFO)

        # Setup main game logger
        self.logger = self._setup_logger()

    def _setup_logger(self) -> logging.Logger:
        """Setup the main game logger with file handler."""
        logger = logging.getLogger('chatwordle')
        logger.setLevel(self.level)

        # Prevent duplicate handlers
        if logger.handlers:
            logger.handlers.clear()

        log_file = self.log_dir / f"game_log_{datetime.now().strftime('%Y-%m-%d')}.log"

        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(self.level)

        # Console only shows warnings and errors
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)

        file_formatter = logging.Formatter(
            '%(asctime)s | %(levelname)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        console_formatter = logging.Formatter(
            '%(levelname)s: %(message)s'
        )

        file_handler.setFormatter(file_formatter)
        console_handler.setFormatter(console_formatter)

        logger.addHandler(file_handler)
        logger.addHandler(console_handler)

        return logger

    def _create_log_entry(self,
                          event_type: str,
                          action: str,
                          source: Dict[str, Any],
                          details: Dict[str, Any]) -> str:
        """Create a structured log entry."""
        log_entry = {
            'timestamp': datetime.now().isoformat(),
            'event_type': event_type,
            'action': action,
            'source': source,
            'details': details
        }
        return json.dumps(log_entry, ensure_ascii=False, default=str)

    def _request_source(self, request) -> Dict[str, Any]:
        return {
            'client_ip': getattr(request, 'remote_addr', None) or 'unknown',
            'endpoint': getattr(request, 'endpoint', None),
            'method': getattr(request, 'method', None)
        }

    def log_chat_message(self,
                         message,
                         action: str,
                         round_id: Optional[int] = None,
                         **kwargs):
        """
        Log what happened to one chat message.

        Args:
            message: ChatMessage being processed
            action: Outcome (e.g. 'guess_accepted', 'guess_rejected', 'guess_queued')
            round_id: Round the message was evaluated in
            **kwargs: Additional details to log
        """
        source = {
            'player_id': message.author.id,
            'display_name': message.author.display_name,
            'message_id': message.message_id
        }
        details = {
            'round_id': round_id,
            'text': message.text,
            **kwargs
        }
        self.logger.info(self._create_log_entry('CHAT_MESSAGE', action, source, details))

    def log_game_event(self,
                       round_id: Optional[int],
                       event: str,
                       **kwargs):
        """
        Log round lifecycle events (starts, wins, timeouts, restarts).

        Args:
            round_id: Round identifier
            event: Type of game event (e.g. 'round_started', 'round_won')
            **kwargs: Additional game details
        """
        details = {
            'round_id': round_id,
            **kwargs
        }
        self.logger.info(self._create_log_entry('GAME_EVENT', event, {'system': 'engine'}, details))

    def log_user_action(self, request, action: str, **kwargs):
        """Log an HTTP request made by a presentation or host client."""
        details = {'url': getattr(request, 'url', None), **kwargs}
        self.logger.info(self._create_log_entry('USER_ACTION', action, self._request_source(request), details))

    def log_server_response(self,
                            request,
                            action: str,
                            success: bool,
                            response_data: Dict[str, Any],
                            **kwargs):
        """
        Log server responses with full context.

        Args:
            request: Flask request object
            action: Action that was performed
            success: Whether the action succeeded
            response_data: Data being returned to client
            **kwargs: Additional details to log
        """
        details = {
            'success': success,
            'response_size': len(str(response_data)),
            'response_data': self._sanitize_response_data(response_data),
            **kwargs
        }

        event_type = 'SERVER_RESPONSE_SUCCESS' if success else 'SERVER_RESPONSE_ERROR'
        log_message = self._create_log_entry(event_type, action, self._request_source(request), details)

        if success:
            self.logger.info(log_message)
        else:
            self.logger.error(log_message)

    def log_error(self,
                  error: Exception,
                  action: str,
                  request=None,
                  round_id: Optional[int] = None):
        """
        Log errors with full context.

        Args:
            error: Exception that occurred
            action: Action that was being performed
            request: Flask request object, if the error happened in a request
            round_id: Round identifier if applicable
        """
        source = self._request_source(request) if request is not None else {'system': 'engine'}
        details = {
            'round_id': round_id,
            'error_type': type(error).__name__,
            'error_message': str(error)
        }
        self.logger.error(self._create_log_entry('ERROR', action, source, details))

    def _sanitize_response_data(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Keep response logs small; round snapshots are reduced to their headline fields."""
        if not isinstance(data, dict):
            return {'data_type': type(data).__name__}

        sanitized = data.copy()
        if 'state' in sanitized and isinstance(sanitized['state'], dict):
            state = sanitized['state']
            sanitized['state'] = {
                'round_id': state.get('round_id'),
                'state': state.get('state'),
                'remaining_seconds': state.get('remaining_seconds'),
                'total_guesses': state.get('total_guesses')
            }

        return sanitized

    def get_log_stats(self) -> Dict[str, Any]:
        """Get statistics about today's logged events (useful for monitoring)."""
        try:
            log_file = self.log_dir / f"game_log_{datetime.now().strftime('%Y-%m-%d')}.log"
            if not log_file.exists():
                return {'error': 'No log file found for today'}

            stats = {
                'log_file': str(log_file),
                'file_size_mb': round(log_file.stat().st_size / (1024 * 1024), 2),
                'total_entries': 0,
                'chat_messages': 0,
                'game_events': 0,
                'server_responses': 0,
                'errors': 0
            }

            with open(log_file, 'r', encoding='utf-8') as f:
                for line in f:
                    if not line.strip():
                        continue
                    stats['total_entries'] += 1
                    if '"CHAT_MESSAGE"' in line:
                        stats['chat_messages'] += 1
                    elif '"GAME_EVENT"' in line:
                        stats['game_events'] += 1
                    elif '"SERVER_RESPONSE' in line:
                        stats['server_responses'] += 1
                    elif '"ERROR"' in line:
                        stats['errors'] += 1

            return stats

        except OSError as e:
            return {'error': f'Failed to get stats: {str(e)}'}


# Global logger instance
game_logger = GameLogger(Config.LOG_DIR, Config.LOG_LEVEL)
