"""
Host Control Decorators

Guards for the manual-restart endpoints. When ``CONTROL_TOKEN`` is configured
the caller must present it; otherwise the guarded handlers are open.
"""

import hmac
from functools import wraps
from flask import request, jsonify, current_app
from flask_socketio import emit

from .helpers import get_bearer_token


def _token_matches(presented) -> bool:
    expected = current_app.config.get('CONTROL_TOKEN')
    if not expected:
        return True
    if not isinstance(presented, str):
        return False
    return hmac.compare_digest(presented, expected)


def require_control_token(f):
    """
    Decorator to require the host control token for protected HTTP endpoints.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        token = get_bearer_token(request)
        if current_app.config.get('CONTROL_TOKEN') and token is None:
            return jsonify({
                'success': False,
                'error': 'Authorization token required'
            }), 401

        if not _token_matches(token):
            return jsonify({
                'success': False,
                'error': 'Invalid control token'
            }), 403

        return f(*args, **kwargs)

    return decorated_function


def websocket_control_required(f):
    """Decorator for Socket.IO host commands; the token travels in the payload."""
    @wraps(f)
    def decorated_function(data=None, *args, **kwargs):
        token = data.get('token') if isinstance(data, dict) else None
        if not _token_matches(token):
            emit('error', {'error': 'Invalid control token'})
            return
        return f(data, *args, **kwargs)

    return decorated_function
