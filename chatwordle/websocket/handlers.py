"""
WebSocket Event Handlers

Handles Socket.IO events from presentation and host clients. Clients receive
read-only projections; the only commands are a manual restart and asking the
chat relay to join a stream.
"""

from flask_socketio import emit
from ..services.game_service import get_game_service
from ..services.chat_relay import get_chat_relay
from ..utils.decorators import websocket_control_required
from ..utils.game_logger import game_logger


def register_websocket_handlers(socketio):
    """Register all WebSocket event handlers."""

    @socketio.on('connect')
    def handle_connect(auth=None):
        """Send the current round and leaderboard to the new client."""
        game_service = get_game_service()
        if not game_service:
            return
        emit('round_state', game_service.get_round_state())
        emit('leaderboard_update', {'leaderboard': game_service.get_leaderboard()})
        summary = game_service.get_summary()
        if summary:
            emit('round_summary', summary)

    @socketio.on('request_state')
    def handle_request_state(data=None):
        """Resend the current round snapshot to the caller."""
        game_service = get_game_service()
        if not game_service:
            emit('error', {'error': 'Game service unavailable'})
            return
        emit('round_state', game_service.get_round_state())

    @socketio.on('new_game')
    @websocket_control_required
    def handle_new_game(data=None):
        """Manual restart requested by the host."""
        try:
            game_service = get_game_service()
            if not game_service:
                emit('error', {'error': 'Game service unavailable'})
                return

            session = game_service.request_restart(reason='manual')
            emit('new_game_result', {'success': True, 'round_id': session.round_id})

        except Exception as e:
            game_logger.log_error(e, 'ws_new_game')
            emit('error', {'error': str(e)})

    @socketio.on('connect_stream')
    @websocket_control_required
    def handle_connect_stream(data=None):
        """Ask the chat relay to join the given live stream."""
        chat_relay = get_chat_relay()
        if not chat_relay:
            emit('error', {'error': 'Chat relay not configured'})
            return

        unique_id = data.get('unique_id') if isinstance(data, dict) else None
        if not unique_id:
            emit('error', {'error': 'Stream unique id is required'})
            return

        try:
            chat_relay.connect_stream(unique_id)
            emit('connect_stream_result', {'success': True, 'unique_id': chat_relay.unique_id})
        except Exception as e:
            game_logger.log_error(e, 'ws_connect_stream')
            emit('error', {'error': str(e)})
