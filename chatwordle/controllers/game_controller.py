"""
Game Controller

Handles all round-related HTTP endpoints.
"""

from flask import Blueprint, request, jsonify
from ..services.game_service import get_game_service
from ..services.chat_relay import get_chat_relay
from ..utils.decorators import require_control_token
from ..utils.game_logger import game_logger

game_bp = Blueprint('game', __name__)


def _service_unavailable():
    return jsonify({
        'success': False,
        'error': 'Game service unavailable'
    }), 500


@game_bp.route('/round/state', methods=['GET'])
def get_round_state():
    """Get the current round snapshot."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        response_data = {
            'success': True,
            'state': game_service.get_round_state()
        }
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(e, 'get_round_state', request=request)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'get_round_state', False, error_response)
        return jsonify(error_response), 500


@game_bp.route('/round/summary', methods=['GET'])
def get_round_summary():
    """Get the reveal summary of the current round, once it is visible."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        summary = game_service.get_summary()
        if summary is None:
            return jsonify({
                'success': False,
                'error': 'No summary available for the current round'
            }), 404

        return jsonify({
            'success': True,
            'summary': summary
        })

    except Exception as e:
        game_logger.log_error(e, 'get_round_summary', request=request)
        return jsonify({'success': False, 'error': str(e)}), 500


@game_bp.route('/new_game', methods=['POST'])
@require_control_token
def new_game():
    """Manually restart the round, whatever state it is in."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        game_logger.log_user_action(request, 'new_game')

        session = game_service.request_restart(reason='manual')

        response_data = {
            'success': True,
            'round_id': session.round_id,
            'state': game_service.get_round_state()
        }

        game_logger.log_server_response(request, 'new_game', True, response_data,
                                        round_id=session.round_id)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(e, 'new_game', request=request)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'new_game', False, error_response)
        return jsonify(error_response), 500


@game_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    try:
        game_service = get_game_service()
        chat_relay = get_chat_relay()

        game_logger.log_user_action(request, 'health_check')

        lexicon_stats = None
        if game_service and hasattr(game_service.lexicon, 'statistics'):
            lexicon_stats = game_service.lexicon.statistics()

        response_data = {
            'status': 'healthy',
            'game_available': game_service is not None,
            'round_id': game_service.session.round_id if game_service else None,
            'round_state': game_service.state.value if game_service else None,
            'chat_connected': game_service.is_connected if game_service else False,
            'relay_configured': chat_relay is not None,
            'lexicon': lexicon_stats,
            'log_stats': game_logger.get_log_stats()
        }

        game_logger.log_server_response(request, 'health_check', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(e, 'health_check', request=request)
        error_response = {
            'status': 'error',
            'error': str(e)
        }
        game_logger.log_server_response(request, 'health_check', False, error_response)
        return jsonify(error_response), 500
