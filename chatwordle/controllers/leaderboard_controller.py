"""
Leaderboard Controller

Exposes the top players across rounds.
"""

from flask import Blueprint, request, jsonify
from ..services.game_service import get_game_service
from ..utils.game_logger import game_logger

leaderboard_bp = Blueprint('leaderboard', __name__)


@leaderboard_bp.route('/leaderboard', methods=['GET'])
def get_leaderboard():
    """Get the current top players by wins."""
    try:
        game_service = get_game_service()
        if not game_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500

        return jsonify({
            'success': True,
            'leaderboard': game_service.get_leaderboard()
        })
    except Exception as e:
        game_logger.log_error(e, 'get_leaderboard', request=request)
        return jsonify({'success': False, 'error': str(e)}), 500
