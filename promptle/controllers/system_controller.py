"""
System Controller

Liveness and health endpoints.
"""

from flask import Blueprint, request, jsonify
from ..config.game_settings import get_word_statistics
from ..services.hint_generator import get_hint_generator
from ..services.session_service import get_session_service
from ..services.store_service import get_store
from ..utils.game_logger import game_logger

system_bp = Blueprint('system', __name__)


@system_bp.route('/ping', methods=['GET'])
def ping():
    """Liveness check."""
    return jsonify({'ok': True, 'message': 'server is running'})


@system_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    try:
        session_service = get_session_service()
        store = get_store()
        hint_generator = get_hint_generator()

        game_logger.log_user_action(request, 'health_check')

        response_data = {
            'ok': True,
            'status': 'healthy',
            'active_sessions': len(session_service.games) if session_service else 0,
            'store_backend': store.backend if store else None,
            'hints_configured': bool(hint_generator and hint_generator.configured),
            'word_statistics': get_word_statistics(session_service.words.words) if session_service else None,
            'log_stats': game_logger.get_log_stats()
        }

        game_logger.log_server_response(request, 'health_check', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'health_check')
        error_response = {
            'ok': False,
            'status': 'error',
            'error': str(e)
        }
        game_logger.log_server_response(request, 'health_check', False, error_response)
        return jsonify(error_response), 500
