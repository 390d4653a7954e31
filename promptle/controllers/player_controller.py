"""
Player Controller

Handles identity-scoped HTTP endpoints: best streak and used words.
"""

from flask import Blueprint, request, jsonify
from ..services.store_service import get_store
from ..utils.decorators import require_json_fields
from ..utils.game_logger import game_logger
from ..utils.helpers import normalize_user_id

player_bp = Blueprint('player', __name__)


def _store_unavailable():
    return jsonify({
        'ok': False,
        'error': 'Store unavailable'
    }), 500


@player_bp.route('/streak/<user_id>', methods=['GET'])
def get_streak(user_id):
    """Return the stored best streak for a user (0 if none)."""
    try:
        store = get_store()
        if not store:
            return _store_unavailable()

        game_logger.log_user_action(request, 'get_streak')

        best_streak = store.get_best_streak(normalize_user_id(user_id))
        response_data = {
            'ok': True,
            'best_streak': best_streak
        }

        game_logger.log_server_response(request, 'get_streak', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'get_streak')
        error_response = {
            'ok': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'get_streak', False, error_response)
        return jsonify(error_response), 500


@player_bp.route('/streak', methods=['POST'])
@require_json_fields('user_id', 'best_streak')
def update_streak():
    """Offer a best streak; the stored value becomes the max of both."""
    try:
        store = get_store()
        if not store:
            return _store_unavailable()

        data = request.payload
        user_id = normalize_user_id(data['user_id'])
        candidate = data['best_streak']

        game_logger.log_user_action(request, 'update_streak', candidate=candidate)

        if isinstance(candidate, bool) or not isinstance(candidate, int) or candidate < 0 or not user_id:
            error_response = {
                'ok': False,
                'error': 'best_streak must be a non-negative integer'
            }
            game_logger.log_server_response(request, 'update_streak', False, error_response)
            return jsonify(error_response), 400

        best_streak = store.merge_best_streak(user_id, candidate)
        response_data = {
            'ok': True,
            'best_streak': best_streak
        }

        game_logger.log_server_response(request, 'update_streak', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'update_streak')
        error_response = {
            'ok': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'update_streak', False, error_response)
        return jsonify(error_response), 500


@player_bp.route('/words', methods=['POST'])
@require_json_fields('user_id', 'word')
def save_word():
    """Record a word a user has guessed."""
    try:
        store = get_store()
        if not store:
            return _store_unavailable()

        data = request.payload
        user_id = normalize_user_id(data['user_id'])
        word = str(data['word']).strip().upper()

        game_logger.log_user_action(request, 'save_word', word_length=len(word))

        if not word.isalpha() or not user_id:
            error_response = {
                'ok': False,
                'error': 'word must contain only letters'
            }
            game_logger.log_server_response(request, 'save_word', False, error_response)
            return jsonify(error_response), 400

        store.save_used_word(user_id, word)
        response_data = {'ok': True}

        game_logger.log_server_response(request, 'save_word', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'save_word')
        error_response = {
            'ok': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'save_word', False, error_response)
        return jsonify(error_response), 500
