"""
Hint Controller

Handles AI hint generation requests.
"""

from flask import Blueprint, request, jsonify
from ..config.game_settings import HINT_KINDS
from ..services.hint_generator import HintGenerationError, get_hint_generator
from ..utils.decorators import require_json_fields
from ..utils.game_logger import game_logger

hint_bp = Blueprint('hint', __name__)


@hint_bp.route('/hint', methods=['POST'])
@require_json_fields('secret', 'kind')
def generate_hint():
    """Generate a letters or meaning hint for a secret word."""
    try:
        hint_generator = get_hint_generator()
        if not hint_generator:
            return jsonify({
                'ok': False,
                'error': 'Hint service unavailable'
            }), 500

        data = request.payload
        secret = str(data['secret']).strip().upper()
        kind = data['kind']

        game_logger.log_user_action(request, 'request_hint', kind=kind, word_length=len(secret))

        if kind not in HINT_KINDS or not secret.isalpha():
            error_response = {
                'ok': False,
                'error': f"kind must be one of {', '.join(HINT_KINDS)} and secret must contain only letters"
            }
            game_logger.log_server_response(request, 'request_hint', False, error_response)
            return jsonify(error_response), 400

        try:
            response_data = hint_generator.generate(secret, kind)
        except HintGenerationError as e:
            error_response = {
                'ok': False,
                'error': str(e)
            }
            game_logger.log_server_response(request, 'request_hint', False, error_response, kind=kind)
            return jsonify(error_response), 503

        game_logger.log_server_response(request, 'request_hint', True, response_data, kind=kind)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'request_hint')
        error_response = {
            'ok': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'request_hint', False, error_response)
        return jsonify(error_response), 500
