"""
Request Decorators

Contains decorators for HTTP body validation and WebSocket session lookup.
"""

from functools import wraps
from flask import request, jsonify
from flask_socketio import emit


def require_json_fields(*fields):
    """
    Decorator to require a JSON body carrying the given non-empty fields.

    The parsed body is exposed to the view as ``request.payload``.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            data = request.get_json(silent=True)
            if not isinstance(data, dict):
                return jsonify({
                    'ok': False,
                    'error': 'Request body is required'
                }), 400

            missing = [name for name in fields if data.get(name) in (None, '')]
            if missing:
                return jsonify({
                    'ok': False,
                    'error': f"Missing required field(s): {', '.join(missing)}"
                }), 400

            request.payload = data
            return f(*args, **kwargs)

        return decorated_function
    return decorator


def websocket_game_required(f):
    """Decorator for WebSocket events that need the caller's active game."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        from ..services.session_service import get_session_service

        session_service = get_session_service()
        game = session_service.get(request.sid) if session_service else None
        if game is None:
            emit('error', {'error': 'No active game. Send start_game first.'})
            return

        kwargs['game'] = game
        return f(*args, **kwargs)

    return decorated_function
