"""
WebSocket Event Handlers

Exposes the game's input port over Socket.IO. Clients send key events and
receive a ``game_state`` snapshot after every change.
"""

from dataclasses import asdict
from flask import request
from flask_socketio import emit
from ..config.game_settings import HINT_KINDS
from ..services.session_service import get_session_service
from ..utils.decorators import websocket_game_required
from ..utils.game_logger import game_logger
from ..utils.helpers import normalize_user_id


def register_websocket_handlers(socketio):
    """Register all WebSocket event handlers."""

    def state_emitter(sid):
        def emit_state(event, state):
            socketio.emit('game_state', {'event': event, 'state': asdict(state)}, to=sid)
        return emit_state

    @socketio.on('connect')
    def handle_connect():
        """Handle WebSocket connection."""
        pass

    @socketio.on('disconnect')
    def handle_disconnect(*args):
        """Drop the game of a disconnected client."""
        session_service = get_session_service()
        if session_service and session_service.remove(request.sid):
            game_logger.logger.info(f"WebSocket: session {request.sid} closed, game removed")

    @socketio.on('start_game')
    def handle_start_game(data=None):
        """Start a game for this connection, optionally tied to a user id."""
        session_service = get_session_service()
        if not session_service:
            emit('error', {'error': 'Game service unavailable'})
            return

        user_id = normalize_user_id((data or {}).get('user_id')) if isinstance(data, dict) else None
        try:
            game = session_service.create_game(request.sid, user_id)
        except Exception as e:
            game_logger.logger.error(f"WebSocket: failed to start game for {request.sid}: {e}")
            emit('error', {'error': 'Failed to start game'})
            return

        game.subscribe(state_emitter(request.sid))
        emit('game_state', {'event': 'round_started', 'state': asdict(game.snapshot())})

    @socketio.on('letter')
    @websocket_game_required
    def handle_letter(data=None, game=None):
        key = data.get('key') if isinstance(data, dict) else data
        game.on_letter(key if isinstance(key, str) else '')

    @socketio.on('backspace')
    @websocket_game_required
    def handle_backspace(data=None, game=None):
        game.on_backspace()

    @socketio.on('enter')
    @websocket_game_required
    def handle_enter(data=None, game=None):
        outcome = game.on_enter()
        emit('submit_result', {'outcome': outcome.value})

    @socketio.on('key')
    @websocket_game_required
    def handle_key(data=None, game=None):
        """Generic key press: ENTER, BACK or a single letter."""
        key = data.get('key') if isinstance(data, dict) else data
        result = game.handle_key(key if isinstance(key, str) else '')
        if hasattr(result, 'value'):
            emit('submit_result', {'outcome': result.value})

    @socketio.on('new_game')
    @websocket_game_required
    def handle_new_game(data=None, game=None):
        game.reset()

    @socketio.on('hint')
    @websocket_game_required
    def handle_hint(data=None, game=None):
        kind = data.get('kind') if isinstance(data, dict) else data
        if kind not in HINT_KINDS:
            emit('error', {'error': f"Hint kind must be one of {', '.join(HINT_KINDS)}"})
            return

        text = game.request_hint(kind)
        emit('hint', {
            'ok': text is not None,
            'kind': kind,
            'text': text,
            'hints_remaining': game.hints.remaining
        })
