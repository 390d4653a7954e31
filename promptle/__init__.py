"""
Promptle Application Package

Word-guessing game engine plus the thin backend it talks to: best-streak
storage, used-word storage and AI hints, with server-hosted play over
Socket.IO.
"""

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from .config import Config


def create_app(config_class=Config):
    """
    Application factory pattern for creating Flask app instances.

    Args:
        config_class: Configuration class to use

    Returns:
        Flask application instance with all extensions initialized
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Initialize extensions
    CORS(app)
    socketio = SocketIO(app, cors_allowed_origins="*", logger=False, engineio_logger=False)

    # Register blueprints
    from .controllers.player_controller import player_bp
    from .controllers.hint_controller import hint_bp
    from .controllers.system_controller import system_bp

    app.register_blueprint(player_bp, url_prefix='/api')
    app.register_blueprint(hint_bp, url_prefix='/api')
    app.register_blueprint(system_bp, url_prefix='/api')

    # Register WebSocket handlers
    from .websocket.handlers import register_websocket_handlers
    register_websocket_handlers(socketio)

    # Store socketio instance for use in other modules
    app.socketio = socketio

    return app, socketio


def initialize_services(config_class=Config, dispatch=None):
    """
    Initialize the global backend services.

    Returns:
        SessionService for server-hosted games
    """
    from .services.hint_generator import initialize_hint_generator
    from .services.remote import InProcessBackend
    from .services.session_service import initialize_session_service
    from .services.store_service import initialize_store
    from .services.word_source import WordSource
    from .services.game_service import run_in_background

    store = initialize_store(config_class.MONGO_URI)
    hint_generator = initialize_hint_generator(
        config_class.HINT_API_URL,
        config_class.HINT_API_KEY,
        config_class.HINT_MODEL,
        config_class.HINT_TIMEOUT_SECONDS
    )

    word_source = WordSource(config_class.WORD_LIST_SOURCE, timeout=config_class.REMOTE_TIMEOUT_SECONDS)
    words = word_source.load()

    return initialize_session_service(
        words,
        word_source,
        InProcessBackend(store, hint_generator),
        max_rows=config_class.MAX_ROWS,
        hint_budget=config_class.HINT_BUDGET,
        dispatch=dispatch or run_in_background
    )
