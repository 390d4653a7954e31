"""
Promptle Server - Main Entry Point

This is the main entry point for the Promptle backend.
It initializes all services and starts the Flask-SocketIO application.
"""

from promptle import create_app, initialize_services
from promptle.config import Config, validate_word_list_integrity
from promptle.services.store_service import get_store
from promptle.services.hint_generator import get_hint_generator
from promptle.utils.game_logger import game_logger


def main():
    """Main function to initialize services and start the server."""
    try:
        print("Creating Flask application...")
        app, socketio = create_app(Config)
        print("✓ Flask application created successfully")

        print("Initializing services...")
        session_service = initialize_services(Config, dispatch=socketio.start_background_task)

        store = get_store()
        print(f"✓ Store initialized ({store.backend})")

        hint_generator = get_hint_generator()
        if hint_generator.configured:
            print("✓ Hint generation configured")
        else:
            print("✗ HINT_API_KEY not configured - players get offline hints")

        problems = validate_word_list_integrity(session_service.words.words)
        for problem in problems:
            game_logger.logger.warning(f"Word list: {problem}")
        print(f"✓ {len(session_service.words)} words loaded")

        game_logger.logger.info("Promptle Server Starting")

        print(f"\nStarting Promptle Server on {Config.HOST}:{Config.PORT}")
        print(f"Debug mode: {Config.DEBUG}")
        print("=" * 50)

        socketio.run(app, host=Config.HOST, port=Config.PORT, debug=Config.DEBUG)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Promptle Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
