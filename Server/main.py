"""
Cryptogram Game Server - Main Entry Point

This is the main entry point for the cryptogram game server.
It creates the application and starts the Flask-SocketIO server.
"""

import os

from cryptogram_game import create_app
from cryptogram_game.config import config, validate_frequency_table
from cryptogram_game.utils.game_logger import game_logger


def main():
    """Main function to create the application and start the server."""
    config_class = config[os.getenv('APP_ENV', 'default')]

    try:
        validate_frequency_table()

        print("Creating Flask application...")
        app, socketio = create_app(config_class)
        print("✓ Flask application created successfully")

        phrase_count = len(app.extensions['cryptogram_service'].phrase_repository.load_phrases())
        if phrase_count:
            print(f"✓ {phrase_count} phrases available")
        else:
            print("✗ No phrases available - new games cannot be started")
            game_logger.logger.warning(f"No phrases available in {config_class.PHRASES_FILE}")

        game_logger.logger.info("Cryptogram Server Starting")

        print(f"\nStarting Cryptogram Game Server on {config_class.HOST}:{config_class.PORT}")
        print(f"Debug mode: {config_class.DEBUG}")
        print("=" * 50)

        socketio.run(app, host=config_class.HOST, port=config_class.PORT, debug=config_class.DEBUG)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Cryptogram Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
