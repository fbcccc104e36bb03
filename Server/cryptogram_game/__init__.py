"""
Cryptogram Game Server Application Package

This package contains a substitution-cipher puzzle server: cipher generation,
game sessions with hints and undo, player statistics, flat-file saves and a
JSON/WebSocket API.
"""

import random

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from .config import Config


def create_app(config_class=Config, rng=None):
    """
    Application factory pattern for creating Flask app instances.

    Args:
        config_class: Configuration class to use
        rng: Random source for cipher generation and hints; defaults to one
            seeded from config_class.RANDOM_SEED

    Returns:
        Flask application instance with all extensions initialized
    """
    from .persistence import GameStateRepository, PhraseRepository, PlayerRepository
    from .services.cryptogram_service import initialize_cryptogram_service
    from .services.game_service import initialize_game_service
    from .services.player_service import initialize_player_service
    from .services.scoreboard_service import initialize_scoreboard_service
    from .utils.game_logger import game_logger

    app = Flask(__name__)
    app.config.from_object(config_class)

    game_logger.configure(app.config['LOG_DIR'], app.config['LOG_LEVEL'])

    if rng is None:
        rng = random.Random(app.config.get('RANDOM_SEED'))

    # Repositories and services
    player_repository = PlayerRepository(app.config['PLAYER_DIR'])
    app.extensions['game_state_repository'] = GameStateRepository(app.config['SAVE_DIR'])
    initialize_cryptogram_service(app, PhraseRepository(app.config['PHRASES_FILE']), rng)
    initialize_game_service(app, rng)
    initialize_player_service(app, player_repository)
    initialize_scoreboard_service(app, player_repository)

    # Initialize extensions
    CORS(app)
    socketio = SocketIO(app, cors_allowed_origins="*", logger=False, engineio_logger=False)

    # Register blueprints
    from .controllers.game_controller import game_bp
    from .controllers.player_controller import player_bp

    app.register_blueprint(game_bp, url_prefix='/api')
    app.register_blueprint(player_bp, url_prefix='/api')

    # Register WebSocket handlers
    from .websocket.handlers import register_websocket_handlers
    register_websocket_handlers(socketio)

    # Store socketio instance for use in other modules
    app.socketio = socketio

    return app, socketio
