"""
Game Lookup Decorators

Contains decorators that resolve the active game for HTTP and WebSocket handlers.
"""

from functools import wraps
from flask import request, jsonify
from flask_socketio import emit


def require_game(f):
    """
    Decorator for /game/<game_id>/... endpoints.

    Resolves the active game and passes it to the view as `game`, or
    answers 404 when the session does not exist (ended, solved or never
    started).
    """
    @wraps(f)
    def decorated_function(game_id, *args, **kwargs):
        from ..services.game_service import get_game_service
        from .game_logger import game_logger

        game_service = get_game_service()
        if not game_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500

        game = game_service.get_game(game_id)
        if game is None:
            error_response = {
                'success': False,
                'error': 'Game not found'
            }
            game_logger.log_server_response(request, request.endpoint or 'game', False, error_response, game_id)
            return jsonify(error_response), 404

        kwargs['game'] = game
        return f(game_id, *args, **kwargs)

    return decorated_function


def websocket_game_required(f):
    """Decorator for WebSocket events that carry a game_id."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        from ..services.game_service import get_game_service

        game_service = get_game_service()
        if not game_service or not args or not isinstance(args[0], dict) or 'game_id' not in args[0]:
            emit('error', {'error': 'Game ID is required'})
            return

        game = game_service.get_game(args[0]['game_id'])
        if game is None:
            emit('error', {'error': 'Game not found'})
            return

        kwargs['game'] = game
        return f(*args, **kwargs)

    return decorated_function
