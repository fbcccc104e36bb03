"""
WebSocket Event Handlers

Pushes game state updates and completion events to the player's client.
"""

from dataclasses import asdict
from typing import Dict, Optional

from flask import current_app
from flask_socketio import emit, join_room, leave_room
from ..services.game_service import get_game_service
from ..utils.decorators import websocket_game_required
from ..utils.game_logger import game_logger


def game_room(game_id: str) -> str:
    return f"game_{game_id}"


def register_websocket_handlers(socketio):
    """Register all WebSocket event handlers."""

    @socketio.on('connect')
    def handle_connect():
        """Handle WebSocket connection."""
        pass

    @socketio.on('join_game')
    @websocket_game_required
    def handle_join_game(data, game=None):
        """Join a game room to receive real-time updates."""
        join_room(game_room(game.game_id))

        state = get_game_service().get_game_state(game.game_id)
        emit('joined_game', {
            'game_id': game.game_id,
            'state': asdict(state)
        })
        game_logger.log_game_event(game.game_id, 'websocket_joined', game.player.name)

    @socketio.on('leave_game')
    def handle_leave_game(data):
        """Leave a game room."""
        game_id = (data or {}).get('game_id')
        if not game_id:
            emit('error', {'error': 'Game ID is required'})
            return

        leave_room(game_room(game_id))
        emit('left_game', {'game_id': game_id})


def broadcast_game_state_update(game_id: str, socketio=None):
    """Send the current state of a game to its room."""
    socketio = socketio or getattr(current_app, 'socketio', None)
    game_service = get_game_service()
    if socketio is None or game_service is None:
        return

    state = game_service.get_game_state(game_id)
    if state is None:
        return

    socketio.emit('game_state_update', {
        'game_id': game_id,
        'state': asdict(state)
    }, to=game_room(game_id))


def broadcast_game_completed(game_id: str, reason: str, solution: Optional[Dict] = None, socketio=None):
    """Tell the room that the session is over (solved or revealed)."""
    socketio = socketio or getattr(current_app, 'socketio', None)
    if socketio is None:
        return

    payload = {
        'game_id': game_id,
        'reason': reason
    }
    if solution is not None:
        payload['solution'] = solution

    socketio.emit('game_completed', payload, to=game_room(game_id))
