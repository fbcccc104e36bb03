"""
Player Controller

Handles player login/logout, statistics and the scoreboard.
"""

from flask import Blueprint, request, jsonify
from ..services.game_service import get_game_service
from ..services.player_service import get_player_service
from ..services.scoreboard_service import get_scoreboard_service
from ..utils.game_logger import game_logger
from ..utils.helpers import get_request_json

player_bp = Blueprint('player', __name__)


@player_bp.route('/players/login', methods=['POST'])
def login():
    """Load a player's stats, creating the player if they are new."""
    try:
        player_service = get_player_service()
        if not player_service:
            return jsonify({
                'success': False,
                'error': 'Player service unavailable'
            }), 500

        player_name = get_request_json().get('name')

        game_logger.log_user_action(request, 'login', extra_data={'player': player_name})

        result = player_service.login(player_name)

        if result['success']:
            game_logger.log_server_response(request, 'login', True, result)
            return jsonify(result), 201 if result['created'] else 200

        game_logger.log_server_response(request, 'login', False, result)
        return jsonify(result), 409 if result.get('corrupted') else 400

    except Exception as e:
        game_logger.log_error(request, e, 'login')
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'login', False, error_response)
        return jsonify(error_response), 500


@player_bp.route('/players/<name>', methods=['GET'])
def get_player(name):
    """Current statistics of a logged-in player."""
    try:
        player_service = get_player_service()
        if not player_service:
            return jsonify({
                'success': False,
                'error': 'Player service unavailable'
            }), 500

        game_logger.log_user_action(request, 'get_player', extra_data={'player': name})

        player = player_service.get_player(name)
        if player is None:
            error_response = {
                'success': False,
                'error': f"Player '{name}' is not logged in"
            }
            game_logger.log_server_response(request, 'get_player', False, error_response)
            return jsonify(error_response), 404

        response_data = {
            'success': True,
            'player': player.to_dict()
        }
        game_logger.log_server_response(request, 'get_player', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'get_player')
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'get_player', False, error_response)
        return jsonify(error_response), 500


@player_bp.route('/players/<name>/logout', methods=['POST'])
def logout(name):
    """Persist a player's stats and end their login."""
    try:
        player_service = get_player_service()
        if not player_service:
            return jsonify({
                'success': False,
                'error': 'Player service unavailable'
            }), 500

        game_logger.log_user_action(request, 'logout', extra_data={'player': name})

        success, message = player_service.logout(name)
        response_data = {'success': success}
        response_data['message' if success else 'error'] = message

        game_logger.log_server_response(request, 'logout', success, response_data)
        if success:
            # A logged-out player's sessions end; any save file is kept
            game_service = get_game_service()
            ended = game_service.end_player_games(name) if game_service else []
            game_logger.log_game_event(None, 'player_logged_out', name, ended_games=ended)
            return jsonify(response_data)
        return jsonify(response_data), 404

    except Exception as e:
        game_logger.log_error(request, e, 'logout')
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'logout', False, error_response)
        return jsonify(error_response), 500


@player_bp.route('/scoreboard', methods=['GET'])
def scoreboard():
    """Top players by completion proportion."""
    try:
        scoreboard_service = get_scoreboard_service()
        if not scoreboard_service:
            return jsonify({
                'success': False,
                'error': 'Scoreboard service unavailable'
            }), 500

        game_logger.log_user_action(request, 'scoreboard')

        entries, message = scoreboard_service.get_top_players()
        response_data = {
            'success': True,
            'message': message,
            'entries': [
                {
                    'player_name': entry.player_name,
                    'cryptograms_completed': entry.cryptograms_completed,
                    'cryptograms_played': entry.cryptograms_played,
                    'completion_proportion': round(entry.completion_proportion, 4)
                }
                for entry in entries or []
            ]
        }

        game_logger.log_server_response(request, 'scoreboard', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'scoreboard')
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'scoreboard', False, error_response)
        return jsonify(error_response), 500
