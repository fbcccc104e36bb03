"""
Game Controller

Handles all game-related HTTP endpoints.
"""

from flask import Blueprint, request, jsonify, current_app
from dataclasses import asdict
from ..models.cryptogram import CipherKind
from ..models.game import MoveStatus
from ..persistence.game_state_repository import LoadStatus
from ..services.cryptogram_service import NoPhrasesAvailableError, get_cryptogram_service
from ..services.game_service import get_game_service
from ..services.player_service import get_player_service
from ..utils.decorators import require_game
from ..utils.game_logger import game_logger
from ..utils.helpers import get_request_json
from ..websocket.handlers import broadcast_game_completed, broadcast_game_state_update

game_bp = Blueprint('game', __name__)


def _game_state_repository():
    return current_app.extensions['game_state_repository']


def _service_unavailable():
    return jsonify({
        'success': False,
        'error': 'Game service unavailable'
    }), 500


def _error(action, message, status_code, game_id=None, **kwargs):
    error_response = {
        'success': False,
        'error': message,
        **kwargs
    }
    game_logger.log_server_response(request, action, False, error_response, game_id)
    return jsonify(error_response), status_code


def _logged_in_player(action):
    """Resolve the player named in the request body, or an error response."""
    data = get_request_json()
    player_name = (data.get('player') or '').strip()
    if not player_name:
        return None, _error(action, 'Player name is required', 400)

    player = get_player_service().get_player(player_name)
    if player is None:
        return None, _error(action, f"Player '{player_name}' is not logged in", 404)

    return player, None


def _finish_game(game, reason, solution=None):
    """Discard a solved or revealed session: delete the save and persist stats."""
    _game_state_repository().delete_save(game.player.name)
    get_player_service().save_player(game.player)
    broadcast_game_completed(game.game_id, reason, solution)
    get_game_service().end_game(game.game_id)


def _move_response(action, game, result):
    """HTTP response for a MoveResult; 400 validation error, 409 confirmation."""
    response_data = {
        'success': result.applied,
        'status': result.status.value,
        'message': result.message,
        'symbol': result.symbol,
        'letter': result.letter,
        'solved': result.solved
    }
    if result.existing_letter is not None:
        response_data['existing_letter'] = result.existing_letter
    if result.conflicting_symbol is not None:
        response_data['conflicting_symbol'] = result.conflicting_symbol
    if result.removed_symbol is not None:
        response_data['removed_symbol'] = result.removed_symbol
    if result.correct_guess is not None:
        response_data['correct_guess'] = result.correct_guess

    if result.is_validation_error:
        response_data['error'] = result.message
        game_logger.log_server_response(request, action, False, response_data, game.game_id,
                                        validation_error=result.status.value)
        return jsonify(response_data), 400

    if result.status == MoveStatus.CONFIRMATION_REQUIRED:
        game_logger.log_server_response(request, action, False, response_data, game.game_id,
                                        confirmation_required=True)
        return jsonify(response_data), 409

    if result.solved:
        response_data['phrase'] = game.session.cryptogram.phrase
        game_logger.log_game_event(game.game_id, 'game_solved', game.player.name,
                                   phrase=game.session.cryptogram.phrase, via=action)
        game_logger.log_server_response(request, action, True, response_data, game.game_id)
        _finish_game(game, 'solved')
        return jsonify(response_data)

    response_data['state'] = asdict(get_game_service().get_game_state(game.game_id))
    if result.status == MoveStatus.FULLY_MAPPED_INCORRECT:
        game_logger.log_game_event(game.game_id, 'fully_mapped_incorrect', game.player.name)

    game_logger.log_server_response(request, action, True, response_data, game.game_id)
    broadcast_game_state_update(game.game_id)
    return jsonify(response_data)


@game_bp.route('/new_game', methods=['POST'])
def new_game():
    """Create a new game session for a logged-in player."""
    try:
        game_service = get_game_service()
        cryptogram_service = get_cryptogram_service()
        if not game_service or not cryptogram_service:
            return _service_unavailable()

        data = get_request_json()
        cipher_type = data.get('cipher_type', CipherKind.LETTERS.value)

        game_logger.log_user_action(request, 'new_game', extra_data={'cipher_type': cipher_type})

        player, error = _logged_in_player('new_game')
        if error:
            return error

        try:
            kind = CipherKind.parse(cipher_type)
        except ValueError:
            return _error('new_game', 'Invalid cipher type. Must be "Letters" or "Numbers"', 400)

        try:
            cryptogram = cryptogram_service.generate_cryptogram(kind)
        except NoPhrasesAvailableError as e:
            game_logger.logger.warning(f"Cannot start a game for '{player.name}': {e}")
            return _error('new_game', f"Error: {e}", 503)

        game = game_service.start_new_game(player, cryptogram)
        state = game_service.get_game_state(game.game_id)

        response_data = {
            'success': True,
            'game_id': game.game_id,
            'message': "Cryptogram generated! Let's play.",
            'state': asdict(state)
        }

        game_logger.log_game_event(game.game_id, 'game_started', player.name, cipher_type=kind.value)
        game_logger.log_server_response(
            request, 'new_game', True, response_data, game.game_id,
            symbol_count=len(state.symbols)
        )

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'new_game')
        return _error('new_game', str(e), 500)


@game_bp.route('/load_game', methods=['POST'])
def load_game():
    """Resume a player's saved game."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        game_logger.log_user_action(request, 'load_game')

        player, error = _logged_in_player('load_game')
        if error:
            return error

        session, status = _game_state_repository().load_game(player.name)

        if status == LoadStatus.NOT_FOUND:
            return _error('load_game', "You don't have a saved game.", 404, status=status.value)

        if status == LoadStatus.CORRUPTED:
            game_logger.logger.warning(f"Corrupted save file for player '{player.name}'")
            return _error('load_game', 'Error: Your save file appears to be corrupted.', 409,
                          status=status.value)

        game = game_service.resume_game(player, session)
        state = game_service.get_game_state(game.game_id)

        response_data = {
            'success': True,
            'game_id': game.game_id,
            'message': 'Saved game loaded! Resuming play.',
            'state': asdict(state)
        }

        game_logger.log_game_event(game.game_id, 'game_loaded', player.name)
        game_logger.log_server_response(request, 'load_game', True, response_data, game.game_id)

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'load_game')
        return _error('load_game', str(e), 500)


@game_bp.route('/game/<game_id>/state', methods=['GET'])
@require_game
def get_state(game_id, game=None):
    """Get current game state."""
    try:
        game_logger.log_user_action(request, 'get_state', game_id)

        state = get_game_service().get_game_state(game_id)
        response_data = {
            'success': True,
            'state': asdict(state)
        }

        game_logger.log_server_response(
            request, 'get_state', True, response_data, game_id,
            fully_mapped=state.fully_mapped
        )

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'get_state', game_id)
        return _error('get_state', str(e), 500, game_id)


@game_bp.route('/game/<game_id>/enter', methods=['POST'])
@require_game
def enter_letter(game_id, game=None):
    """Map a cipher symbol to a plain letter."""
    try:
        data = get_request_json()
        if 'symbol' not in data or 'letter' not in data:
            return _error('enter_letter', 'Symbol and letter are required', 400, game_id)

        symbol = str(data['symbol'])
        letter = str(data['letter'])
        overwrite = data.get('overwrite') is True

        game_logger.log_user_action(
            request, 'enter_letter', game_id,
            symbol=symbol, letter=letter, overwrite=overwrite
        )

        result = get_game_service().enter_letter(game.session, game.player, symbol, letter, overwrite)
        return _move_response('enter_letter', game, result)

    except Exception as e:
        game_logger.log_error(request, e, 'enter_letter', game_id)
        return _error('enter_letter', str(e), 500, game_id)


@game_bp.route('/game/<game_id>/undo', methods=['POST'])
@require_game
def undo_letter(game_id, game=None):
    """Remove the guess for a cipher symbol."""
    try:
        data = get_request_json()
        if 'symbol' not in data:
            return _error('undo_letter', 'Symbol is required', 400, game_id)

        symbol = str(data['symbol'])
        game_logger.log_user_action(request, 'undo_letter', game_id, symbol=symbol)

        result = get_game_service().undo_letter(game.session, symbol)
        return _move_response('undo_letter', game, result)

    except Exception as e:
        game_logger.log_error(request, e, 'undo_letter', game_id)
        return _error('undo_letter', str(e), 500, game_id)


@game_bp.route('/game/<game_id>/hint', methods=['POST'])
@require_game
def get_hint(game_id, game=None):
    """Reveal the correct letter for one unmapped symbol."""
    try:
        game_logger.log_user_action(request, 'hint', game_id)

        result = get_game_service().get_hint(game.session, game.player)
        return _move_response('hint', game, result)

    except Exception as e:
        game_logger.log_error(request, e, 'hint', game_id)
        return _error('hint', str(e), 500, game_id)


@game_bp.route('/game/<game_id>/frequencies', methods=['GET'])
@require_game
def get_frequencies(game_id, game=None):
    """Letter frequencies of the phrase next to English usage."""
    try:
        game_logger.log_user_action(request, 'frequencies', game_id)

        entries = get_game_service().get_frequencies(game.session)
        response_data = {
            'success': True,
            'frequencies': [asdict(entry) for entry in entries]
        }

        game_logger.log_server_response(request, 'frequencies', True, response_data, game_id)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'frequencies', game_id)
        return _error('frequencies', str(e), 500, game_id)


@game_bp.route('/game/<game_id>/save', methods=['POST'])
@require_game
def save_game(game_id, game=None):
    """Save the session; replacing an existing save needs confirmation."""
    try:
        overwrite = get_request_json().get('overwrite') is True
        game_logger.log_user_action(request, 'save_game', game_id, overwrite=overwrite)

        repository = _game_state_repository()
        if repository.save_exists(game.player.name) and not overwrite:
            return _error('save_game', 'You already have a saved game. Overwrite?', 409, game_id,
                          status=MoveStatus.CONFIRMATION_REQUIRED.value)

        try:
            repository.save_game(game.player.name, game.session)
        except OSError as e:
            game_logger.log_error(request, e, 'save_game', game_id)
            return _error('save_game', 'Error saving game.', 500, game_id)

        response_data = {
            'success': True,
            'message': 'Game saved successfully.'
        }

        game_logger.log_game_event(game_id, 'game_saved', game.player.name)
        game_logger.log_server_response(request, 'save_game', True, response_data, game_id)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'save_game', game_id)
        return _error('save_game', str(e), 500, game_id)


@game_bp.route('/game/<game_id>/solution', methods=['POST'])
@require_game
def show_solution(game_id, game=None):
    """Reveal the answer and end the session."""
    try:
        game_logger.log_user_action(request, 'show_solution', game_id)

        solution = get_game_service().show_solution(game.session)
        solution_data = asdict(solution)
        response_data = {
            'success': True,
            'solution': solution_data
        }

        game_logger.log_game_event(game_id, 'solution_revealed', game.player.name)
        game_logger.log_server_response(request, 'show_solution', True, response_data, game_id)

        _finish_game(game, 'revealed', solution_data)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'show_solution', game_id)
        return _error('show_solution', str(e), 500, game_id)


@game_bp.route('/game/<game_id>', methods=['DELETE'])
@require_game
def quit_game(game_id, game=None):
    """Quit to menu: the session is discarded, any save is kept."""
    try:
        game_logger.log_user_action(request, 'quit_game', game_id)

        success = get_game_service().end_game(game_id)
        get_player_service().save_player(game.player)

        response_data = {
            'success': success
        }

        game_logger.log_server_response(request, 'quit_game', success, response_data, game_id)
        game_logger.log_game_event(game_id, 'game_quit', game.player.name)

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'quit_game', game_id)
        return _error('quit_game', str(e), 500, game_id)


@game_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    try:
        game_service = get_game_service()
        player_service = get_player_service()

        game_logger.log_user_action(request, 'health_check')

        response_data = {
            'status': 'healthy',
            'active_games': len(game_service.games) if game_service else 0,
            'active_players': len(player_service.players) if player_service else 0,
            'phrases_available': len(get_cryptogram_service().phrase_repository.load_phrases()),
            'log_stats': game_logger.get_log_stats()
        }

        game_logger.log_server_response(request, 'health_check', True, response_data)

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'health_check')
        error_response = {
            'status': 'error',
            'error': str(e)
        }
        game_logger.log_server_response(request, 'health_check', False, error_response)
        return jsonify(error_response), 500
