"""
Player Service

Loads, creates and persists player statistics.
"""

from typing import Dict, Optional, Tuple

from flask import current_app

from ..models.player import PlayerStats
from ..persistence.game_state_repository import LoadStatus
from ..persistence.player_repository import PlayerRepository


class PlayerService:
    """
    Keeps the statistics of players with an open session in memory and
    writes them back through the repository.
    """

    def __init__(self, player_repository: PlayerRepository):
        self.player_repository = player_repository
        self.players: Dict[str, PlayerStats] = {}  # lower-cased name -> stats

    def login(self, player_name: str) -> Dict:
        """
        Loads an existing player or creates a new one.

        Returns:
            Dict with success flag, message, created flag and the player stats
        """
        player_name = (player_name or "").strip()
        if not player_name:
            return {'success': False, 'error': 'Player name cannot be empty.'}

        # Already logged in: active games hold this object, so keep it
        player = self.get_player(player_name)
        if player is not None:
            return {
                'success': True,
                'created': False,
                'message': f"Welcome back, {player.name}!",
                'player': player.to_dict()
            }

        player, status = self.player_repository.load_player(player_name)

        if status == LoadStatus.CORRUPTED:
            return {
                'success': False,
                'corrupted': True,
                'error': f"Error loading player details for '{player_name}'. The file may be corrupted."
            }

        if status == LoadStatus.NOT_FOUND:
            player = PlayerStats(name=player_name)
            self.players[player_name.lower()] = player
            return {
                'success': True,
                'created': True,
                'message': f"Player '{player_name}' not found. A new player has been created.",
                'player': player.to_dict()
            }

        self.players[player_name.lower()] = player
        return {
            'success': True,
            'created': False,
            'message': f"Welcome back, {player.name}!",
            'player': player.to_dict()
        }

    def get_player(self, player_name: str) -> Optional[PlayerStats]:
        return self.players.get((player_name or "").strip().lower())

    def save_player(self, player: PlayerStats) -> Tuple[bool, str]:
        try:
            self.player_repository.save_player(player)
        except OSError as e:
            return False, f"Error saving player details: {e}"
        return True, f"Player '{player.name}' details saved."

    def logout(self, player_name: str) -> Tuple[bool, str]:
        """Persists the player's stats and forgets them."""
        player = self.get_player(player_name)
        if player is None:
            return False, f"Player '{player_name}' is not logged in."

        saved, message = self.save_player(player)
        if saved:
            del self.players[player.name.lower()]
        return saved, message


def get_player_service() -> Optional[PlayerService]:
    """Get the player service of the current application."""
    return current_app.extensions.get('player_service')


def initialize_player_service(app, player_repository: PlayerRepository) -> PlayerService:
    """Initialize the player service for an application instance."""
    player_service = PlayerService(player_repository)
    app.extensions['player_service'] = player_service
    return player_service
