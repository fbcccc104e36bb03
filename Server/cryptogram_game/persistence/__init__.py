"""
Persistence Package

Flat-file repositories for saved games, player statistics and phrases.
"""

from .game_state_repository import (
    GameStateRepository, LoadStatus, SaveCorruptedError, deserialize_game, serialize_game
)
from .phrase_repository import PhraseRepository
from .player_repository import PlayerRepository, deserialize_player, serialize_player

__all__ = [
    'GameStateRepository', 'LoadStatus', 'SaveCorruptedError', 'deserialize_game', 'serialize_game',
    'PhraseRepository',
    'PlayerRepository', 'deserialize_player', 'serialize_player'
]
