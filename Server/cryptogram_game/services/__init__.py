"""
Services Package

Contains all business logic and service classes.
"""

from .cryptogram_service import (
    CipherGenerator, CryptogramService, NoPhrasesAvailableError,
    get_cryptogram_service, initialize_cryptogram_service
)
from .frequency_service import analyse_frequencies
from .game_service import GameService, get_game_service, initialize_game_service
from .player_service import PlayerService, get_player_service, initialize_player_service
from .scoreboard_service import ScoreboardService, get_scoreboard_service, initialize_scoreboard_service

__all__ = [
    'CipherGenerator', 'CryptogramService', 'NoPhrasesAvailableError',
    'get_cryptogram_service', 'initialize_cryptogram_service',
    'analyse_frequencies',
    'GameService', 'get_game_service', 'initialize_game_service',
    'PlayerService', 'get_player_service', 'initialize_player_service',
    'ScoreboardService', 'get_scoreboard_service', 'initialize_scoreboard_service'
]
