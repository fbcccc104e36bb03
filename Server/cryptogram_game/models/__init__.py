"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .cryptogram import CipherKind, Cryptogram
from .game import FrequencyEntry, GameSession, GameState, MoveResult, MoveStatus, Solution
from .player import PlayerStats, ScoreboardEntry

__all__ = [
    'CipherKind', 'Cryptogram',
    'FrequencyEntry', 'GameSession', 'GameState', 'MoveResult', 'MoveStatus', 'Solution',
    'PlayerStats', 'ScoreboardEntry'
]
