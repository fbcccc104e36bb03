"""
Configuration Package

Contains all configuration-related files and settings.

This package separates two types of configuration:
- app_config.py: Flask application configuration (environment-based)
- game_settings.py: Game constants (alphabet, reference frequencies)
"""

from .app_config import Config, DevelopmentConfig, ProductionConfig, TestingConfig, config
from .game_settings import (
    ALPHABET, NUMBER_SYMBOLS, ENGLISH_FREQUENCIES, SCOREBOARD_SIZE, validate_frequency_table
)

__all__ = [
    # App configuration
    'Config', 'DevelopmentConfig', 'ProductionConfig', 'TestingConfig', 'config',
    # Game constants
    'ALPHABET', 'NUMBER_SYMBOLS', 'ENGLISH_FREQUENCIES', 'SCOREBOARD_SIZE',
    'validate_frequency_table'
]
