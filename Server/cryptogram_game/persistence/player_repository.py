"""
Player Repository

Stores player statistics as flat key=value text, one file per player.
"""

import glob
import os
from typing import List, Optional, Tuple

from ..models.player import PlayerStats
from .game_state_repository import LoadStatus, SaveCorruptedError, parse_key_values

_COUNTER_KEYS = {
    'cryptograms_played': 'CryptogramsPlayed',
    'cryptograms_completed': 'CryptogramsCompleted',
    'num_guesses': 'NumGuesses',
    'num_correct_guesses': 'NumCorrectGuesses',
}


def serialize_player(player: PlayerStats) -> str:
    lines = [f"Name={player.name}"]
    lines.extend(f"{key}={getattr(player, attr)}" for attr, key in _COUNTER_KEYS.items())
    return "\n".join(lines) + "\n"


def _parse_counter(value: Optional[str]) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def deserialize_player(text: str) -> PlayerStats:
    """
    Rebuild player stats from text. Missing or non-numeric counters are 0.

    Raises:
        SaveCorruptedError: If the Name key is missing or empty
    """
    data = parse_key_values(text.splitlines())
    if not data.get('Name'):
        raise SaveCorruptedError("Player file has no Name")

    counters = {attr: _parse_counter(data.get(key)) for attr, key in _COUNTER_KEYS.items()}
    return PlayerStats(name=data['Name'], **counters)


class PlayerRepository:
    """One stats file per player, named after the lower-cased player name."""

    def __init__(self, directory_path: str):
        self.directory_path = directory_path
        os.makedirs(self.directory_path, exist_ok=True)

    def _player_file_path(self, player_name: str) -> str:
        return os.path.join(self.directory_path, f"{player_name.lower()}.txt")

    def player_exists(self, player_name: str) -> bool:
        return os.path.exists(self._player_file_path(player_name))

    def save_player(self, player: PlayerStats) -> None:
        with open(self._player_file_path(player.name), 'w', encoding='utf-8') as f:
            f.write(serialize_player(player))

    def load_player(self, player_name: str) -> Tuple[Optional[PlayerStats], LoadStatus]:
        file_path = self._player_file_path(player_name)
        if not os.path.exists(file_path):
            return None, LoadStatus.NOT_FOUND

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                player = deserialize_player(f.read())
        except (SaveCorruptedError, UnicodeDecodeError):
            return None, LoadStatus.CORRUPTED

        return player, LoadStatus.SUCCESS

    def load_all_players(self) -> List[PlayerStats]:
        """All readable player files; corrupted ones are skipped."""
        players = []
        for file_path in sorted(glob.glob(os.path.join(self.directory_path, '*.txt'))):
            player_name = os.path.splitext(os.path.basename(file_path))[0]
            player, status = self.load_player(player_name)
            if status == LoadStatus.SUCCESS:
                players.append(player)
        return players
