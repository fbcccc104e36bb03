"""
Game State Repository

Saves and loads a player's in-progress game as flat key=value text:

    Phrase=<lowercase letters and spaces>
    Type=<Letters|Numbers>
    EncryptionMap=<letter>=<symbol>,<letter>=<symbol>,...
    PlayerMapping=<symbol>=<letter>,<symbol>=<letter>,...
"""

import os
from enum import Enum
from typing import Dict, List, Optional, Tuple

from ..config.game_settings import ALPHABET, NUMBER_SYMBOLS
from ..models.cryptogram import CipherKind, Cryptogram
from ..models.game import GameSession


class LoadStatus(Enum):
    SUCCESS = "SUCCESS"
    NOT_FOUND = "NOT_FOUND"
    CORRUPTED = "CORRUPTED"


class SaveCorruptedError(ValueError):
    """Raised when persisted text violates the save or player file format."""


def parse_key_values(lines: List[str]) -> Dict[str, str]:
    """Split each line on its first '='. Lines without one are ignored."""
    data = {}
    for line in lines:
        if '=' not in line:
            continue
        key, value = line.split('=', 1)
        data[key.strip()] = value.strip()
    return data


def _parse_pairs(text: str) -> List[Tuple[str, str]]:
    pairs = []
    for entry in text.split(','):
        parts = entry.split('=')
        if len(parts) != 2:
            raise SaveCorruptedError(f"Malformed mapping entry: {entry!r}")
        pairs.append((parts[0], parts[1]))
    return pairs


def parse_encryption_map(text: str) -> Dict[str, str]:
    """Parse "a=X,b=Q" into {'a': 'X', 'b': 'Q'}."""
    mapping = {}
    for letter, symbol in _parse_pairs(text):
        if len(letter) != 1:
            raise SaveCorruptedError(f"Plain letter key must be one character: {letter!r}")
        mapping[letter] = symbol
    return mapping


def parse_player_mapping(text: str) -> Dict[str, str]:
    """Parse "X=e,Q=t" into {'X': 'e', 'Q': 't'}."""
    mapping = {}
    for symbol, letter in _parse_pairs(text):
        if len(letter) != 1:
            raise SaveCorruptedError(f"Guessed letter must be one character: {letter!r}")
        mapping[symbol] = letter
    return mapping


def _is_symbol(symbol: str, kind: CipherKind) -> bool:
    if kind == CipherKind.LETTERS:
        return len(symbol) == 1 and symbol.upper() == symbol and symbol.lower() in ALPHABET
    return symbol in NUMBER_SYMBOLS


def serialize_game(session: GameSession) -> str:
    cryptogram = session.cryptogram
    encryption = ",".join(f"{letter}={symbol}" for letter, symbol in cryptogram.encryption_map.items())
    player = ",".join(f"{symbol}={letter}" for symbol, letter in session.player_mapping.items())
    lines = [
        f"Phrase={cryptogram.phrase}",
        f"Type={cryptogram.kind.value}",
        f"EncryptionMap={encryption}",
        f"PlayerMapping={player}",
    ]
    return "\n".join(lines) + "\n"


def deserialize_game(text: str) -> GameSession:
    """
    Rebuild a game session from saved text.

    Raises:
        SaveCorruptedError: If a required key is missing, the type is unknown,
            a phrase character, symbol or guessed letter is out of range, a
            mapping entry is malformed or the mapping does not cover the phrase
    """
    data = parse_key_values(text.splitlines())

    for key in ('Phrase', 'Type', 'EncryptionMap'):
        if key not in data:
            raise SaveCorruptedError(f"Missing required key: {key}")

    try:
        kind = CipherKind(data['Type'])
    except ValueError:
        raise SaveCorruptedError(f"Unknown cipher type: {data['Type']!r}")

    encryption_map = parse_encryption_map(data['EncryptionMap'])
    phrase = data['Phrase']

    if any(char != " " and char not in ALPHABET for char in phrase):
        raise SaveCorruptedError(f"Phrase may only hold lowercase letters and spaces: {phrase!r}")
    if any(letter not in ALPHABET for letter in encryption_map):
        raise SaveCorruptedError("Encryption map keys must be lowercase letters")
    invalid_symbols = sorted(symbol for symbol in encryption_map.values() if not _is_symbol(symbol, kind))
    if invalid_symbols:
        raise SaveCorruptedError(f"Invalid {kind.value} symbols: {invalid_symbols}")

    missing = sorted({char for char in phrase if char != ' ' and char not in encryption_map})
    if missing:
        raise SaveCorruptedError(f"Encryption map does not cover letters: {missing}")
    if len(set(encryption_map.values())) != len(encryption_map):
        raise SaveCorruptedError("Encryption map assigns one symbol to several letters")

    player_mapping: Dict[str, str] = {}
    if data.get('PlayerMapping'):
        player_mapping = parse_player_mapping(data['PlayerMapping'])

    cryptogram = Cryptogram(phrase=phrase, kind=kind, encryption_map=encryption_map)

    unknown = sorted(set(player_mapping) - cryptogram.used_symbols)
    if unknown:
        raise SaveCorruptedError(f"Player mapping uses symbols not in the cryptogram: {unknown}")
    if any(letter not in ALPHABET for letter in player_mapping.values()):
        raise SaveCorruptedError("Player mapping values must be lowercase letters")
    if len(set(player_mapping.values())) != len(player_mapping):
        raise SaveCorruptedError("Player mapping assigns one letter to several symbols")

    return GameSession(cryptogram=cryptogram, player_mapping=player_mapping)


class GameStateRepository:
    """One save file per player, named after the lower-cased player name."""

    def __init__(self, directory_path: str):
        self.directory_path = directory_path
        os.makedirs(self.directory_path, exist_ok=True)

    def _save_file_path(self, player_name: str) -> str:
        # Names differing only in case share a file
        return os.path.join(self.directory_path, f"{player_name.lower()}_save.txt")

    def save_exists(self, player_name: str) -> bool:
        return os.path.exists(self._save_file_path(player_name))

    def save_game(self, player_name: str, session: GameSession) -> None:
        with open(self._save_file_path(player_name), 'w', encoding='utf-8') as f:
            f.write(serialize_game(session))

    def load_game(self, player_name: str) -> Tuple[Optional[GameSession], LoadStatus]:
        """
        Load a player's saved game.

        Returns:
            Tuple of (session or None, load status)
        """
        file_path = self._save_file_path(player_name)
        if not os.path.exists(file_path):
            return None, LoadStatus.NOT_FOUND

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                session = deserialize_game(f.read())
        except (SaveCorruptedError, UnicodeDecodeError):
            return None, LoadStatus.CORRUPTED

        return session, LoadStatus.SUCCESS

    def delete_save(self, player_name: str) -> bool:
        file_path = self._save_file_path(player_name)
        if os.path.exists(file_path):
            os.remove(file_path)
            return True
        return False
