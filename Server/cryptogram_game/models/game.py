"""
Game Data Models

Contains the game session, the tagged move results and the serializable
game state structures.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Set

from .cryptogram import Cryptogram


class MoveStatus(Enum):
    """Outcome of a player move on a game session."""
    MAPPED = "MAPPED"
    SOLVED = "SOLVED"
    FULLY_MAPPED_INCORRECT = "FULLY_MAPPED_INCORRECT"
    CONFIRMATION_REQUIRED = "CONFIRMATION_REQUIRED"
    UNMAPPED = "UNMAPPED"
    HINT_APPLIED = "HINT_APPLIED"
    # Validation errors: session state is unchanged
    INVALID_SYMBOL = "INVALID_SYMBOL"
    INVALID_LETTER = "INVALID_LETTER"
    DUPLICATE_LETTER = "DUPLICATE_LETTER"
    NOT_MAPPED = "NOT_MAPPED"
    NO_UNMAPPED_VALUES = "NO_UNMAPPED_VALUES"


VALIDATION_ERRORS = frozenset({
    MoveStatus.INVALID_SYMBOL,
    MoveStatus.INVALID_LETTER,
    MoveStatus.DUPLICATE_LETTER,
    MoveStatus.NOT_MAPPED,
    MoveStatus.NO_UNMAPPED_VALUES,
})


@dataclass
class MoveResult:
    """Tagged result of enter_letter, undo_letter and get_hint."""
    status: MoveStatus
    message: str
    symbol: Optional[str] = None
    letter: Optional[str] = None
    existing_letter: Optional[str] = None      # CONFIRMATION_REQUIRED
    conflicting_symbol: Optional[str] = None   # DUPLICATE_LETTER
    removed_symbol: Optional[str] = None       # HINT_APPLIED that repaired a stale mapping
    correct_guess: Optional[bool] = None
    solved: bool = False

    @property
    def applied(self) -> bool:
        """True if the move changed the player mapping."""
        return self.status not in VALIDATION_ERRORS and self.status != MoveStatus.CONFIRMATION_REQUIRED

    @property
    def is_validation_error(self) -> bool:
        return self.status in VALIDATION_ERRORS


@dataclass
class GameSession:
    """Player progress over a cryptogram: cipher symbol -> guessed letter."""
    cryptogram: Cryptogram
    player_mapping: Dict[str, str] = field(default_factory=dict)

    @property
    def is_fully_mapped(self) -> bool:
        return all(symbol in self.player_mapping for symbol in self.cryptogram.used_symbols)

    @property
    def is_correct(self) -> bool:
        """Every used symbol is guessed and matches the decryption map."""
        decryption_map = self.cryptogram.decryption_map
        return all(
            self.player_mapping.get(symbol) == decryption_map.get(symbol)
            for symbol in self.cryptogram.used_symbols
        )

    @property
    def used_plain_letters(self) -> Set[str]:
        return set(self.player_mapping.values())

    @property
    def unmapped_values(self) -> Set[str]:
        return {symbol for symbol in self.cryptogram.used_symbols if symbol not in self.player_mapping}

    def symbol_for_letter(self, letter: str) -> Optional[str]:
        """The symbol currently guessed as `letter`, if any."""
        for symbol, guessed in self.player_mapping.items():
            if guessed == letter:
                return symbol
        return None


@dataclass
class FrequencyEntry:
    """Observed proportion of a letter in the phrase next to English usage."""
    letter: str
    cryptogram_proportion: float
    english_proportion: float


@dataclass
class Solution:
    """Revealed answer of a cryptogram."""
    phrase: str
    decryption_map: Dict[str, str]


@dataclass
class GameState:
    """Client-facing game state representation (never exposes the answer)."""
    game_id: str
    player: str
    cipher_type: str
    encoded_phrase: str
    progress: str
    player_mapping: Dict[str, str]
    symbols: List[str]
    unmapped_values: List[str]
    fully_mapped: bool
    solved: bool
