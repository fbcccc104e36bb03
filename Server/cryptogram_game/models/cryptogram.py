"""
Cryptogram Data Models

Contains the cipher kind enum and the cryptogram entity with its derived
encoding.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Set


class CipherKind(Enum):
    """Kind of cipher symbols used to encode a phrase."""
    LETTERS = "Letters"
    NUMBERS = "Numbers"

    @classmethod
    def parse(cls, value: str) -> "CipherKind":
        """Resolve a kind from its name ("Letters"/"Numbers"), case-insensitively."""
        for kind in cls:
            if kind.value.lower() == str(value).strip().lower():
                return kind
        raise ValueError(f"Unknown cipher type: {value!r}")


@dataclass
class Cryptogram:
    """
    A plaintext phrase encoded under a substitution mapping.

    The encryption map only covers the letters present in the phrase. The
    decryption map, encoded phrase and used symbols are derived from it by
    build_derived_data(), which runs on construction.
    """
    phrase: str
    kind: CipherKind
    encryption_map: Dict[str, str]
    decryption_map: Dict[str, str] = field(default_factory=dict, init=False)
    encoded_phrase: str = field(default="", init=False)
    used_symbols: Set[str] = field(default_factory=set, init=False)

    def __post_init__(self):
        self.build_derived_data()

    def build_derived_data(self) -> None:
        """Rebuild the decryption map, encoded phrase and used symbols."""
        self.decryption_map = {symbol: letter for letter, symbol in self.encryption_map.items()}

        used: Set[str] = set()
        parts: List[str] = []
        for char in self.phrase:
            if char == " ":
                parts.append(" ")
            elif char in self.encryption_map:
                symbol = self.encryption_map[char]
                parts.append(symbol)
                used.add(symbol)

        self.used_symbols = used

        if self.kind == CipherKind.LETTERS:
            self.encoded_phrase = "".join(parts)
            return

        # Numbers are variable width: hyphen-join inside a word, two spaces between words
        words: List[str] = []
        current_word: List[str] = []
        for part in parts:
            if part == " ":
                if current_word:
                    words.append("-".join(current_word))
                    current_word = []
            else:
                current_word.append(part)
        if current_word:
            words.append("-".join(current_word))

        self.encoded_phrase = "  ".join(words)

    def encode(self) -> List[str]:
        """Phrase as a list of cipher symbols, with " " kept as word separators."""
        return [" " if char == " " else self.encryption_map[char] for char in self.phrase]

    def decode(self, symbols: List[str]) -> str:
        """Inverse of encode(): map symbols back through the decryption map."""
        return "".join(" " if symbol == " " else self.decryption_map[symbol] for symbol in symbols)

    def progress_string(self, player_mapping: Dict[str, str]) -> str:
        """
        Render the phrase with the player's guesses filled in.

        Letters whose symbol has no guess yet show as underscores.
        """
        parts = []
        for char in self.phrase:
            if char == " ":
                parts.append(" ")
                continue
            symbol = self.encryption_map.get(char)
            if symbol is None:
                continue
            parts.append(player_mapping.get(symbol, "_"))
        return "".join(parts)
