"""
Game Configuration Constants Module

This module defines the cryptogram game constants: the plaintext alphabet,
the reference English letter frequencies used for player guidance and the
scoreboard size. All game parameters are centralized here to enable easy
modification.
"""

from typing import Dict, Final, List

ALPHABET: Final[str] = "abcdefghijklmnopqrstuvwxyz"
"""
Plaintext alphabet. Cipher permutations are generated over all 26 letters
even when a phrase only uses a few of them.
"""

NUMBER_SYMBOLS: Final[List[str]] = [str(n) for n in range(1, len(ALPHABET) + 1)]

SCOREBOARD_SIZE: Final[int] = 10

# Approximate published unigram frequencies of English text
ENGLISH_FREQUENCIES: Final[Dict[str, float]] = {
    "a": 0.08167, "b": 0.01492, "c": 0.02782, "d": 0.04253,
    "e": 0.12702, "f": 0.02228, "g": 0.02015, "h": 0.06094,
    "i": 0.06966, "j": 0.00153, "k": 0.00772, "l": 0.04025,
    "m": 0.02406, "n": 0.06749, "o": 0.07507, "p": 0.01929,
    "q": 0.00095, "r": 0.05987, "s": 0.06327, "t": 0.09056,
    "u": 0.02758, "v": 0.00978, "w": 0.02360, "x": 0.00150,
    "y": 0.01974, "z": 0.00074
}


def validate_frequency_table() -> bool:
    """
    Validates the reference frequency table.

    Checks that every alphabet letter has an entry, that no entry is
    negative and that the proportions sum to approximately 1.0.

    Returns:
        bool: True if the table passes all validation checks

    Raises:
        ValueError: If any validation check fails with detailed error message
    """
    missing = [letter for letter in ALPHABET if letter not in ENGLISH_FREQUENCIES]
    if missing:
        raise ValueError(f"Frequency table is missing letters: {missing}")

    extra = [key for key in ENGLISH_FREQUENCIES if key not in ALPHABET]
    if extra:
        raise ValueError(f"Frequency table has unknown keys: {extra}")

    negative = [letter for letter, value in ENGLISH_FREQUENCIES.items() if value < 0]
    if negative:
        raise ValueError(f"Frequency table has negative entries: {negative}")

    total = sum(ENGLISH_FREQUENCIES.values())
    if abs(total - 1.0) > 0.01:
        raise ValueError(f"Frequency table sums to {total:.5f}, expected ~1.0")

    return True


if __name__ == "__main__":

    try:
        validate_frequency_table()
        print(" Frequency table validation passed")
    except ValueError as config_error:
        print(f" Configuration validation failed: {config_error}")
        exit(1)
