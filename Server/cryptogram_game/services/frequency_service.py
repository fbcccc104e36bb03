"""
Frequency Service

Letter frequency guidance for the player.
"""

from collections import Counter
from typing import List

from ..config.game_settings import ALPHABET, ENGLISH_FREQUENCIES
from ..models.game import FrequencyEntry


def analyse_frequencies(phrase: str) -> List[FrequencyEntry]:
    """
    Observed proportion of each letter in the phrase alongside English usage.

    All 26 letters are returned, most frequent first; ties keep alphabetical
    order. A phrase without letters yields 0.0 for every letter.
    """
    counts = Counter(char for char in phrase if char in ALPHABET)
    total = sum(counts.values())

    entries = [
        FrequencyEntry(
            letter=letter,
            cryptogram_proportion=counts[letter] / total if total else 0.0,
            english_proportion=ENGLISH_FREQUENCIES.get(letter, 0.0)
        )
        for letter in ALPHABET
    ]

    return sorted(entries, key=lambda entry: entry.cryptogram_proportion, reverse=True)
