"""
Phrase Repository

Reads the newline-delimited phrase list that cryptograms are drawn from.
"""

import os
import random
from typing import List, Optional


def _is_valid_phrase(line: str) -> bool:
    return bool(line) and all(('a' <= char <= 'z') or char == ' ' for char in line)


class PhraseRepository:
    """Phrases are trimmed and lower-cased; lines with anything but letters and spaces are dropped."""

    def __init__(self, file_path: str):
        self.file_path = file_path

    def load_phrases(self) -> List[str]:
        if not os.path.exists(self.file_path):
            return []

        with open(self.file_path, 'r', encoding='utf-8') as f:
            lines = [line.strip().lower() for line in f]

        return [line for line in lines if _is_valid_phrase(line)]

    def get_random_phrase(self, rng: random.Random) -> Optional[str]:
        """A random phrase, or None if no phrases are available."""
        phrases = self.load_phrases()
        if not phrases:
            return None
        return rng.choice(phrases)
