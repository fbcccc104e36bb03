"""
Cryptogram Service

Generates substitution mappings and builds cryptograms from the phrase source.
"""

import random
from typing import Dict, List, Optional

from flask import current_app

from ..config.game_settings import ALPHABET, NUMBER_SYMBOLS
from ..models.cryptogram import CipherKind, Cryptogram
from ..persistence.phrase_repository import PhraseRepository

NO_PHRASES_MESSAGE = (
    "No phrases available. Please ensure the phrases file exists and contains valid phrases."
)


class NoPhrasesAvailableError(RuntimeError):
    """Raised when the phrase source yields nothing to encode."""

    def __init__(self, message: str = NO_PHRASES_MESSAGE):
        super().__init__(message)


def derange(permutation: List[str], alphabet: str = ALPHABET) -> List[str]:
    """
    Repair fixed points of a permutation of `alphabet` in place.

    Each position holding its own letter is swapped with the nearest later
    position (wrapping) that does not. The swap cannot create a new fixed
    point, so one pass leaves a derangement. If every other position is
    fixed too, the neighbour is used, which fixes both.
    """
    size = len(alphabet)
    for i in range(size):
        if permutation[i] != alphabet[i]:
            continue

        j = (i + 1) % size
        while permutation[j] == alphabet[j] and j != i:
            j = (j + 1) % size
        if j == i:
            j = (i + 1) % size

        permutation[i], permutation[j] = permutation[j], permutation[i]

    return permutation


class CipherGenerator:
    """Random bijective substitution from plain letters to cipher symbols."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def generate(self, phrase: str, kind: CipherKind) -> Dict[str, str]:
        if kind == CipherKind.LETTERS:
            return self.generate_letter_mapping(phrase)
        return self.generate_number_mapping(phrase)

    def generate_letter_mapping(self, phrase: str) -> Dict[str, str]:
        """
        Letter-to-letter mapping with no letter encoding to itself.

        The derangement is built over the whole alphabet; only the letters
        present in the phrase are returned, as uppercase symbols.
        """
        used = set(phrase)
        shuffled = list(ALPHABET)
        self.rng.shuffle(shuffled)
        derange(shuffled)

        return {
            letter: shuffled[i].upper()
            for i, letter in enumerate(ALPHABET)
            if letter in used
        }

    def generate_number_mapping(self, phrase: str) -> Dict[str, str]:
        """Letter-to-number (1-26) mapping for the letters present in the phrase."""
        used = set(phrase)
        numbers = list(NUMBER_SYMBOLS)
        self.rng.shuffle(numbers)

        return {
            letter: numbers[i]
            for i, letter in enumerate(ALPHABET)
            if letter in used
        }


class CryptogramService:
    """Draws a phrase and encodes it under a fresh mapping."""

    def __init__(self, phrase_repository: PhraseRepository, rng: Optional[random.Random] = None):
        self.phrase_repository = phrase_repository
        self.rng = rng or random.Random()
        self.generator = CipherGenerator(self.rng)

    def create_cryptogram(self, phrase: str, kind: CipherKind) -> Cryptogram:
        return Cryptogram(phrase=phrase, kind=kind, encryption_map=self.generator.generate(phrase, kind))

    def generate_cryptogram(self, kind: CipherKind) -> Cryptogram:
        """
        Build a cryptogram of the given kind from a random phrase.

        Raises:
            NoPhrasesAvailableError: If the phrase source is missing or empty
        """
        phrase = self.phrase_repository.get_random_phrase(self.rng)
        if phrase is None:
            raise NoPhrasesAvailableError()
        return self.create_cryptogram(phrase, kind)


def get_cryptogram_service() -> Optional[CryptogramService]:
    """Get the cryptogram service of the current application."""
    return current_app.extensions.get('cryptogram_service')


def initialize_cryptogram_service(app,
                                  phrase_repository: PhraseRepository,
                                  rng: Optional[random.Random] = None) -> CryptogramService:
    """Initialize the cryptogram service for an application instance."""
    cryptogram_service = CryptogramService(phrase_repository, rng)
    app.extensions['cryptogram_service'] = cryptogram_service
    return cryptogram_service
