"""Tests for cipher generation and cryptogram creation."""

import random

import pytest

from cryptogram_game.config import ALPHABET
from cryptogram_game.models import CipherKind
from cryptogram_game.persistence import PhraseRepository
from cryptogram_game.services.cryptogram_service import (
    CipherGenerator, CryptogramService, NoPhrasesAvailableError, derange
)

PANGRAM = "the quick brown fox jumps over the lazy dog"


class IdentityShuffle(random.Random):
    """Leaves sequences in order, producing the worst case for derangement repair."""

    def shuffle(self, x, *args, **kwargs):
        pass


# ---- Derangement repair ----

class TestDerange:
    def test_identity_becomes_derangement(self):
        result = derange(list(ALPHABET))
        assert all(result[i] != ALPHABET[i] for i in range(26))
        assert sorted(result) == list(ALPHABET)

    def test_single_fixed_point_swapped_with_next(self):
        perm = list("bacdefghijklmnopqrstuvwxyz")
        # positions 2.. are fixed; each is swapped forward
        result = derange(perm)
        assert all(result[i] != ALPHABET[i] for i in range(26))
        assert sorted(result) == list(ALPHABET)

    def test_derangement_left_alone(self):
        perm = list(ALPHABET[1:] + ALPHABET[0])
        assert derange(list(perm)) == perm


# ---- Letter mappings ----

class TestLetterMapping:
    def test_no_letter_maps_to_itself(self):
        generator = CipherGenerator(random.Random(7))
        for _ in range(500):
            mapping = generator.generate_letter_mapping(PANGRAM)
            for letter, symbol in mapping.items():
                assert symbol.lower() != letter

    def test_identity_shuffle_still_deranged(self):
        mapping = CipherGenerator(IdentityShuffle()).generate_letter_mapping(PANGRAM)
        assert all(symbol.lower() != letter for letter, symbol in mapping.items())

    def test_injective_and_uppercase(self):
        mapping = CipherGenerator(random.Random(3)).generate_letter_mapping(PANGRAM)
        assert len(set(mapping.values())) == len(mapping)
        assert all(symbol.isupper() and len(symbol) == 1 for symbol in mapping.values())

    def test_only_phrase_letters_exposed(self):
        mapping = CipherGenerator(random.Random(3)).generate_letter_mapping("abba cab")
        assert set(mapping) == {"a", "b", "c"}

    def test_independent_calls_differ(self):
        generator = CipherGenerator(random.Random(11))
        mappings = {tuple(sorted(generator.generate_letter_mapping(PANGRAM).items())) for _ in range(5)}
        assert len(mappings) > 1


# ---- Number mappings ----

class TestNumberMapping:
    def test_numbers_in_range_and_injective(self):
        generator = CipherGenerator(random.Random(5))
        for _ in range(100):
            mapping = generator.generate_number_mapping(PANGRAM)
            assert set(mapping) == set(PANGRAM.replace(" ", ""))
            assert all(1 <= int(symbol) <= 26 for symbol in mapping.values())
            assert len(set(mapping.values())) == len(mapping)

    def test_identity_shuffle_assigns_positionally(self):
        mapping = CipherGenerator(IdentityShuffle()).generate_number_mapping("abz")
        assert mapping == {"a": "1", "b": "2", "z": "26"}


# ---- Cryptogram service ----

class TestCryptogramService:
    def test_generates_from_phrase_source(self, tmp_path):
        path = tmp_path / "phrases.txt"
        path.write_text("hello world\n")
        service = CryptogramService(PhraseRepository(str(path)), random.Random(1))

        cryptogram = service.generate_cryptogram(CipherKind.NUMBERS)

        assert cryptogram.phrase == "hello world"
        assert cryptogram.kind == CipherKind.NUMBERS
        assert cryptogram.decode(cryptogram.encode()) == "hello world"

    def test_no_phrases_available(self, tmp_path):
        path = tmp_path / "phrases.txt"
        path.write_text("Not valid!\n123\n\n")
        service = CryptogramService(PhraseRepository(str(path)), random.Random(1))

        with pytest.raises(NoPhrasesAvailableError, match="No phrases available"):
            service.generate_cryptogram(CipherKind.LETTERS)

    def test_missing_phrase_file(self, tmp_path):
        service = CryptogramService(PhraseRepository(str(tmp_path / "missing.txt")))
        with pytest.raises(NoPhrasesAvailableError):
            service.generate_cryptogram(CipherKind.LETTERS)
