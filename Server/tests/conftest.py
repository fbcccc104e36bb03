"""Shared fixtures for cryptogram game tests."""
import random

import pytest

from cryptogram_game import create_app
from cryptogram_game.config import TestingConfig
from cryptogram_game.models import CipherKind, Cryptogram, GameSession, PlayerStats
from cryptogram_game.services.game_service import GameService


@pytest.fixture
def rng():
    """Seeded random source so generation and hints are reproducible."""
    return random.Random(1234)


@pytest.fixture
def cat_cryptogram():
    """Phrase "cat" under the fixed mapping c->Q, a->Z, t->X."""
    return Cryptogram(phrase="cat", kind=CipherKind.LETTERS,
                      encryption_map={"c": "Q", "a": "Z", "t": "X"})


@pytest.fixture
def session(cat_cryptogram):
    return GameSession(cryptogram=cat_cryptogram)


@pytest.fixture
def player():
    return PlayerStats(name="Alice")


@pytest.fixture
def game_service(rng):
    return GameService(rng)


@pytest.fixture
def phrases_file(tmp_path):
    path = tmp_path / "phrases.txt"
    path.write_text("cat\n")
    return path


@pytest.fixture
def app_config(tmp_path, phrases_file):
    class Config(TestingConfig):
        PHRASES_FILE = str(phrases_file)
        PLAYER_DIR = str(tmp_path / "players")
        SAVE_DIR = str(tmp_path / "saves")
        LOG_DIR = str(tmp_path / "logs")
    return Config


@pytest.fixture
def app_and_socketio(app_config, rng):
    return create_app(app_config, rng=rng)


@pytest.fixture
def app(app_and_socketio):
    return app_and_socketio[0]


@pytest.fixture
def socketio(app_and_socketio):
    return app_and_socketio[1]


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def logged_in(client):
    """Log in player "alice" and return the client."""
    response = client.post('/api/players/login', json={'name': 'alice'})
    assert response.status_code == 201
    return client
