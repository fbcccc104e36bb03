"""Tests for the HTTP API and WebSocket events."""

import os

import pytest


def start_game(client, cipher_type='Letters'):
    response = client.post('/api/new_game', json={'player': 'alice', 'cipher_type': cipher_type})
    assert response.status_code == 200
    return response.get_json()


def encryption_map(app, game_id):
    return app.extensions['game_service'].get_game(game_id).session.cryptogram.encryption_map


# ---- Players ----

class TestPlayers:
    def test_login_creates_then_welcomes_back(self, client):
        response = client.post('/api/players/login', json={'name': 'alice'})
        assert response.status_code == 201
        assert response.get_json()['created'] is True

        assert client.post('/api/players/alice/logout').status_code == 200

        response = client.post('/api/players/login', json={'name': 'Alice'})
        assert response.status_code == 200
        assert response.get_json()['message'].startswith('Welcome back')

    def test_login_requires_name(self, client):
        response = client.post('/api/players/login', json={'name': '  '})
        assert response.status_code == 400

    def test_corrupted_player_file(self, client, app_config):
        os.makedirs(app_config.PLAYER_DIR, exist_ok=True)
        with open(os.path.join(app_config.PLAYER_DIR, 'mallory.txt'), 'w') as f:
            f.write('CryptogramsPlayed=2\n')

        response = client.post('/api/players/login', json={'name': 'Mallory'})
        assert response.status_code == 409
        assert 'corrupted' in response.get_json()['error']

    def test_get_player_stats(self, logged_in):
        start_game(logged_in)
        response = logged_in.get('/api/players/alice')
        assert response.get_json()['player']['cryptograms_played'] == 1

    def test_second_login_keeps_active_game_stats(self, app, logged_in, app_config):
        game_id = start_game(logged_in)['game_id']
        mapping = encryption_map(app, game_id)

        response = logged_in.post('/api/players/login', json={'name': 'Alice'})
        assert response.status_code == 200
        assert response.get_json()['player']['cryptograms_played'] == 1

        for letter in 'cat':
            response = logged_in.post(f'/api/game/{game_id}/enter',
                                      json={'symbol': mapping[letter], 'letter': letter})
        assert response.get_json()['solved'] is True

        player = logged_in.get('/api/players/alice').get_json()['player']
        assert player['cryptograms_played'] == 1
        assert player['cryptograms_completed'] == 1

        assert logged_in.post('/api/players/alice/logout').status_code == 200
        with open(os.path.join(app_config.PLAYER_DIR, 'alice.txt')) as f:
            saved = f.read()
        assert 'CryptogramsPlayed=1' in saved
        assert 'CryptogramsCompleted=1' in saved

    def test_logout_ends_active_game(self, app, logged_in):
        game_id = start_game(logged_in)['game_id']
        symbol = encryption_map(app, game_id)['c']

        assert logged_in.post('/api/players/alice/logout').status_code == 200

        response = logged_in.post(f'/api/game/{game_id}/enter', json={'symbol': symbol, 'letter': 'c'})
        assert response.status_code == 404
        assert app.extensions['game_service'].games == {}

    def test_unknown_player(self, client):
        assert client.get('/api/players/ghost').status_code == 404
        assert client.post('/api/players/ghost/logout').status_code == 404


# ---- Starting and loading games ----

class TestNewGame:
    def test_new_game_state(self, logged_in):
        data = start_game(logged_in)
        state = data['state']

        assert data['success'] is True
        assert state['cipher_type'] == 'Letters'
        assert len(state['encoded_phrase']) == 3
        assert state['progress'] == '___'
        assert state['fully_mapped'] is False

    def test_numbers_game(self, logged_in):
        state = start_game(logged_in, 'numbers')['state']
        assert state['cipher_type'] == 'Numbers'
        assert state['encoded_phrase'].count('-') == 2

    def test_player_must_be_logged_in(self, client):
        response = client.post('/api/new_game', json={'player': 'alice'})
        assert response.status_code == 404

    def test_invalid_cipher_type(self, logged_in):
        response = logged_in.post('/api/new_game', json={'player': 'alice', 'cipher_type': 'runes'})
        assert response.status_code == 400

    def test_no_phrases_available(self, logged_in, phrases_file):
        phrases_file.write_text('not a phrase!\n')
        response = logged_in.post('/api/new_game', json={'player': 'alice'})
        assert response.status_code == 503
        assert 'No phrases available' in response.get_json()['error']

    def test_unknown_game(self, client):
        assert client.get('/api/game/missing/state').status_code == 404


# ---- Moves ----

class TestMoves:
    def test_enter_duplicate_and_overwrite(self, app, logged_in):
        game_id = start_game(logged_in)['game_id']
        mapping = encryption_map(app, game_id)
        url = f'/api/game/{game_id}/enter'

        response = logged_in.post(url, json={'symbol': mapping['c'], 'letter': 'x'})
        assert response.status_code == 200
        assert response.get_json()['state']['player_mapping'] == {mapping['c']: 'x'}

        response = logged_in.post(url, json={'symbol': mapping['a'], 'letter': 'x'})
        assert response.status_code == 400
        assert response.get_json()['conflicting_symbol'] == mapping['c']

        response = logged_in.post(url, json={'symbol': mapping['c'], 'letter': 'c'})
        assert response.status_code == 409
        assert response.get_json()['existing_letter'] == 'x'

        response = logged_in.post(url, json={'symbol': mapping['c'], 'letter': 'c', 'overwrite': True})
        assert response.status_code == 200
        assert response.get_json()['correct_guess'] is True

    def test_overwrite_must_be_json_true(self, app, logged_in):
        game_id = start_game(logged_in)['game_id']
        symbol = encryption_map(app, game_id)['c']
        url = f'/api/game/{game_id}/enter'
        logged_in.post(url, json={'symbol': symbol, 'letter': 'q'})

        for value in ('false', 'true', 1, 'no'):
            response = logged_in.post(url, json={'symbol': symbol, 'letter': 'w', 'overwrite': value})
            assert response.status_code == 409
            assert response.get_json()['status'] == 'CONFIRMATION_REQUIRED'

        state = logged_in.get(f'/api/game/{game_id}/state').get_json()['state']
        assert state['player_mapping'] == {symbol: 'q'}

    def test_enter_requires_fields(self, logged_in):
        game_id = start_game(logged_in)['game_id']
        response = logged_in.post(f'/api/game/{game_id}/enter', json={'symbol': 'A'})
        assert response.status_code == 400

    def test_undo(self, app, logged_in):
        game_id = start_game(logged_in)['game_id']
        symbol = encryption_map(app, game_id)['t']

        response = logged_in.post(f'/api/game/{game_id}/undo', json={'symbol': symbol})
        assert response.status_code == 400
        assert response.get_json()['status'] == 'NOT_MAPPED'

        logged_in.post(f'/api/game/{game_id}/enter', json={'symbol': symbol, 'letter': 't'})
        response = logged_in.post(f'/api/game/{game_id}/undo', json={'symbol': symbol})
        assert response.status_code == 200
        assert response.get_json()['state']['player_mapping'] == {}

    def test_solving_ends_session_and_records_stats(self, app, logged_in, app_config):
        game_id = start_game(logged_in)['game_id']
        mapping = encryption_map(app, game_id)

        logged_in.post(f'/api/game/{game_id}/save')
        for letter in 'cat':
            response = logged_in.post(f'/api/game/{game_id}/enter',
                                      json={'symbol': mapping[letter], 'letter': letter})

        data = response.get_json()
        assert data['status'] == 'SOLVED'
        assert data['phrase'] == 'cat'
        assert logged_in.get(f'/api/game/{game_id}/state').status_code == 404
        assert not app.extensions['game_state_repository'].save_exists('alice')

        with open(f'{app_config.PLAYER_DIR}/alice.txt') as f:
            saved = f.read()
        assert 'CryptogramsCompleted=1' in saved
        assert 'NumCorrectGuesses=3' in saved

        board = logged_in.get('/api/scoreboard').get_json()
        assert board['entries'][0]['player_name'] == 'alice'

    def test_hints_until_solved(self, logged_in):
        game_id = start_game(logged_in)['game_id']

        for _ in range(2):
            response = logged_in.post(f'/api/game/{game_id}/hint')
            assert response.get_json()['status'] == 'HINT_APPLIED'
            assert response.get_json()['solved'] is False

        response = logged_in.post(f'/api/game/{game_id}/hint')
        assert response.get_json()['solved'] is True
        assert logged_in.post(f'/api/game/{game_id}/hint').status_code == 404

    def test_frequencies(self, logged_in):
        game_id = start_game(logged_in)['game_id']
        entries = logged_in.get(f'/api/game/{game_id}/frequencies').get_json()['frequencies']

        assert len(entries) == 26
        assert [entry['letter'] for entry in entries[:3]] == ['a', 'c', 't']
        assert entries[0]['cryptogram_proportion'] == pytest.approx(1 / 3)


# ---- Save, load, solution, quit ----

class TestSessionLifecycle:
    def test_save_load_roundtrip(self, app, logged_in):
        game_id = start_game(logged_in, 'Numbers')['game_id']
        symbol = encryption_map(app, game_id)['a']
        logged_in.post(f'/api/game/{game_id}/enter', json={'symbol': symbol, 'letter': 'e'})
        before = logged_in.get(f'/api/game/{game_id}/state').get_json()['state']

        assert logged_in.post(f'/api/game/{game_id}/save').status_code == 200
        assert logged_in.post(f'/api/game/{game_id}/save').status_code == 409
        assert logged_in.post(f'/api/game/{game_id}/save', json={'overwrite': True}).status_code == 200
        assert logged_in.delete(f'/api/game/{game_id}').get_json()['success'] is True

        response = logged_in.post('/api/load_game', json={'player': 'alice'})
        assert response.status_code == 200
        after = response.get_json()['state']

        for key in ('cipher_type', 'encoded_phrase', 'progress', 'player_mapping', 'symbols'):
            assert after[key] == before[key]

        player = logged_in.get('/api/players/alice').get_json()['player']
        assert player['cryptograms_played'] == 1

    def test_save_overwrite_must_be_json_true(self, logged_in):
        game_id = start_game(logged_in)['game_id']
        url = f'/api/game/{game_id}/save'
        assert logged_in.post(url).status_code == 200

        response = logged_in.post(url, json={'overwrite': 'false'})
        assert response.status_code == 409
        assert response.get_json()['status'] == 'CONFIRMATION_REQUIRED'

    def test_load_without_save(self, logged_in):
        response = logged_in.post('/api/load_game', json={'player': 'alice'})
        assert response.status_code == 404

    def test_load_corrupted_save(self, logged_in, app_config):
        with open(f'{app_config.SAVE_DIR}/alice_save.txt', 'w') as f:
            f.write('Phrase=cat\nType=Hieroglyphs\nEncryptionMap=c=Q,a=Z,t=X\n')

        response = logged_in.post('/api/load_game', json={'player': 'alice'})
        assert response.status_code == 409
        assert response.get_json()['status'] == 'CORRUPTED'

    def test_solution_ends_session_and_deletes_save(self, app, logged_in):
        game_id = start_game(logged_in)['game_id']
        logged_in.post(f'/api/game/{game_id}/save')

        response = logged_in.post(f'/api/game/{game_id}/solution')
        solution = response.get_json()['solution']

        assert solution['phrase'] == 'cat'
        assert sorted(solution['decryption_map'].values()) == ['a', 'c', 't']
        assert logged_in.get(f'/api/game/{game_id}/state').status_code == 404
        assert not app.extensions['game_state_repository'].save_exists('alice')


# ---- Health ----

class TestHealth:
    def test_health(self, logged_in):
        start_game(logged_in)
        data = logged_in.get('/api/health').get_json()
        assert data['status'] == 'healthy'
        assert data['active_games'] == 1
        assert data['phrases_available'] == 1


# ---- WebSocket ----

class TestWebSocket:
    def test_join_game_and_receive_updates(self, app, socketio, logged_in):
        game_id = start_game(logged_in)['game_id']
        ws = socketio.test_client(app, flask_test_client=logged_in)

        ws.emit('join_game', {'game_id': game_id})
        received = ws.get_received()
        assert received[0]['name'] == 'joined_game'
        assert received[0]['args'][0]['state']['progress'] == '___'

        symbol = encryption_map(app, game_id)['c']
        logged_in.post(f'/api/game/{game_id}/enter', json={'symbol': symbol, 'letter': 'c'})

        updates = [packet for packet in ws.get_received() if packet['name'] == 'game_state_update']
        assert updates
        assert updates[-1]['args'][0]['state']['player_mapping'] == {symbol: 'c'}

    def test_join_unknown_game(self, app, socketio):
        ws = socketio.test_client(app)
        ws.emit('join_game', {'game_id': 'nope'})
        received = ws.get_received()
        assert received[0]['name'] == 'error'
        assert received[0]['args'][0]['error'] == 'Game not found'

    def test_completion_event(self, app, socketio, logged_in):
        game_id = start_game(logged_in)['game_id']
        ws = socketio.test_client(app, flask_test_client=logged_in)
        ws.emit('join_game', {'game_id': game_id})
        ws.get_received()

        logged_in.post(f'/api/game/{game_id}/solution')

        events = [packet['name'] for packet in ws.get_received()]
        assert 'game_completed' in events
