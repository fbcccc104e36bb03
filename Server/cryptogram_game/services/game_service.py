"""
Game Service

Contains the core game logic for cryptogram sessions: entering and undoing
letters, hints, solution reveal and win detection.
"""

import random
import uuid
from dataclasses import dataclass
from typing import Dict, List, Optional

from flask import current_app

from ..config.game_settings import ALPHABET
from ..models.cryptogram import CipherKind, Cryptogram
from ..models.game import FrequencyEntry, GameSession, GameState, MoveResult, MoveStatus, Solution
from ..models.player import PlayerStats
from .frequency_service import analyse_frequencies


@dataclass
class ActiveGame:
    """A registered session and the player who owns it."""
    game_id: str
    player: PlayerStats
    session: GameSession


class GameService:
    """
    Core game service managing cryptogram sessions.

    This class handles:
    - Session registration with unique game IDs
    - Letter entry with duplicate and overwrite checks
    - Undo, hints and solution reveal
    - Completion detection and player statistics updates

    The move methods act on the session and player stats they are given;
    the registry only maps game IDs to those objects for the HTTP layer.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self.games: Dict[str, ActiveGame] = {}

    # ------------------------------------------------------------------
    # Session registry
    # ------------------------------------------------------------------

    def start_new_game(self, player: PlayerStats, cryptogram: Cryptogram) -> ActiveGame:
        """Registers a fresh session; counts as a played cryptogram."""
        player.cryptograms_played += 1
        return self._register(player, GameSession(cryptogram=cryptogram))

    def resume_game(self, player: PlayerStats, session: GameSession) -> ActiveGame:
        """Registers a loaded session. Loading does not change the stats."""
        return self._register(player, session)

    def _register(self, player: PlayerStats, session: GameSession) -> ActiveGame:
        # One session per player
        self.end_player_games(player.name)

        game = ActiveGame(game_id=str(uuid.uuid4()), player=player, session=session)
        self.games[game.game_id] = game
        return game

    def get_game(self, game_id: str) -> Optional[ActiveGame]:
        return self.games.get(game_id)

    def end_game(self, game_id: str) -> bool:
        """
        Removes a session from memory.

        Returns:
            bool: True if the session was removed, False if not found
        """
        if game_id in self.games:
            del self.games[game_id]
            return True
        return False

    def end_player_games(self, player_name: str) -> List[str]:
        """Removes every session owned by a player; returns their game IDs."""
        ended = [gid for gid, game in self.games.items()
                 if game.player.name.lower() == player_name.strip().lower()]
        for game_id in ended:
            del self.games[game_id]
        return ended

    def get_game_state(self, game_id: str) -> Optional[GameState]:
        """
        Returns the current state of a session (without revealing the answer).

        Args:
            game_id: Unique game identifier

        Returns:
            GameState object or None if game not found
        """
        game = self.games.get(game_id)
        if game is None:
            return None

        session = game.session
        cryptogram = session.cryptogram
        return GameState(
            game_id=game.game_id,
            player=game.player.name,
            cipher_type=cryptogram.kind.value,
            encoded_phrase=cryptogram.encoded_phrase,
            progress=cryptogram.progress_string(session.player_mapping),
            player_mapping=dict(session.player_mapping),
            symbols=sort_symbols(cryptogram.used_symbols, cryptogram.kind),
            unmapped_values=sort_symbols(session.unmapped_values, cryptogram.kind),
            fully_mapped=session.is_fully_mapped,
            solved=session.is_fully_mapped and session.is_correct
        )

    # ------------------------------------------------------------------
    # Moves
    # ------------------------------------------------------------------

    def enter_letter(self,
                     session: GameSession,
                     player: PlayerStats,
                     symbol: str,
                     letter: str,
                     overwrite_confirmed: bool = False) -> MoveResult:
        """
        Maps a cipher symbol to a plain letter.

        Overwriting an existing guess is two-phase: without
        overwrite_confirmed the move is rejected with CONFIRMATION_REQUIRED
        and the existing letter, and nothing changes.

        Args:
            session: Session being played
            player: Stats of the player making the guess
            symbol: Cipher symbol to map
            letter: Guessed plain letter
            overwrite_confirmed: Replace an existing guess for the symbol

        Returns:
            MoveResult tagged with the outcome
        """
        symbol = normalize_symbol(symbol, session.cryptogram.kind)
        letter = normalize_letter(letter)

        if symbol not in session.cryptogram.used_symbols:
            return MoveResult(MoveStatus.INVALID_SYMBOL,
                              f"The value '{symbol}' is not used in this cryptogram.",
                              symbol=symbol, letter=letter)

        if len(letter) != 1 or letter not in ALPHABET:
            return MoveResult(MoveStatus.INVALID_LETTER,
                              "Please enter a single letter (a-z).",
                              symbol=symbol, letter=letter)

        conflicting_symbol = session.symbol_for_letter(letter)
        if conflicting_symbol is not None and conflicting_symbol != symbol:
            return MoveResult(MoveStatus.DUPLICATE_LETTER,
                              f"The letter '{letter}' is already mapped to cryptogram value "
                              f"'{conflicting_symbol}'. Please try a different letter.",
                              symbol=symbol, letter=letter, conflicting_symbol=conflicting_symbol)

        existing_letter = session.player_mapping.get(symbol)
        if existing_letter is not None and not overwrite_confirmed:
            return MoveResult(MoveStatus.CONFIRMATION_REQUIRED,
                              f"The value '{symbol}' is already mapped to '{existing_letter}'. "
                              f"Do you want to overwrite?",
                              symbol=symbol, letter=letter, existing_letter=existing_letter)

        session.player_mapping[symbol] = letter

        correct_guess = session.cryptogram.decryption_map.get(symbol) == letter
        player.record_guess(correct_guess)

        completion = self._check_completion(session, player, symbol, letter)
        if completion is not None:
            completion.correct_guess = correct_guess
            return completion

        return MoveResult(MoveStatus.MAPPED,
                          f"Letter '{letter}' mapped to '{symbol}'.",
                          symbol=symbol, letter=letter, correct_guess=correct_guess)

    def undo_letter(self, session: GameSession, symbol: str) -> MoveResult:
        """Removes the player's guess for a symbol."""
        symbol = normalize_symbol(symbol, session.cryptogram.kind)

        if symbol not in session.cryptogram.used_symbols:
            return MoveResult(MoveStatus.INVALID_SYMBOL,
                              f"The value '{symbol}' is not used in this cryptogram.",
                              symbol=symbol)

        if symbol not in session.player_mapping:
            return MoveResult(MoveStatus.NOT_MAPPED,
                              f"The value '{symbol}' has not been mapped yet.",
                              symbol=symbol)

        removed = session.player_mapping.pop(symbol)
        return MoveResult(MoveStatus.UNMAPPED,
                          f"Mapping for '{symbol}' (was '{removed}') has been removed.",
                          symbol=symbol, letter=removed)

    def get_hint(self, session: GameSession, player: PlayerStats) -> MoveResult:
        """
        Correctly maps one random unmapped symbol.

        If the correct letter is currently guessed for another symbol, that
        guess is wrong and is removed before the hint is installed. Hints do
        not count as guesses.
        """
        kind = session.cryptogram.kind
        unmapped = sort_symbols(session.unmapped_values, kind)
        if not unmapped:
            return MoveResult(MoveStatus.NO_UNMAPPED_VALUES, "All values have already been mapped.")

        symbol = self.rng.choice(unmapped)
        correct_letter = session.cryptogram.decryption_map[symbol]

        stale_symbol = session.symbol_for_letter(correct_letter)
        if stale_symbol is not None:
            del session.player_mapping[stale_symbol]
            message = (f"Hint: '{symbol}' = '{correct_letter}'. Your previous mapping of "
                       f"'{correct_letter}' to '{stale_symbol}' was incorrect and has been removed.")
        else:
            message = f"Hint: '{symbol}' = '{correct_letter}'."

        session.player_mapping[symbol] = correct_letter

        result = MoveResult(MoveStatus.HINT_APPLIED, message,
                            symbol=symbol, letter=correct_letter, removed_symbol=stale_symbol)

        completion = self._check_completion(session, player, symbol, correct_letter)
        if completion is not None:
            result.solved = completion.solved
            result.message = f"{message} {completion.message}"
        return result

    def _check_completion(self,
                          session: GameSession,
                          player: PlayerStats,
                          symbol: str,
                          letter: str) -> Optional[MoveResult]:
        if not session.is_fully_mapped:
            return None

        if session.is_correct:
            player.cryptograms_completed += 1
            return MoveResult(MoveStatus.SOLVED,
                              "Congratulations! You have successfully solved the cryptogram!",
                              symbol=symbol, letter=letter, solved=True)

        return MoveResult(MoveStatus.FULLY_MAPPED_INCORRECT,
                          "All values are mapped, but the solution is incorrect. Keep trying!",
                          symbol=symbol, letter=letter)

    def show_solution(self, session: GameSession) -> Solution:
        """The full answer. Read-only; callers end the session afterwards."""
        return Solution(phrase=session.cryptogram.phrase,
                        decryption_map=dict(session.cryptogram.decryption_map))

    def get_frequencies(self, session: GameSession) -> List[FrequencyEntry]:
        return analyse_frequencies(session.cryptogram.phrase)


def normalize_symbol(symbol: str, kind: CipherKind) -> str:
    symbol = (symbol or "").strip()
    return symbol.upper() if kind == CipherKind.LETTERS else symbol


def normalize_letter(letter: str) -> str:
    return (letter or "").strip().lower()


def sort_symbols(symbols, kind: CipherKind) -> List[str]:
    """Letters alphabetically, numbers numerically."""
    if kind == CipherKind.NUMBERS:
        return sorted(symbols, key=lambda s: (not s.isdigit(), int(s) if s.isdigit() else 0, s))
    return sorted(symbols)


def get_game_service() -> Optional[GameService]:
    """Get the game service of the current application."""
    return current_app.extensions.get('game_service')


def initialize_game_service(app, rng: Optional[random.Random] = None) -> GameService:
    """Initialize the game service for an application instance."""
    game_service = GameService(rng)
    app.extensions['game_service'] = game_service
    return game_service
