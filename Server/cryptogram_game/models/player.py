"""
Player Data Models

Contains player statistics and scoreboard structures.
"""

from dataclasses import dataclass


@dataclass
class PlayerStats:
    """Player statistics data model."""
    name: str
    cryptograms_played: int = 0
    cryptograms_completed: int = 0
    num_guesses: int = 0
    num_correct_guesses: int = 0

    @property
    def accuracy_percentage(self) -> float:
        if self.num_guesses == 0:
            return 0.0
        return self.num_correct_guesses / self.num_guesses * 100.0

    @property
    def completion_proportion(self) -> float:
        if self.cryptograms_played == 0:
            return 0.0
        return self.cryptograms_completed / self.cryptograms_played

    def record_guess(self, is_correct: bool) -> None:
        self.num_guesses += 1
        if is_correct:
            self.num_correct_guesses += 1

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'cryptograms_played': self.cryptograms_played,
            'cryptograms_completed': self.cryptograms_completed,
            'num_guesses': self.num_guesses,
            'num_correct_guesses': self.num_correct_guesses,
            'accuracy_percentage': round(self.accuracy_percentage, 2),
            'completion_proportion': round(self.completion_proportion, 4)
        }


@dataclass
class ScoreboardEntry:
    """Scoreboard row."""
    player_name: str
    cryptograms_completed: int
    cryptograms_played: int

    @property
    def completion_proportion(self) -> float:
        if self.cryptograms_played == 0:
            return 0.0
        return self.cryptograms_completed / self.cryptograms_played
