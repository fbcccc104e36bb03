"""
Scoreboard Service

Ranks players by the proportion of cryptograms they completed.
"""

from typing import List, Optional, Tuple

from flask import current_app

from ..config.game_settings import SCOREBOARD_SIZE
from ..models.player import PlayerStats, ScoreboardEntry
from ..persistence.player_repository import PlayerRepository


def rank_players(players: List[PlayerStats], limit: int = SCOREBOARD_SIZE) -> List[ScoreboardEntry]:
    """Players with at least one completion, best completion proportion first."""
    eligible = [player for player in players if player.cryptograms_completed > 0]
    ranked = sorted(
        eligible,
        key=lambda p: (p.completion_proportion, p.cryptograms_completed),
        reverse=True
    )
    return [
        ScoreboardEntry(
            player_name=player.name,
            cryptograms_completed=player.cryptograms_completed,
            cryptograms_played=player.cryptograms_played
        )
        for player in ranked[:limit]
    ]


class ScoreboardService:

    def __init__(self, player_repository: PlayerRepository):
        self.player_repository = player_repository

    def get_top_players(self) -> Tuple[Optional[List[ScoreboardEntry]], str]:
        players = self.player_repository.load_all_players()
        if not players:
            return None, "No player stats have been stored yet."

        entries = rank_players(players)
        if not entries:
            return None, "No players have successfully completed a cryptogram yet."

        return entries, f"Top {SCOREBOARD_SIZE} players by completion proportion:"


def get_scoreboard_service() -> Optional[ScoreboardService]:
    """Get the scoreboard service of the current application."""
    return current_app.extensions.get('scoreboard_service')


def initialize_scoreboard_service(app, player_repository: PlayerRepository) -> ScoreboardService:
    """Initialize the scoreboard service for an application instance."""
    scoreboard_service = ScoreboardService(player_repository)
    app.extensions['scoreboard_service'] = scoreboard_service
    return scoreboard_service
