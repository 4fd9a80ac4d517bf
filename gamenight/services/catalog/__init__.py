"""
Catalog service submodules.

Building blocks used by the `GameService` orchestrator: the playable-games
matcher and the mapping between games and stored documents.
"""

from .mapper import document_to_game, game_to_document, playable_to_dto
from .matcher import PlayableGame, find_playable_games, normalize_players

__all__ = [
    "document_to_game",
    "game_to_document",
    "playable_to_dto",
    "PlayableGame",
    "find_playable_games",
    "normalize_players",
]
