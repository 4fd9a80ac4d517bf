"""
Repository layer for the game catalog document store.
"""

from .catalog_store import CatalogStore
from .game_repository import GameRepository

__all__ = ["CatalogStore", "GameRepository"]
