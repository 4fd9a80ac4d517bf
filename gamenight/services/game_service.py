from __future__ import annotations

import logging
import uuid
from typing import Iterable, List, Optional, Union

from gamenight.dtos.game_dtos import GameDTO, PlayableGamesResponse
from gamenight.errors import ConflictError, InvalidArgumentError, NotFoundError
from gamenight.repositories import CatalogStore, GameRepository
from gamenight.services.catalog import (
    find_playable_games,
    normalize_players,
    playable_to_dto,
)
from gamenight.utils.names import clean_name, clean_player_name, find_owner, name_key, unique_names

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("name", "capacity", "owners", "full_party_only", "remote_play_enabled")


def _sorted_by_name(games: Iterable[GameDTO]) -> List[GameDTO]:
    return sorted(games, key=lambda game: game.name.casefold())


class GameService:
    """
    Catalog operations over an injected CatalogStore.

    Rules
    -----
    * Names are trimmed; game names and owner names are unique case-insensitively.
    * Every validation happens before anything is written.
    * Removing an owner never changes the game's capacity.
    """

    def __init__(self, catalog: CatalogStore) -> None:
        self._catalog = catalog

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_games(
        self,
        name_contains: Optional[str] = None,
        owner_contains: Optional[str] = None,
    ) -> List[GameDTO]:
        """
        All games sorted by name, optionally narrowed by case-insensitive
        substrings of the game name and of any owner's name.
        """
        with self._catalog.acquire() as repo:
            games = repo.list_all()

        name_filter = name_key(name_contains)
        owner_filter = name_key(owner_contains)
        if name_filter:
            games = [g for g in games if name_filter in g.name.casefold()]
        if owner_filter:
            games = [
                g for g in games
                if any(owner_filter in owner.casefold() for owner in g.owners)
            ]
        return _sorted_by_name(games)

    def get_game(self, game_id: str) -> GameDTO:
        with self._catalog.acquire() as repo:
            return self._require(repo, game_id)

    def list_players(self) -> List[str]:
        """Every distinct owner across the catalog, sorted case-insensitively."""
        with self._catalog.acquire() as repo:
            games = repo.list_all()
        players = unique_names(owner for game in games for owner in game.owners)
        return sorted(players, key=str.casefold)

    def games_for_player(self, player: str) -> List[GameDTO]:
        key = name_key(player)
        if not key:
            raise InvalidArgumentError("A player name is required.")
        with self._catalog.acquire() as repo:
            games = repo.list_all()
        return _sorted_by_name(g for g in games if find_owner(g.owners, key) is not None)

    def playable_games(self, players: Iterable[str]) -> PlayableGamesResponse:
        """
        Games the given group can play together, with the requested players
        who own each one. An empty group is rejected before the catalog is read.
        """
        group = normalize_players(players)
        with self._catalog.acquire() as repo:
            catalog = repo.list_all()
        matches = find_playable_games(group, catalog)
        logger.info("Group %s can play %d of %d game(s)", group, len(matches), len(catalog))
        return PlayableGamesResponse(
            players=group,
            items=[playable_to_dto(item) for item in matches],
        )

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_game(
        self,
        name: str,
        capacity: int,
        owners: Union[Iterable[str], str, None] = None,
        full_party_only: bool = False,
        remote_play_enabled: bool = False,
    ) -> GameDTO:
        name = self._validate_name(name)
        capacity = self._validate_capacity(capacity)
        game = GameDTO(
            id=uuid.uuid4().hex,
            name=name,
            capacity=capacity,
            owners=unique_names(owners),
            full_party_only=bool(full_party_only),
            remote_play_enabled=bool(remote_play_enabled),
        )
        with self._catalog.acquire() as repo:
            self._ensure_unique_name(repo.list_all(), name)
            repo.save(game)
        logger.info("Added game '%s' (%s)", game.name, game.id)
        return game

    def update_game(self, game_id: str, changes: dict) -> GameDTO:
        """
        Apply a partial edit. Accepted keys are listed in EDITABLE_FIELDS;
        unknown keys are ignored.
        """
        updates = {k: v for k, v in (changes or {}).items() if k in EDITABLE_FIELDS and v is not None}
        if not updates:
            raise InvalidArgumentError("No updates provided.")
        if "name" in updates:
            updates["name"] = self._validate_name(updates["name"])
        if "capacity" in updates:
            updates["capacity"] = self._validate_capacity(updates["capacity"])
        if "owners" in updates:
            updates["owners"] = unique_names(updates["owners"])
        for flag in ("full_party_only", "remote_play_enabled"):
            if flag in updates:
                updates[flag] = bool(updates[flag])

        with self._catalog.acquire() as repo:
            game = self._require(repo, game_id)
            if "name" in updates:
                self._ensure_unique_name(repo.list_all(), updates["name"], ignore_id=game.id)
            updated = game.model_copy(update=updates)
            repo.save(updated)
        logger.info("Updated game %s: %s", game_id, sorted(updates))
        return updated

    def delete_game(self, game_id: str) -> None:
        with self._catalog.acquire() as repo:
            game = self._require(repo, game_id)
            repo.delete(game.id)
        logger.info("Deleted game '%s' (%s)", game.name, game.id)

    def add_owner(self, game_id: str, player: str) -> GameDTO:
        player = clean_player_name(player)
        if not player:
            raise InvalidArgumentError("A player name is required.")
        with self._catalog.acquire() as repo:
            game = self._require(repo, game_id)
            if find_owner(game.owners, player) is not None:
                raise ConflictError(f"{player} already owns '{game.name}'.")
            updated = game.model_copy(update={"owners": [*game.owners, player]})
            repo.save(updated)
        logger.info("Added owner %s to '%s'", player, game.name)
        return updated

    def remove_owner(self, game_id: str, player: str) -> GameDTO:
        """
        Remove `player` from the game's owners. Removing someone who is not
        an owner is a no-op.
        """
        with self._catalog.acquire() as repo:
            game = self._require(repo, game_id)
            existing = find_owner(game.owners, player)
            if existing is None:
                return game
            updated = game.model_copy(
                update={"owners": [o for o in game.owners if o != existing]}
            )
            repo.save(updated)
        logger.info("Removed owner %s from '%s'", existing, game.name)
        return updated

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _require(repo: GameRepository, game_id: str) -> GameDTO:
        game = repo.get_by_id(game_id)
        if game is None:
            raise NotFoundError(f"Game {game_id} not found.")
        return game

    @staticmethod
    def _validate_name(name: Optional[str]) -> str:
        name = clean_name(name)
        if not name:
            raise InvalidArgumentError("A game name is required.")
        return name

    @staticmethod
    def _validate_capacity(capacity) -> int:
        if isinstance(capacity, bool) or (isinstance(capacity, float) and not capacity.is_integer()):
            raise InvalidArgumentError(f"Capacity must be a whole number, got {capacity!r}.")
        try:
            value = int(capacity)
        except (TypeError, ValueError) as e:
            raise InvalidArgumentError(f"Capacity must be a whole number, got {capacity!r}.") from e
        if value < 1:
            raise InvalidArgumentError("Capacity must be at least 1.")
        return value

    @staticmethod
    def _ensure_unique_name(games: Iterable[GameDTO], name: str, ignore_id: Optional[str] = None) -> None:
        key = name.casefold()
        for game in games:
            if game.id != ignore_id and game.name.casefold() == key:
                raise ConflictError(f"A game named '{game.name}' already exists.")
