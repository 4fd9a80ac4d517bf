from __future__ import annotations

from typing import List, Optional

from haystack.document_stores.errors import DocumentStoreError
from haystack.document_stores.types import DocumentStore, DuplicatePolicy

from gamenight.dtos.game_dtos import GameDTO
from gamenight.errors import UnavailableError
from gamenight.services.catalog.mapper import document_to_game, game_to_document


class GameRepository:
    """
    Data access layer around the catalog document store.
    Converts between stored documents and games, and reports store
    failures as UnavailableError.
    """

    def __init__(self, document_store: DocumentStore) -> None:
        self._document_store = document_store

    def list_all(self) -> List[GameDTO]:
        try:
            documents = self._document_store.filter_documents()
        except DocumentStoreError as e:
            raise UnavailableError(f"Could not read the game catalog: {e}") from e
        return [document_to_game(doc) for doc in documents]

    def get_by_id(self, game_id: str) -> Optional[GameDTO]:
        filters = {"field": "id", "operator": "==", "value": game_id}
        try:
            documents = self._document_store.filter_documents(filters=filters)
        except DocumentStoreError as e:
            raise UnavailableError(f"Could not read game {game_id}: {e}") from e
        if documents:
            return document_to_game(documents[0])
        return None

    def save(self, game: GameDTO) -> GameDTO:
        """
        Insert or overwrite the stored document for `game`.
        """
        try:
            self._document_store.write_documents(
                [game_to_document(game)], policy=DuplicatePolicy.OVERWRITE
            )
        except DocumentStoreError as e:
            raise UnavailableError(f"Could not save game {game.id}: {e}") from e
        return game

    def delete(self, game_id: str) -> None:
        try:
            self._document_store.delete_documents([game_id])
        except DocumentStoreError as e:
            raise UnavailableError(f"Could not delete game {game_id}: {e}") from e

    def count(self) -> int:
        try:
            return self._document_store.count_documents()
        except DocumentStoreError as e:
            raise UnavailableError(f"Could not count the game catalog: {e}") from e
