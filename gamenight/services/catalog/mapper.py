from __future__ import annotations

from typing import Any, Dict

from haystack import Document

from gamenight.dtos.game_dtos import GameDTO, PlayableGameDTO
from gamenight.services.catalog.matcher import PlayableGame
from gamenight.utils.names import join_owners, unique_names


def _game_content(game: GameDTO) -> str:
    """
    Short text line stored as the document content.
    """
    return f"Game: {game.name}. Up to {game.capacity} players."


def game_to_document(game: GameDTO) -> Document:
    """
    Map a game to the Haystack Document stored in the catalog.
    Owners are flattened into a single string since not every document
    store accepts list metadata.
    """
    meta: Dict[str, Any] = {
        "name": game.name,
        "capacity": game.capacity,
        "owners": join_owners(game.owners),
        "full_party_only": game.full_party_only,
        "remote_play_enabled": game.remote_play_enabled,
    }
    return Document(id=game.id, content=_game_content(game), meta=meta)


def document_to_game(doc: Document) -> GameDTO:
    """
    Map a stored Haystack Document back to a game.
    """
    meta = doc.meta or {}
    return GameDTO(
        id=doc.id,
        name=meta.get("name", ""),
        capacity=int(meta.get("capacity", 1)),
        owners=unique_names(meta.get("owners")),
        full_party_only=bool(meta.get("full_party_only", False)),
        remote_play_enabled=bool(meta.get("remote_play_enabled", False)),
    )


def playable_to_dto(item: PlayableGame) -> PlayableGameDTO:
    payload = item.game.model_dump()
    payload["matched_owners"] = list(item.matched_owners)
    return PlayableGameDTO(**payload)
