"""
Pytest fixtures for the game catalog tests.
"""

import pytest
from haystack.document_stores.in_memory import InMemoryDocumentStore

from gamenight import create_app
from gamenight.config.config import TestingConfig
from gamenight.dtos.game_dtos import GameDTO
from gamenight.repositories import CatalogStore
from gamenight.services.game_service import GameService


def make_game(name, capacity, owners=(), remote=False, full_party=False, game_id=None) -> GameDTO:
    return GameDTO(
        id=game_id or name.lower().replace(" ", "-"),
        name=name,
        capacity=capacity,
        owners=list(owners),
        full_party_only=full_party,
        remote_play_enabled=remote,
    )


@pytest.fixture
def scenario_catalog():
    """Zelda is local-only and owned by Alice and Bob; Ace is remote-playable and owned by Alice."""
    return [
        make_game("Zelda", 2, ["Alice", "Bob"]),
        make_game("Ace", 4, ["Alice"], remote=True),
    ]


@pytest.fixture
def catalog_store():
    """An open in-memory catalog store."""
    store = CatalogStore(InMemoryDocumentStore)
    store.open()
    yield store
    store.close()


@pytest.fixture
def service(catalog_store) -> GameService:
    return GameService(catalog_store)


@pytest.fixture
def seeded_service(service) -> GameService:
    """Service over a small catalog covering every play mode."""
    service.add_game("Zelda", 2, ["Alice", "Bob"])
    service.add_game("Ace", 4, ["Alice"], remote_play_enabled=True)
    service.add_game("Overcooked", 4, ["Alice", "Bob", "Charlie"])
    service.add_game("Trio Quest", 3, ["Alice", "Bob", "Charlie"], full_party_only=True)
    service.add_game("Solo Story", 1, ["alice"])
    return service


@pytest.fixture
def app(catalog_store):
    return create_app(TestingConfig, catalog=catalog_store)


@pytest.fixture
def client(app):
    return app.test_client()
