import logging
import os

from haystack.document_stores.in_memory import InMemoryDocumentStore
from haystack.document_stores.types import DocumentStore
from haystack_integrations.document_stores.chroma import ChromaDocumentStore

logger = logging.getLogger(__name__)

SUPPORTED_BACKENDS = ("chroma", "memory")


def get_chroma_store(
    persistence_directory: str = os.getenv("CHROMA_PERSISTENCE_DIR", "./data/chroma_game_catalog"),
    collection_name: str = os.getenv("CHROMA_COLLECTION", "game_catalog"),
) -> ChromaDocumentStore:
    """
    Open the persistent Chroma collection that holds the game catalog.
    """
    logger.info(
        "Opening ChromaDocumentStore at '%s' (collection '%s')",
        persistence_directory,
        collection_name,
    )
    document_store = ChromaDocumentStore(
        collection_name=collection_name,
        persist_path=persistence_directory,
    )
    logger.info("Catalog collection holds %d game(s)", document_store.count_documents())
    return document_store


def get_document_store(
    backend: str,
    persistence_directory: str = os.getenv("CHROMA_PERSISTENCE_DIR", "./data/chroma_game_catalog"),
    collection_name: str = os.getenv("CHROMA_COLLECTION", "game_catalog"),
) -> DocumentStore:
    """
    Build the document store for the configured backend.
    `memory` keeps everything in process and is used by tests and local runs.
    """
    backend = (backend or "").lower()
    if backend == "memory":
        logger.info("Using in-memory catalog store")
        return InMemoryDocumentStore()
    if backend == "chroma":
        return get_chroma_store(persistence_directory, collection_name)
    raise ValueError(
        f"Unknown catalog backend '{backend}'. Expected one of {', '.join(SUPPORTED_BACKENDS)}."
    )
