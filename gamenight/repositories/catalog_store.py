from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from haystack.document_stores.types import DocumentStore

from gamenight.errors import UnavailableError
from gamenight.repositories.game_repository import GameRepository

logger = logging.getLogger(__name__)

DocumentStoreFactory = Callable[[], DocumentStore]


class CatalogStore:
    """
    Owns the lifecycle of the catalog's document store.

    The store is created on `open()` and dropped on `close()`. Callers do
    not hold on to it; each operation borrows a `GameRepository` through
    `acquire()`, which is always released when the block exits.
    """

    def __init__(self, factory: DocumentStoreFactory) -> None:
        self._factory = factory
        self._document_store: Optional[DocumentStore] = None
        self._lock = threading.Lock()
        self._active_leases = 0

    @property
    def is_open(self) -> bool:
        return self._document_store is not None

    @property
    def active_leases(self) -> int:
        return self._active_leases

    def open(self) -> "CatalogStore":
        with self._lock:
            if self._document_store is not None:
                return self
            try:
                self._document_store = self._factory()
            except Exception as e:
                raise UnavailableError(f"Could not open the game catalog: {e}") from e
        logger.info("Catalog store opened")
        return self

    def close(self) -> None:
        with self._lock:
            if self._document_store is None:
                return
            if self._active_leases:
                logger.warning("Closing catalog store with %d active lease(s)", self._active_leases)
            self._document_store = None
        logger.info("Catalog store closed")

    @contextmanager
    def acquire(self) -> Iterator[GameRepository]:
        with self._lock:
            if self._document_store is None:
                raise UnavailableError("The game catalog is not open.")
            document_store = self._document_store
            self._active_leases += 1
        logger.debug("Catalog lease acquired (%d active)", self._active_leases)
        try:
            yield GameRepository(document_store)
        finally:
            with self._lock:
                self._active_leases -= 1
            logger.debug("Catalog lease released (%d active)", self._active_leases)

    def __enter__(self) -> "CatalogStore":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
