from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from .catalog_state import MongoCatalogStore
from .interfaces import CatalogStore
from .memory_store import InMemoryCatalogStore
from .seed import load_seed_document

if TYPE_CHECKING:
    from settings import Settings

logger = logging.getLogger(__name__)

CATALOG_BACKENDS = ("mongo", "memory")


def open_catalog_store(settings: "Settings") -> CatalogStore:
    """
    Open the configured backend and seed it if it holds no catalog yet.

    Any failure here is fatal: the caller must not start serving.
    """
    if settings.catalog_backend == "mongo":
        store: CatalogStore = MongoCatalogStore.connect(settings)
    elif settings.catalog_backend == "memory":
        store = InMemoryCatalogStore()
        logger.warning("CATALOG: using in-memory store; data is lost on restart")
    else:
        raise ValueError(
            f"unknown CATALOG_BACKEND {settings.catalog_backend!r}; expected one of {CATALOG_BACKENDS}"
        )

    if settings.seed_on_startup:
        try:
            seed = load_seed_document(settings.seed_path)
            if seed is not None:
                store.seed_if_empty(seed)
        except Exception:
            store.close()
            raise
    return store


class AsyncCatalogRepository:
    """
    Async wrapper around a blocking CatalogStore.
    Uses asyncio.to_thread to avoid blocking the event loop on driver I/O.
    """

    def __init__(self, store: CatalogStore) -> None:
        self._store = store

    @property
    def store(self) -> CatalogStore:
        return self._store

    async def get_document(self) -> dict[str, Any] | None:
        return await asyncio.to_thread(self._store.get_document)

    async def replace_document(self, doc: dict[str, Any]) -> None:
        await asyncio.to_thread(self._store.replace_document, doc)
