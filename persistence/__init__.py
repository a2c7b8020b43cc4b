from __future__ import annotations

from .catalog_state import CATALOG_DOCUMENT_ID, MongoCatalogStore
from .interfaces import CatalogDocumentRejected, CatalogStore, CatalogStoreError, SeedDocumentError
from .memory_store import InMemoryCatalogStore
from .repositories import AsyncCatalogRepository, open_catalog_store
from .seed import load_seed_document

__all__ = [
    "CATALOG_DOCUMENT_ID",
    "CatalogStore",
    "CatalogStoreError",
    "CatalogDocumentRejected",
    "SeedDocumentError",
    "MongoCatalogStore",
    "InMemoryCatalogStore",
    "AsyncCatalogRepository",
    "open_catalog_store",
    "load_seed_document",
]
