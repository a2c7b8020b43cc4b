from __future__ import annotations

import copy
import threading
from typing import Any

from .documents import ensure_storable
from .interfaces import CatalogStore


class InMemoryCatalogStore(CatalogStore):
    """
    Process-local catalog store.

    - Deep-copies on read and write so callers never share state with the store.
    - A single lock serializes writers; the last completed write wins.
    - Accepts exactly the documents MongoCatalogStore accepts.
    """

    def __init__(self, doc: dict[str, Any] | None = None) -> None:
        self._lock = threading.Lock()
        self._doc: dict[str, Any] | None = copy.deepcopy(doc) if doc is not None else None
        self.closed = False

    def seed_if_empty(self, doc: dict[str, Any]) -> bool:
        ensure_storable(doc)
        with self._lock:
            if self._doc is not None:
                return False
            self._doc = copy.deepcopy(doc)
            return True

    def get_document(self) -> dict[str, Any] | None:
        with self._lock:
            return copy.deepcopy(self._doc) if self._doc is not None else None

    def replace_document(self, doc: dict[str, Any]) -> None:
        ensure_storable(doc)
        snapshot = {k: v for k, v in copy.deepcopy(doc).items() if k != "_id"}
        with self._lock:
            self._doc = snapshot

    def close(self) -> None:
        self.closed = True
