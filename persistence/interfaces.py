from __future__ import annotations

from typing import Any, Protocol


class CatalogStoreError(RuntimeError):
    """Raised when the backing document store cannot be reached or written."""


class CatalogDocumentRejected(ValueError):
    """Raised when a JSON object cannot be stored as the catalog (e.g. not BSON-encodable)."""


class SeedDocumentError(ValueError):
    """Raised when the configured seed file exists but is not a JSON object."""


class CatalogStore(Protocol):
    """
    Holds exactly one logical JSON document: the business-process catalog.

    The document is opaque; stores never inspect its structure.
    """

    def seed_if_empty(self, doc: dict[str, Any]) -> bool:
        """Insert `doc` only if no catalog exists yet. Returns True if inserted."""
        ...

    def get_document(self) -> dict[str, Any] | None:
        """Return the current catalog (without store identity fields), or None."""
        ...

    def replace_document(self, doc: dict[str, Any]) -> None:
        """Overwrite the catalog with `doc`, creating it if absent.

        Raises CatalogDocumentRejected if `doc` cannot be stored.
        """
        ...

    def close(self) -> None:
        """Release resources. Idempotent."""
        ...
