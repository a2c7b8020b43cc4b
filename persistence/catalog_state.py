from __future__ import annotations

import contextlib
import logging
from typing import TYPE_CHECKING, Any, Callable, Iterator

from bson.errors import BSONError
from pymongo import MongoClient
from pymongo.errors import PyMongoError
from pymongo.server_api import ServerApi

from .documents import ensure_storable, to_json_compatible
from .interfaces import CatalogDocumentRejected, CatalogStore, CatalogStoreError

if TYPE_CHECKING:
    from pymongo.collection import Collection

    from settings import Settings

logger = logging.getLogger(__name__)

# The catalog is a singleton; it always lives under this _id.
CATALOG_DOCUMENT_ID = "catalog"


def _strip_identity(doc: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in doc.items() if k != "_id"}


@contextlib.contextmanager
def _store_errors(action: str) -> Iterator[None]:
    try:
        yield
    except PyMongoError as e:
        logger.warning("MONGODB: %s failed: %r", action, e)
        raise CatalogStoreError(f"{action} failed: {e}") from e
    except (BSONError, ValueError, OverflowError) as e:
        # Client-side encoding refused the document before it reached the server.
        logger.info("MONGODB: %s rejected document: %r", action, e)
        raise CatalogDocumentRejected(f"{action} rejected: {e}") from e


class MongoCatalogStore(CatalogStore):
    """
    Stores the catalog as one document in a MongoDB collection.

    The driver's client is thread-safe and pools connections, so a single
    instance is shared by every request.
    """

    def __init__(self, collection: "Collection", client: MongoClient | None = None) -> None:
        self._collection = collection
        self._client = client

    @classmethod
    def connect(
        cls,
        settings: "Settings",
        *,
        client_factory: Callable[..., MongoClient] = MongoClient,
    ) -> "MongoCatalogStore":
        """
        Open a client pinned to the configured Stable API version and ping it.

        pymongo connects lazily, so the ping is what makes a bad URI or an
        unreachable cluster fail here instead of on the first request.
        """
        client: MongoClient | None = None
        try:
            client = client_factory(
                settings.mongodb_uri,
                server_api=ServerApi(settings.mongodb_server_api),
                serverSelectionTimeoutMS=settings.mongodb_timeout_ms,
            )
            client.admin.command("ping")
        except PyMongoError as e:
            logger.error("MONGODB: could not connect: %r", e)
            if client is not None:
                client.close()
            raise CatalogStoreError(f"could not connect to MongoDB: {e}") from e

        collection = client[settings.mongodb_database][settings.mongodb_collection]
        store = cls(collection, client)
        store.adopt_legacy_document()
        logger.info(
            "MONGODB: connected (database=%s collection=%s)",
            settings.mongodb_database,
            settings.mongodb_collection,
        )
        return store

    def adopt_legacy_document(self) -> bool:
        """
        Move a catalog stored under a driver-generated _id to the fixed id.

        Older deployments replaced "the first document with an _id", so the
        catalog may exist under an ObjectId. Returns True if a document was moved.
        """
        with _store_errors("legacy adoption"):
            if self._collection.find_one({"_id": CATALOG_DOCUMENT_ID}, {"_id": True}) is not None:
                return False
            legacy = self._collection.find_one({"_id": {"$ne": CATALOG_DOCUMENT_ID}})
            if legacy is None:
                return False
            legacy_id = legacy.pop("_id")
            self._collection.replace_one({"_id": CATALOG_DOCUMENT_ID}, legacy, upsert=True)
            self._collection.delete_one({"_id": legacy_id})
        logger.info("MONGODB: adopted legacy catalog document %s", legacy_id)
        return True

    def seed_if_empty(self, doc: dict[str, Any]) -> bool:
        ensure_storable(doc)
        with _store_errors("seed"):
            result = self._collection.update_one(
                {"_id": CATALOG_DOCUMENT_ID},
                {"$setOnInsert": _strip_identity(doc)},
                upsert=True,
            )
        inserted = result.upserted_id is not None
        if inserted:
            logger.info("MONGODB: initialized catalog with seed document")
        return inserted

    def get_document(self) -> dict[str, Any] | None:
        with _store_errors("read"):
            doc = self._collection.find_one({"_id": CATALOG_DOCUMENT_ID}, {"_id": False})
        # Other clients may have written BSON-only values (ObjectId, datetime).
        return to_json_compatible(doc) if doc is not None else None

    def replace_document(self, doc: dict[str, Any]) -> None:
        ensure_storable(doc)
        with _store_errors("replace"):
            self._collection.replace_one(
                {"_id": CATALOG_DOCUMENT_ID},
                _strip_identity(doc),
                upsert=True,
            )

    def close(self) -> None:
        if self._client is None:
            return
        client, self._client = self._client, None
        client.close()
        logger.info("MONGODB: connection closed")
