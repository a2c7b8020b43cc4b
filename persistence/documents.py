from __future__ import annotations

import json
from typing import Any

import bson
from bson import json_util
from bson.errors import BSONError

from .interfaces import CatalogDocumentRejected

# Server-side cap on a single BSON document.
MAX_DOCUMENT_BYTES = 16 * 1024 * 1024


def ensure_storable(doc: dict[str, Any]) -> None:
    """
    Raise CatalogDocumentRejected for JSON objects MongoDB cannot hold:
    top-level operator keys, NUL in keys, integers beyond int64, or more than 16 MiB.
    """
    operator_keys = [k for k in doc if isinstance(k, str) and k.startswith("$")]
    if operator_keys:
        raise CatalogDocumentRejected(f"top-level keys may not start with '$': {operator_keys}")
    try:
        encoded = bson.encode({k: v for k, v in doc.items() if k != "_id"})
    except (BSONError, OverflowError, ValueError) as e:
        raise CatalogDocumentRejected(f"document cannot be encoded: {e}") from e
    if len(encoded) > MAX_DOCUMENT_BYTES:
        raise CatalogDocumentRejected(
            f"document is {len(encoded)} bytes; the limit is {MAX_DOCUMENT_BYTES}"
        )


def to_json_compatible(doc: dict[str, Any]) -> dict[str, Any]:
    # ObjectId, datetime and friends become relaxed Extended JSON ({"$oid": ...}).
    return json.loads(json_util.dumps(doc, json_options=json_util.RELAXED_JSON_OPTIONS))
