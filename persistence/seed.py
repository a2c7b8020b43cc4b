from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .interfaces import SeedDocumentError

logger = logging.getLogger(__name__)


def load_seed_document(path: Path) -> dict[str, Any] | None:
    """
    Read the seed catalog from disk.

    Returns None when the file is missing (seeding is skipped). A file that
    exists but is empty, unreadable, or not a JSON object raises
    SeedDocumentError so a misconfigured deployment fails at startup.
    """
    if not path.exists():
        logger.warning("SEED: %s not found; store will not be seeded", path)
        return None
    try:
        raw = path.read_text(encoding="utf-8")
        doc = json.loads(raw)
    except (OSError, ValueError) as e:
        raise SeedDocumentError(f"could not read seed document {path}: {e}") from e
    if not isinstance(doc, dict):
        raise SeedDocumentError(f"seed document {path} must be a JSON object")
    return doc
