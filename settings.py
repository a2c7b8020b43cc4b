from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from persistence.paths import default_seed_path, default_static_dir


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name, "").strip()
    return Path(raw) if raw else default


@dataclass(frozen=True)
class Settings:
    # HTTP
    host: str
    port: int
    static_dir: Path

    # Document store
    catalog_backend: str
    mongodb_uri: str
    mongodb_database: str
    mongodb_collection: str
    mongodb_server_api: str
    mongodb_timeout_ms: int

    # Seeding
    seed_path: Path
    seed_on_startup: bool

    # Debug
    debug_log_requests: bool
    log_level: str


def get_settings() -> Settings:
    host = os.getenv("HOST", "0.0.0.0")
    # A non-integer PORT is a startup error.
    port = int(os.getenv("PORT", "5000"))

    catalog_backend = os.getenv("CATALOG_BACKEND", "mongo").strip().lower()

    # NOTE: no credentials in source; set MONGODB_URI for Atlas or any remote cluster
    mongodb_uri = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
    mongodb_database = os.getenv("MONGODB_DATABASE", "business_process_db")
    mongodb_collection = os.getenv("MONGODB_COLLECTION", "data")
    mongodb_server_api = os.getenv("MONGODB_SERVER_API", "1")
    mongodb_timeout_ms = int(os.getenv("MONGODB_TIMEOUT_MS", "5000"))

    seed_path = _env_path("SEED_PATH", default_seed_path())
    seed_on_startup = _env_bool("SEED_ON_STARTUP", True)

    static_dir = _env_path("STATIC_DIR", default_static_dir())

    debug_log_requests = _env_bool("DEBUG_LOG_REQUESTS", False)
    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()

    return Settings(
        host=host,
        port=port,
        static_dir=static_dir,
        catalog_backend=catalog_backend,
        mongodb_uri=mongodb_uri,
        mongodb_database=mongodb_database,
        mongodb_collection=mongodb_collection,
        mongodb_server_api=mongodb_server_api,
        mongodb_timeout_ms=mongodb_timeout_ms,
        seed_path=seed_path,
        seed_on_startup=seed_on_startup,
        debug_log_requests=debug_log_requests,
        log_level=log_level,
    )
