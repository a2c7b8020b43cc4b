from __future__ import annotations

import dataclasses
import json
from pathlib import Path
import sys
from typing import Any, Callable, Iterator


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
# This avoids ModuleNotFoundError for imports like `import persistence...` under pytest import modes
# that don't automatically prepend the cwd/rootdir to sys.path.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


SEED_DOC: dict[str, Any] = {
    "processes": [{"id": "p1", "name": "Customer Onboarding", "subProcesses": []}],
    "systems": [{"id": "s1", "name": "CRM System"}],
    "vendors": [{"id": "v1", "name": "Cloud Provider"}],
}

_ENV_VARS = (
    "PORT",
    "HOST",
    "CATALOG_BACKEND",
    "MONGODB_URI",
    "MONGODB_DATABASE",
    "MONGODB_COLLECTION",
    "MONGODB_SERVER_API",
    "MONGODB_TIMEOUT_MS",
    "SEED_PATH",
    "SEED_ON_STARTUP",
    "STATIC_DIR",
    "DEBUG_LOG_REQUESTS",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sandbox_project(tmp_path: Path) -> Path:
    """
    A temp project directory with a seed file and a public/ dir so tests never touch real ./data.
    """
    (tmp_path / "data").mkdir()
    (tmp_path / "data" / "seed_catalog.json").write_text(json.dumps(SEED_DOC), encoding="utf-8")
    public = tmp_path / "public"
    public.mkdir()
    (public / "index.html").write_text("<h1>catalog</h1>", encoding="utf-8")
    (public / "app.js").write_text("console.log('catalog');", encoding="utf-8")
    return tmp_path


@pytest.fixture
def make_settings(sandbox_project: Path) -> Callable[..., Any]:
    from settings import get_settings

    def _make(**overrides: Any):
        base = dataclasses.replace(
            get_settings(),
            catalog_backend="memory",
            seed_path=sandbox_project / "data" / "seed_catalog.json",
            static_dir=sandbox_project / "public",
        )
        return dataclasses.replace(base, **overrides)

    return _make


@pytest.fixture
def memory_store():
    from persistence import InMemoryCatalogStore

    return InMemoryCatalogStore()


@pytest.fixture
def client(make_settings, memory_store) -> Iterator[Any]:
    from fastapi.testclient import TestClient

    from app import create_app

    with TestClient(create_app(make_settings(), store=memory_store)) as c:
        yield c
