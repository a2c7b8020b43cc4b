from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from conftest import SEED_DOC


def test_app_smoke_routes(client):
    r = client.get("/")
    assert r.status_code == 200
    assert "catalog" in r.text
    assert r.headers["access-control-allow-origin"] == "*"

    r = client.get("/app.js")
    assert r.status_code == 200
    assert "console.log" in r.text

    # API routes win over the static mount
    r = client.get("/api/data")
    assert r.headers["content-type"].startswith("application/json")


def test_startup_opens_and_seeds_configured_backend(make_settings):
    from app import create_app

    app = create_app(make_settings(catalog_backend="memory"))
    with TestClient(app) as c:
        assert c.get("/api/data").json() == SEED_DOC
        store = app.state.catalog_repository.store

    assert store.closed is True


def test_startup_without_seeding_starts_empty(make_settings):
    from app import create_app

    with TestClient(create_app(make_settings(seed_on_startup=False))) as c:
        assert c.get("/api/data").json() == {}


def test_missing_seed_file_starts_empty(make_settings, tmp_path):
    from app import create_app

    with TestClient(create_app(make_settings(seed_path=tmp_path / "nope.json"))) as c:
        assert c.get("/api/data").json() == {}


def test_startup_fails_for_unknown_backend(make_settings):
    from app import create_app

    with pytest.raises(ValueError):
        with TestClient(create_app(make_settings(catalog_backend="couchdb"))):
            pass


def test_missing_static_dir_disables_static_files(make_settings, memory_store, tmp_path):
    from app import create_app

    with TestClient(create_app(make_settings(static_dir=tmp_path / "missing"), store=memory_store)) as c:
        assert c.get("/index.html").status_code in (404, 405)
        assert c.get("/api/data").status_code == 200


def test_request_logging_toggle(make_settings, memory_store, caplog):
    from app import create_app

    with TestClient(create_app(make_settings(debug_log_requests=True), store=memory_store)) as c:
        with caplog.at_level("INFO", logger="app"):
            c.get("/api/data")

    assert any("GET /api/data -> 200" in rec.getMessage() for rec in caplog.records)
