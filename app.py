from __future__ import annotations

import asyncio
import contextlib
import logging
import time

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from dotenv import load_dotenv

from persistence import AsyncCatalogRepository, CatalogStore, open_catalog_store
from settings import Settings, get_settings

logger = logging.getLogger(__name__)


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings

    # Connect and seed before accepting traffic; failures abort startup.
    if getattr(app.state, "catalog_repository", None) is None:
        store = await asyncio.to_thread(open_catalog_store, settings)
        app.state.catalog_repository = AsyncCatalogRepository(store)

    try:
        yield
    finally:
        app.state.catalog_repository.store.close()


def create_app(settings: Settings | None = None, store: CatalogStore | None = None) -> FastAPI:
    if settings is None:
        load_dotenv("local.env")
        settings = get_settings()

    from endpoints.catalog_endpoints import router as catalog_router
    from endpoints.cors import PermissiveCorsMiddleware, router as cors_router

    app = FastAPI(title="Business Process Catalog", lifespan=lifespan)
    app.state.settings = settings
    app.state.catalog_repository = AsyncCatalogRepository(store) if store is not None else None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(PermissiveCorsMiddleware)

    if settings.debug_log_requests:

        @app.middleware("http")
        async def log_requests(request: Request, call_next):
            started = time.perf_counter()
            response = await call_next(request)
            logger.info(
                "REQUEST: %s %s -> %s (%.1f ms)",
                request.method,
                request.url.path,
                response.status_code,
                (time.perf_counter() - started) * 1000,
            )
            return response

    # API routes must come before static file serving.
    app.include_router(catalog_router)
    app.include_router(cors_router)

    if settings.static_dir.is_dir():
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")
    else:
        logger.warning("STATIC: %s does not exist; static files disabled", settings.static_dir)

    return app


def main() -> None:
    load_dotenv("local.env")
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Server starting on port %d", settings.port)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


app = create_app()


if __name__ == "__main__":
    main()
