# catalog_endpoints.py
from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from persistence import AsyncCatalogRepository, CatalogDocumentRejected, CatalogStoreError

router = APIRouter(tags=["catalog"])
logger = logging.getLogger(__name__)

UPDATE_SUCCESS_MESSAGE = "Data updated successfully"


class CatalogWriteResult(BaseModel):
    success: bool
    message: str


def get_catalog_repository(request: Request) -> AsyncCatalogRepository:
    return request.app.state.catalog_repository


def _failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=CatalogWriteResult(success=False, message=message).model_dump(),
    )


@router.get("/api/data")
@router.get("/api/get_data.php", include_in_schema=False)
async def get_data(repo: AsyncCatalogRepository = Depends(get_catalog_repository)) -> JSONResponse:
    try:
        doc = await repo.get_document()
    except CatalogStoreError as e:
        logger.warning("GET CATALOG: store unavailable: %s", e)
        return _failure(503, "Failed to fetch data")
    # No catalog yet is not an error.
    return JSONResponse(doc if doc is not None else {})


@router.post("/api/data")
@router.post("/api/save_data.php", include_in_schema=False)
async def update_data(
    request: Request,
    repo: AsyncCatalogRepository = Depends(get_catalog_repository),
) -> JSONResponse:
    raw = await request.body()
    try:
        doc: Any = json.loads(raw)
    except ValueError:
        logger.info("POST CATALOG: rejected malformed JSON body (%d bytes)", len(raw))
        return _failure(400, "Invalid JSON body")
    if not isinstance(doc, dict):
        return _failure(400, "Request body must be a JSON object")

    try:
        await repo.replace_document(doc)
    except CatalogDocumentRejected as e:
        logger.info("POST CATALOG: rejected unstorable document: %s", e)
        return _failure(400, "Data cannot be stored")
    except CatalogStoreError as e:
        logger.warning("POST CATALOG: store unavailable: %s", e)
        return _failure(503, "Failed to save data")

    return JSONResponse(CatalogWriteResult(success=True, message=UPDATE_SUCCESS_MESSAGE).model_dump())
