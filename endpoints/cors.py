from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware

router = APIRouter(tags=["cors"])

ALLOWED_METHODS = "GET,POST,PUT,DELETE,OPTIONS"
DEFAULT_ALLOWED_HEADERS = "Content-Type,Authorization,X-Requested-With,Content-Length,Accept,Origin"


class PermissiveCorsMiddleware(BaseHTTPMiddleware):
    """
    Stamp permissive CORS headers on every response, whether or not the
    request carried an Origin. Headers already set by a preflight are kept.
    """

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers["Access-Control-Allow-Origin"] = "*"
        response.headers.setdefault("Access-Control-Allow-Methods", ALLOWED_METHODS)
        response.headers.setdefault("Access-Control-Allow-Headers", DEFAULT_ALLOWED_HEADERS)
        return response


@router.options("/{rest:path}", include_in_schema=False)
async def preflight(request: Request, rest: str) -> PlainTextResponse:
    # Browser preflights (Origin + Access-Control-Request-Method) are answered by
    # CORSMiddleware before reaching here; this covers bare OPTIONS probes.
    headers: dict[str, str] = {}
    requested_headers = request.headers.get("access-control-request-headers")
    if requested_headers:
        headers["Access-Control-Allow-Headers"] = requested_headers
    if request.headers.get("access-control-request-method"):
        headers["Access-Control-Allow-Methods"] = ALLOWED_METHODS
    return PlainTextResponse("OK", headers=headers)
