# backend/findride/main.py

import logging
import os
import time
from typing import Iterable

from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from routes import distance
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import settings
from .core.observability import setup_logging, setup_tracer
from .middleware.security_headers import SecurityHeadersMiddleware
from .utils.errors import error_json

# Configure logging before creating any loggers
setup_logging()
logger = logging.getLogger(__name__)

_BOOT_TS = time.time()

# Always use ORJSONResponse for JSON payloads to ensure consistent, fast
# serialization across all endpoints.
app = FastAPI(title="FindRide API", default_response_class=ORJSONResponse)
setup_tracer(app)


def _merge_origins(*groups: Iterable[str]) -> list[str]:
    merged: list[str] = []
    for group in groups:
        for origin in group:
            if not origin:
                continue
            normalized = origin.rstrip("/")
            if normalized not in merged:
                merged.append(normalized)
    return merged


ALLOWED_ORIGINS = _merge_origins(settings.CORS_ORIGINS)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET"],
    allow_headers=["*"],
)
logger.info("CORS origins set to: %s", ALLOWED_ORIGINS)
app.add_middleware(SecurityHeadersMiddleware, api_prefix=settings.API_PREFIX)


@app.middleware("http")
async def catch_exceptions(request: Request, call_next):
    """Turn unhandled errors into the fixed JSON error body."""
    try:
        response = await call_next(request)
    except Exception as exc:
        logger.exception("Unhandled error at %s: %s", request.url.path, exc)
        response = error_json("Failed to process request", status.HTTP_500_INTERNAL_SERVER_ERROR)

        # Keep CORS headers on error responses so browsers can read the body
        origin = request.headers.get("origin")
        if origin and ("*" in ALLOWED_ORIGINS or origin.rstrip("/") in ALLOWED_ORIGINS):
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Vary"] = "Origin"

    return response


@app.exception_handler(StarletteHTTPException)
async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
    """Give methods the router rejects (HEAD, TRACE) the same body as the proxy."""
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        response = error_json("Method not allowed", status.HTTP_405_METHOD_NOT_ALLOWED)
        response.headers.update(exc.headers or {})
        return response
    return await http_exception_handler(request, exc)


@app.get("/healthz", tags=["health"])
async def healthz():
    """Liveness probe; the proxy keeps no state worth checking."""
    return {
        "status": "ok",
        "uptime_s": round(time.time() - _BOOT_TS, 1),
        "pid": os.getpid(),
    }


@app.get("/")
async def root():
    return {"message": "Welcome to FindRide API"}


app.include_router(distance.router, prefix=settings.API_PREFIX)
