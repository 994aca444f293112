from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from taskapi.domain.errors import DecodeError, NotFound, StorageError, ValidationError

access_logger = logging.getLogger("taskapi.access")
logger = logging.getLogger(__name__)

INTERNAL_ERROR = "Internal server error"

CORS_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
CORS_HEADERS = [
    "Content-Type",
    "Content-Length",
    "Accept-Encoding",
    "Authorization",
    "Accept",
    "Origin",
    "Cache-Control",
    "X-Requested-With",
]


def _log_request(request: Request, status_code: int, started: float) -> None:
    duration_ms = (time.perf_counter() - started) * 1000
    client = request.client.host if request.client else "-"
    access_logger.info(
        "[%s] %s HTTP/%s - Status: %d - Duration: %.2fms - IP: %s",
        request.method,
        request.url.path,
        request.scope.get("http_version", "1.1"),
        status_code,
        duration_ms,
        client,
    )


def install_middleware(app: FastAPI) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )

    # Registered last so it wraps CORS and sees every response. Unhandled
    # errors become a JSON 500 here, before debug mode can render a traceback.
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("%s %s failed", request.method, request.url.path)
            response = _error(500, INTERNAL_ERROR)
        _log_request(request, response.status_code, started)
        return response


def _error(status_code: int, message: str, details: str | None = None) -> JSONResponse:
    body = {"error": message}
    if details is not None:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=body)


def _describe(errors) -> str:
    parts = []
    for error in errors:
        location = ".".join(str(part) for part in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts)


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        decode_error = DecodeError(_describe(exc.errors()))
        return _error(400, DecodeError.message, decode_error.detail)

    @app.exception_handler(ValidationError)
    async def handle_validation(request: Request, exc: ValidationError):
        return _error(400, exc.detail)

    @app.exception_handler(NotFound)
    async def handle_not_found(request: Request, exc: NotFound):
        return _error(404, exc.detail)

    @app.exception_handler(StorageError)
    async def handle_storage(request: Request, exc: StorageError):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.__cause__ or exc)
        return _error(500, exc.detail)
