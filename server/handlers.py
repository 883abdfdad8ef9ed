"""Exception handlers rendering the uniform error envelope."""
from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalog.config import Settings
from catalog.errors import CatalogError, MalformedRequestBody

from .schemas import ErrorBody, ErrorEnvelope

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str, details: Any = None) -> JSONResponse:
    envelope = ErrorEnvelope(error=ErrorBody(message=message, details=details))
    return JSONResponse(status_code=status_code, content=envelope.model_dump(mode="json"))


def _is_body_error(exc: RequestValidationError) -> bool:
    return any(error.get("loc", ())[:1] == ("body",) for error in exc.errors())


def register_exception_handlers(app: FastAPI, config: Settings) -> None:
    @app.exception_handler(CatalogError)
    async def _catalog_error(request: Request, exc: CatalogError) -> JSONResponse:
        return error_response(exc.status_code, exc.message, exc.details)

    @app.exception_handler(RequestValidationError)
    async def _request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        if _is_body_error(exc):
            malformed = MalformedRequestBody("Invalid JSON format", "Request body must be a valid JSON object")
            return error_response(malformed.status_code, malformed.message, malformed.details)
        return error_response(400, "Invalid request", [error.get("msg") for error in exc.errors()])

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # unmatched methods fall through to the static mount, which answers 405
        if exc.status_code in (404, 405):
            return error_response(404, "Endpoint not found", f"Path '{request.url.path}' does not exist")
        return error_response(exc.status_code, str(exc.detail), None)

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Server error on %s %s", request.method, request.url.path)
        return error_response(500, "Internal server error", str(exc) if config.debug else None)
