"""Global exception handlers — translate domain errors to HTTP responses.

Each domain exception maps to a specific HTTP status code and the
standard ``{"status": "error", "message": "..."}`` envelope.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from repo_browser.domain.exceptions import (
    EmptyInputError,
    EntryNotFoundError,
    FetchError,
    GitHubRateLimitError,
    InvalidFormatError,
    NoFileContentError,
    NoRepositoryLoadedError,
    PathNotFoundError,
    RepoBrowserError,
    RepositoryAccessDeniedError,
    RepositoryNotFoundError,
)

logger = logging.getLogger(__name__)

_EXCEPTION_STATUS: dict[type[RepoBrowserError], int] = {
    EmptyInputError: 422,
    InvalidFormatError: 422,
    RepositoryNotFoundError: 404,
    PathNotFoundError: 404,
    RepositoryAccessDeniedError: 403,
    GitHubRateLimitError: 429,
    FetchError: 502,
    NoRepositoryLoadedError: 409,
    EntryNotFoundError: 404,
    NoFileContentError: 409,
}


def _status_for(exc: RepoBrowserError) -> int:
    """Most specific mapped status for *exc*, walking its class hierarchy."""
    for cls in type(exc).__mro__:
        if cls in _EXCEPTION_STATUS:
            return _EXCEPTION_STATUS[cls]
    return 500


def _error_json(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "message": message},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application."""

    # ── Domain exceptions ───────────────────────────────────────────────

    @app.exception_handler(RepoBrowserError)
    async def domain_handler(request: Request, exc: RepoBrowserError) -> JSONResponse:
        status_code = _status_for(exc)
        if isinstance(exc, FetchError) and exc.detail:
            logger.warning("%s (upstream %s): %s", exc, exc.status_code, exc.detail)
        else:
            logger.warning("%s: %s", type(exc).__name__, exc)
        return _error_json(status_code, str(exc))

    # ── Pydantic / FastAPI validation errors ────────────────────────────

    @app.exception_handler(RequestValidationError)
    async def validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        messages = []
        for err in exc.errors():
            loc = " → ".join(str(p) for p in err.get("loc", []))
            messages.append(f"{loc}: {err.get('msg', 'validation error')}")
        return _error_json(422, "; ".join(messages))

    # ── Catch-all for unexpected errors ─────────────────────────────────

    @app.exception_handler(Exception)
    async def generic_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception")
        return _error_json(500, "An unexpected error occurred. Please try again later.")
