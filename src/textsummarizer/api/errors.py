"""Exception handlers mapping the error taxonomy to JSON responses."""

import logging
from collections.abc import Sequence
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from textsummarizer.domain.errors import BadRequestError, SummarizerAppError

logger = logging.getLogger(__name__)

_LOCATION_ROOTS = {"body", "query", "path", "header", "cookie"}


def flatten_validation_errors(errors: Sequence[Any]) -> dict[str, Any]:
    """Group validation messages into form-level and per-field lists."""
    form_errors: list[str] = []
    field_errors: dict[str, list[str]] = {}

    for err in errors:
        loc = list(err.get("loc", ()))
        if loc and loc[0] in _LOCATION_ROOTS:
            loc = loc[1:]
        if not loc or err.get("type") == "json_invalid":
            form_errors.append(err.get("msg", "Invalid request"))
            continue
        field = ".".join(str(part) for part in loc)
        field_errors.setdefault(field, []).append(err.get("msg", "Invalid value"))

    return {"formErrors": form_errors, "fieldErrors": field_errors}


def rate_limit_headers(
    request: Request, headers: dict[str, str] | None = None
) -> dict[str, str] | None:
    """Merge the request's RateLimit-* headers, if it was counted, with headers."""
    merged: dict[str, str] = {}
    decision = getattr(request.state, "rate_limit", None)
    if decision is not None:
        merged.update(decision.headers())
    if headers:
        merged.update(headers)
    return merged or None


async def app_error_handler(request: Request, exc: SummarizerAppError) -> JSONResponse:
    """Render a SummarizerAppError as its structured JSON body."""
    return JSONResponse(
        exc.to_dict(),
        status_code=exc.status_code,
        headers=rate_limit_headers(request, exc.headers),
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render request validation failures as 400 bad_request."""
    error = BadRequestError(details=flatten_validation_errors(exc.errors()))
    return JSONResponse(
        error.to_dict(),
        status_code=error.status_code,
        headers=rate_limit_headers(request),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log anything unanticipated and answer with a bare server_error."""
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        {"error": "server_error"}, status_code=500, headers=rate_limit_headers(request)
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error handlers on an application."""
    app.add_exception_handler(SummarizerAppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
