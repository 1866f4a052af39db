from __future__ import annotations

"""
Problem+JSON exception handlers (RFC 7807).

Registered by `movieshelf.main.create_app`. All errors are rendered as
application/problem+json with a stable schema; unexpected faults are logged
with their traceback and surfaced without internal details.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from movieshelf.core.exceptions import AppException
from movieshelf.middleware.request_id import get_request_id

logger = logging.getLogger("movieshelf.errors")


def _problem(
    title: str,
    detail: str,
    status_code: int,
    request: Request,
    *,
    extra: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    content: Dict[str, Any] = {
        "type": "about:blank",
        "title": title,
        "detail": detail,
        "status": status_code,
        "instance": str(request.url.path),
        "request_id": get_request_id(request) or "N/A",
    }
    if extra:
        content.update(extra)
    return JSONResponse(
        status_code=status_code,
        content=content,
        media_type="application/problem+json",
        headers=headers,
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    title = exc.__class__.__name__.replace("Exception", "").strip() or "Error"
    extra = {"details": exc.details} if exc.details is not None else None
    return _problem(title, exc.message, exc.status_code, request, extra=extra, headers=exc.headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:  # type: ignore
    title = exc.__class__.__name__.replace("Exception", "").strip() or "Error"
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return _problem(title, detail, exc.status_code, request, headers=getattr(exc, "headers", None))


def _json_safe_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    errors = []
    for err in exc.errors():
        errors.append(
            {
                "loc": [str(p) for p in err.get("loc", ())],
                "msg": str(err.get("msg", "")),
                "type": str(err.get("type", "")),
            }
        )
    return errors


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:  # type: ignore
    errors = _json_safe_errors(exc)
    if any(e["type"] == "json_invalid" for e in errors):
        detail = "Malformed JSON body."
    else:
        detail = "Validation error"
    return _problem(
        "Validation",
        detail,
        status.HTTP_400_BAD_REQUEST,
        request,
        extra={"errors": errors},
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:  # type: ignore
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _problem(
        "Internal Server Error",
        "An unexpected error occurred.",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        request,
    )


__all__ = [
    "app_exception_handler",
    "http_exception_handler",
    "validation_exception_handler",
    "global_exception_handler",
]
