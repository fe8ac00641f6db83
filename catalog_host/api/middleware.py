"""Request correlation and error responses for the catalog API.

Every response carries the caller's ``X-Request-ID`` (or a generated one),
and every error leaves the service as the same ``ErrorResponse`` body.
Catalog errors map to status codes through ``CATALOG_ERRORS``.
"""

import time
from dataclasses import dataclass
from typing import Any
from uuid import uuid4

import structlog
from fastapi import FastAPI, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from catalog_host.domain.exceptions import (
    DomainError,
    InvalidPageRequestError,
    StoreUnavailableError,
)

logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Tag each request with a correlation id.

    The id is kept on ``request.state`` for error bodies, bound into the
    structlog context while the request runs, and echoed in the response.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        request.state.request_id = request_id
        started = time.perf_counter()

        with structlog.contextvars.bound_contextvars(request_id=request_id):
            response = await call_next(request)
            logger.info(
                "Catalog request served",
                method=request.method,
                path=request.url.path,
                query=str(request.url.query) or None,
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


# ============================================================================
# Error Responses
# ============================================================================


@dataclass(frozen=True)
class ErrorMapping:
    """How a catalog exception is reported over HTTP.

    Attributes:
        status_code: Response status.
        error_code: Machine-readable code in the body.
        public_message: Fixed message; None means use the exception's own.
    """

    status_code: int
    error_code: str
    public_message: str | None = None


# Looked up along the exception MRO, so subclasses inherit their base mapping.
CATALOG_ERRORS: dict[type[DomainError], ErrorMapping] = {
    InvalidPageRequestError: ErrorMapping(status.HTTP_400_BAD_REQUEST, "INVALID_PAGE_REQUEST"),
    StoreUnavailableError: ErrorMapping(
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "STORE_UNAVAILABLE",
        "The catalog store is temporarily unavailable",
    ),
    DomainError: ErrorMapping(status.HTTP_400_BAD_REQUEST, "DOMAIN_ERROR"),
}


def error_response(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    details: list[Any] | None = None,
) -> JSONResponse:
    """Build the standard error body for a request."""
    return JSONResponse(
        status_code=status_code,
        content={
            "error_code": error_code,
            "message": message,
            "details": details or [],
            "request_id": getattr(request.state, "request_id", None),
        },
    )


def mapping_for(exc: DomainError) -> ErrorMapping:
    """Find the mapping of the closest mapped class of ``exc``."""
    for cls in type(exc).__mro__:
        if cls in CATALOG_ERRORS:
            return CATALOG_ERRORS[cls]
    return CATALOG_ERRORS[DomainError]


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Report a catalog exception with its mapped status and code."""
    mapping = mapping_for(exc)
    if mapping.status_code >= 500:
        logger.error(
            "Catalog request failed",
            path=request.url.path,
            error_code=mapping.error_code,
            **exc.details,
        )
    return error_response(
        request,
        mapping.status_code,
        mapping.error_code,
        mapping.public_message or exc.message,
    )


async def http_error_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Wrap route-raised HTTP errors in the standard body.

    Routes pass ``{"error_code", "message"}`` dicts as detail; plain string
    details get the generic ``ERROR`` code.
    """
    detail = exc.detail
    if isinstance(detail, dict):
        return error_response(
            request,
            exc.status_code,
            detail.get("error_code", "ERROR"),
            detail.get("message", str(detail)),
            detail.get("details"),
        )
    return error_response(request, exc.status_code, "ERROR", str(detail))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
    )
    return error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_ERROR",
        "An internal error occurred",
    )


def setup_middleware(app: FastAPI) -> None:
    """Install request correlation and the error handlers.

    Args:
        app: FastAPI application instance.
    """
    app.add_middleware(RequestIdMiddleware)
    app.add_exception_handler(HTTPException, http_error_handler)
    for exc_class in CATALOG_ERRORS:
        app.add_exception_handler(exc_class, domain_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
