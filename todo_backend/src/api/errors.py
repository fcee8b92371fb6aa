"""
Mapping of domain errors onto RPC error codes, plus the FastAPI exception
handlers that render them.

    NotFoundError    -> not_found            (404)
    ValidationError  -> invalid_argument     (400)
    StateError       -> failed_precondition  (400)
    anything else    -> internal             (500)
"""
from __future__ import annotations

import logging
from typing import Tuple

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..domain.todo import NotFoundError, StateError, TodoError, ValidationError

logger = logging.getLogger(__name__)

_INTERNAL = ("internal", status.HTTP_500_INTERNAL_SERVER_ERROR)


# PUBLIC_INTERFACE
def to_rpc_code(exc: BaseException) -> Tuple[str, int]:
    """Return (rpc code, http status) for an exception."""
    if isinstance(exc, NotFoundError):
        return "not_found", status.HTTP_404_NOT_FOUND
    if isinstance(exc, ValidationError):
        return "invalid_argument", status.HTTP_400_BAD_REQUEST
    if isinstance(exc, StateError):
        return "failed_precondition", status.HTTP_400_BAD_REQUEST
    return _INTERNAL


def _error_response(code: str, http_status: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=http_status, content={"code": code, "message": message})


# PUBLIC_INTERFACE
def register_error_handlers(app: FastAPI) -> None:
    """Register handlers for domain errors, request validation errors and the catch-all."""

    @app.exception_handler(TodoError)
    async def todo_error_handler(request: Request, exc: TodoError) -> JSONResponse:
        code, http_status = to_rpc_code(exc)
        if http_status >= 500:
            logger.error(
                f"Internal error on {request.url.path}: {exc}",
                exc_info=exc,
                extra={"error_code": code},
            )
            return _error_response(code, http_status, "internal error")
        return _error_response(code, http_status, str(exc))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning(f"Malformed request on {request.url.path}: {exc.errors()}")
        details = "; ".join(
            f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}" for e in exc.errors()
        )
        return _error_response(
            "invalid_argument", status.HTTP_400_BAD_REQUEST, f"malformed request: {details}"
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
        return _error_response(*_INTERNAL, "internal error")
