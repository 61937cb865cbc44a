"""Centralized exception handlers for the FastAPI application.

This module provides a unified approach to exception handling across all
API endpoints. Every rejected request, whatever raised it, is answered with
the same failure body; domain exceptions go through ``classify`` so that
technical causes never leak to the caller.

Error Response Format:
    {
        "detail": "Human-readable error message",
        "code": "MACHINE_READABLE_ERROR_CODE",
        "field": "offending field or empty string",
        "identifier": "correlation id of the request",
        "date": "ISO-8601 UTC timestamp"
    }

Usage:
    from tessera.presentation.api.exception_handlers import setup_exception_handlers

    app = FastAPI()
    setup_exception_handlers(app)
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tessera.domain.shared import (
    DomainException,
    ErrorCode,
    ErrorKind,
    Failure,
    classify,
    utc_now,
)
from tessera.presentation.api.middleware import MESSAGE_ID_HEADER

logger = logging.getLogger(__name__)


# =============================================================================
# Error Code to HTTP Status Mapping
# =============================================================================

ERROR_CODE_TO_STATUS: dict[ErrorCode, int] = {
    # 400 Bad Request - validation errors
    ErrorCode.INVALID_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_PARAMETERS: status.HTTP_400_BAD_REQUEST,
    ErrorCode.USER_ID_REQUIRED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.USER_NAME_REQUIRED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.USER_EMAIL_REQUIRED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.USER_PASSWORD_REQUIRED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.USER_ROLE_REQUIRED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.USER_NAME_TOO_LONG: status.HTTP_400_BAD_REQUEST,
    ErrorCode.USER_EMAIL_TOO_LONG: status.HTTP_400_BAD_REQUEST,
    ErrorCode.USER_EMAIL_INVALID: status.HTTP_400_BAD_REQUEST,
    # 401 Unauthorized - authentication errors
    ErrorCode.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.TOKEN_EXPIRED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.TOKEN_INVALID: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.TOKEN_MISSING: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    # 403 Forbidden
    ErrorCode.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    # 404 Not Found
    ErrorCode.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    # 409 Conflict - already exists
    ErrorCode.USER_ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    # 500 Internal Server Error
    ErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    # 501 Not Implemented
    ErrorCode.UNSUPPORTED_OPERATION: status.HTTP_501_NOT_IMPLEMENTED,
}

# Framework-level HTTP errors that have a dedicated code
_HTTP_STATUS_TO_CODE: dict[int, ErrorCode] = {
    status.HTTP_401_UNAUTHORIZED: ErrorCode.UNAUTHORIZED,
    status.HTTP_403_FORBIDDEN: ErrorCode.FORBIDDEN,
    status.HTTP_405_METHOD_NOT_ALLOWED: ErrorCode.UNSUPPORTED_OPERATION,
}


def _status_for(failure: Failure) -> int:
    try:
        return ERROR_CODE_TO_STATUS[ErrorCode(failure.code)]
    except (KeyError, ValueError):
        return status.HTTP_500_INTERNAL_SERVER_ERROR


def _create_error_response(
    request: Request,
    status_code: int,
    failure: Failure,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Create a standardized error response.

    The correlation id is set on the response here as well, since the
    catch-all handler answers from outside ``MessageIdMiddleware``.
    """
    message_id = getattr(request.state, "message_id", "")
    headers = dict(headers or {})
    if message_id:
        headers[MESSAGE_ID_HEADER] = message_id

    return JSONResponse(
        status_code=status_code,
        content={
            "detail": failure.message,
            "code": failure.code,
            "field": failure.field,
            "identifier": message_id,
            "date": utc_now().isoformat(),
        },
        headers=headers,
    )


def _offending_field(errors: list[dict[str, Any]]) -> str:
    """Name of the first field pydantic complained about, if any."""
    for error in errors:
        names = [part for part in error.get("loc", ()) if isinstance(part, str)]
        # First element is the location kind (body, path, query, ...)
        if len(names) > 1:
            return names[-1]
    return ""


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI application.

    This should be called during app initialization to enable centralized
    exception handling for all domain exceptions.

    Parameters
    ----------
    app
        The FastAPI application instance
    """

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle all domain exceptions with structured response.

        Business failures are returned as-is. Technical failures are logged
        with their cause and collapsed to ``INTERNAL_ERROR``.
        """
        outcome = classify(exc)
        message_id = getattr(request.state, "message_id", "")

        if outcome.kind is ErrorKind.BUSINESS:
            logger.warning(
                "[%s] Domain exception on %s %s: %s (code=%s, details=%s)",
                message_id,
                request.method,
                request.url.path,
                exc.message,
                exc.code.value,
                exc.details,
            )
        else:
            logger.error(
                "[%s] Technical failure on %s %s: %r",
                message_id,
                request.method,
                request.url.path,
                exc,
                exc_info=exc,
            )

        return _create_error_response(
            request,
            status_code=_status_for(outcome.failure),
            failure=outcome.failure,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle request-schema errors (wrong types, unparsable bodies)."""
        errors = list(exc.errors())
        if any(error.get("type") == "json_invalid" for error in errors):
            failure = Failure.of(ErrorCode.INVALID_REQUEST)
        else:
            failure = Failure(
                code=ErrorCode.INVALID_PARAMETERS.value,
                message=ErrorCode.INVALID_PARAMETERS.message,
                field=_offending_field(errors),
            )

        logger.warning(
            "Request validation failed on %s %s: %s",
            request.method,
            request.url.path,
            failure.field or failure.code,
        )
        return _create_error_response(
            request,
            status_code=status.HTTP_400_BAD_REQUEST,
            failure=failure,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        """Handle framework HTTP errors (unknown routes, wrong methods)."""
        code = _HTTP_STATUS_TO_CODE.get(exc.status_code)
        if code is None:
            code = (
                ErrorCode.INTERNAL_ERROR
                if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR
                else ErrorCode.INVALID_REQUEST
            )
            status_code = exc.status_code
        else:
            status_code = ERROR_CODE_TO_STATUS[code]

        return _create_error_response(
            request,
            status_code=status_code,
            failure=Failure.of(code),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unhandled exceptions with consistent error format.

        This is the catch-all handler for any exceptions not handled by
        the domain-specific handlers above. It ensures clients always
        receive a consistent error response format.
        """
        logger.exception(
            "Unhandled exception on %s %s: %s",
            request.method,
            request.url.path,
            exc,
        )
        outcome = classify(exc)
        return _create_error_response(
            request,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            failure=outcome.failure,
        )
