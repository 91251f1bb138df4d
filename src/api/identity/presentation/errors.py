"""Global exception handlers for the identity API.

Every failure leaves the API in one envelope:

    {"error": {"code": "...", "message": "..."}}

- IdentityError: its own status code and code
- RequestValidationError and ValueError from aggregate factories: 400
- anything else: 500, without internal details
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from identity.ports.exceptions import IdentityError

logger = structlog.get_logger()


def error_response(status_code: int, code: str, message: str) -> JSONResponse:
    """Build the uniform error envelope."""
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": code, "message": message}},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(IdentityError)
    async def identity_error_handler(request: Request, exc: IdentityError):
        if exc.status_code >= 500:
            logger.error(
                "identity_error",
                code=exc.code,
                message=exc.message,
                path=request.url.path,
            )
        else:
            logger.info(
                "identity_request_rejected",
                code=exc.code,
                message=exc.message,
                path=request.url.path,
            )
        return error_response(exc.status_code, exc.code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ):
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        logger.info("request_validation_failed", path=request.url.path, errors=details)
        return error_response(status.HTTP_400_BAD_REQUEST, "BAD_REQUEST", details)

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        logger.info("invalid_value", path=request.url.path, error=str(exc))
        return error_response(status.HTTP_400_BAD_REQUEST, "BAD_REQUEST", str(exc))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("unhandled_exception", path=request.url.path)
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "INTERNAL_ERROR",
            "An unexpected error occurred",
        )
