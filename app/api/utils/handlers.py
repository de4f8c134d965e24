"""
Exception handlers for the Wallet Master API.

This module provides global exception handlers for the FastAPI application.
"""

import logging
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.utils.exceptions import ErrorCode, WalletMasterException
from app.api.utils.response import error_response
from app.api.utils.validation import format_validation_errors
from config import settings

logger = logging.getLogger(__name__)


async def wallet_master_exception_handler(request: Request, exc: WalletMasterException):
    """
    Global exception handler for all WalletMasterException and subclasses.

    Args:
        request (Request): The request that caused the exception
        exc (WalletMasterException): The exception instance

    Returns:
        JSONResponse: Formatted error response
    """
    logger.warning(f"{exc.error_code.value}: {exc.message} ({request.method} {request.url.path})")

    return error_response(
        status_code=exc.status_code,
        message=exc.message,
        error=exc.error_code.value,
        details=exc.details,
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Global exception handler for request validation errors.

    Args:
        request (Request): The request that caused the exception
        exc (RequestValidationError): The validation exception

    Returns:
        JSONResponse: 400 response with per-field details
    """
    details = format_validation_errors(exc.errors())
    logger.warning(f"Validation error on {request.method} {request.url.path}: {details}")

    return error_response(
        status_code=status.HTTP_400_BAD_REQUEST,
        message="Invalid request data. Please check your input.",
        error=ErrorCode.VALIDATION_ERROR.value,
        details=details,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render framework level HTTP errors (unknown routes, bad methods) in the API error shape."""
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return error_response(
            status_code=exc.status_code,
            message=f"Route {request.method} {request.url.path} not found",
            error=ErrorCode.NOT_FOUND.value,
        )

    return error_response(
        status_code=exc.status_code,
        message=str(exc.detail),
        error="HTTP_ERROR",
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    """
    Last resort handler mapping unexpected exceptions to a generic 500.

    The exception text is only exposed in development.
    """
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {str(exc)}", exc_info=exc)

    return error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        message="An unexpected error occurred",
        error=ErrorCode.INTERNAL_ERROR.value,
        details=str(exc) if settings.is_development else None,
    )
