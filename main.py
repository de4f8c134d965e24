"""
Wallet Master API - Main Application Entry Point
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import Depends, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.core.auth import resolve_auth_context
from app.api.core.logger import setup_logging
from app.api.core.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware
from app.api.db.database import create_storage
from app.api.db.storage import Storage
from app.api.utils.exceptions import WalletMasterException
from app.api.utils.handlers import (
    http_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
    wallet_master_exception_handler,
)
from app.api.v1.routes import auth, transaction, user
from app.api.v1.services.google import GoogleIdentityVerifier
from config import settings

setup_logging(settings.DEBUG)
logger = logging.getLogger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan - startup and shutdown events.

    Builds the storage backend unless one was injected, then initializes it.

    Args:
        app (FastAPI): FastAPI application instance

    Yields:
        None
    """
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Environment: {settings.ENVIRONMENT}")

    if app.state.storage is None:
        app.state.storage = create_storage(settings)

    try:
        await app.state.storage.initialize()
        logger.info("Storage initialization completed")
    except Exception as e:
        logger.error(f"Storage initialization failed: {str(e)}", exc_info=True)
        raise

    yield

    await app.state.storage.close()
    logger.info(f"Shutting down {settings.APP_NAME}")


def create_app(
    storage: Optional[Storage] = None,
    identity_verifier: Optional[GoogleIdentityVerifier] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        storage (Storage, optional): Storage backend; built from settings at startup when omitted
        identity_verifier (GoogleIdentityVerifier, optional): Google verifier

    Returns:
        FastAPI: Configured application
    """
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Wallet Master API with Google sign-in, cookie sessions and gasless transactions",
        debug=settings.DEBUG,
        lifespan=lifespan,
        dependencies=[Depends(resolve_auth_context)],
    )

    app.state.storage = storage
    app.state.identity_verifier = identity_verifier or GoogleIdentityVerifier()

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
        allow_headers=[
            "Content-Type",
            "Authorization",
            "X-Requested-With",
            "Accept",
            "Origin",
            "Access-Control-Request-Method",
            "Access-Control-Request-Headers",
        ],
        max_age=86400,
    )

    app.add_exception_handler(WalletMasterException, wallet_master_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    @app.get("/health", tags=["Health"])
    async def health_check():
        """
        Health check endpoint for service monitoring.

        Returns:
            dict: Service status and version information
        """
        return {
            "status": "healthy",
            "app_name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "session": {
                "cookie": settings.AUTH_COOKIE_NAME,
                "sameSite": "none" if settings.is_production else "lax",
            },
        }

    @app.get("/", tags=["Root"])
    async def root():
        """
        Root endpoint providing API information.

        Returns:
            dict: API name and documentation links
        """
        return {
            "message": f"Welcome to {settings.APP_NAME}",
            "version": settings.APP_VERSION,
            "docs": "/docs",
            "redoc": "/redoc",
        }

    app.include_router(auth.router, prefix=settings.API_PREFIX)
    app.include_router(user.router, prefix=settings.API_PREFIX)
    app.include_router(transaction.router, prefix=settings.API_PREFIX)

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting server on 0.0.0.0:{settings.APP_PORT}")
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.APP_PORT,
        reload=settings.DEBUG,
        log_config=None,
    )
