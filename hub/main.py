# 📄 File: hub/main.py
#
# 🧭 Purpose (Layman Explanation):
# The control center that starts the back office: it opens the database, makes sure the tables
# exist, plugs in all the endpoints, and closes everything cleanly when the service stops.
#
# 🧪 Purpose (Technical Summary):
# FastAPI application factory and entry point. The lifespan builds the per-application database,
# session and security objects onto ``app.state`` (no module globals), syncs the schema, and
# disposes the engine on shutdown. Middleware, exception handlers and v1 routers are wired here.
#
# 🔗 Dependencies:
# - FastAPI framework, uvicorn
# - hub.shared.config.settings
# - hub.shared.infrastructure.database (connection and session managers)
# - hub.api (middleware and v1 router)
#
# 🔄 Connected Modules / Calls From:
# - uvicorn server startup
# - tests (create_application with test settings)

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hub.api import API_PREFIX, CURRENT_VERSION
from hub.api.middleware.error_handling import (
    ErrorHandlingMiddleware,
    create_error_response,
    hub_exception_response,
)
from hub.api.middleware.logging import RequestLoggingMiddleware
from hub.api.v1.router import api_v1_router
from hub.modules import register_models
from hub.shared.config.settings import Settings, get_settings
from hub.shared.core.exceptions import HubException
from hub.shared.core.security import SecurityManager
from hub.shared.infrastructure.database import DatabaseConnectionManager, DatabaseSessionManager
from hub.shared.utils.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Startup: database connection, schema sync, session and security managers.
    Shutdown: engine disposal.
    """
    settings: Settings = app.state.settings
    setup_logging(log_level=settings.LOG_LEVEL, log_format=settings.LOG_FORMAT)

    logger.info(f"🚀 {settings.APP_NAME} starting up ({settings.ENVIRONMENT})...")

    db = DatabaseConnectionManager(settings)
    await db.initialize()
    logger.info("✅ Database connection initialized")

    try:
        register_models()
        await db.sync_schema()
        logger.info("✅ Database schema synchronized")

        app.state.db = db
        app.state.sessions = DatabaseSessionManager(db)
        app.state.security = SecurityManager(settings)
        logger.info(f"✅ {settings.APP_NAME} startup complete")

        yield  # Application is running

    finally:
        logger.info(f"🔄 {settings.APP_NAME} shutting down...")
        await db.close()
        logger.info("✅ Database connections closed")


def create_application(settings: Optional[Settings] = None) -> FastAPI:
    """
    Application factory function.

    Args:
        settings: Settings to build the app with; the environment's when omitted

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        lifespan=lifespan,
        debug=settings.DEBUG,
    )
    app.state.settings = settings

    # =========================================================================
    # MIDDLEWARE CONFIGURATION (last added runs first)
    # =========================================================================

    app.add_middleware(ErrorHandlingMiddleware, settings=settings)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    # =========================================================================
    # EXCEPTION HANDLERS
    # =========================================================================

    @app.exception_handler(HubException)
    async def hub_exception_handler(request: Request, exc: HubException) -> JSONResponse:
        """Handle domain exceptions raised by services and endpoints."""
        return hub_exception_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        validation_errors = [
            {
                "field": ".".join(str(loc) for loc in error.get("loc", [])),
                "message": error.get("msg", "Validation error"),
                "type": error.get("type", "validation_error"),
            }
            for error in exc.errors()
        ]
        return create_error_response(
            request,
            error_code="VALIDATION_ERROR",
            message="Request validation failed",
            status_code=422,
            details={"validation_errors": validation_errors},
        )

    # =========================================================================
    # ROUTER REGISTRATION
    # =========================================================================

    app.include_router(api_v1_router, prefix=f"{API_PREFIX}/{CURRENT_VERSION}")

    @app.get("/", include_in_schema=False)
    async def root() -> dict:
        """Root endpoint with API information."""
        return {
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "docs_url": "/docs" if settings.DEBUG else None,
            "health_check": f"{API_PREFIX}/{CURRENT_VERSION}/health",
            "api_base": f"{API_PREFIX}/{CURRENT_VERSION}",
        }

    return app


# Create the FastAPI application
app = create_application()


def main():
    """
    Run the application with uvicorn.

    Used by the ``stexcore-hub`` console script and ``python -m hub.main``.
    """
    settings = get_settings()
    uvicorn.run(
        "hub.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD and settings.is_development,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
