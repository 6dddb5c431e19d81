"""Aqar Property Records Backend - Main Application Entry Point."""

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .config import Settings, settings
from .core.exceptions import AqarException
from .core.logging import (
    RequestIdMiddleware,
    get_logger,
    setup_logging,
    shutdown_logging,
)
from .modules.auth import router as auth_router
from .modules.records import router as records_router
from .services import AppServices

logger = get_logger(__name__)

INVALID_REQUEST_MESSAGE = "Invalid request"


def create_app(app_settings: Settings = settings) -> FastAPI:
    """Build the application for the given settings."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        # Startup
        setup_logging(app_settings)
        logger.info("Starting Aqar application...")
        logger.info(f"Environment: {app_settings.app_env}")
        logger.info(f"Debug mode: {app_settings.app_debug}")

        services = AppServices(app_settings)
        app.state.services = services
        await services.start()
        yield
        # Shutdown
        logger.info("Shutting down Aqar application...")
        await services.stop()
        shutdown_logging()

    app = FastAPI(
        title=app_settings.api_title,
        description="Property records, lease contracts and ledgers for the Aqar UI",
        version=app_settings.app_version,
        docs_url=f"{app_settings.api_prefix}/docs" if app_settings.app_debug else None,
        redoc_url=f"{app_settings.api_prefix}/redoc" if app_settings.app_debug else None,
        openapi_url=(
            f"{app_settings.api_prefix}/openapi.json" if app_settings.app_debug else None
        ),
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request ID middleware for request tracing
    app.add_middleware(RequestIdMiddleware)

    @app.exception_handler(AqarException)
    async def aqar_exception_handler(request: Request, exc: AqarException):
        """Handle application exceptions with their own status code."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "error": exc.message},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Render malformed request bodies like any other client error."""
        message = INVALID_REQUEST_MESSAGE
        errors = exc.errors()
        if errors:
            first = errors[0]
            location = ".".join(
                str(part) for part in first.get("loc", ()) if part != "body"
            )
            message = f"{message}: {location or 'body'}: {first.get('msg')}"
        logger.info(message)
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": message},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unhandled exceptions."""
        logger.exception(f"Unhandled exception: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": str(exc) if app_settings.app_debug else "Internal server error",
            },
        )

    @app.get(f"{app_settings.api_prefix}/health", tags=["Health"])
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": app_settings.app_version,
            "env": app_settings.app_env,
        }

    app.include_router(auth_router, prefix=app_settings.api_prefix)
    app.include_router(records_router, prefix=app_settings.api_prefix)

    # Built UI, mounted last so API routes win
    if app_settings.static_dir and os.path.isdir(app_settings.static_dir):
        app.mount(
            "/",
            StaticFiles(directory=app_settings.static_dir, html=True),
            name="static",
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "aqar_backend.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.app_debug,
    )
