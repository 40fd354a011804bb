"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from browser_ide import __version__
from browser_ide.api import health, routes
from browser_ide.api.middleware import RequestLoggingMiddleware
from browser_ide.config import settings
from browser_ide.core.exceptions import BrowserIDEError
from browser_ide.subhosting.client import SubhostingClient
from browser_ide.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    # Startup
    configure_logging()
    logger.info(
        "application.starting",
        version=__version__,
        environment=settings.app_env,
        org_id=app.state.subhosting.org_id,
        endpoint=app.state.subhosting.config.endpoint,
    )

    yield

    # Shutdown
    await app.state.subhosting.aclose()
    logger.info("application.shutdown")


def build_subhosting_client() -> SubhostingClient:
    """Create the Subhosting client from settings and the environment.

    Raises:
        ConfigurationError: If the access token or org ID is missing.
    """
    return SubhostingClient(
        settings.deploy_access_token or None,
        settings.deploy_org_id or None,
        endpoint=settings.subhosting_endpoint,
        timeout=settings.subhosting_timeout,
    )


def create_app(subhosting: SubhostingClient | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    The Subhosting client is built up front so missing credentials stop the
    server before it accepts any request.
    """
    if subhosting is None:
        subhosting = build_subhosting_client()

    app = FastAPI(
        title="Browser IDE",
        description="Minimal browser code editor and deployment dashboard for Deno Subhosting",
        version=__version__,
        docs_url="/docs" if settings.app_debug else None,
        redoc_url="/redoc" if settings.app_debug else None,
        lifespan=lifespan,
    )
    app.state.subhosting = subhosting

    app.add_middleware(RequestLoggingMiddleware)

    @app.exception_handler(BrowserIDEError)
    async def browser_ide_error_handler(
        request: Request, exc: BrowserIDEError
    ) -> JSONResponse:
        """Handle application-specific errors."""
        logger.error(
            "application_error",
            error=exc.message,
            path=request.url.path,
            details=exc.details,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": {
                    "code": type(exc).__name__.upper(),
                    "message": exc.message,
                    "details": exc.details,
                }
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle unexpected errors, e.g. the Subhosting API being unreachable."""
        logger.error(
            "unhandled_exception",
            error=str(exc),
            path=request.url.path,
            exc_info=True,
        )

        if settings.is_development:
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "error": {
                        "code": "INTERNAL_ERROR",
                        "message": str(exc),
                        "type": type(exc).__name__,
                    }
                },
            )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                }
            },
        )

    # Include routers
    app.include_router(health.router, tags=["health"])
    app.include_router(routes.router, tags=["dashboard"])

    # Anything else is a static asset
    app.mount("/", StaticFiles(directory=str(STATIC_DIR)), name="static")

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "browser_ide.main:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.is_development,
    )
