"""Main application entry point with FastAPI."""

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware

from . import email_service
from .config import get_settings
from .database import check_database_health, dispose_engine
from .errors import RecipeIdeasError
from .routes import router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def validate_environment():
    """Validate all required environment variables on startup."""
    try:
        settings = get_settings()
        logger.info("Environment variables validated successfully")
        return settings
    except ValidationError as e:
        logger.error("ERROR: Missing or invalid environment variables:")
        logger.error(str(e))
        sys.exit(1)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown."""
    # Startup
    logger.info("Starting Recipe Ideas API...")
    validate_environment()

    if not email_service.is_configured():
        logger.warning("Resend API key not set; recipe reports will fail")

    logger.info("Recipe Ideas API started successfully")

    yield

    # Shutdown
    logger.info("Shutting down Recipe Ideas API...")
    dispose_engine()
    logger.info("Recipe Ideas API shutdown complete")


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title="Recipe Ideas",
        description="Recipe discovery API: preferences, favorites and dietary feedback",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret_key,
        session_cookie=settings.session_cookie_name,
        same_site="lax",
    )

    @app.exception_handler(RecipeIdeasError)
    async def handle_app_error(request: Request, exc: RecipeIdeasError):
        return JSONResponse({"error": exc.message}, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        logger.info(f"Invalid request to {request.url.path}: {exc.errors()}")
        return JSONResponse({"error": "Invalid request parameters"}, status_code=400)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse({"error": str(exc.detail)}, status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse({"error": "Internal server error"}, status_code=500)

    @app.get("/health")
    async def health_check():
        """Health check endpoint.

        Verifies database connection and returns status.
        """
        db_healthy = check_database_health()

        return {
            "status": "healthy" if db_healthy else "unhealthy",
            "database": "connected" if db_healthy else "disconnected",
            "email": "configured" if email_service.is_configured() else "not_configured",
        }

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "name": "Recipe Ideas",
            "status": "running",
            "version": "1.0.0",
        }

    app.include_router(router)
    return app


# Create FastAPI app
app = create_app()
