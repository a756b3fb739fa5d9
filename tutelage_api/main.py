"""Tutelage content API (FastAPI application)."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from tutelage_api.core.auth.router import router as auth_router
from tutelage_api.core.config import settings
from tutelage_api.core.exceptions import AppException
from tutelage_api.core.exceptions.handlers import (
    app_exception_handler,
    http_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from tutelage_api.modules.resources.registry import ResourceRegistry, build_default_registry
from tutelage_api.modules.task_pdfs.router import router as task_pdfs_router

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info(
        "Starting with resource types: %s",
        ", ".join(t.value for t in app.state.resource_registry.resource_types),
    )
    yield


def create_app(registry: ResourceRegistry | None = None) -> FastAPI:
    """Create and configure FastAPI application."""
    configure_logging()

    app = FastAPI(
        title="Tutelage Content API",
        description="Task PDF attachments for videos, audios, stories, blogs and ESL resources",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.resource_registry = registry or build_default_registry()

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    # Routers
    app.include_router(auth_router, prefix="/api/v1")
    app.include_router(task_pdfs_router, prefix="/api/v1")

    return app


app = create_app()
