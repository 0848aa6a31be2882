"""
Tiny CRM API - Main Application

Wires routers, middleware, problem-detail error handlers and logging.
Schema creation runs at startup.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
import logging

from tinycrm.api.router import api_router
from tinycrm.config import settings
from tinycrm.database import init_db
from tinycrm.exceptions import register_exception_handlers
from tinycrm.middleware import CorrelationIdMiddleware, CorrelationLogFilter

VERSION = "1.0.0"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"


def configure_logging() -> None:
    handler = logging.StreamHandler()
    handler.addFilter(CorrelationLogFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else settings.LOG_LEVEL,
        handlers=[handler],
        force=True,
    )


configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info("Starting Tiny CRM API...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    # Don't log full database URL, just the driver
    logger.info(f"Database driver: {settings.DATABASE_URL.split('://', 1)[0]}")
    await init_db()
    logger.info("Database initialized successfully")
    yield
    logger.info("Shutting down Tiny CRM API...")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Tiny CRM API",
        description="Companies, products, remit information and invoices",
        version=VERSION,
        docs_url=None if settings.is_production else "/docs",
        redoc_url=None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.FRONTEND_URL],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(CorrelationIdMiddleware)

    register_exception_handlers(app)
    app.include_router(api_router, prefix="/api")

    @app.get("/", include_in_schema=False)
    async def index():
        """Single-page front end."""
        return FileResponse(settings.TEMPLATES_DIR / "index.html")

    @app.get("/health")
    async def health_check():
        return {
            "status": "healthy",
            "version": VERSION,
            "environment": settings.ENVIRONMENT,
        }

    return app


app = create_app()
