# ABOUTME: FastAPI application factory with Jinja2 templates and database lifespan.
# ABOUTME: Serves the settings form and the scheduler trigger API.

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

import structlog
from fastapi import FastAPI
from fastapi.templating import Jinja2Templates

from smart_blogger.db.session import close_db, init_db
from smart_blogger.logging_config import configure_logging
from smart_blogger.web.routes import api, settings

logger = structlog.get_logger()

WEB_DIR = Path(__file__).parent
TEMPLATES_DIR = WEB_DIR / "templates"


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan context for database setup/teardown."""
    logger.info("app_startup")
    init_db()
    yield
    logger.info("app_shutdown")
    close_db()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    configure_logging()

    app = FastAPI(
        title="Smart Blogger",
        description="Imports, rewrites and publishes posts from RSS feeds",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

    app.include_router(settings.router)
    app.include_router(api.router)

    return app
