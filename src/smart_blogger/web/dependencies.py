# ABOUTME: FastAPI dependency injection for database sessions, repositories and auth.
# ABOUTME: Provides reusable dependencies for route handlers.

from collections.abc import Iterator
from typing import Annotated

import structlog
from fastapi import Depends, HTTPException, Request
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session

from smart_blogger.config import get_settings
from smart_blogger.db.repository import CategoryRepository, OptionRepository
from smart_blogger.db.session import get_db_session

log = structlog.get_logger()

DbSession = Annotated[Session, Depends(get_db_session)]


def get_templates(request: Request) -> Jinja2Templates:
    """Get Jinja2 templates from app state."""
    return request.app.state.templates


Templates = Annotated[Jinja2Templates, Depends(get_templates)]


def get_option_repository(session: DbSession) -> Iterator[OptionRepository]:
    yield OptionRepository(session)


def get_category_repository(session: DbSession) -> Iterator[CategoryRepository]:
    yield CategoryRepository(session)


OptionRepo = Annotated[OptionRepository, Depends(get_option_repository)]
CategoryRepo = Annotated[CategoryRepository, Depends(get_category_repository)]


def verify_scheduler_token(request: Request) -> None:
    """Check the bearer token on scheduler requests.

    No token configured means the trigger is open (development).

    Raises:
        HTTPException: If a token is configured and the request does not carry it.
    """
    settings = get_settings()
    if settings.scheduler_token is None:
        log.debug("scheduler_auth_skipped", reason="no_token_configured")
        return

    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        log.warning("scheduler_missing_authorization")
        raise HTTPException(status_code=401, detail="Authorization header required")

    if auth_header[7:] != settings.scheduler_token.get_secret_value():
        log.warning("scheduler_invalid_token")
        raise HTTPException(status_code=401, detail="Invalid token")


SchedulerVerified = Annotated[None, Depends(verify_scheduler_token)]
