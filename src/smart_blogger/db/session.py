# ABOUTME: Database session management for SQLAlchemy.
# ABOUTME: Provides engine and session factory, a commit/rollback context manager, and init_db.

from collections.abc import Iterator
from contextlib import contextmanager

import structlog
from sqlalchemy import Engine, create_engine, select
from sqlalchemy.orm import Session, sessionmaker

from smart_blogger.config import DEFAULT_CATEGORY_ID, get_settings
from smart_blogger.db.models import Base, Category

log = structlog.get_logger()

_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def get_engine() -> Engine:
    """Get or create the database engine."""
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = create_engine(settings.database_url, echo=settings.db_echo)
    return _engine


def get_session_factory() -> sessionmaker[Session]:
    """Get or create the session factory."""
    global _session_factory
    if _session_factory is None:
        _session_factory = sessionmaker(get_engine(), expire_on_commit=False)
    return _session_factory


@contextmanager
def get_session() -> Iterator[Session]:
    """Context manager for database sessions with automatic commit/rollback.

    Usage:
        with get_session() as session:
            result = session.execute(query)
    """
    session = get_session_factory()()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def get_db_session() -> Iterator[Session]:
    """FastAPI dependency for database sessions."""
    with get_session() as session:
        yield session


def create_schema(engine: Engine) -> None:
    """Create all tables and the default category on an engine."""
    Base.metadata.create_all(engine)
    with Session(engine) as session:
        exists = session.execute(
            select(Category.id).where(Category.id == DEFAULT_CATEGORY_ID)
        ).scalar_one_or_none()
        if exists is None:
            session.add(Category(id=DEFAULT_CATEGORY_ID, name="Uncategorized"))
            session.commit()


def init_db() -> None:
    """Initialize database tables."""
    create_schema(get_engine())
    log.info("database_initialized")


def close_db() -> None:
    """Dispose the engine and forget the session factory."""
    global _engine, _session_factory
    if _engine is not None:
        _engine.dispose()
        _engine = None
        _session_factory = None
        log.info("database_closed")
