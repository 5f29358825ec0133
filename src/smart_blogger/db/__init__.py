# ABOUTME: Database module initialization.
# ABOUTME: Exports core database components for the content repository.

from smart_blogger.db.models import Base, Category, Entry, Media, Option, ScheduledJob
from smart_blogger.db.session import get_session, init_db

__all__ = [
    "Base",
    "Category",
    "Entry",
    "Media",
    "Option",
    "ScheduledJob",
    "get_session",
    "init_db",
]
