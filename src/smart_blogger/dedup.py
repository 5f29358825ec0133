# ABOUTME: Title-based duplicate check against the content repository.
# ABOUTME: Keeps no local index, so exact titles are caught across all feeds.

import structlog

from smart_blogger.interfaces import ContentRepository

log = structlog.get_logger()


class Deduplicator:
    """Asks the repository whether an entry with this exact title exists."""

    def __init__(self, repository: ContentRepository) -> None:
        self.repository = repository

    def is_duplicate(self, title: str) -> bool:
        exists = self.repository.exists_by_title(title)
        if exists:
            log.debug("duplicate_title", title=title)
        return exists
