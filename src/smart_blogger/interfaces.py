# ABOUTME: Narrow collaborator contracts consumed by the pipeline core.
# ABOUTME: The db package provides the concrete implementations; tests provide fakes.

from typing import Any, Protocol


class ConfigStore(Protocol):
    """Key-value option store edited through the admin settings form."""

    def get(self, key: str, default: Any = None) -> Any: ...


class ContentRepository(Protocol):
    """Create/read primitives of the content repository."""

    def exists_by_title(self, title: str) -> bool: ...

    def create_entry(
        self, title: str, body: str, status: str, author: int, category: int
    ) -> int:
        """Create an entry and return its id. Raises PublishError."""
        ...

    def attach_media(self, source_url: str, entry_id: int, alt_text: str) -> int:
        """Download an image, attach it to an entry and return the media id. Raises MediaError."""
        ...

    def set_featured_image(self, entry_id: int, media_id: int) -> None: ...


class Scheduler(Protocol):
    """Recurring-job registration."""

    def schedule(self, job: str, interval_seconds: int) -> bool: ...

    def unschedule(self, job: str) -> bool: ...
