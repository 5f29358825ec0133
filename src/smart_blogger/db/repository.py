# ABOUTME: Repository classes for database access patterns.
# ABOUTME: Provides EntryRepository (content repository), OptionRepository and CategoryRepository.

import mimetypes
from collections.abc import Sequence
from pathlib import PurePosixPath
from typing import Any
from urllib.parse import urlparse
from uuid import uuid4

import httpx
import structlog
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from smart_blogger.config import Settings, get_settings
from smart_blogger.db.models import Category, Entry, Media, Option
from smart_blogger.exceptions import MediaError, PublishError

log = structlog.get_logger()


class EntryRepository:
    """Content repository backed by the entries and media tables."""

    def __init__(
        self,
        session: Session,
        settings: Settings | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self.session = session
        self.settings = settings or get_settings()
        self._client = client

    @property
    def client(self) -> httpx.Client:
        """Lazy-initialized HTTP client for image downloads."""
        if self._client is None:
            self._client = httpx.Client(
                timeout=self.settings.image_timeout,
                headers={"User-Agent": self.settings.feed_user_agent},
                follow_redirects=True,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> "EntryRepository":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def exists_by_title(self, title: str) -> bool:
        """Check for an entry with exactly this title."""
        result = self.session.execute(select(Entry.id).where(Entry.title == title).limit(1))
        return result.scalar_one_or_none() is not None

    def create_entry(self, title: str, body: str, status: str, author: int, category: int) -> int:
        """Insert an entry and return its id.

        Raises:
            PublishError: If the insert fails.
        """
        entry = Entry(
            title=title,
            body=body,
            status=status,
            author_id=author,
            category_id=category,
        )
        try:
            self.session.add(entry)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise PublishError(f"could not create entry {title!r}: {e}") from e
        return entry.id

    def attach_media(self, source_url: str, entry_id: int, alt_text: str) -> int:
        """Download an image and attach it to an entry.

        Args:
            source_url: Image URL.
            entry_id: Entry the image belongs to.
            alt_text: Alternative text stored with the image.

        Returns:
            ID of the new media row.

        Raises:
            MediaError: If the download fails, is not an image, or is too large.
        """
        try:
            response = self.client.get(source_url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise MediaError(f"download failed for {source_url}: {e}") from e

        mime_type = response.headers.get("content-type", "").split(";")[0].strip().lower()
        if not mime_type.startswith("image/"):
            raise MediaError(f"{source_url} is not an image ({mime_type or 'unknown type'})")

        data = response.content
        if len(data) > self.settings.image_max_bytes:
            raise MediaError(f"{source_url} exceeds {self.settings.image_max_bytes} bytes")

        media = Media(
            entry_id=entry_id,
            source_url=source_url,
            filename=_filename_for(source_url, mime_type),
            mime_type=mime_type,
            alt_text=alt_text,
            data=data,
        )
        try:
            self.session.add(media)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise MediaError(f"could not store media for entry {entry_id}: {e}") from e

        log.debug("media_stored", media_id=media.id, entry_id=entry_id, size=len(data))
        return media.id

    def set_featured_image(self, entry_id: int, media_id: int) -> None:
        """Mark a media row as the entry's featured image."""
        entry = self.session.get(Entry, entry_id)
        if entry is None:
            raise MediaError(f"entry {entry_id} not found")
        entry.featured_media_id = media_id
        self.session.commit()


def _filename_for(source_url: str, mime_type: str) -> str:
    """Derive a storage filename from the URL path, falling back to a random name."""
    name = PurePosixPath(urlparse(source_url).path).name
    if name and "." in name:
        return name
    extension = mimetypes.guess_extension(mime_type) or ""
    return f"{name or uuid4().hex}{extension}"


class OptionRepository:
    """Key-value option store used as the pipeline's ConfigStore."""

    def __init__(self, session: Session):
        self.session = session

    def get(self, key: str, default: Any = None) -> Any:
        """Get an option value, or the default when it was never set."""
        option = self.session.get(Option, key)
        if option is None:
            return default
        return option.value

    def set(self, key: str, value: Any) -> None:
        """Insert or update an option."""
        option = self.session.get(Option, key)
        if option is None:
            self.session.add(Option(key=key, value=str(value)))
        else:
            option.value = str(value)
        self.session.flush()


class CategoryRepository:
    """Repository for Category lookups."""

    def __init__(self, session: Session):
        self.session = session

    def list_all(self) -> Sequence[Category]:
        """List categories ordered by name."""
        result = self.session.execute(select(Category).order_by(Category.name))
        return result.scalars().all()
