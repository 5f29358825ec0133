# ABOUTME: Pytest fixtures and configuration for Smart Blogger tests.
# ABOUTME: Provides settings, an in-memory database, a fake content repository, and sample items.

from collections.abc import Iterator

import pytest
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from smart_blogger.config import Settings
from smart_blogger.db.session import create_schema
from smart_blogger.exceptions import MediaError, PublishError
from smart_blogger.models import Enclosure, FeedItem

SAMPLE_RSS = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Kitchen Notes</title>
    <link>https://example.com/</link>
    <description>Recipes</description>
    <item>
      <title>Beginner Guide to Baking</title>
      <link>https://example.com/baking</link>
      <description><![CDATA[<p>Bread is easy.</p><img src="https://example.com/inline.jpg">]]></description>
      <enclosure url="https://example.com/cover.jpg" type="image/jpeg" length="1024"/>
    </item>
    <item>
      <title>Garden Report</title>
      <link>https://example.com/garden</link>
      <description>Tomatoes and peppers.</description>
    </item>
  </channel>
</rss>
"""


class FakeRepository:
    """In-memory content repository recording every call."""

    def __init__(
        self,
        existing_titles: tuple[str, ...] = (),
        failing_titles: tuple[str, ...] = (),
        media_error: bool = False,
        lookup_error_titles: tuple[str, ...] = (),
    ) -> None:
        self.titles = set(existing_titles)
        self.lookup_error_titles = set(lookup_error_titles)
        self.failing_titles = set(failing_titles)
        self.media_error = media_error
        self.entries: dict[int, dict] = {}
        self.media: dict[int, dict] = {}
        self.featured: dict[int, int] = {}
        self.calls: list[str] = []

    def exists_by_title(self, title: str) -> bool:
        self.calls.append("exists_by_title")
        if title in self.lookup_error_titles:
            raise RuntimeError("database is locked")
        return title in self.titles

    def create_entry(self, title: str, body: str, status: str, author: int, category: int) -> int:
        self.calls.append("create_entry")
        if title in self.failing_titles:
            raise PublishError(f"refused {title}")
        entry_id = len(self.entries) + 1
        self.entries[entry_id] = {
            "title": title,
            "body": body,
            "status": status,
            "author": author,
            "category": category,
        }
        self.titles.add(title)
        return entry_id

    def attach_media(self, source_url: str, entry_id: int, alt_text: str) -> int:
        self.calls.append("attach_media")
        if self.media_error:
            raise MediaError(f"cannot download {source_url}")
        media_id = len(self.media) + 1
        self.media[media_id] = {"url": source_url, "entry_id": entry_id, "alt": alt_text}
        return media_id

    def set_featured_image(self, entry_id: int, media_id: int) -> None:
        self.calls.append("set_featured_image")
        self.featured[entry_id] = media_id


@pytest.fixture
def mock_settings() -> Settings:
    """Create settings for testing, ignoring any local .env file."""
    return Settings(
        _env_file=None,
        database_url="sqlite://",
        feed_timeout=5,
        max_items_per_feed=10,
        image_timeout=5,
        image_max_bytes=1024,
        post_author_id=7,
        log_level="DEBUG",
    )


@pytest.fixture
def db_engine() -> Iterator[Engine]:
    """In-memory SQLite engine shared across threads, with schema created."""
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    create_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine: Engine) -> Iterator[Session]:
    """Database session on the in-memory engine."""
    session = Session(db_engine, expire_on_commit=False)
    yield session
    session.close()


@pytest.fixture
def fake_repository() -> FakeRepository:
    """Empty fake content repository."""
    return FakeRepository()


@pytest.fixture
def sample_item() -> FeedItem:
    """A feed item matching the keyword "guide"."""
    return FeedItem(
        title="Beginner Guide to Baking",
        content="<p>Bread is easy to bake.</p>",
        permalink="https://example.com/baking",
    )


@pytest.fixture
def image_item() -> FeedItem:
    """A feed item with both an image enclosure and an inline image."""
    return FeedItem(
        title="Best Tips for Sourdough",
        content='<p>Starter tips.</p><img src="https://example.com/inline.jpg">',
        permalink="https://example.com/sourdough",
        enclosure=Enclosure(link="https://example.com/cover.jpg", mime_type="image/jpeg"),
    )


@pytest.fixture
def sample_rss() -> bytes:
    """RSS 2.0 document with one image-enclosure item and one plain item."""
    return SAMPLE_RSS
