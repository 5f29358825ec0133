# ABOUTME: RSS feed fetcher producing normalized feed items.
# ABOUTME: Uses httpx for the download and feedparser for parsing.

from typing import Any

import feedparser
import httpx
import structlog

from smart_blogger.config import Settings, get_settings
from smart_blogger.exceptions import FeedFetchError
from smart_blogger.filtering import strip_tags
from smart_blogger.models import Enclosure, FeedItem

log = structlog.get_logger()


class FeedFetcher:
    """Fetches RSS/Atom feeds and normalizes their entries."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        """Lazy-initialized HTTP client."""
        if self._client is None:
            self._client = httpx.Client(
                timeout=self.settings.feed_timeout,
                headers={"User-Agent": self.settings.feed_user_agent},
                follow_redirects=True,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> "FeedFetcher":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def fetch(self, url: str, max_items: int | None = None) -> list[FeedItem]:
        """Fetch a feed and return its most recent items.

        Args:
            url: Feed URL. Surrounding whitespace is ignored.
            max_items: Maximum number of items. Defaults to settings value.

        Returns:
            Items in the feed's own order, truncated to max_items.

        Raises:
            FeedFetchError: If the URL is blank or invalid, the download fails,
                or the feed is malformed and has no entries.
        """
        url = url.strip()
        if not url:
            raise FeedFetchError(url, "empty feed URL")

        max_items = max_items or self.settings.max_items_per_feed

        log.debug("fetching_feed", url=url)

        try:
            response = self.client.get(url)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            # ValueError covers UnicodeError and InvalidCodepoint from host encoding
            raise FeedFetchError(url, str(e)) from e

        feed = feedparser.parse(response.content)

        if feed.bozo:
            if not feed.entries:
                raise FeedFetchError(url, f"parse error: {feed.bozo_exception}")
            log.warning("feed_parse_warning", url=url, error=str(feed.bozo_exception))

        items = [self._to_item(entry) for entry in feed.entries[:max_items]]
        log.info("feed_fetched", url=url, items=len(items))
        return items

    @staticmethod
    def _to_item(entry: Any) -> FeedItem:
        """Normalize a feedparser entry."""
        content = ""
        contents = entry.get("content") or []
        if contents:
            content = contents[0].get("value", "") or ""
        if not content:
            content = entry.get("summary", "") or ""

        return FeedItem(
            title=strip_tags(entry.get("title", "") or "").strip(),
            content=content,
            permalink=entry.get("link", "") or "",
            enclosure=_find_enclosure(entry),
        )


def _find_enclosure(entry: Any) -> Enclosure | None:
    """Return the first enclosure of an entry, if any."""
    for link in entry.get("links") or []:
        if link.get("rel") == "enclosure" and link.get("href"):
            return Enclosure(link=link["href"], mime_type=link.get("type", "") or "")

    for enclosure in entry.get("enclosures") or []:
        if enclosure.get("href"):
            return Enclosure(link=enclosure["href"], mime_type=enclosure.get("type", "") or "")

    return None
