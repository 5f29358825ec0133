# ABOUTME: Pydantic models for pipeline data structures.
# ABOUTME: Defines FeedItem, Enclosure, and the per-run RunReport.

from pydantic import BaseModel


class Enclosure(BaseModel):
    """Media attached to a feed item."""

    link: str
    mime_type: str = ""


class FeedItem(BaseModel):
    """One normalized entry from a feed, transient for the duration of a run."""

    title: str
    content: str = ""
    permalink: str = ""
    enclosure: Enclosure | None = None


class RunReport(BaseModel):
    """Counters collected over one pipeline run."""

    feeds_processed: int = 0
    feeds_failed: int = 0
    items_seen: int = 0
    duplicates: int = 0
    unmatched: int = 0
    published: int = 0
    publish_failures: int = 0
    item_failures: int = 0
    images_attached: int = 0
    image_failures: int = 0
    entry_ids: list[int] = []
