# ABOUTME: Domain exceptions raised at the pipeline's collaborator boundaries.
# ABOUTME: Each failure is scoped to one feed URL or one item and never aborts a run.


class SmartBloggerError(Exception):
    """Base class for all smart_blogger errors."""


class FeedFetchError(SmartBloggerError):
    """A feed URL could not be fetched or parsed."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class PublishError(SmartBloggerError):
    """The content repository refused to create an entry."""


class MediaError(SmartBloggerError):
    """An image could not be downloaded or attached to an entry."""
