# ABOUTME: Feed processing module for RSS fetching and item normalization.
# ABOUTME: Turns a feed URL into a list of FeedItem models.

from smart_blogger.feeds.fetcher import FeedFetcher

__all__ = ["FeedFetcher"]
