# ABOUTME: Main package for the Smart Blogger feed importer.
# ABOUTME: Exports the pipeline runner, its configuration, and the feed item models.

from smart_blogger.config import PipelineConfig, get_settings
from smart_blogger.models import Enclosure, FeedItem, RunReport
from smart_blogger.runner import PipelineRunner

__all__ = [
    "get_settings",
    "Enclosure",
    "FeedItem",
    "PipelineConfig",
    "PipelineRunner",
    "RunReport",
]
