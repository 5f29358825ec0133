# ABOUTME: Centralized configuration using Pydantic Settings.
# ABOUTME: Loads process settings from the environment and per-run pipeline config from the option store.

from functools import lru_cache
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from smart_blogger.filtering import parse_keywords

if TYPE_CHECKING:
    from smart_blogger.interfaces import ConfigStore

# Option store keys edited through the settings form
FEED_URLS_KEY = "rss_feed_urls"
KEYWORDS_KEY = "keywords"
CATEGORY_KEY = "post_category"

DEFAULT_CATEGORY_ID = 1


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database
    database_url: str = "sqlite:///smart_blogger.db"
    db_echo: bool = False

    # Feeds
    feed_timeout: int = 10
    max_items_per_feed: int = 10
    feed_user_agent: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/605.1.15 (KHTML, like Gecko) Version/18.3 Safari/605.1.15"
    )

    # Images
    image_timeout: int = 15
    image_max_bytes: int = 10 * 1024 * 1024

    # Publishing
    post_author_id: int = 1
    post_status: str = "publish"

    # Scheduling
    import_interval_seconds: int = 3600
    scheduler_token: SecretStr | None = None  # Bearer token for /api/run, unset = open

    # Logging
    log_level: str = "INFO"
    log_format: str = "console"  # "console" or "json"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def _parse_category(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return DEFAULT_CATEGORY_ID


class PipelineConfig(BaseModel):
    """Per-run pipeline configuration.

    Built once at the start of every run and passed explicitly to the runner,
    so the pipeline never reads the option store itself.
    """

    feed_urls: list[str] = []
    keywords: tuple[str, ...] = ()
    category_id: int = DEFAULT_CATEGORY_ID

    @property
    def is_empty(self) -> bool:
        """A run with no feeds or no keywords does nothing."""
        return not self.feed_urls or not self.keywords

    @classmethod
    def from_text(
        cls,
        feed_urls_text: str | None,
        keywords_text: str | None,
        category: Any = DEFAULT_CATEGORY_ID,
    ) -> "PipelineConfig":
        """Parse the raw option values as they are stored by the settings form.

        Args:
            feed_urls_text: Newline-separated feed URLs.
            keywords_text: Comma-separated keywords.
            category: Category id, anything int() accepts.

        Returns:
            PipelineConfig with blank URLs and keywords removed.
        """
        feed_urls = [line.strip() for line in (feed_urls_text or "").splitlines()]
        return cls(
            feed_urls=[url for url in feed_urls if url],
            keywords=parse_keywords(keywords_text or ""),
            category_id=_parse_category(category),
        )

    @classmethod
    def from_store(cls, store: "ConfigStore") -> "PipelineConfig":
        """Read the three pipeline keys from a config store."""
        return cls.from_text(
            store.get(FEED_URLS_KEY, ""),
            store.get(KEYWORDS_KEY, ""),
            store.get(CATEGORY_KEY, DEFAULT_CATEGORY_ID),
        )
