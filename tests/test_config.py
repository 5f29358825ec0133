# ABOUTME: Tests for configuration loading and per-run pipeline config parsing.
# ABOUTME: Verifies Pydantic Settings defaults and PipelineConfig text parsing.

from pydantic import SecretStr

from smart_blogger.config import (
    CATEGORY_KEY,
    FEED_URLS_KEY,
    KEYWORDS_KEY,
    PipelineConfig,
    Settings,
)


class TestSettings:
    """Tests for Settings configuration class."""

    def test_settings_default_values(self) -> None:
        """Settings should have the documented defaults."""
        settings = Settings(_env_file=None)

        assert settings.max_items_per_feed == 10
        assert settings.post_author_id == 1
        assert settings.post_status == "publish"
        assert settings.import_interval_seconds == 3600
        assert settings.scheduler_token is None

    def test_settings_overrides(self, mock_settings: Settings) -> None:
        """Explicit values should override defaults."""
        assert mock_settings.feed_timeout == 5
        assert mock_settings.post_author_id == 7

    def test_settings_from_environment(self, monkeypatch) -> None:
        """Settings should be read from environment variables."""
        monkeypatch.setenv("MAX_ITEMS_PER_FEED", "3")
        monkeypatch.setenv("LOG_FORMAT", "json")

        settings = Settings(_env_file=None)

        assert settings.max_items_per_feed == 3
        assert settings.log_format == "json"

    def test_scheduler_token_hidden(self) -> None:
        """Secret values should not be exposed in string representation."""
        settings = Settings(_env_file=None, scheduler_token=SecretStr("s3cret"))
        assert "s3cret" not in str(settings)


class TestPipelineConfig:
    """Tests for PipelineConfig parsing."""

    def test_from_text(self) -> None:
        """Feed URLs are split on newlines, keywords on commas."""
        config = PipelineConfig.from_text(
            "https://a.example.com/rss\r\n\n  https://b.example.com/rss  \n",
            "Guide, Tips ,",
            "3",
        )

        assert config.feed_urls == ["https://a.example.com/rss", "https://b.example.com/rss"]
        assert config.keywords == ("guide", "tips")
        assert config.category_id == 3
        assert not config.is_empty

    def test_invalid_category_falls_back(self) -> None:
        """A non-numeric category should fall back to the default category."""
        assert PipelineConfig.from_text("https://a", "x", "news").category_id == 1
        assert PipelineConfig.from_text("https://a", "x", None).category_id == 1

    def test_empty_when_no_feeds(self) -> None:
        """No feed URLs means an empty config."""
        assert PipelineConfig.from_text("\n  \n", "guide").is_empty

    def test_empty_when_no_keywords(self) -> None:
        """No keywords means an empty config."""
        assert PipelineConfig.from_text("https://a", " , ").is_empty
        assert PipelineConfig.from_text("https://a", None).is_empty

    def test_from_store(self) -> None:
        """Any object with get(key, default) can be the store."""
        store = {
            FEED_URLS_KEY: "https://example.com/feed",
            KEYWORDS_KEY: "baking",
            CATEGORY_KEY: 5,
        }
        config = PipelineConfig.from_store(store)

        assert config.feed_urls == ["https://example.com/feed"]
        assert config.keywords == ("baking",)
        assert config.category_id == 5

    def test_from_empty_store(self) -> None:
        """Missing keys give an empty config with the default category."""
        config = PipelineConfig.from_store({})

        assert config.is_empty
        assert config.category_id == 1
