# ABOUTME: Pipeline runner: fetch, dedupe, filter, rewrite, publish, attach image.
# ABOUTME: Failures are isolated to one feed URL or one item; a run always completes.

import html

import bleach
import structlog

from smart_blogger.config import PipelineConfig, Settings, get_settings
from smart_blogger.dedup import Deduplicator
from smart_blogger.exceptions import FeedFetchError
from smart_blogger.feeds.fetcher import FeedFetcher
from smart_blogger.filtering import KeywordFilter
from smart_blogger.images import resolve_image_url
from smart_blogger.interfaces import ContentRepository
from smart_blogger.models import FeedItem, RunReport
from smart_blogger.rewriter import ContentTransformer

log = structlog.get_logger()

# Markup allowed in published entry bodies
ALLOWED_TAGS = [
    "a", "abbr", "b", "blockquote", "br", "code", "em", "figcaption", "figure",
    "h1", "h2", "h3", "h4", "h5", "h6", "hr", "i", "img", "li", "ol", "p", "pre",
    "span", "strong", "table", "tbody", "td", "th", "thead", "tr", "ul",
]  # fmt: skip
ALLOWED_ATTRS = {
    "a": ["href", "title", "target", "rel"],
    "img": ["src", "alt", "title", "width", "height"],
}

ATTRIBUTION_TEMPLATE = (
    '<hr><p><strong>Source:</strong> <a href="{link}" target="_blank" '
    'rel="nofollow noopener">{title}</a></p>'
)


def sanitize_html(value: str) -> str:
    """Strip markup that is not safe to publish."""
    return bleach.clean(value, tags=ALLOWED_TAGS, attributes=ALLOWED_ATTRS, strip=True)


def build_attribution(permalink: str, title: str) -> str:
    """Build the source link appended to every published body."""
    return ATTRIBUTION_TEMPLATE.format(
        link=html.escape(permalink, quote=True),
        title=html.escape(title),
    )


def compose_body(transformed: str, item: FeedItem) -> str:
    """Sanitized transformed content followed by the attribution block."""
    return sanitize_html(transformed) + build_attribution(item.permalink, item.title)


class PipelineRunner:
    """Runs one import across every configured feed, sequentially."""

    def __init__(
        self,
        repository: ContentRepository,
        fetcher: FeedFetcher | None = None,
        transformer: ContentTransformer | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.repository = repository
        self.fetcher = fetcher or FeedFetcher(self.settings)
        self.transformer = transformer or ContentTransformer()
        self.deduplicator = Deduplicator(repository)

    def run(self, config: PipelineConfig) -> RunReport:
        """Process every feed URL in the config.

        Args:
            config: Feed URLs, keywords and target category for this run.

        Returns:
            RunReport with the counters of this run.
        """
        report = RunReport()

        if config.is_empty:
            log.debug(
                "pipeline_run_skipped",
                feeds=len(config.feed_urls),
                keywords=len(config.keywords),
            )
            return report

        log.info("pipeline_run_start", feeds=len(config.feed_urls))
        keyword_filter = KeywordFilter(config.keywords)

        for url in config.feed_urls:
            url = url.strip()
            if not url:
                continue

            try:
                items = self.fetcher.fetch(url, self.settings.max_items_per_feed)
            except FeedFetchError as e:
                log.warning("feed_fetch_failed", url=url, error=e.reason)
                report.feeds_failed += 1
                continue
            except Exception:
                log.exception("feed_fetch_failed", url=url)
                report.feeds_failed += 1
                continue

            report.feeds_processed += 1
            for item in items:
                try:
                    self._process_item(item, keyword_filter, config, report)
                except Exception:
                    log.exception("item_failed", title=item.title)
                    report.item_failures += 1

        log.info("pipeline_run_complete", **report.model_dump(exclude={"entry_ids"}))
        return report

    def _process_item(
        self,
        item: FeedItem,
        keyword_filter: KeywordFilter,
        config: PipelineConfig,
        report: RunReport,
    ) -> None:
        report.items_seen += 1

        if self.deduplicator.is_duplicate(item.title):
            report.duplicates += 1
            return

        if not keyword_filter.matches(item.title, item.content):
            log.debug("keyword_not_matched", title=item.title)
            report.unmatched += 1
            return

        body = compose_body(self.transformer.transform(item.content), item)

        try:
            entry_id = self.repository.create_entry(
                title=item.title,
                body=body,
                status=self.settings.post_status,
                author=self.settings.post_author_id,
                category=config.category_id,
            )
        except Exception:
            log.exception("entry_publish_failed", title=item.title)
            report.publish_failures += 1
            return

        if not entry_id:
            log.warning("entry_publish_failed", title=item.title, error="no entry id returned")
            report.publish_failures += 1
            return

        log.info("entry_published", entry_id=entry_id, title=item.title)
        report.published += 1
        report.entry_ids.append(entry_id)

        self._attach_image(item, entry_id, report)

    def _attach_image(self, item: FeedItem, entry_id: int, report: RunReport) -> None:
        image_url = resolve_image_url(item)
        if not image_url:
            return

        try:
            media_id = self.repository.attach_media(image_url, entry_id, item.title)
            self.repository.set_featured_image(entry_id, media_id)
        except Exception as e:
            # Entry stays published without a featured image
            log.warning("image_attach_failed", entry_id=entry_id, url=image_url, error=str(e))
            report.image_failures += 1
            return

        log.info("featured_image_set", entry_id=entry_id, media_id=media_id)
        report.images_attached += 1
