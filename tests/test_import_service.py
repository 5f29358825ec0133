# ABOUTME: Tests for the import service wiring the runner to the database.
# ABOUTME: Runs the whole pipeline against in-memory SQLite with a mocked feed fetch.

from collections.abc import Iterator
from contextlib import contextmanager
from unittest.mock import patch

import pytest
from sqlalchemy import select
from sqlalchemy.orm import Session

from smart_blogger.config import CATEGORY_KEY, FEED_URLS_KEY, KEYWORDS_KEY, Settings
from smart_blogger.db.models import Entry
from smart_blogger.db.repository import OptionRepository
from smart_blogger.exceptions import FeedFetchError
from smart_blogger.models import FeedItem
from smart_blogger.scheduling import IMPORT_JOB, JobScheduler
from smart_blogger.services.import_service import install, job_registry, run_import, uninstall


@pytest.fixture
def patched_session(db_session: Session) -> Iterator[Session]:
    """Route the service's get_session to the test session."""

    @contextmanager
    def _session() -> Iterator[Session]:
        yield db_session
        db_session.commit()

    with patch("smart_blogger.services.import_service.get_session", _session):
        yield db_session


def _configure(session: Session, feeds: str, keywords: str) -> None:
    options = OptionRepository(session)
    options.set(FEED_URLS_KEY, feeds)
    options.set(KEYWORDS_KEY, keywords)
    options.set(CATEGORY_KEY, 1)
    session.commit()


class TestRunImport:
    """Tests for run_import."""

    def test_publishes_new_item(
        self, patched_session: Session, mock_settings: Settings, sample_item: FeedItem
    ) -> None:
        """A matching item should end up as a published entry."""
        _configure(patched_session, "https://example.com/feed", "guide")

        with patch("smart_blogger.services.import_service.FeedFetcher.fetch", return_value=[sample_item]):
            report = run_import(mock_settings)

        entries = patched_session.execute(select(Entry)).scalars().all()
        assert report.published == 1
        assert [entry.title for entry in entries] == ["Beginner Guide to Baking"]
        assert "https://example.com/baking" in entries[0].body
        assert entries[0].author_id == 7

    def test_second_run_skips_existing(
        self, patched_session: Session, mock_settings: Settings, sample_item: FeedItem
    ) -> None:
        """Running twice should not publish the same title again."""
        _configure(patched_session, "https://example.com/feed", "guide")

        with patch("smart_blogger.services.import_service.FeedFetcher.fetch", return_value=[sample_item]):
            run_import(mock_settings)
            report = run_import(mock_settings)

        assert report.duplicates == 1
        assert len(patched_session.execute(select(Entry)).scalars().all()) == 1

    def test_fetch_failure_completes(self, patched_session: Session, mock_settings: Settings) -> None:
        """A failing feed should give zero entries without raising."""
        _configure(patched_session, "https://example.com/feed", "guide")

        with patch(
            "smart_blogger.services.import_service.FeedFetcher.fetch",
            side_effect=FeedFetchError("https://example.com/feed", "timeout"),
        ):
            report = run_import(mock_settings)

        assert report.feeds_failed == 1
        assert patched_session.execute(select(Entry)).scalars().all() == []

    def test_unconfigured_is_noop(self, patched_session: Session, mock_settings: Settings) -> None:
        """Without options the import should not fetch anything."""
        with patch("smart_blogger.services.import_service.FeedFetcher.fetch") as mock_fetch:
            report = run_import(mock_settings)

        mock_fetch.assert_not_called()
        assert report.published == 0


class TestInstall:
    """Tests for install and uninstall."""

    def test_install_and_uninstall(self, patched_session: Session, mock_settings: Settings) -> None:
        """install registers the import job once, uninstall removes it."""
        assert install(mock_settings) is True
        assert install(mock_settings) is False
        assert JobScheduler(patched_session).is_scheduled(IMPORT_JOB)

        assert uninstall() is True
        assert not JobScheduler(patched_session).is_scheduled(IMPORT_JOB)
        assert uninstall() is False

    def test_job_registry(self) -> None:
        """The registry should map the import job to run_import."""
        assert job_registry() == {IMPORT_JOB: run_import}
