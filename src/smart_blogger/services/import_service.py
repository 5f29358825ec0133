# ABOUTME: Wires the pipeline runner to the database-backed collaborators.
# ABOUTME: Entry points for a single import run and for installing the hourly job.

from collections.abc import Callable

import structlog

from smart_blogger.config import PipelineConfig, Settings, get_settings
from smart_blogger.db.repository import EntryRepository, OptionRepository
from smart_blogger.db.session import get_session
from smart_blogger.feeds.fetcher import FeedFetcher
from smart_blogger.interfaces import Scheduler
from smart_blogger.models import RunReport
from smart_blogger.runner import PipelineRunner
from smart_blogger.scheduling import IMPORT_JOB, JobScheduler

log = structlog.get_logger()


def run_import(settings: Settings | None = None) -> RunReport:
    """Run one import with the configuration currently in the option store."""
    settings = settings or get_settings()

    with get_session() as session:
        config = PipelineConfig.from_store(OptionRepository(session))
        with (
            EntryRepository(session, settings) as repository,
            FeedFetcher(settings) as fetcher,
        ):
            runner = PipelineRunner(repository, fetcher, settings=settings)
            return runner.run(config)


def job_registry() -> dict[str, Callable[[], object]]:
    """Handlers for every job this application schedules."""
    return {IMPORT_JOB: run_import}


def install(settings: Settings | None = None) -> bool:
    """Register the recurring import job. Returns False if already registered."""
    settings = settings or get_settings()
    with get_session() as session:
        scheduler: Scheduler = JobScheduler(session)
        return scheduler.schedule(IMPORT_JOB, settings.import_interval_seconds)


def uninstall() -> bool:
    """Remove the recurring import job. Returns False if it was not registered."""
    with get_session() as session:
        scheduler: Scheduler = JobScheduler(session)
        return scheduler.unschedule(IMPORT_JOB)
