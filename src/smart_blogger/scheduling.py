# ABOUTME: Recurring-job registry stored in the database.
# ABOUTME: The host (cron, systemd timer, or POST /api/run) calls run_due_jobs to fire due jobs.

from collections.abc import Callable, Sequence
from datetime import UTC, datetime, timedelta

import structlog
from sqlalchemy import select
from sqlalchemy.orm import Session

from smart_blogger.db.models import ScheduledJob

log = structlog.get_logger()

IMPORT_JOB = "hourly_import"
HOURLY = 3600


class JobScheduler:
    """Registers recurring jobs and tracks when each one is due."""

    def __init__(self, session: Session):
        self.session = session

    def schedule(self, job: str, interval_seconds: int, now: datetime | None = None) -> bool:
        """Register a job. Returns False if it was already scheduled."""
        if self.session.get(ScheduledJob, job) is not None:
            return False

        now = now or datetime.now(UTC)
        self.session.add(
            ScheduledJob(name=job, interval_seconds=interval_seconds, next_run_at=now)
        )
        self.session.flush()
        log.info("job_scheduled", job=job, interval_seconds=interval_seconds)
        return True

    def unschedule(self, job: str) -> bool:
        """Remove a job. Returns False if it was not scheduled."""
        scheduled = self.session.get(ScheduledJob, job)
        if scheduled is None:
            return False

        self.session.delete(scheduled)
        self.session.flush()
        log.info("job_unscheduled", job=job)
        return True

    def is_scheduled(self, job: str) -> bool:
        return self.session.get(ScheduledJob, job) is not None

    def due_jobs(self, now: datetime | None = None) -> Sequence[ScheduledJob]:
        """Jobs whose next run time has passed."""
        now = now or datetime.now(UTC)
        result = self.session.execute(
            select(ScheduledJob)
            .where(ScheduledJob.next_run_at <= now)
            .order_by(ScheduledJob.next_run_at)
        )
        return result.scalars().all()

    def mark_ran(self, job: ScheduledJob, now: datetime | None = None) -> None:
        """Record a run and push the job's next run one interval ahead."""
        now = now or datetime.now(UTC)
        job.last_run_at = now
        job.next_run_at = now + timedelta(seconds=job.interval_seconds)
        self.session.flush()


def run_due_jobs(
    session: Session,
    registry: dict[str, Callable[[], object]],
    now: datetime | None = None,
) -> list[str]:
    """Run every due job once.

    Jobs without a handler in the registry are skipped and left due. A failing
    job is logged and still rescheduled, so it does not fire again until its
    next interval.

    Args:
        session: Database session holding the job table.
        registry: Job name to callable.
        now: Current time, defaults to now in UTC.

    Returns:
        Names of the jobs that were run.
    """
    scheduler = JobScheduler(session)
    ran: list[str] = []

    for job in scheduler.due_jobs(now):
        handler = registry.get(job.name)
        if handler is None:
            log.warning("job_handler_missing", job=job.name)
            continue

        log.info("job_start", job=job.name)
        try:
            handler()
        except Exception:
            log.exception("job_failed", job=job.name)
        scheduler.mark_ran(job, now)
        ran.append(job.name)

    return ran
