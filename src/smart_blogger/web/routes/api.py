# ABOUTME: API routes for scheduler automation.
# ABOUTME: Endpoints to fire due jobs (or force an import) and a health check.

import structlog
from fastapi import APIRouter, BackgroundTasks
from pydantic import BaseModel

from smart_blogger.web.dependencies import SchedulerVerified

router = APIRouter(prefix="/api", tags=["api"])
log = structlog.get_logger()


class TaskResponse(BaseModel):
    """Response model for background tasks."""

    status: str
    message: str


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str
    version: str = "0.1.0"


@router.get("/health", response_model=HealthResponse)
def health_check():
    """Health check endpoint for load balancer."""
    return HealthResponse(status="healthy")


def _run_due() -> None:
    """Run due scheduled jobs in background."""
    from smart_blogger.db.session import get_session
    from smart_blogger.scheduling import run_due_jobs
    from smart_blogger.services.import_service import job_registry

    log.info("api_run_due_start")
    try:
        with get_session() as session:
            ran = run_due_jobs(session, job_registry())
        log.info("api_run_due_complete", jobs=ran)
    except Exception:
        log.exception("api_run_due_failed")


def _run_import() -> None:
    """Run one import in background."""
    from smart_blogger.services.import_service import run_import

    log.info("api_import_start")
    try:
        report = run_import()
        log.info("api_import_complete", published=report.published)
    except Exception:
        log.exception("api_import_failed")


@router.post("/run", response_model=TaskResponse)
def trigger_run(
    _verified: SchedulerVerified,
    background_tasks: BackgroundTasks,
    force: bool = False,
):
    """Fire due jobs, or run the import immediately with force=true."""
    if force:
        background_tasks.add_task(_run_import)
        return TaskResponse(status="accepted", message="Import started")

    background_tasks.add_task(_run_due)
    return TaskResponse(status="accepted", message="Due jobs started")
