"""
Celery tasks for the mappings app.

``run_scheduled_sync`` is wired into ``CELERY_BEAT_SCHEDULE``, which fires
it every day at ``SYNC_CRON_HOUR``; the cadence evaluator decides which
mappings are due, so weekends are usually a no-op.
"""
from celery import shared_task
import logging

from .services import run_sync

logger = logging.getLogger(__name__)


@shared_task(name="mappings.tasks.run_scheduled_sync")
def run_scheduled_sync() -> dict:
    """Run the scheduled sync and return the response payload."""
    outcome = run_sync(scheduled=True)
    logger.info("Scheduled sync finished: %s (%d result(s))", outcome.message, len(outcome.results))
    return outcome.as_dict()
