"""
Audit trail for scheduled sync runs.

``CronRunLog`` is a best-effort side channel: every public method
catches database errors, logs them and returns normally, so a broken
audit write can never abort or mask the outcome of the sync itself.
Each write runs in its own savepoint so one failure does not poison
the surrounding connection.
"""
from __future__ import annotations

import functools
import logging

from django.db import DatabaseError, transaction
from django.utils import timezone

from .models import CronLog, CronLogMapping

logger = logging.getLogger(__name__)


def best_effort(method):
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            with transaction.atomic():
                return method(self, *args, **kwargs)
        except DatabaseError:
            logger.exception("Cron log %s failed (cron log %s)", method.__name__, self.log_id)
            return None

    return wrapper


class CronRunLog:
    """Writes one ``CronLog`` row per run and one ``CronLogMapping`` per mapping."""

    def __init__(self):
        self.log_id: int | None = None

    @best_effort
    def start(self, cadence) -> None:
        log = CronLog.objects.create(
            status=CronLog.STATUS_RUNNING,
            cadences=list(cadence.cadences),
            day_of_week=cadence.day_of_week,
            day_of_month=cadence.day_of_month,
            last_day_of_month=cadence.last_day_of_month,
        )
        self.log_id = log.pk
        logger.info("Created cron log %s for cadences %s", log.pk, cadence.cadences)

    @best_effort
    def record_found(self, count: int) -> None:
        if self.log_id is None:
            return
        CronLog.objects.filter(pk=self.log_id).update(mappings_found=count)

    @best_effort
    def complete_empty(self) -> None:
        if self.log_id is None:
            return
        CronLog.objects.filter(pk=self.log_id).update(
            status=CronLog.STATUS_COMPLETED,
            completed_at=timezone.now(),
        )

    def finalize(self, outcomes: dict) -> None:
        """Write a child row per mapping outcome, then the run totals.

        ``outcomes`` maps mapping id to an object exposing ``audit_status``
        and ``error``.  Children that fail to write are logged and left
        out of the totals.
        """
        if self.log_id is None:
            return
        executed = failed = 0
        for mapping_id, outcome in outcomes.items():
            if self._write_child(mapping_id, outcome.audit_status, outcome.error) is None:
                continue
            if outcome.audit_status == CronLogMapping.STATUS_FAILED:
                failed += 1
            else:
                executed += 1
        self._write_totals(executed, failed)

    @best_effort
    def _write_child(self, mapping_id: int, status: str, error: str | None):
        return CronLogMapping.objects.create(
            cron_log_id=self.log_id,
            mapping_id=mapping_id,
            status=status,
            error_message=error or None,
        )

    @best_effort
    def _write_totals(self, executed: int, failed: int) -> None:
        CronLog.objects.filter(pk=self.log_id).update(
            status=CronLog.STATUS_COMPLETED,
            completed_at=timezone.now(),
            mappings_executed=executed,
            mappings_failed=failed,
        )
        logger.info("Cron log %s completed (%d executed, %d failed)", self.log_id, executed, failed)

    @best_effort
    def fail(self, message: str) -> None:
        """Mark the run failed, creating the row if the run died before ``start``."""
        message = message or "Internal Server Error"
        if self.log_id is None:
            log = CronLog.objects.create(
                status=CronLog.STATUS_FAILED,
                completed_at=timezone.now(),
                error_message=message,
                cadences=[],
            )
            self.log_id = log.pk
            return
        CronLog.objects.filter(pk=self.log_id).update(
            status=CronLog.STATUS_FAILED,
            completed_at=timezone.now(),
            error_message=message,
        )
