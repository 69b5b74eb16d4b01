from datetime import date
from types import SimpleNamespace
from unittest import mock

import pytest
from django.db import DatabaseError

from mappings.cadence import cadences_for
from mappings.cron_log import CronRunLog
from mappings.models import CronLog, CronLogMapping, Mapping

FRIDAY = date(2024, 6, 7)


def _outcome(status, error=None):
    return SimpleNamespace(audit_status=status, error=error)


@pytest.mark.django_db
def test_full_lifecycle(mapping, company):
    other = Mapping.objects.create(title="Other", hubspot_company=company)
    log = CronRunLog()
    log.start(cadences_for(FRIDAY))
    log.record_found(2)
    log.finalize(
        {
            mapping.pk: _outcome(CronLogMapping.STATUS_SUCCESS),
            other.pk: _outcome(CronLogMapping.STATUS_FAILED, "HubSpot down"),
        }
    )

    row = CronLog.objects.get(pk=log.log_id)
    assert row.status == CronLog.STATUS_COMPLETED
    assert row.cadences == ["daily", "weekly"]
    assert (row.mappings_found, row.mappings_executed, row.mappings_failed) == (2, 1, 1)
    assert row.mappings.count() == row.mappings_executed + row.mappings_failed
    assert row.mappings.get(mapping=other).error_message == "HubSpot down"


@pytest.mark.django_db
def test_failed_child_write_is_skipped_not_counted(mapping, company):
    other = Mapping.objects.create(title="Other", hubspot_company=company)
    log = CronRunLog()
    log.start(cadences_for(FRIDAY))

    real_create = CronLogMapping.objects.create

    def flaky_create(**kwargs):
        if kwargs["mapping_id"] == other.pk:
            raise DatabaseError("disk full")
        return real_create(**kwargs)

    with mock.patch.object(CronLogMapping.objects, "create", side_effect=flaky_create):
        log.finalize(
            {
                mapping.pk: _outcome(CronLogMapping.STATUS_SUCCESS),
                other.pk: _outcome(CronLogMapping.STATUS_FAILED, "boom"),
            }
        )

    row = CronLog.objects.get(pk=log.log_id)
    assert row.status == CronLog.STATUS_COMPLETED
    assert (row.mappings_executed, row.mappings_failed) == (1, 0)
    assert row.mappings.count() == 1


@pytest.mark.django_db
def test_start_failure_never_raises(mapping):
    log = CronRunLog()
    with mock.patch.object(CronLog.objects, "create", side_effect=DatabaseError("no table")):
        log.start(cadences_for(FRIDAY))

    assert log.log_id is None
    log.record_found(3)
    log.complete_empty()
    log.finalize({mapping.pk: _outcome(CronLogMapping.STATUS_SUCCESS)})
    assert not CronLog.objects.exists()
    assert not CronLogMapping.objects.exists()


@pytest.mark.django_db
def test_fail_creates_a_row_when_none_was_opened():
    log = CronRunLog()
    log.fail("mapping query failed")

    row = CronLog.objects.get()
    assert row.status == CronLog.STATUS_FAILED
    assert row.error_message == "mapping query failed"
    assert row.completed_at is not None


@pytest.mark.django_db
def test_fail_updates_the_open_row():
    log = CronRunLog()
    log.start(cadences_for(FRIDAY))
    log.fail("")

    row = CronLog.objects.get()
    assert row.status == CronLog.STATUS_FAILED
    assert row.error_message == "Internal Server Error"
