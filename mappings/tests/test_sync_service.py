"""
Tests for the mapping sync orchestrator.

Adapters are replaced with ``unittest.mock`` doubles so these tests
exercise only the per-channel control flow and the cron audit trail.
"""
from datetime import date
from unittest import mock
from urllib.error import URLError

import pytest

from integrations.exceptions import HubSpotError, SlackError, SummarizerError
from integrations.models import SlackChannel
from integrations.slack_client import SlackClient
from mappings.formatting import fallback_summary
from mappings.models import CronLog, CronLogMapping, Mapping, MappingSlackChannel
from mappings.services import SyncClients, process_mapping, run_sync
from prompts.models import Prompt

MESSAGES = [
    {"user": "U1", "text": "Shipped the fix", "ts": "1.0"},
    {"user": "U2", "text": "Thanks <@U1>", "ts": "2.0"},
]

# 2024-06-03 was a Monday: only "daily" is due.
MONDAY = date(2024, 6, 3)


def _clients(messages=None, summary="All good."):
    slack = mock.Mock()
    slack.fetch_recent_messages.return_value = MESSAGES if messages is None else messages
    summarizer = mock.Mock()
    summarizer.summarize.return_value = summary
    hubspot = mock.Mock()
    hubspot.create_company_note.return_value = "note-1"
    return SyncClients(slack=slack, summarizer=summarizer, hubspot=hubspot)


@pytest.fixture
def two_channel_mapping(mapping):
    second = SlackChannel.objects.create(channel_id="C0002", name="acme-eng")
    MappingSlackChannel.objects.create(mapping=mapping, slack_channel=second)
    return mapping


@pytest.mark.django_db
def test_failed_channel_does_not_stop_sibling(two_channel_mapping):
    clients = _clients()
    clients.slack.fetch_recent_messages.side_effect = [SlackError("channel_not_found"), MESSAGES]

    outcome = process_mapping(two_channel_mapping, None, {}, False, clients)

    assert [r["status"] for r in outcome.results] == ["Failed", "Synced"]
    assert outcome.results[0]["error"] == "channel_not_found"
    assert outcome.success is True
    assert outcome.error == "channel_not_found"
    assert outcome.audit_status == CronLogMapping.STATUS_SUCCESS
    clients.hubspot.create_company_note.assert_called_once_with("9001", "All good.")


@pytest.mark.django_db
def test_network_error_fails_one_mapping_and_run_continues(mapping, company, channel, settings):
    settings.SYNC_MAPPING_DELAY_SECONDS = 0
    other = Mapping.objects.create(title="Other", hubspot_company=company)
    MappingSlackChannel.objects.create(mapping=other, slack_channel=channel)
    web = mock.Mock()
    web.conversations_history.side_effect = [
        URLError("timed out"),
        {"messages": [{"user": "U1", "text": "Shipped the fix", "ts": "1.0"}], "has_more": False},
    ]
    clients = _clients()
    clients.slack = SlackClient(client=web)

    outcome = run_sync(test_mode=True, clients=clients)

    assert outcome.message == "Sync process completed"
    assert [(r["id"], r["status"]) for r in outcome.results] == [
        (mapping.pk, "Failed"),
        (other.pk, "Test Complete"),
    ]
    assert "timed out" in outcome.results[0]["error"]


@pytest.mark.django_db
def test_unexpected_channel_error_is_reported_per_channel(two_channel_mapping):
    clients = _clients()
    clients.slack.fetch_recent_messages.side_effect = [RuntimeError("boom"), MESSAGES]

    outcome = process_mapping(two_channel_mapping, None, {}, False, clients)

    assert [r["status"] for r in outcome.results] == ["Failed", "Synced"]
    assert outcome.results[0]["error"] == "boom"


@pytest.mark.django_db
def test_synced_result_carries_summary_and_destination(mapping):
    clients = _clients()
    outcome = process_mapping(mapping, "Be brief.", {"U1": "Ada Admin"}, False, clients)

    (result,) = outcome.results
    assert result == {
        "id": mapping.pk,
        "channel_id": "C0001",
        "status": "Synced",
        "summary": "All good.",
        "destination": {"name": "Acme Corp", "id": "9001"},
    }
    text, instruction, label = clients.summarizer.summarize.call_args.args
    assert text == "Ada Admin: Shipped the fix\nU2: Thanks @Ada Admin"
    assert instruction == "Be brief."
    assert label == "#acme-support"
    clients.slack.fetch_recent_messages.assert_called_once_with("C0001", 1)
    mapping.refresh_from_db()
    assert mapping.last_synced_at is not None


@pytest.mark.django_db
@pytest.mark.parametrize("test_mode, status", [(False, "No messages to sync"), (True, "No messages to test")])
def test_no_messages_makes_no_downstream_calls(mapping, test_mode, status):
    clients = _clients(messages=[])
    outcome = process_mapping(mapping, None, {}, test_mode, clients)

    assert outcome.results == [{"id": mapping.pk, "channel_id": "C0001", "status": status}]
    assert outcome.success is False
    assert outcome.audit_status == CronLogMapping.STATUS_SKIPPED
    clients.summarizer.summarize.assert_not_called()
    clients.hubspot.create_company_note.assert_not_called()


@pytest.mark.django_db
def test_test_mode_never_writes(mapping):
    clients = _clients()
    outcome = process_mapping(mapping, None, {}, True, clients)

    assert outcome.results[0]["status"] == "Test Complete"
    clients.hubspot.create_company_note.assert_not_called()
    mapping.refresh_from_db()
    assert mapping.last_synced_at is None


@pytest.mark.django_db
def test_summarizer_failure_uses_fallback_listing(mapping):
    clients = _clients()
    clients.summarizer.summarize.side_effect = SummarizerError("quota exceeded")

    outcome = process_mapping(mapping, None, {}, False, clients)

    assert outcome.results[0]["status"] == "Synced"
    assert outcome.results[0]["summary"] == fallback_summary(MESSAGES, "quota exceeded")
    clients.hubspot.create_company_note.assert_called_once()


@pytest.mark.django_db
def test_note_failure_is_reported_per_channel(mapping):
    clients = _clients()
    clients.hubspot.create_company_note.side_effect = HubSpotError("boom")

    outcome = process_mapping(mapping, None, {}, False, clients)

    assert outcome.results[0]["status"] == "Failed"
    assert outcome.audit_status == CronLogMapping.STATUS_FAILED
    mapping.refresh_from_db()
    assert mapping.last_synced_at is None


@pytest.mark.django_db
def test_weekly_mapping_looks_back_seven_days(mapping):
    Mapping.objects.filter(pk=mapping.pk).update(cadence="weekly")
    mapping.refresh_from_db()
    clients = _clients()
    process_mapping(mapping, None, {}, True, clients)
    clients.slack.fetch_recent_messages.assert_called_once_with("C0001", 7)


@pytest.mark.django_db
def test_run_sync_uses_active_prompt_and_sleeps_between_mappings(mapping, company, channel, settings):
    settings.SYNC_MAPPING_DELAY_SECONDS = 2
    other = Mapping.objects.create(title="Other", hubspot_company=company)
    MappingSlackChannel.objects.create(mapping=other, slack_channel=channel)
    Prompt.objects.create(name="Default", content="Summarize for account managers.", is_active=True)
    clients = _clients()

    with mock.patch("mappings.services.time.sleep") as sleep:
        outcome = run_sync(test_mode=True, clients=clients)

    assert outcome.message == "Sync process completed"
    assert len(outcome.results) == 2
    sleep.assert_called_once_with(2)
    for call in clients.summarizer.summarize.call_args_list:
        assert call.args[1] == "Summarize for account managers."


@pytest.mark.django_db
def test_run_sync_scoped_to_one_mapping(mapping, company, channel):
    other = Mapping.objects.create(title="Other", hubspot_company=company)
    MappingSlackChannel.objects.create(mapping=other, slack_channel=channel)

    outcome = run_sync(mapping_id=other.pk, test_mode=True, clients=_clients())

    assert {r["id"] for r in outcome.results} == {other.pk}


@pytest.mark.django_db
def test_scheduled_run_writes_cron_log(two_channel_mapping, company, channel):
    weekly = Mapping.objects.create(title="Weekly", cadence="weekly", hubspot_company=company)
    MappingSlackChannel.objects.create(mapping=weekly, slack_channel=channel)
    clients = _clients()
    clients.slack.fetch_recent_messages.side_effect = [SlackError("not_in_channel"), MESSAGES]

    outcome = run_sync(scheduled=True, today=MONDAY, clients=clients)

    assert outcome.message == "Sync process completed"
    log = CronLog.objects.get()
    assert log.status == CronLog.STATUS_COMPLETED
    assert log.cadences == ["daily"]
    assert log.day_of_week == 1
    assert log.mappings_found == 1
    assert log.mappings_executed == 1
    assert log.mappings_failed == 0
    assert log.completed_at is not None
    child = log.mappings.get()
    assert child.mapping_id == two_channel_mapping.pk
    assert child.status == CronLogMapping.STATUS_SUCCESS
    assert child.error_message == "not_in_channel"


@pytest.mark.django_db
def test_scheduled_run_counts_failures(mapping):
    clients = _clients()
    clients.slack.fetch_recent_messages.side_effect = SlackError("ratelimited")

    run_sync(scheduled=True, today=MONDAY, clients=clients)

    log = CronLog.objects.get()
    assert (log.mappings_executed, log.mappings_failed) == (0, 1)
    assert log.mappings.get().status == CronLogMapping.STATUS_FAILED


@pytest.mark.django_db
def test_scheduled_run_on_weekend_is_a_no_op(mapping):
    clients = _clients()
    outcome = run_sync(scheduled=True, today=date(2024, 6, 8), clients=clients)

    assert outcome.message == "No mappings scheduled for sync today"
    assert outcome.results == []
    assert outcome.cadence == {"day_of_week": 6, "day_of_month": 8, "last_day_of_month": 30}
    clients.slack.fetch_recent_messages.assert_not_called()
    log = CronLog.objects.get()
    assert log.status == CronLog.STATUS_COMPLETED
    assert log.mappings_found == 0


@pytest.mark.django_db
def test_fatal_error_marks_cron_log_failed_and_reraises(mapping):
    with mock.patch("mappings.services.mappings_for_sync", side_effect=RuntimeError("db gone")):
        with pytest.raises(RuntimeError):
            run_sync(scheduled=True, today=MONDAY, clients=_clients())

    log = CronLog.objects.get()
    assert log.status == CronLog.STATUS_FAILED
    assert log.error_message == "db gone"


@pytest.mark.django_db
def test_manual_run_writes_no_cron_log(mapping):
    run_sync(test_mode=True, clients=_clients())
    assert not CronLog.objects.exists()
