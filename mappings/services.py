"""
Mapping sync: Slack history -> summary -> HubSpot note.

``process_mapping`` handles one mapping channel by channel and never
raises for a failing channel; each channel yields a result entry.
``run_sync`` drives a whole run (manual or scheduled), sleeping between
mappings to stay under provider rate limits and, for scheduled runs,
recording the audit trail through ``CronRunLog``.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import date

from django.conf import settings
from django.utils import timezone

from integrations import clients as provider_clients
from prompts.models import Prompt
from users.services import slack_user_map

from .cadence import cadences_for
from .cron_log import CronRunLog
from .formatting import fallback_summary, format_messages
from .models import CronLogMapping, Mapping

logger = logging.getLogger(__name__)

STATUS_SYNCED = "Synced"
STATUS_TEST_COMPLETE = "Test Complete"
STATUS_FAILED = "Failed"
STATUS_NO_MESSAGES = "No messages to sync"
STATUS_NO_MESSAGES_TEST = "No messages to test"

MESSAGE_COMPLETED = "Sync process completed"
MESSAGE_NOTHING_DUE = "No mappings scheduled for sync today"


@dataclass
class SyncClients:
    slack: object
    summarizer: object
    hubspot: object = None


def build_sync_clients(test_mode: bool = False) -> SyncClients:
    """Preview runs never write to HubSpot, so they do not need its token."""
    return SyncClients(
        slack=provider_clients.get_slack_client(),
        summarizer=provider_clients.get_summarizer(),
        hubspot=None if test_mode else provider_clients.get_hubspot_client(),
    )


@dataclass
class MappingSyncResult:
    success: bool
    error: str | None = None
    results: list[dict] = field(default_factory=list)

    @property
    def audit_status(self) -> str:
        if self.success:
            return CronLogMapping.STATUS_SUCCESS
        if self.error:
            return CronLogMapping.STATUS_FAILED
        return CronLogMapping.STATUS_SKIPPED


@dataclass
class SyncOutcome:
    message: str
    results: list[dict] = field(default_factory=list)
    cadence: dict | None = None

    def as_dict(self) -> dict:
        data = {"message": self.message, "results": self.results}
        if self.cadence is not None:
            data["cadence"] = self.cadence
        return data


def process_mapping(mapping: Mapping, system_prompt: str | None, user_map: dict, test_mode: bool, clients: SyncClients) -> MappingSyncResult:
    """Summarize every channel of ``mapping`` and post the notes.

    The mapping succeeds when at least one channel succeeds; the first
    channel error is kept as the mapping's error.
    """
    outcome = MappingSyncResult(success=False)
    company = mapping.hubspot_company

    for link in mapping.channel_links.all():
        channel = link.slack_channel
        base = {"id": mapping.pk, "channel_id": channel.channel_id}
        try:
            messages = clients.slack.fetch_recent_messages(channel.channel_id, mapping.lookback_days)
            if not messages:
                outcome.results.append({**base, "status": STATUS_NO_MESSAGES_TEST if test_mode else STATUS_NO_MESSAGES})
                continue

            text = format_messages(messages, user_map)
            try:
                summary = clients.summarizer.summarize(text, system_prompt, channel.label)
            except Exception as exc:
                logger.warning("Summarizer failed for %s, using fallback: %s", channel.channel_id, exc)
                summary = fallback_summary(messages, getattr(exc, "message", None) or str(exc) or "Unknown error")

            if not test_mode:
                clients.hubspot.create_company_note(company.company_id, summary)
                Mapping.objects.filter(pk=mapping.pk).update(last_synced_at=timezone.now())

            outcome.results.append(
                {
                    **base,
                    "status": STATUS_TEST_COMPLETE if test_mode else STATUS_SYNCED,
                    "summary": summary,
                    "destination": {"name": company.name, "id": company.company_id},
                }
            )
            outcome.success = True
        except Exception as exc:
            message = getattr(exc, "message", None) or str(exc) or "Unknown error"
            logger.error(
                "%s mapping %s channel %s failed: %s",
                "Testing" if test_mode else "Syncing",
                mapping.pk,
                channel.channel_id,
                message,
            )
            outcome.results.append({**base, "status": STATUS_FAILED, "error": message})
            if outcome.error is None:
                outcome.error = message

    return outcome


def mappings_for_sync(mapping_id: int | None = None, cadences: list[str] | None = None):
    qs = Mapping.objects.select_related("hubspot_company").prefetch_related("channel_links__slack_channel")
    if mapping_id is not None:
        qs = qs.filter(pk=mapping_id)
    if cadences is not None:
        qs = qs.filter(cadence__in=cadences)
    return qs.order_by("id")


def run_sync(
    mapping_id: int | None = None,
    test_mode: bool = False,
    scheduled: bool = False,
    today: date | None = None,
    clients: SyncClients | None = None,
) -> SyncOutcome:
    """Run one sync pass.

    Scheduled runs only pick mappings whose cadence is due ``today`` and
    are audited in ``CronLog``.  Errors outside the per-channel loop
    (database reads, missing configuration) propagate after being
    recorded on the run's audit row.
    """
    cron_log = CronRunLog() if scheduled else None
    try:
        cadence = None
        if scheduled:
            cadence = cadences_for(today or timezone.localdate())
            cron_log.start(cadence)
            if not cadence.should_sync:
                logger.info(
                    "No mappings due today (day %s, date %s/%s)",
                    cadence.day_of_week,
                    cadence.day_of_month,
                    cadence.last_day_of_month,
                )
                cron_log.complete_empty()
                return SyncOutcome(MESSAGE_NOTHING_DUE, [], cadence.as_dict())

        mappings = list(mappings_for_sync(mapping_id, cadence.cadences if cadence else None))
        logger.info("Found %d mapping(s) to sync", len(mappings))
        if cron_log is not None:
            cron_log.record_found(len(mappings))

        active_prompt = Prompt.objects.active()
        system_prompt = active_prompt.content if active_prompt else None
        user_map = slack_user_map()
        if mappings and clients is None:
            clients = build_sync_clients(test_mode)

        results: list[dict] = []
        outcomes: dict[int, MappingSyncResult] = {}
        for index, mapping in enumerate(mappings):
            outcome = process_mapping(mapping, system_prompt, user_map, test_mode, clients)
            results.extend(outcome.results)
            outcomes[mapping.pk] = outcome
            if index < len(mappings) - 1 and settings.SYNC_MAPPING_DELAY_SECONDS:
                logger.debug("Waiting %ss before the next mapping", settings.SYNC_MAPPING_DELAY_SECONDS)
                time.sleep(settings.SYNC_MAPPING_DELAY_SECONDS)

        if cron_log is not None:
            cron_log.finalize(outcomes)
        return SyncOutcome(MESSAGE_COMPLETED, results)
    except Exception as exc:
        logger.exception("Sync run failed")
        if cron_log is not None:
            cron_log.fail(str(exc))
        raise
