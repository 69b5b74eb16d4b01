"""
Bulk import of Slack channels and HubSpot companies.

Both imports upsert by external id: unknown ids are created, known ids
get their cached name refreshed when it changed, and per-record
failures are collected as messages instead of aborting the import.
"""
from __future__ import annotations

import logging

from django.db import DatabaseError, IntegrityError, transaction

from .exceptions import HubSpotRateLimitError, IntegrationError
from .models import HubspotCompany, SlackChannel

logger = logging.getLogger(__name__)


def empty_report() -> dict:
    return {"created": 0, "updated": 0, "errors": []}


def upsert_reference(model, id_field: str, external_id, name, report: dict) -> None:
    """Create or rename one ``SlackChannel``/``HubspotCompany`` row."""
    label = name or external_id
    if not external_id:
        report["errors"].append(f"Skipped {model._meta.verbose_name}: No {id_field}")
        return
    external_id = str(external_id)
    try:
        existing = model.objects.filter(**{id_field: external_id}).first()
        if existing is not None:
            if name and name != existing.name:
                existing.name = name
                existing.save(update_fields=["name", "updated_at"])
                report["updated"] += 1
            return
        try:
            with transaction.atomic():
                model.objects.create(**{id_field: external_id, "name": name or None})
        except IntegrityError:
            report["errors"].append(f"Skipped {label}: Duplicate entry ({id_field} already exists)")
            return
        report["created"] += 1
    except DatabaseError as exc:
        logger.exception("Failed to upsert %s %s", model.__name__, external_id)
        report["errors"].append(f"Error processing {label}: {exc}")


def import_slack_channels(slack) -> dict:
    """Upsert every channel the bot can see.  Slack errors propagate."""
    report = empty_report()
    channels = slack.list_channels()
    logger.info("Importing %d Slack channels", len(channels))
    for channel in channels:
        upsert_reference(SlackChannel, "channel_id", channel.get("id"), channel.get("name"), report)
    return report


def import_hubspot_companies(hubspot) -> dict:
    """Upsert every HubSpot company, page by page.

    Errors on the first page (and rate limits on any page) propagate.
    A failure on a later page stops paging and is reported alongside
    the companies already imported.
    """
    report = empty_report()
    after = None
    while True:
        try:
            companies, next_after = hubspot.get_companies_page(after=after)
        except HubSpotRateLimitError:
            raise
        except IntegrationError as exc:
            if after is None:
                raise
            logger.error("HubSpot company paging stopped at %s: %s", after, exc.message)
            report["errors"].append(f"Error fetching additional pages: {exc.message}")
            break
        for company in companies:
            name = (company.get("properties") or {}).get("name")
            upsert_reference(HubspotCompany, "company_id", company.get("id"), name, report)
        if not next_after:
            break
        after = next_after
    return report
