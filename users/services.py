"""
User helpers shared with the sync.

``slack_user_map`` resolves Slack member ids to display names for
summaries.  ``import_slack_users`` upserts workspace members as
(non-admin) users keyed by Slack id, falling back to email.
"""
from __future__ import annotations

import logging
import uuid

from django.contrib.auth.models import User
from django.db import DatabaseError, IntegrityError, transaction

from integrations.services import empty_report

from .models import UserProfile

logger = logging.getLogger(__name__)


def slack_user_map() -> dict[str, str]:
    """``{slack_id: "First Last"}`` for every user with a Slack id."""
    profiles = UserProfile.objects.select_related("user").exclude(slack_id__isnull=True).exclude(slack_id="")
    return {p.slack_id: p.display_name for p in profiles}


def _names(member: dict) -> tuple[str, str, str]:
    profile = member.get("profile") or {}
    first = profile.get("first_name") or ""
    last = profile.get("last_name") or ""
    if not (first or last):
        real = (profile.get("real_name") or member.get("real_name") or member.get("name") or "").strip()
        first, _, last = real.partition(" ")
    email = (profile.get("email") or "").strip().lower()
    return first[:150], last[:150], email


def upsert_slack_user(member: dict, report: dict) -> None:
    slack_id = member.get("id")
    label = member.get("real_name") or member.get("name") or slack_id
    if not slack_id:
        report["errors"].append("Skipped user: No slack_id")
        return
    first, last, email = _names(member)
    try:
        profile = UserProfile.objects.select_related("user").filter(slack_id=slack_id).first()
        user = profile.user if profile else None
        if user is None and email:
            user = User.objects.filter(email__iexact=email).first()

        if user is not None:
            changed = []
            for field, value in (("first_name", first), ("last_name", last)):
                if value and getattr(user, field) != value:
                    setattr(user, field, value)
                    changed.append(field)
            if email and not user.email:
                user.email = email
                changed.append("email")
            with transaction.atomic():
                if changed:
                    user.save(update_fields=changed)
                if user.profile.slack_id != slack_id:
                    user.profile.slack_id = slack_id
                    user.profile.save(update_fields=["slack_id", "updated_at"])
                    changed.append("slack_id")
            if changed:
                report["updated"] += 1
            return

        try:
            with transaction.atomic():
                user = User(
                    username=email or f"slack-{slack_id.lower()}-{uuid.uuid4().hex[:6]}",
                    email=email,
                    first_name=first,
                    last_name=last,
                )
                user.set_unusable_password()
                user.save()
                user.profile.slack_id = slack_id
                user.profile.save(update_fields=["slack_id", "updated_at"])
        except IntegrityError:
            report["errors"].append(f"Skipped {label}: Duplicate entry (email or slack_id already exists)")
            return
        report["created"] += 1
    except DatabaseError as exc:
        logger.exception("Failed to upsert Slack user %s", slack_id)
        report["errors"].append(f"Error processing {label}: {exc}")


def import_slack_users(slack) -> dict:
    """Upsert every active human member of the workspace."""
    report = empty_report()
    members = slack.list_users()
    logger.info("Importing %d Slack users", len(members))
    for member in members:
        upsert_slack_user(member, report)
    return report
