"""
Webhook logging and transcript processing for Fireflies meetings.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone as dt_timezone

from django.utils.dateparse import parse_datetime

from .models import FireHookLog, MeetingNote
from .webhooks import compute_signature, verify_signature

logger = logging.getLogger(__name__)


class TranscriptNotFound(Exception):
    pass


def _payload(body: bytes):
    try:
        data = json.loads(body or b"{}")
    except (ValueError, UnicodeDecodeError):
        return {"raw": body.decode("utf-8", errors="replace")}
    return data


def _clip(field_name: str, value):
    """Coerce a caller-supplied value to fit its ``FireHookLog`` column."""
    if value in (None, ""):
        return None
    return str(value)[: FireHookLog._meta.get_field(field_name).max_length]


def record_delivery(body: bytes, signature: str | None, secret: str) -> FireHookLog:
    """Persist one webhook delivery and its authenticity verdict.

    Header and payload values are truncated to their column lengths so
    that an oversized delivery is still logged.
    """
    payload = _payload(body)
    fields = payload if isinstance(payload, dict) else {}
    log = FireHookLog.objects.create(
        event_type=_clip("event_type", fields.get("eventType") or fields.get("event_type")),
        meeting_id=_clip("meeting_id", fields.get("meetingId") or fields.get("meeting_id")),
        client_reference_id=_clip(
            "client_reference_id", fields.get("clientReferenceId") or fields.get("client_reference_id")
        ),
        payload=payload,
        is_authentic=verify_signature(secret, body, signature) if secret else None,
        computed_signature=compute_signature(secret, body) if secret else None,
        received_signature=_clip("received_signature", signature),
    )
    logger.info(
        "Logged Fireflies webhook %s (event=%s meeting=%s authentic=%s)",
        log.pk,
        log.event_type,
        log.meeting_id,
        log.is_authentic,
    )
    return log


def summary_text(summary: dict | None) -> str | None:
    if not summary:
        return None
    parts = []
    if isinstance(summary.get("action_items"), list):
        parts.append("Action Items: " + ", ".join(str(i) for i in summary["action_items"]))
    elif summary.get("action_items"):
        parts.append("Action Items: " + str(summary["action_items"]))
    if summary.get("outline"):
        parts.append("Outline: " + str(summary["outline"]))
    if isinstance(summary.get("keywords"), list):
        parts.append("Keywords: " + ", ".join(str(k) for k in summary["keywords"]))
    return "\n\n".join(parts) or None


def meeting_date(value) -> datetime | None:
    """Fireflies sends epoch milliseconds; ISO strings are accepted too."""
    if value in (None, ""):
        return None
    if isinstance(value, (int, float)) or (isinstance(value, str) and value.isdigit()):
        try:
            return datetime.fromtimestamp(int(value) / 1000, tz=dt_timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    try:
        return parse_datetime(str(value))
    except ValueError:
        return None


def process_log(log: FireHookLog, fireflies) -> MeetingNote:
    """Fetch the transcript for ``log`` and upsert its ``MeetingNote``.

    Raises ``TranscriptNotFound`` when Fireflies does not know the
    meeting; provider errors propagate as ``FirefliesError``.
    """
    transcript = fireflies.get_transcript(log.meeting_id)
    if not transcript:
        raise TranscriptNotFound(f"Meeting not found: {log.meeting_id}")

    participants = [p for p in transcript.get("participants") or [] if isinstance(p, str) and p.strip()]
    duration = transcript.get("duration")
    note, created = MeetingNote.objects.update_or_create(
        meeting_id=log.meeting_id,
        defaults={
            "title": transcript.get("title") or None,
            "notes": None,
            "transcript_url": transcript.get("transcript_url") or None,
            "summary": summary_text(transcript.get("summary")),
            "participants": participants,
            "duration": round(duration) if duration else None,
            "meeting_date": meeting_date(transcript.get("date")),
        },
    )
    FireHookLog.objects.filter(pk=log.pk).update(processed=True, error_message=None)
    logger.info("%s meeting note %s for %s", "Created" if created else "Updated", note.pk, log.meeting_id)
    return note


def mark_failed(log: FireHookLog, message: str) -> None:
    FireHookLog.objects.filter(pk=log.pk).update(processed=False, error_message=message or "Unknown error occurred")
