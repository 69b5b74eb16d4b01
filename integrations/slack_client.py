"""
Slack Web API adapter.

Wraps ``slack_sdk.WebClient`` for the three reads the sync needs:
channel listing, recent channel history and the workspace member list.
No slack_sdk or transport exception escapes this module: a missing
OAuth scope becomes ``SlackScopeError`` and everything else ``SlackError``.
"""
from __future__ import annotations

import logging
import time

from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError, SlackClientError

from .exceptions import SlackError, SlackScopeError

logger = logging.getLogger(__name__)

CHANNEL_TYPES = "public_channel,private_channel"
PAGE_SIZE = 200
SECONDS_PER_DAY = 86400

# Membership churn and similar housekeeping events carry no conversation.
IGNORED_SUBTYPES = {"channel_join", "channel_leave", "channel_topic", "channel_purpose", "channel_name"}


def _translate(exc: Exception) -> SlackError:
    if not isinstance(exc, SlackApiError):
        return SlackError(f"Slack request failed: {exc}")
    response = exc.response
    error = response.get("error") if response is not None else None
    if error == "missing_scope":
        needed = response.get("needed") or []
        if isinstance(needed, str):
            needed = [s.strip() for s in needed.split(",") if s.strip()]
        return SlackScopeError(needed)
    return SlackError(error or str(exc), code=error)


class SlackClient:
    """Narrow facade over the Slack Web API."""

    def __init__(self, token: str | None = None, client: WebClient | None = None):
        self.client = client or WebClient(token=token)

    def list_channels(self) -> list[dict]:
        """Return every non-archived public and private channel.

        A failure on the first page raises.  A failure on a later page is
        logged and the channels collected so far are returned.
        """
        channels: list[dict] = []
        cursor = None
        while True:
            try:
                response = self.client.conversations_list(
                    types=CHANNEL_TYPES,
                    exclude_archived=True,
                    limit=PAGE_SIZE,
                    cursor=cursor,
                )
            except (SlackClientError, OSError) as exc:
                if cursor is None:
                    raise _translate(exc) from exc
                logger.error("Slack conversations.list failed on cursor %s: %s", cursor, exc)
                break
            channels.extend(response.get("channels") or [])
            cursor = (response.get("response_metadata") or {}).get("next_cursor")
            if not cursor:
                break
        return channels

    def fetch_recent_messages(self, channel_id: str, days: int = 1) -> list[dict]:
        """Messages posted in the last ``days`` days, oldest first."""
        oldest = f"{time.time() - days * SECONDS_PER_DAY:.6f}"
        messages: list[dict] = []
        cursor = None
        while True:
            try:
                response = self.client.conversations_history(
                    channel=channel_id,
                    oldest=oldest,
                    limit=PAGE_SIZE,
                    cursor=cursor,
                )
            except (SlackClientError, OSError) as exc:
                raise _translate(exc) from exc
            for message in response.get("messages") or []:
                if message.get("subtype") in IGNORED_SUBTYPES or not message.get("text"):
                    continue
                messages.append(message)
            cursor = (response.get("response_metadata") or {}).get("next_cursor")
            if not response.get("has_more") or not cursor:
                break
        messages.sort(key=lambda m: float(m.get("ts") or 0))
        return messages

    def list_users(self) -> list[dict]:
        """Active human members of the workspace."""
        users: list[dict] = []
        cursor = None
        while True:
            try:
                response = self.client.users_list(limit=PAGE_SIZE, cursor=cursor)
            except (SlackClientError, OSError) as exc:
                raise _translate(exc) from exc
            for member in response.get("members") or []:
                if member.get("deleted") or member.get("is_bot") or member.get("id") == "USLACKBOT":
                    continue
                users.append(member)
            cursor = (response.get("response_metadata") or {}).get("next_cursor")
            if not cursor:
                break
        return users
