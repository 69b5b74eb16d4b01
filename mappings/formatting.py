"""
Text helpers for turning Slack history into summarizer input.
"""
from __future__ import annotations

import re

MENTION_RE = re.compile(r"<@([A-Z0-9]+)(?:\|[^>]*)?>")


def replace_mentions(text: str, user_map: dict[str, str]) -> str:
    """``<@U123>`` -> ``@Jane Doe`` for users we know; others left intact."""

    def _sub(match):
        name = user_map.get(match.group(1))
        return f"@{name}" if name else match.group(0)

    return MENTION_RE.sub(_sub, text or "")


def author_name(message: dict, user_map: dict[str, str]) -> str:
    user_id = message.get("user")
    if user_id and user_id in user_map:
        return user_map[user_id]
    profile = message.get("user_profile") or {}
    return profile.get("real_name") or message.get("username") or user_id or "Unknown"


def format_messages(messages: list[dict], user_map: dict[str, str]) -> str:
    """One ``Author: text`` line per message with known user ids resolved."""
    return "\n".join(
        f"{author_name(m, user_map)}: {replace_mentions(m.get('text', ''), user_map)}" for m in messages
    )


def fallback_summary(messages: list[dict], error: str) -> str:
    """Plain listing used when the summarizer is unavailable."""
    lines = [f"Summary unavailable ({error}). Messages:"]
    lines.extend(f"- {m.get('text', '')}" for m in messages)
    return "\n".join(lines)
