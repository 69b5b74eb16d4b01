"""
Chat-completion summarizer backed by the OpenAI API.

Callers must treat every failure as recoverable: the sync substitutes a
plain listing of the raw messages when ``summarize`` raises.
"""
from __future__ import annotations

import logging

from openai import OpenAI, OpenAIError

from .exceptions import SummarizerError

logger = logging.getLogger(__name__)

DEFAULT_INSTRUCTION = (
    "You are an assistant that summarizes Slack conversations for account managers. "
    "Write a concise summary of the key topics, decisions, open questions and action items. "
    "Use short bullet points and plain text. Do not invent information."
)


class Summarizer:
    def __init__(self, api_key: str, model: str = "gpt-4o-mini", client=None):
        self.client = client or OpenAI(api_key=api_key)
        self.model = model

    def summarize(self, messages_text: str, instruction: str | None = None, channel_label: str | None = None) -> str:
        source = f"the Slack channel {channel_label}" if channel_label else "a Slack channel"
        try:
            completion = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": instruction or DEFAULT_INSTRUCTION},
                    {
                        "role": "user",
                        "content": f"Summarize the following conversation from {source}:\n\n{messages_text}",
                    },
                ],
                temperature=0.3,
                max_tokens=600,
            )
        except OpenAIError as exc:
            logger.warning("OpenAI summary failed for %s: %s", source, exc)
            raise SummarizerError(str(exc)) from exc

        content = completion.choices[0].message.content if completion.choices else None
        if not content or not content.strip():
            raise SummarizerError("Empty summary returned")
        return content.strip()
