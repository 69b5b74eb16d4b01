"""
Factories that build the outbound adapters from Django settings.

Tokens are checked when an adapter is first needed rather than at
import time, so commands and tests that never touch a provider do not
require its credentials.
"""
from __future__ import annotations

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from .fireflies_client import FirefliesClient
from .hubspot_client import HubSpotClient
from .slack_client import SlackClient
from .summarizer import Summarizer


def _require(name: str) -> str:
    value = getattr(settings, name, "")
    if not value:
        raise ImproperlyConfigured(f"Required setting {name} is not set")
    return value


def get_slack_client() -> SlackClient:
    return SlackClient(token=_require("SLACK_BOT_TOKEN"))


def get_hubspot_client() -> HubSpotClient:
    return HubSpotClient(token=_require("HUBSPOT_ACCESS_TOKEN"), base_url=settings.HUBSPOT_API_URL)


def get_summarizer() -> Summarizer:
    return Summarizer(api_key=_require("OPENAI_API_KEY"), model=settings.OPENAI_MODEL)


def get_fireflies_client() -> FirefliesClient:
    return FirefliesClient(api_key=_require("FIREFLIES_API_KEY"), url=settings.FIREFLIES_GRAPHQL_URL)
