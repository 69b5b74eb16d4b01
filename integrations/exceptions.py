"""
Domain errors raised by the outbound API adapters.

Each adapter translates its provider's failures into one of these so
views can map them to HTTP responses without knowing which SDK raised
them: rate limits become 429, missing permissions 400 with remediation
text, anything else 500 with the provider message attached.
"""
from __future__ import annotations

from rest_framework import status


class IntegrationError(Exception):
    """Base class for provider failures."""

    provider = "integration"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, *, code=None):
        super().__init__(message)
        self.message = message
        self.code = code

    def as_response_data(self) -> dict:
        return {
            "error": f"{self.provider} API Error: {self.message}",
            "details": {"code": self.code, "message": self.message},
        }


class SlackError(IntegrationError):
    provider = "Slack"


class SlackScopeError(SlackError):
    """The bot token lacks an OAuth scope the call needs."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, needed: list[str], *, code="missing_scope"):
        self.needed = list(needed)
        scopes = ", ".join(self.needed) or "unknown"
        super().__init__(
            f"Missing Slack OAuth scope(s): {scopes}. Add them to the Slack app, "
            "reinstall it to the workspace and update SLACK_BOT_TOKEN.",
            code=code,
        )

    def as_response_data(self) -> dict:
        data = super().as_response_data()
        data["details"]["needed"] = self.needed
        return data


class HubSpotError(IntegrationError):
    provider = "HubSpot"


class HubSpotRateLimitError(HubSpotError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS

    def as_response_data(self) -> dict:
        data = super().as_response_data()
        data["error"] = f"HubSpot API Rate Limit Error: {self.message}. Please try again later."
        return data


class SummarizerError(IntegrationError):
    provider = "OpenAI"


class FirefliesError(IntegrationError):
    provider = "Fireflies"
