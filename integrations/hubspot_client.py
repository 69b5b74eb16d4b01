"""
HubSpot CRM adapter.

Talks to the CRM v3 REST API with ``requests`` using a private-app
access token.  Companies are listed 100 at a time following HubSpot's
opaque ``after`` cursor; summary notes are created with a default
note-to-company association.  A 429 is retried once after ``Retry-After``.
"""
from __future__ import annotations

import html
import logging
import time

import requests
from django.utils import timezone

from .exceptions import HubSpotError, HubSpotRateLimitError

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 100
# HubSpot-defined association type id for note -> company.
NOTE_TO_COMPANY_ASSOCIATION = 190
MAX_RETRY_WAIT_SECONDS = 10.0


def _retry_after(resp) -> float:
    try:
        return min(float(resp.headers.get("Retry-After") or 1), MAX_RETRY_WAIT_SECONDS)
    except (TypeError, ValueError):
        return 1.0


def is_rate_limit(status_code, message: str) -> bool:
    lowered = (message or "").lower()
    return status_code == 429 or "rate limit" in lowered or "too many requests" in lowered


def note_body_html(text: str) -> str:
    """HubSpot renders note bodies as HTML; keep the summary's line breaks."""
    return "<br>".join(html.escape(line) for line in text.splitlines())


class HubSpotClient:
    def __init__(self, token: str, base_url: str = "https://api.hubapi.com", session=None, timeout: int = 15):
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str, **kwargs) -> dict:
        headers = {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
        }
        for attempt in range(2):
            try:
                resp = self.session.request(
                    method, f"{self.base_url}{path}", headers=headers, timeout=self.timeout, **kwargs
                )
            except requests.RequestException as exc:
                raise HubSpotError(str(exc)) from exc
            if resp.status_code != 429 or attempt:
                break
            wait = _retry_after(resp)
            logger.warning("HubSpot %s %s rate limited, retrying once in %.1fs", method, path, wait)
            time.sleep(wait)

        if resp.status_code >= 400:
            try:
                message = resp.json().get("message") or resp.text
            except ValueError:
                message = resp.text
            message = (message or f"HTTP {resp.status_code}")[:512]
            logger.error("HubSpot %s %s failed (%s): %s", method, path, resp.status_code, message)
            if is_rate_limit(resp.status_code, message):
                raise HubSpotRateLimitError(message, code=resp.status_code)
            raise HubSpotError(message, code=resp.status_code)
        if not resp.content:
            return {}
        return resp.json()

    def get_companies_page(self, after: str | None = None, limit: int = DEFAULT_PAGE_SIZE):
        """Fetch one page of companies.

        Returns a ``(companies, next_after)`` tuple; ``next_after`` is None
        on the last page.
        """
        params = {"limit": limit, "properties": "name", "archived": "false"}
        if after:
            params["after"] = after
        data = self._request("GET", "/crm/v3/objects/companies", params=params)
        next_after = ((data.get("paging") or {}).get("next") or {}).get("after")
        return data.get("results") or [], next_after

    def create_company_note(self, company_id: str, body: str) -> str:
        """Attach ``body`` as a note on the company; returns the note id."""
        payload = {
            "properties": {
                "hs_timestamp": timezone.now().isoformat(),
                "hs_note_body": note_body_html(body),
            },
            "associations": [
                {
                    "to": {"id": str(company_id)},
                    "types": [
                        {
                            "associationCategory": "HUBSPOT_DEFINED",
                            "associationTypeId": NOTE_TO_COMPANY_ASSOCIATION,
                        }
                    ],
                }
            ],
        }
        data = self._request("POST", "/crm/v3/objects/notes", json=payload)
        note_id = data.get("id")
        logger.info("Created HubSpot note %s on company %s", note_id, company_id)
        return note_id
