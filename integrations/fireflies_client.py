"""
Fireflies.ai GraphQL adapter.

Used by the webhook "process" action to pull a meeting transcript's
metadata after Fireflies notifies us that it is ready.  Lookup by id is
tried first; when that yields nothing the most recent transcripts are
scanned for a matching id.
"""
from __future__ import annotations

import logging

import requests

from .exceptions import FirefliesError

logger = logging.getLogger(__name__)

TRANSCRIPT_FIELDS = """
    id
    title
    transcript_url
    summary {
        action_items
        outline
        keywords
    }
    participants
    duration
    date
"""

QUERY_BY_ID = f"""
query GetTranscript($id: String!) {{
    transcript(id: $id) {{{TRANSCRIPT_FIELDS}}}
}}
"""

QUERY_RECENT = f"""
query GetTranscripts($limit: Int) {{
    transcripts(limit: $limit) {{{TRANSCRIPT_FIELDS}}}
}}
"""

SCAN_LIMIT = 500


class FirefliesClient:
    def __init__(self, api_key: str, url: str = "https://api.fireflies.ai/graphql", session=None, timeout: int = 20):
        self.api_key = api_key
        self.url = url
        self.session = session or requests.Session()
        self.timeout = timeout

    def _post(self, query: str, variables: dict) -> requests.Response:
        try:
            return self.session.post(
                self.url,
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Bearer {self.api_key}",
                },
                json={"query": query, "variables": variables},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise FirefliesError(str(exc)) from exc

    def get_transcript(self, meeting_id: str) -> dict | None:
        """Return the transcript dict for ``meeting_id`` or None if unknown."""
        resp = self._post(QUERY_BY_ID, {"id": meeting_id})
        if resp.ok:
            result = resp.json()
            if result.get("errors"):
                logger.info("Fireflies lookup by id returned errors: %s", result["errors"])
            elif (result.get("data") or {}).get("transcript"):
                return result["data"]["transcript"]
        else:
            logger.info("Fireflies lookup by id failed (%s): %s", resp.status_code, resp.text[:200])

        resp = self._post(QUERY_RECENT, {"limit": SCAN_LIMIT})
        if not resp.ok:
            raise FirefliesError(f"HTTP error: {resp.status_code} - {resp.text[:500]}", code=resp.status_code)
        result = resp.json()
        if result.get("errors"):
            raise FirefliesError(f"GraphQL errors: {str(result['errors'])[:500]}")
        transcripts = (result.get("data") or {}).get("transcripts") or []
        logger.info("Scanning %d Fireflies transcripts for %s", len(transcripts), meeting_id)
        return next((t for t in transcripts if t.get("id") == meeting_id), None)
