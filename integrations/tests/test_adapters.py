"""
Tests for the Slack, HubSpot, OpenAI and Fireflies adapters with their
transports mocked out.
"""
from types import SimpleNamespace
from unittest import mock
from urllib.error import URLError

import pytest
import requests
from openai import OpenAIError
from slack_sdk.errors import SlackApiError, SlackRequestError

from integrations.exceptions import (
    FirefliesError,
    HubSpotError,
    HubSpotRateLimitError,
    SlackError,
    SlackScopeError,
    SummarizerError,
)
from integrations.fireflies_client import FirefliesClient
from integrations.hubspot_client import HubSpotClient, is_rate_limit, note_body_html
from integrations.slack_client import SlackClient
from integrations.summarizer import DEFAULT_INSTRUCTION, Summarizer


def _slack_error(error, **extra):
    return SlackApiError("slack failed", {"ok": False, "error": error, **extra})


def _http(status_code=200, payload=None, text="", headers=None):
    resp = mock.Mock()
    resp.status_code = status_code
    resp.ok = status_code < 400
    resp.json.return_value = payload if payload is not None else {}
    resp.text = text
    resp.headers = headers or {}
    resp.content = b"{}" if payload is not None else b""
    return resp


# --- Slack ---------------------------------------------------------------

def test_list_channels_follows_cursor():
    web = mock.Mock()
    web.conversations_list.side_effect = [
        {"channels": [{"id": "C1"}], "response_metadata": {"next_cursor": "abc"}},
        {"channels": [{"id": "C2"}], "response_metadata": {"next_cursor": ""}},
    ]
    assert [c["id"] for c in SlackClient(client=web).list_channels()] == ["C1", "C2"]
    assert web.conversations_list.call_args_list[1].kwargs["cursor"] == "abc"


def test_list_channels_keeps_partial_results_after_later_page_error():
    web = mock.Mock()
    web.conversations_list.side_effect = [
        {"channels": [{"id": "C1"}], "response_metadata": {"next_cursor": "abc"}},
        _slack_error("internal_error"),
    ]
    assert [c["id"] for c in SlackClient(client=web).list_channels()] == ["C1"]


def test_missing_scope_names_needed_scopes():
    web = mock.Mock()
    web.conversations_list.side_effect = _slack_error("missing_scope", needed="channels:read,groups:read")

    with pytest.raises(SlackScopeError) as info:
        SlackClient(client=web).list_channels()

    exc = info.value
    assert exc.needed == ["channels:read", "groups:read"]
    assert exc.status_code == 400
    data = exc.as_response_data()
    assert data["details"]["needed"] == ["channels:read", "groups:read"]
    assert "channels:read, groups:read" in data["error"]


def test_other_slack_errors_are_generic():
    web = mock.Mock()
    web.conversations_history.side_effect = _slack_error("channel_not_found")
    with pytest.raises(SlackError) as info:
        SlackClient(client=web).fetch_recent_messages("C1", 7)
    assert not isinstance(info.value, SlackScopeError)
    assert info.value.message == "channel_not_found"
    assert info.value.status_code == 500


@pytest.mark.parametrize(
    "effect", [URLError("timed out"), TimeoutError("read timed out"), SlackRequestError("bad request")]
)
def test_transport_failures_are_slack_errors(effect):
    web = mock.Mock()
    web.conversations_history.side_effect = effect
    web.users_list.side_effect = effect
    client = SlackClient(client=web)
    with pytest.raises(SlackError):
        client.fetch_recent_messages("C1", 1)
    with pytest.raises(SlackError):
        client.list_users()


def test_fetch_recent_messages_filters_and_orders():
    web = mock.Mock()
    web.conversations_history.return_value = {
        "messages": [
            {"ts": "3.0", "text": "third"},
            {"ts": "2.0", "text": "joined", "subtype": "channel_join"},
            {"ts": "1.0", "text": "first"},
            {"ts": "1.5", "text": ""},
        ],
        "has_more": False,
    }
    messages = SlackClient(client=web).fetch_recent_messages("C1", 1)
    assert [m["text"] for m in messages] == ["first", "third"]
    assert web.conversations_history.call_args.kwargs["channel"] == "C1"


def test_list_users_skips_bots_and_deleted():
    web = mock.Mock()
    web.users_list.return_value = {
        "members": [
            {"id": "U1"},
            {"id": "U2", "is_bot": True},
            {"id": "U3", "deleted": True},
            {"id": "USLACKBOT"},
        ],
    }
    assert [u["id"] for u in SlackClient(client=web).list_users()] == ["U1"]


# --- HubSpot -------------------------------------------------------------

@pytest.mark.parametrize(
    "status_code, message, expected",
    [
        (429, "", True),
        (400, "You have reached your secondly Rate Limit", True),
        (500, "Too Many Requests", True),
        (500, "boom", False),
    ],
)
def test_rate_limit_classification(status_code, message, expected):
    assert is_rate_limit(status_code, message) is expected


def test_companies_page_returns_next_cursor():
    session = mock.Mock()
    session.request.return_value = _http(
        payload={"results": [{"id": "1"}], "paging": {"next": {"after": "100"}}}
    )
    results, after = HubSpotClient("tok", session=session).get_companies_page(after="0")

    assert results == [{"id": "1"}]
    assert after == "100"
    kwargs = session.request.call_args.kwargs
    assert kwargs["params"]["limit"] == 100
    assert kwargs["params"]["after"] == "0"
    assert kwargs["headers"]["Authorization"] == "Bearer tok"


def test_last_companies_page_has_no_cursor():
    session = mock.Mock()
    session.request.return_value = _http(payload={"results": []})
    assert HubSpotClient("tok", session=session).get_companies_page() == ([], None)


def test_http_429_is_retried_once_then_raises():
    session = mock.Mock()
    session.request.return_value = _http(429, payload={"message": "slow down"}, headers={"Retry-After": "60"})
    with mock.patch("integrations.hubspot_client.time.sleep") as sleep, pytest.raises(HubSpotRateLimitError) as info:
        HubSpotClient("tok", session=session).get_companies_page()
    assert session.request.call_count == 2
    sleep.assert_called_once_with(10.0)
    assert info.value.status_code == 429
    assert info.value.as_response_data()["error"].startswith("HubSpot API Rate Limit Error: slow down")


def test_transport_failure_is_hubspot_error():
    session = mock.Mock()
    session.request.side_effect = requests.ConnectionError("dns")
    with pytest.raises(HubSpotError):
        HubSpotClient("tok", session=session).create_company_note("9001", "hi")


def test_create_note_associates_company():
    session = mock.Mock()
    session.request.return_value = _http(payload={"id": "n1"})

    note_id = HubSpotClient("tok", session=session).create_company_note("9001", "line 1\n<b>line 2</b>")

    assert note_id == "n1"
    method, url = session.request.call_args.args
    assert (method, url) == ("POST", "https://api.hubapi.com/crm/v3/objects/notes")
    body = session.request.call_args.kwargs["json"]
    assert body["properties"]["hs_note_body"] == "line 1<br>&lt;b&gt;line 2&lt;/b&gt;"
    assert body["associations"][0]["to"] == {"id": "9001"}
    assert body["associations"][0]["types"][0]["associationTypeId"] == 190


def test_note_body_html_escapes():
    assert note_body_html("a & b") == "a &amp; b"


# --- Summarizer ----------------------------------------------------------

def _completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def test_summarize_passes_instruction_and_label():
    openai_client = mock.Mock()
    openai_client.chat.completions.create.return_value = _completion("  - shipped  ")

    summary = Summarizer("sk", model="m", client=openai_client).summarize("a: b", None, "#general")

    assert summary == "- shipped"
    kwargs = openai_client.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "m"
    assert kwargs["messages"][0]["content"] == DEFAULT_INSTRUCTION
    assert "#general" in kwargs["messages"][1]["content"]


@pytest.mark.parametrize("effect", [OpenAIError("quota"), None])
def test_summarize_failures_raise_summarizer_error(effect):
    openai_client = mock.Mock()
    if effect is not None:
        openai_client.chat.completions.create.side_effect = effect
    else:
        openai_client.chat.completions.create.return_value = _completion("   ")
    with pytest.raises(SummarizerError):
        Summarizer("sk", client=openai_client).summarize("a: b")


# --- Fireflies -----------------------------------------------------------

def test_fireflies_lookup_by_id():
    session = mock.Mock()
    session.post.return_value = _http(payload={"data": {"transcript": {"id": "m1", "title": "Kickoff"}}})
    assert FirefliesClient("key", session=session).get_transcript("m1")["title"] == "Kickoff"
    assert session.post.call_count == 1


def test_fireflies_falls_back_to_recent_scan():
    session = mock.Mock()
    session.post.side_effect = [
        _http(payload={"errors": [{"message": "not found"}]}),
        _http(payload={"data": {"transcripts": [{"id": "m0"}, {"id": "m1", "title": "Found"}]}}),
    ]
    assert FirefliesClient("key", session=session).get_transcript("m1")["title"] == "Found"
    assert session.post.call_args.kwargs["json"]["variables"] == {"limit": 500}


def test_fireflies_scan_http_error_raises():
    session = mock.Mock()
    session.post.side_effect = [_http(404, text="nope"), _http(502, text="bad gateway")]
    with pytest.raises(FirefliesError) as info:
        FirefliesClient("key", session=session).get_transcript("m1")
    assert "502" in info.value.message


def test_http_429_retry_can_succeed():
    session = mock.Mock()
    session.request.side_effect = [
        _http(429, payload={"message": "slow down"}, headers={"Retry-After": "2"}),
        _http(payload={"results": [{"id": "7"}]}),
    ]
    with mock.patch("integrations.hubspot_client.time.sleep") as sleep:
        results, after = HubSpotClient("tok", session=session).get_companies_page()
    assert results == [{"id": "7"}]
    sleep.assert_called_once_with(2.0)
