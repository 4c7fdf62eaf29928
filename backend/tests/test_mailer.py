from __future__ import annotations

import json
from typing import Any, Dict, List

import httpx
import pytest

from slc_core import EnrichedEvent, EnrichedPerson, ResendMailer
from slc_core.errors import ConfigurationError, UpstreamError, ValidationError
from slc_core.mailer import build_schedule_html, is_valid_email, schedule_subject


def _person() -> EnrichedPerson:
    return EnrichedPerson(
        name="Doe, Jane",
        school="North <High>",
        events=[
            EnrichedEvent(
                competition="Accounting",
                type="Individual",
                date="",
                check_in_time="",
                start_time="",
                end_time="",
                category="Objective Test",
                rubric_url="https://example.com/hs.pdf",
                bizybear_url="https://bizybear.app/fbla/accounting",
                is_objective_test=True,
                is_team_event=False,
                competitor_count=1,
            ),
            EnrichedEvent(
                competition="Job Interview",
                type="Individual",
                date="Saturday, April 11",
                check_in_time="8:00 AM",
                start_time="8:30 AM",
                end_time="",
                category="Presentation",
                rubric_url="https://example.com/hs.pdf",
                bizybear_url=None,
                is_objective_test=False,
                is_team_event=False,
                competitor_count=3,
            ),
        ],
    )


@pytest.fixture(autouse=True)
def reset_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("RESEND_API_KEY", raising=False)
    monkeypatch.delenv("RESEND_FROM", raising=False)
    monkeypatch.delenv("RESEND_API_URL", raising=False)
    yield


def _recording_transport(status: int, body: Any, calls: List[Dict[str, Any]]) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        calls.append({"url": str(request.url), "headers": request.headers, "json": json.loads(request.content)})
        return httpx.Response(status, json=body)

    return httpx.MockTransport(handler)


def test_email_validation() -> None:
    assert is_valid_email("user@example.com") is True
    assert is_valid_email("not-an-email") is False
    assert is_valid_email("user@localhost") is False
    assert is_valid_email("us er@example.com") is False
    assert is_valid_email(None) is False


def test_schedule_html_renders_each_event() -> None:
    html = build_schedule_html(_person())

    assert html.startswith("<html>")
    assert "Doe, Jane" in html
    assert "North &lt;High&gt;" in html
    assert "2 events" in html
    assert "credentialing station" in html
    assert "1 other competitor<" in html
    assert "3 other competitors" in html
    assert "<strong>Check-in:</strong> 8:00 AM" in html
    assert "<strong>End:</strong>" not in html
    assert html.count("Practice Questions") == 1
    assert html.count("View Rubric / Guidelines") == 2


def test_subject_contains_name() -> None:
    assert "Doe, Jane" in schedule_subject(_person())


def test_send_schedule_posts_to_resend() -> None:
    calls: List[Dict[str, Any]] = []
    mailer = ResendMailer(api_key="re_test", transport=_recording_transport(200, {"id": "msg_1"}, calls))

    message_id = mailer.send_schedule("user@example.com", _person())

    assert message_id == "msg_1"
    assert len(calls) == 1
    call = calls[0]
    assert call["url"] == "https://api.resend.com/emails"
    assert call["headers"]["authorization"] == "Bearer re_test"
    assert call["json"]["to"] == ["user@example.com"]
    assert call["json"]["subject"] == schedule_subject(_person())
    assert "Accounting" in call["json"]["html"]


def test_sender_and_url_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RESEND_API_KEY", "re_env")
    monkeypatch.setenv("RESEND_FROM", "Events <events@example.com>")
    monkeypatch.setenv("RESEND_API_URL", "https://mail.example.com/send")
    calls: List[Dict[str, Any]] = []
    mailer = ResendMailer(transport=_recording_transport(200, {"id": "msg_2"}, calls))

    mailer.send_schedule("user@example.com", _person())

    assert calls[0]["url"] == "https://mail.example.com/send"
    assert calls[0]["json"]["from"] == "Events <events@example.com>"


@pytest.mark.parametrize(
    "email, person, message",
    [
        ("", _person(), "required"),
        ("user@example.com", None, "required"),
        ("not-an-email", _person(), "valid email"),
    ],
)
def test_invalid_input_is_rejected_before_sending(email, person, message) -> None:
    calls: List[Dict[str, Any]] = []
    mailer = ResendMailer(api_key="re_test", transport=_recording_transport(200, {}, calls))

    with pytest.raises(ValidationError, match=message):
        mailer.send_schedule(email, person)
    assert calls == []


def test_missing_api_key_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError, match="not configured"):
        ResendMailer().send_schedule("user@example.com", _person())


def test_provider_rejection_is_an_upstream_error() -> None:
    calls: List[Dict[str, Any]] = []
    transport = _recording_transport(422, {"statusCode": 422, "message": "Invalid `to` field"}, calls)
    mailer = ResendMailer(api_key="re_test", transport=transport)

    with pytest.raises(UpstreamError, match="Email failed: Invalid `to` field"):
        mailer.send_schedule("user@example.com", _person())
    assert len(calls) == 1


def test_transport_failure_is_an_upstream_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    mailer = ResendMailer(api_key="re_test", transport=httpx.MockTransport(handler))

    with pytest.raises(UpstreamError, match="connection refused"):
        mailer.send_schedule("user@example.com", _person())


def test_accepted_send_without_json_body_returns_no_id() -> None:
    mailer = ResendMailer(
        api_key="re_test",
        transport=httpx.MockTransport(lambda request: httpx.Response(200, text="OK")),
    )

    assert mailer.send_schedule("user@example.com", _person()) is None
