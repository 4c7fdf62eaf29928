from __future__ import annotations

import logging
import os
import re
from html import escape
from typing import Any, Dict, List, Optional

import httpx

from .errors import ConfigurationError, UpstreamError, ValidationError
from .event import EnrichedEvent, EnrichedPerson


logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

DEFAULT_SENDER = "Ohio FBLA Events <onboarding@resend.dev>"
DEFAULT_API_URL = "https://api.resend.com/emails"

NAVY = "#0A2E7F"
GOLD = "#F2A900"
SLATE = "#4A5568"


def is_valid_email(value: Any) -> bool:
    return isinstance(value, str) and bool(EMAIL_PATTERN.match(value))


def schedule_subject(person: EnrichedPerson) -> str:
    return f"Your SLC 2026 Schedule - {person.name}"


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" + ("" if count == 1 else "s")


def build_schedule_html(person: EnrichedPerson) -> str:
    """Render a self-contained, inline-styled HTML schedule for email clients."""

    def para(text: str, style: str = f"margin:0 0 4px;color:{SLATE};font-size:14px;") -> str:
        return f"<p style=\"{style}\">{text}</p>"

    def event_block(event: EnrichedEvent) -> str:
        accent = GOLD if event.is_objective_test else NAVY
        lines: List[str] = [
            f"<div style=\"background:#f8f9ff;border-radius:12px;padding:20px;margin-bottom:16px;"
            f"border-left:4px solid {accent};\">",
            f"<h3 style=\"margin:0 0 8px;color:{NAVY};font-size:16px;\">{escape(event.competition)}</h3>",
            para(f"<strong>Type:</strong> {escape(event.type)}"),
        ]
        if event.is_objective_test:
            lines.append(
                para(
                    "Objective Test: go to the credentialing station within your testing window",
                    f"margin:0 0 4px;color:{GOLD};font-size:14px;font-weight:600;",
                )
            )
        else:
            times = (
                f"<strong>Check-in:</strong> {escape(event.check_in_time)} | "
                f"<strong>Start:</strong> {escape(event.start_time)}"
            )
            if event.end_time:
                times += f" | <strong>End:</strong> {escape(event.end_time)}"
            lines.append(para(f"<strong>Date:</strong> {escape(event.date)}"))
            lines.append(para(times))

        lines.append(
            para(
                _plural(event.competitor_count, "other competitor"),
                f"margin:8px 0 4px;color:{SLATE};font-size:13px;",
            )
        )
        links = [
            f"<a href=\"{escape(event.rubric_url, quote=True)}\" style=\"color:#226ADD;font-size:13px;"
            f"text-decoration:underline;margin-right:16px;\">View Rubric / Guidelines</a>"
        ]
        if event.bizybear_url:
            links.append(
                f"<a href=\"{escape(event.bizybear_url, quote=True)}\" style=\"color:{GOLD};font-size:13px;"
                f"text-decoration:underline;\">Practice Questions</a>"
            )
        lines.append("<div style=\"margin-top:12px;\">" + "".join(links) + "</div>")
        lines.append("</div>")
        return "".join(lines)

    header = (
        f"<div style=\"background:{NAVY};padding:24px;border-radius:12px 12px 0 0;text-align:center;\">"
        "<h1 style=\"color:#FFFFFF;margin:0;font-size:22px;\">Ohio FBLA SLC 2026</h1>"
        "<p style=\"color:rgba(255,255,255,0.8);margin:8px 0 0;font-size:14px;\">Your Competition Schedule</p>"
        "</div>"
    )
    body = (
        "<div style=\"padding:24px;background:#FFFFFF;\">"
        + para(escape(person.name), f"font-size:16px;color:{NAVY};font-weight:700;margin:0 0 4px;")
        + para(
            f"{escape(person.school)} &bull; {_plural(len(person.events), 'event')}",
            f"font-size:14px;color:{SLATE};margin:0 0 20px;",
        )
        + "".join(event_block(event) for event in person.events)
        + "</div>"
    )
    footer = (
        "<div style=\"background:#f0f2f5;padding:16px;border-radius:0 0 12px 12px;text-align:center;\">"
        + para("Good luck! Ohio FBLA &bull; ohfbla.org", f"margin:0;color:{SLATE};font-size:12px;")
        + "</div>"
    )

    return (
        "<html><head><meta charset=\"utf-8\"></head><body>"
        "<div style=\"max-width:600px;margin:0 auto;font-family:'Montserrat',Arial,sans-serif;color:#2D2B2B;\">"
        + header
        + body
        + footer
        + "</div></body></html>"
    )


class ResendMailer:
    """Sends schedule emails through the Resend REST API."""

    def __init__(
        self,
        api_key: str | None = None,
        sender: str | None = None,
        api_url: str | None = None,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.api_key = api_key if api_key is not None else os.getenv("RESEND_API_KEY", "")
        self.sender = sender or os.getenv("RESEND_FROM") or DEFAULT_SENDER
        self.api_url = api_url or os.getenv("RESEND_API_URL") or DEFAULT_API_URL
        self.timeout = timeout
        self.transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def send_schedule(self, email: Any, person: Optional[EnrichedPerson]) -> Optional[str]:
        """Email a person's schedule; returns the provider's message id if given."""
        if not email or person is None:
            raise ValidationError("Email and person data are required.")
        if not is_valid_email(email):
            raise ValidationError("Please enter a valid email address.")
        if not self.configured:
            raise ConfigurationError("Email service is not configured.")

        payload = {
            "from": self.sender,
            "to": [email],
            "subject": schedule_subject(person),
            "html": build_schedule_html(person),
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.post(self.api_url, json=payload, headers=headers)
                response.raise_for_status()
                message_id = self._extract_message_id(response)
        except httpx.HTTPStatusError as exc:
            detail = self._extract_error_detail(exc.response) or str(exc)
            logger.error("Resend rejected schedule email (%s)", detail)
            raise UpstreamError(f"Email failed: {detail}") from exc
        except httpx.HTTPError as exc:
            logger.error("Resend request failed (%s)", exc)
            raise UpstreamError(f"Email failed: {exc}") from exc

        return message_id

    @staticmethod
    def _extract_message_id(response: httpx.Response) -> str | None:
        try:
            data: Any = response.json()
        except ValueError:
            logger.info("Resend accepted schedule email without a JSON body")
            return None
        if isinstance(data, dict) and data.get("id"):
            return str(data["id"])
        return None

    @staticmethod
    def _extract_error_detail(response: httpx.Response | None) -> str | None:
        if response is None:
            return None
        try:
            data: Any = response.json()
        except ValueError:
            text = response.text.strip()
            return text or None

        if isinstance(data, dict):
            for key in ("message", "error", "name"):
                value = data.get(key)
                if isinstance(value, str) and value.strip():
                    return value.strip()
                if isinstance(value, dict):
                    nested: Dict[str, Any] = value
                    message = nested.get("message")
                    if isinstance(message, str) and message.strip():
                        return message.strip()
        return None
