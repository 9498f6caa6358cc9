"""Best-effort email delivery for notifications via SendGrid."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Protocol

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from app.config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeliveryOutcome:
    """Result of one send attempt. Never persisted."""

    delivered: bool
    detail: str | None = None


class EmailDispatcher(Protocol):
    """Single-operation side channel used by the notification fanout."""

    def send(self, destination: str, subject: str, body: str) -> DeliveryOutcome:  # pragma: no cover
        ...


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a human readable description for a SendGrid error payload."""

    if body in (None, ""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
    else:
        parsed = body

    if isinstance(parsed, dict):
        errors = parsed.get("errors")
        if isinstance(errors, list):
            messages = [
                str(item["message"]) for item in errors if isinstance(item, dict) and item.get("message")
            ]
            if messages:
                return "; ".join(messages)
        return json.dumps(parsed, default=str)

    if isinstance(parsed, list):
        return "; ".join(str(item) for item in parsed)

    return None


class SendGridEmailDispatcher:
    """Deliver plain-text emails through the SendGrid REST API.

    Every failure (client exception or non-2xx status) is logged and turned
    into an undelivered :class:`DeliveryOutcome`; nothing is raised.
    """

    def __init__(self, api_key: str, sender: str) -> None:
        self._api_key = api_key
        self._sender = sender

    def send(self, destination: str, subject: str, body: str) -> DeliveryOutcome:
        message = Mail(
            from_email=self._sender,
            to_emails=destination,
            subject=subject,
            plain_text_content=body,
        )

        try:
            response = SendGridAPIClient(self._api_key).send(message)
        except Exception as exc:  # noqa: BLE001 - email never fails the caller
            return self._failure(
                getattr(exc, "status_code", None), getattr(exc, "body", None), exc=exc
            )

        status_code = getattr(response, "status_code", None)
        if not isinstance(status_code, int) or not 200 <= status_code < 300:
            return self._failure(status_code, getattr(response, "body", None))

        logger.info("Notification email sent to %s (status %s)", destination, status_code)
        return DeliveryOutcome(delivered=True)

    @staticmethod
    def _failure(status_code: Any, body: Any, *, exc: Exception | None = None) -> DeliveryOutcome:
        details = _extract_sendgrid_error_details(body)
        if status_code and details:
            logger.error("SendGrid API request failed with status %s: %s", status_code, details)
        elif status_code:
            logger.error("SendGrid API request failed with status %s", status_code)
        elif details:
            logger.error("SendGrid API request failed: %s", details)
        else:
            logger.error("Error sending email via SendGrid: %s", exc)
        return DeliveryOutcome(delivered=False, detail=details or (str(exc) if exc else None))


class LoggingEmailDispatcher:
    """Stand-in used when no email transport is configured."""

    def __init__(self, logger_: logging.Logger | None = None) -> None:
        self._logger = logger_ or logger

    def send(self, destination: str, subject: str, body: str) -> DeliveryOutcome:
        self._logger.info("[email disabled] would send to %s: %s | %s", destination, subject, body)
        return DeliveryOutcome(delivered=False, detail="email disabled")


def build_email_dispatcher(settings: Settings) -> EmailDispatcher:
    """Pick the transport once, based on whether SendGrid is configured."""

    if settings.email_enabled:
        return SendGridEmailDispatcher(settings.sendgrid_api_key, settings.sendgrid_sender)

    if settings.sendgrid_api_key or settings.sendgrid_sender:
        logger.warning(
            "SendGrid is only partially configured (SENDGRID_API_KEY set: %s, "
            "SENDGRID_SENDER: %r); notification emails will only be logged",
            bool(settings.sendgrid_api_key),
            settings.sendgrid_sender,
        )
    else:
        logger.info("SendGrid is not configured; notification emails will only be logged")
    return LoggingEmailDispatcher()


__all__ = [
    "DeliveryOutcome",
    "EmailDispatcher",
    "LoggingEmailDispatcher",
    "SendGridEmailDispatcher",
    "build_email_dispatcher",
]
