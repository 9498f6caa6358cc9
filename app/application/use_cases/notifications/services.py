"""Wiring of the notification subsystem for one application instance."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.config import Settings
from app.infrastructure.email import EmailDispatcher, build_email_dispatcher
from app.infrastructure.notifications import NotificationPusher, SessionRegistry
from app.infrastructure.security import JwtTokenVerifier, TokenVerifier

from .fanout import NotificationFanout
from .log import NotificationLog


@dataclass
class NotificationServices:
    """Objects shared by the HTTP routes and the websocket endpoint."""

    registry: SessionRegistry
    log: NotificationLog
    fanout: NotificationFanout
    verifier: TokenVerifier


def build_notification_services(
    settings: Settings,
    session_factory: Callable[[], Session],
    *,
    dispatcher: EmailDispatcher | None = None,
    verifier: TokenVerifier | None = None,
) -> NotificationServices:
    registry = SessionRegistry()
    log = NotificationLog(session_factory)
    pusher = NotificationPusher(registry, send_timeout=settings.push_send_timeout_seconds)
    fanout = NotificationFanout(
        log,
        pusher,
        dispatcher or build_email_dispatcher(settings),
        worker_threads=settings.notification_worker_threads,
    )
    return NotificationServices(
        registry=registry,
        log=log,
        fanout=fanout,
        verifier=verifier or JwtTokenVerifier(),
    )


__all__ = ["NotificationServices", "build_notification_services"]
