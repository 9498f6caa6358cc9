"""Public helpers for emitting and reading notifications."""

from .events import announce_new_plan, announce_new_subject
from .fanout import FanoutResult, NotificationFanout
from .log import RECENT_LIMIT, NotificationLog, NotificationStore
from .messages import EmailMessage, compose_email
from .services import NotificationServices, build_notification_services

__all__ = [
    "announce_new_plan",
    "announce_new_subject",
    "FanoutResult",
    "NotificationFanout",
    "RECENT_LIMIT",
    "NotificationLog",
    "NotificationStore",
    "EmailMessage",
    "compose_email",
    "NotificationServices",
    "build_notification_services",
]
