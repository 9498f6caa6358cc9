"""Persistence helpers for the notification log."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.orm import Session

from app.infrastructure.models import NotificationModel
from app.utils import ensure_app_timezone


@dataclass(frozen=True)
class NotificationRow:
    """Raw stored notification; ``payload`` is still serialized JSON."""

    id: int
    recipient_id: int
    kind: str
    payload: str
    read: bool
    created_at: datetime | None


class NotificationRepository:
    """Append/query access to the ``notification`` table.

    Rows are never deleted here and ``read`` is the only column ever updated.
    Listings follow insertion order (``id``); ``created_at`` is wall-clock time
    in the application timezone and can step backwards.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def insert_notification(self, recipient_id: int, kind: str, payload_json: str) -> NotificationRow:
        model = NotificationModel(
            recipient_id=recipient_id,
            kind=kind,
            payload=payload_json,
            read=False,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_row(model)

    def list_notifications(self, recipient_id: int, limit: int) -> Sequence[NotificationRow]:
        query = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.recipient_id == recipient_id)
            .order_by(NotificationModel.id.desc())
            .limit(limit)
        )
        return [self._to_row(model) for model in query.all()]

    def mark_notification_read(self, notification_id: int, recipient_id: int) -> bool:
        """Flag the row as read; ``False`` when no row belongs to ``recipient_id``."""

        matched = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.id == notification_id,
                NotificationModel.recipient_id == recipient_id,
            )
            .update({NotificationModel.read: True}, synchronize_session=False)
        )
        self.session.commit()
        return bool(matched)

    @staticmethod
    def _to_row(model: NotificationModel) -> NotificationRow:
        return NotificationRow(
            id=model.id,
            recipient_id=model.recipient_id,
            kind=model.kind,
            payload=model.payload,
            read=bool(model.read),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["NotificationRepository", "NotificationRow"]
