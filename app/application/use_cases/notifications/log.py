"""Durable, append-only notification log."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Sequence
from typing import Protocol

from sqlalchemy.orm import Session

from app.domain.entities import NotificationPayload, NotificationRecord, parse_payload
from app.domain.exceptions import StorageFailure
from app.infrastructure.repositories import NotificationRepository, NotificationRow

logger = logging.getLogger(__name__)

RECENT_LIMIT = 100


class NotificationStore(Protocol):
    """Storage operations the log relies on."""

    def insert_notification(
        self, recipient_id: int, kind: str, payload_json: str
    ) -> NotificationRow:  # pragma: no cover - Protocol
        ...

    def list_notifications(
        self, recipient_id: int, limit: int
    ) -> Sequence[NotificationRow]:  # pragma: no cover - Protocol
        ...

    def mark_notification_read(
        self, notification_id: int, recipient_id: int
    ) -> bool:  # pragma: no cover - Protocol
        ...


class NotificationLog:
    """Record every notification once and serve it back for polling.

    Each call opens its own session from ``session_factory`` so appends can
    run in worker threads independently of the request session.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        store_factory: Callable[[Session], NotificationStore] = NotificationRepository,
    ) -> None:
        self._session_factory = session_factory
        self._store_factory = store_factory

    def append(self, recipient_id: int, payload: NotificationPayload) -> NotificationRecord:
        """Persist ``payload`` for ``recipient_id``.

        Raises :class:`StorageFailure` when the entry cannot be stored.
        """

        payload_json = json.dumps(payload.to_dict(), sort_keys=True)
        try:
            with self._session_factory() as session:
                row = self._store_factory(session).insert_notification(
                    recipient_id, payload.kind.value, payload_json
                )
        except Exception as exc:  # noqa: BLE001 - any storage error breaks durability
            logger.exception(
                "Could not store %s notification for user %s", payload.kind.value, recipient_id
            )
            raise StorageFailure(
                f"Could not store notification for user {recipient_id}",
                recipient_id=recipient_id,
            ) from exc

        return NotificationRecord(
            id=row.id,
            recipient_id=row.recipient_id,
            payload=payload,
            read=row.read,
            created_at=row.created_at,
        )

    def list_recent(self, recipient_id: int) -> list[NotificationRecord]:
        """Return the newest records for ``recipient_id`` (at most 100)."""

        with self._session_factory() as session:
            rows = self._store_factory(session).list_notifications(recipient_id, RECENT_LIMIT)
        return [_row_to_record(row) for row in rows]

    def mark_read(self, record_id: int, recipient_id: int) -> bool:
        """Flag the record as read; unknown ids and foreign owners yield ``False``."""

        with self._session_factory() as session:
            return self._store_factory(session).mark_notification_read(record_id, recipient_id)

    def mark_many_read(self, record_ids: Sequence[int], recipient_id: int) -> int:
        marked = 0
        for record_id in dict.fromkeys(record_ids):
            if isinstance(record_id, int) and self.mark_read(record_id, recipient_id):
                marked += 1
        return marked


def _row_to_record(row: NotificationRow) -> NotificationRecord:
    return NotificationRecord(
        id=row.id,
        recipient_id=row.recipient_id,
        payload=parse_payload(row.kind, json.loads(row.payload)),
        read=row.read,
        created_at=row.created_at,
    )


__all__ = ["NotificationLog", "NotificationStore", "RECENT_LIMIT"]
