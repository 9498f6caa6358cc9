"""Fan a notification out to the log, live websockets and email."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

import anyio

from app.domain.entities import (
    NotificationEvent,
    NotificationPayload,
    NotificationRecord,
    Recipient,
)
from app.infrastructure.email import DeliveryOutcome, EmailDispatcher
from app.infrastructure.notifications import NotificationPusher, build_push_message

from .log import NotificationLog
from .messages import compose_email

logger = logging.getLogger(__name__)


@dataclass
class FanoutResult:
    """What ``notify`` achieved; emails are still in flight when it is returned."""

    records: list[NotificationRecord] = field(default_factory=list)
    pushed: dict[int, int] = field(default_factory=dict)

    @property
    def recipient_ids(self) -> list[int]:
        return [record.recipient_id for record in self.records]


class NotificationFanout:
    """Deliver one domain event to each recipient through every channel.

    For every recipient, in the given order: the durable log append is
    awaited first (a failure raises :class:`StorageFailure` and stops the
    call), then the email is scheduled as a tracked background task and the
    message is pushed to the recipient's live connections. Push and email
    failures are logged and never reach the caller.

    Appends and email sends each run in worker threads drawn from their own
    limiter, separate from the default one that runs the request handlers
    calling ``notify``.
    """

    def __init__(
        self,
        log: NotificationLog,
        pusher: NotificationPusher,
        dispatcher: EmailDispatcher,
        *,
        worker_threads: int = 10,
    ) -> None:
        self._log = log
        self._pusher = pusher
        self._dispatcher = dispatcher
        self._worker_threads = worker_threads
        self._limiters: dict[str, anyio.CapacityLimiter] = {}
        self._pending: set[asyncio.Task[DeliveryOutcome]] = set()

    @property
    def pending_emails(self) -> int:
        return len(self._pending)

    async def notify(
        self, payload: NotificationPayload, recipients: Iterable[Recipient]
    ) -> FanoutResult:
        result = FanoutResult()
        targets = _unique(recipients)
        if not targets:
            logger.debug("No recipients for %s notification; nothing to do", payload.kind.value)
            return result

        for recipient in targets:
            event = NotificationEvent(recipient_id=recipient.id, payload=payload)
            record = await anyio.to_thread.run_sync(
                self._log.append,
                event.recipient_id,
                event.payload,
                limiter=self._worker_limiter("append"),
            )
            result.records.append(record)
            self._schedule_email(event, recipient)
            result.pushed[recipient.id] = await self._push(record)

        logger.info(
            "%s notification stored for users %s", payload.kind.value, result.recipient_ids
        )
        return result

    async def drain(self) -> None:
        """Wait for every scheduled email to finish."""

        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def _worker_limiter(self, name: str) -> anyio.CapacityLimiter:
        # Created on first use so it belongs to the running event loop.
        limiter = self._limiters.get(name)
        if limiter is None:
            limiter = self._limiters[name] = anyio.CapacityLimiter(self._worker_threads)
        return limiter

    async def _push(self, record: NotificationRecord) -> int:
        try:
            return await self._pusher.push(record.recipient_id, build_push_message(record))
        except Exception:  # noqa: BLE001 - push is best-effort
            logger.exception("Push of notification %s to user %s failed", record.id, record.recipient_id)
            return 0

    def _schedule_email(self, event: NotificationEvent, recipient: Recipient) -> None:
        if not recipient.email:
            logger.debug("User %s has no email address; skipping email", recipient.id)
            return

        message = compose_email(event.payload, recipient)
        task = asyncio.get_running_loop().create_task(
            anyio.to_thread.run_sync(
                self._dispatcher.send,
                recipient.email,
                message.subject,
                message.body,
                limiter=self._worker_limiter("email"),
            ),
            name=f"notification-email-{event.kind.value}-{event.recipient_id}",
        )
        self._pending.add(task)
        task.add_done_callback(self._email_finished)

    def _email_finished(self, task: asyncio.Task[DeliveryOutcome]) -> None:
        self._pending.discard(task)
        if task.cancelled():
            logger.warning("Email task %s was cancelled", task.get_name())
            return

        exc = task.exception()
        if exc is not None:
            logger.error("Email task %s failed", task.get_name(), exc_info=exc)
            return

        outcome = task.result()
        if not outcome.delivered:
            logger.info("Email task %s not delivered: %s", task.get_name(), outcome.detail)


def _unique(recipients: Iterable[Recipient]) -> list[Recipient]:
    seen: dict[int, Recipient] = {}
    for recipient in recipients:
        if recipient.id and recipient.id not in seen:
            seen[recipient.id] = recipient
    return list(seen.values())


__all__ = ["FanoutResult", "NotificationFanout"]
