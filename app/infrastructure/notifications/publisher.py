"""Push notification messages to the live websockets of a recipient."""

from __future__ import annotations

import logging
from typing import Any

import anyio

from app.domain.entities import NotificationRecord

from .manager import PushConnection, SessionRegistry

logger = logging.getLogger(__name__)


class NotificationPusher:
    """Deliver one message to every connection bound to a principal.

    Delivery is best-effort: each connection is written independently, a
    connection that fails or times out is dropped from the registry, and
    nothing is raised to the caller.
    """

    def __init__(self, registry: SessionRegistry, *, send_timeout: float = 5.0) -> None:
        self._registry = registry
        self._send_timeout = send_timeout

    async def push(self, principal_id: int, message: dict[str, Any]) -> int:
        """Send ``message`` to ``principal_id`` and return how many sockets accepted it."""

        delivered = 0
        for connection in self._registry.resolve(principal_id):
            if await self._send(principal_id, connection, message):
                delivered += 1
        return delivered

    async def _send(
        self, principal_id: int, connection: PushConnection, message: dict[str, Any]
    ) -> bool:
        if connection.closed:
            self._registry.unregister(connection)
            return False

        try:
            with anyio.fail_after(self._send_timeout):
                await connection.send_json(message)
        except TimeoutError:
            logger.warning(
                "Push to %r for user %s timed out; dropping connection", connection, principal_id
            )
        except Exception as exc:  # noqa: BLE001 - a dead socket must not stop the fanout
            if connection.closed:
                logger.debug("Connection %r closed during push; skipping", connection)
            else:
                logger.warning(
                    "Push to %r for user %s failed: %s", connection, principal_id, exc
                )
        else:
            return True

        self._registry.unregister(connection)
        return False


def build_push_message(record: NotificationRecord) -> dict[str, Any]:
    """Wrap ``record`` in the ``notification`` websocket envelope."""

    return {
        "type": "notification",
        "data": {
            "id": record.id,
            "type": record.kind.value,
            "payload": record.payload.to_dict(),
        },
    }


__all__ = ["NotificationPusher", "build_push_message"]
