"""Connection bookkeeping for notification websockets."""

from __future__ import annotations

import threading
import uuid
from typing import Any, Protocol

from fastapi import WebSocket, WebSocketDisconnect
from starlette.websockets import WebSocketState

from app.domain.exceptions import DeliveryFailure


class PushConnection(Protocol):
    """Anything the registry can hold and the pusher can write to."""

    @property
    def closed(self) -> bool:  # pragma: no cover - Protocol
        ...

    async def send_json(self, message: dict[str, Any]) -> None:  # pragma: no cover - Protocol
        ...


class WebSocketConnection:
    """Handle wrapping a live websocket; hashed and compared by identity."""

    def __init__(self, websocket: WebSocket) -> None:
        self.id = uuid.uuid4().hex
        self._websocket = websocket
        self._closed = False

    @property
    def closed(self) -> bool:
        return (
            self._closed
            or self._websocket.client_state is not WebSocketState.CONNECTED
            or self._websocket.application_state is not WebSocketState.CONNECTED
        )

    def mark_closed(self) -> None:
        self._closed = True

    async def send_json(self, message: dict[str, Any]) -> None:
        try:
            await self._websocket.send_json(message)
        except (WebSocketDisconnect, RuntimeError, OSError) as exc:
            raise DeliveryFailure(f"websocket {self.id} unavailable: {exc}") from exc

    def __repr__(self) -> str:
        return f"WebSocketConnection(id={self.id!r})"


class SessionRegistry:
    """Track which live connections belong to which principal.

    Both indexes are updated under one lock so ``resolve`` never observes a
    half-applied mutation. The lock is never held across I/O.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._by_principal: dict[int, set[PushConnection]] = {}
        self._owners: dict[PushConnection, int] = {}

    def register(self, principal_id: int, connection: PushConnection) -> None:
        """Bind ``connection`` to ``principal_id``; a later call for the same handle wins."""

        with self._lock:
            previous = self._owners.get(connection)
            if previous == principal_id:
                return
            if previous is not None:
                self._discard(previous, connection)
            self._owners[connection] = principal_id
            self._by_principal.setdefault(principal_id, set()).add(connection)

    def unregister(self, connection: PushConnection) -> None:
        """Forget ``connection``; unknown handles are ignored."""

        with self._lock:
            principal_id = self._owners.pop(connection, None)
            if principal_id is not None:
                self._discard(principal_id, connection)

    def resolve(self, principal_id: int) -> frozenset[PushConnection]:
        with self._lock:
            return frozenset(self._by_principal.get(principal_id, ()))

    def owner_of(self, connection: PushConnection) -> int | None:
        with self._lock:
            return self._owners.get(connection)

    def principals(self) -> list[int]:
        with self._lock:
            return sorted(self._by_principal)

    def count(self) -> int:
        with self._lock:
            return len(self._owners)

    def _discard(self, principal_id: int, connection: PushConnection) -> None:
        connections = self._by_principal.get(principal_id)
        if connections is None:
            return
        connections.discard(connection)
        if not connections:
            del self._by_principal[principal_id]


__all__ = ["PushConnection", "SessionRegistry", "WebSocketConnection"]
