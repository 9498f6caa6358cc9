"""Per-connection authentication handshake for the notification websocket."""

from __future__ import annotations

import logging
from enum import Enum

from app.domain.entities import Principal
from app.domain.exceptions import InvalidCredential
from app.infrastructure.security import TokenVerifier

from .manager import PushConnection, SessionRegistry

logger = logging.getLogger(__name__)


class HandshakeState(str, Enum):
    OPEN = "open"
    AUTHENTICATING = "authenticating"
    BOUND = "bound"
    REJECTED = "rejected"
    CLOSED = "closed"


class ChannelHandshake:
    """Bind a freshly opened connection to the principal behind its token.

    A rejected token leaves the connection open but unbound, so it never
    receives pushes. ``close`` always unregisters, whatever the state.
    """

    def __init__(
        self,
        connection: PushConnection,
        registry: SessionRegistry,
        verifier: TokenVerifier,
    ) -> None:
        self._connection = connection
        self._registry = registry
        self._verifier = verifier
        self._state = HandshakeState.OPEN
        self._principal: Principal | None = None

    @property
    def state(self) -> HandshakeState:
        return self._state

    @property
    def principal(self) -> Principal | None:
        """The bound principal, or ``None`` unless the state is ``BOUND``."""

        return self._principal if self._state is HandshakeState.BOUND else None

    def authenticate(self, token: str | None) -> HandshakeState:
        if self._state is HandshakeState.CLOSED:
            return self._state

        self._state = HandshakeState.AUTHENTICATING
        try:
            principal = self._verifier.verify(token or "")
        except InvalidCredential as exc:
            logger.warning("Rejected websocket handshake for %r: %s", self._connection, exc)
            if self._principal is not None:
                self._registry.unregister(self._connection)
                self._principal = None
            self._state = HandshakeState.REJECTED
            return self._state

        self._registry.register(principal.id, self._connection)
        self._principal = principal
        self._state = HandshakeState.BOUND
        logger.debug("Connection %r bound to user %s", self._connection, principal.id)
        return self._state

    def close(self) -> None:
        self._registry.unregister(self._connection)
        self._principal = None
        self._state = HandshakeState.CLOSED


__all__ = ["ChannelHandshake", "HandshakeState"]
