"""Endpoints and websocket handler for notifications."""

from __future__ import annotations

import logging
from typing import Any

import anyio
from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from app.application.use_cases.notifications import NotificationServices
from app.domain.entities import NotificationRecord, Principal
from app.infrastructure.notifications import (
    ChannelHandshake,
    HandshakeState,
    WebSocketConnection,
)
from app.interfaces.api.dependencies import get_current_principal, get_notification_services
from app.interfaces.api.schemas import NotificationRead, NotificationReadResult

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)


def _notification_to_schema(record: NotificationRecord) -> NotificationRead:
    return NotificationRead(
        id=record.id,
        type=record.kind,
        payload=record.payload.to_dict(),
        read=record.read,
        created_at=record.created_at,
    )


@router.get("/", response_model=list[NotificationRead])
def list_notifications(
    principal: Principal = Depends(get_current_principal),
    services: NotificationServices = Depends(get_notification_services),
) -> list[NotificationRead]:
    """Retorna as notificações mais recentes do usuário autenticado."""

    return [_notification_to_schema(record) for record in services.log.list_recent(principal.id)]


@router.post("/{notification_id}/read", response_model=NotificationReadResult)
def mark_notification_read(
    notification_id: int,
    principal: Principal = Depends(get_current_principal),
    services: NotificationServices = Depends(get_notification_services),
) -> NotificationReadResult:
    """Marca a notificação como lida; repetir a chamada não tem efeito."""

    return NotificationReadResult(ok=services.log.mark_read(notification_id, principal.id))


def _authenticate(
    handshake: ChannelHandshake, token: str | None, services: NotificationServices
) -> dict[str, Any]:
    state = handshake.authenticate(token)
    if state is HandshakeState.BOUND:
        logger.debug(
            "User %s connected to notifications (%d live connections)",
            handshake.principal.id,
            services.registry.count(),
        )
    status = "bound" if state is HandshakeState.BOUND else "rejected"
    return {"type": "auth", "data": {"status": status}}


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket que entrega notificações ao usuário autenticado."""

    services: NotificationServices = websocket.app.state.notifications
    await websocket.accept()
    connection = WebSocketConnection(websocket)
    handshake = ChannelHandshake(connection, services.registry, services.verifier)

    try:
        token = websocket.query_params.get("token")
        if token:
            await websocket.send_json(_authenticate(handshake, token, services))

        while True:
            try:
                message = await websocket.receive_json()
            except (KeyError, ValueError):
                continue

            if not isinstance(message, dict):
                continue

            message_type = message.get("type")
            if message_type == "auth":
                await websocket.send_json(_authenticate(handshake, message.get("token"), services))
                continue

            if message_type == "ping":
                await websocket.send_json({"type": "pong"})
                continue

            if message_type == "ack":
                principal = handshake.principal
                ids = message.get("ids", [])
                if principal is not None and isinstance(ids, list) and ids:
                    await anyio.to_thread.run_sync(services.log.mark_many_read, ids, principal.id)
                continue
    except WebSocketDisconnect:
        logger.debug("Websocket %r disconnected", connection)
    finally:
        owner = services.registry.owner_of(connection)
        connection.mark_closed()
        handshake.close()
        if owner is not None:
            logger.debug(
                "User %s disconnected from notifications (%d live connections)",
                owner,
                services.registry.count(),
            )
