"""Realtime notification helpers for the infrastructure layer."""

from .handshake import ChannelHandshake, HandshakeState
from .manager import PushConnection, SessionRegistry, WebSocketConnection
from .publisher import NotificationPusher, build_push_message

__all__ = [
    "ChannelHandshake",
    "HandshakeState",
    "PushConnection",
    "SessionRegistry",
    "WebSocketConnection",
    "NotificationPusher",
    "build_push_message",
]
