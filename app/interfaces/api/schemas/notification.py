"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from app.domain.entities import NotificationKind


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    id: int
    type: NotificationKind
    payload: dict[str, Any] = Field(default_factory=dict)
    read: bool
    created_at: datetime | None = None


class NotificationReadResult(BaseModel):
    ok: bool
