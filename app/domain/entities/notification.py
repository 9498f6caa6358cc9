"""Domain entities describing notifications delivered to users."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Union


class NotificationKind(str, Enum):
    """Discriminant for every notification the system emits."""

    NEW_SUBJECT = "NEW_SUBJECT"
    NEW_PLAN = "NEW_PLAN"


@dataclass(frozen=True)
class NewSubjectPayload:
    """A subject finished registering; sent to every supervisor."""

    kind: ClassVar[NotificationKind] = NotificationKind.NEW_SUBJECT

    subject_id: int
    subject_name: str
    subject_email: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class NewPlanPayload:
    """A supervisor assigned a training plan; sent to the subject."""

    kind: ClassVar[NotificationKind] = NotificationKind.NEW_PLAN

    plan_id: int
    title: str
    subject_id: int
    supervisor_id: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


NotificationPayload = Union[NewSubjectPayload, NewPlanPayload]

_PAYLOAD_TYPES: dict[NotificationKind, type] = {
    NotificationKind.NEW_SUBJECT: NewSubjectPayload,
    NotificationKind.NEW_PLAN: NewPlanPayload,
}


def parse_payload(kind: NotificationKind | str, data: dict[str, Any]) -> NotificationPayload:
    """Rebuild the payload record for ``kind`` from its serialized mapping."""

    payload_type = _PAYLOAD_TYPES[NotificationKind(kind)]
    names = {item.name for item in fields(payload_type)}
    missing = names - data.keys()
    if missing:
        msg = f"Payload for {NotificationKind(kind).value} is missing {sorted(missing)}"
        raise ValueError(msg)
    return payload_type(**{name: data[name] for name in names})


@dataclass(frozen=True)
class NotificationEvent:
    """Transient event consumed once by the log, the push channel and email."""

    recipient_id: int
    payload: NotificationPayload

    @property
    def kind(self) -> NotificationKind:
        return self.payload.kind


@dataclass
class NotificationRecord:
    """Durable notification entry owned by a single recipient."""

    id: int
    recipient_id: int
    payload: NotificationPayload
    read: bool = False
    created_at: datetime | None = None

    @property
    def kind(self) -> NotificationKind:
        return self.payload.kind


@dataclass(frozen=True)
class Recipient:
    """Principal id plus the contact data the email channel needs."""

    id: int
    email: str
    name: str


__all__ = [
    "NotificationKind",
    "NewSubjectPayload",
    "NewPlanPayload",
    "NotificationPayload",
    "parse_payload",
    "NotificationEvent",
    "NotificationRecord",
    "Recipient",
]
