"""Domain entities exposed by the application."""

from .notification import (
    NewPlanPayload,
    NewSubjectPayload,
    NotificationEvent,
    NotificationKind,
    NotificationPayload,
    NotificationRecord,
    Recipient,
    parse_payload,
)
from .principal import Principal
from .role import Role
from .training_plan import DEFAULT_REST_SECONDS, PlanExercise, TrainingPlan
from .user import User

__all__ = [
    "NewPlanPayload",
    "NewSubjectPayload",
    "NotificationEvent",
    "NotificationKind",
    "NotificationPayload",
    "NotificationRecord",
    "Recipient",
    "parse_payload",
    "Principal",
    "Role",
    "DEFAULT_REST_SECONDS",
    "PlanExercise",
    "TrainingPlan",
    "User",
]
