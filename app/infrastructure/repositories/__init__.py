"""Repository implementations for infrastructure layer."""

from .notification_repository import NotificationRepository, NotificationRow
from .training_plan_repository import TrainingPlanRepository
from .user_repository import UserRepository

__all__ = [
    "NotificationRepository",
    "NotificationRow",
    "TrainingPlanRepository",
    "UserRepository",
]
