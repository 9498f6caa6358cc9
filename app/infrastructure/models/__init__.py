"""ORM models used by the application infrastructure."""

from .notification import NotificationModel
from .training_plan import PlanExerciseModel, TrainingPlanModel
from .user import UserModel

__all__ = [
    "NotificationModel",
    "PlanExerciseModel",
    "TrainingPlanModel",
    "UserModel",
]
