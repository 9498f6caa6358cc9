from .auth import RegisterRequest, RegisterResponse, Token
from .notification import NotificationRead, NotificationReadResult
from .training_plan import (
    PlanExerciseCreate,
    PlanExerciseRead,
    TrainingPlanCreate,
    TrainingPlanCreated,
    TrainingPlanRead,
)
from .user import SubjectRead, UserRead

__all__ = [
    "RegisterRequest",
    "RegisterResponse",
    "Token",
    "NotificationRead",
    "NotificationReadResult",
    "PlanExerciseCreate",
    "PlanExerciseRead",
    "TrainingPlanCreate",
    "TrainingPlanCreated",
    "TrainingPlanRead",
    "SubjectRead",
    "UserRead",
]
