"""Use cases for training plans."""

from .create_training_plan import NewPlanExerciseData, SubjectNotFound, create_training_plan
from .get_training_plan import get_training_plan

__all__ = [
    "NewPlanExerciseData",
    "SubjectNotFound",
    "create_training_plan",
    "get_training_plan",
]
