"""Domain entities describing a training plan assigned to a subject."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

DEFAULT_REST_SECONDS = 90


@dataclass
class PlanExercise:
    """Single exercise line inside a training plan."""

    id: int | None
    exercise_name: str
    sets: int
    reps: int
    rest_seconds: int = DEFAULT_REST_SECONDS
    order_index: int = 0


@dataclass
class TrainingPlan:
    """Workout plan written by a supervisor for one subject."""

    id: int | None
    subject_id: int
    supervisor_id: int
    title: str
    notes: str = ""
    exercises: list[PlanExercise] = field(default_factory=list)
    created_at: datetime | None = None

    def can_be_read_by(self, user_id: int) -> bool:
        """Only the assigned subject and the assigning supervisor may read the plan."""

        return user_id in (self.subject_id, self.supervisor_id)


__all__ = ["DEFAULT_REST_SECONDS", "PlanExercise", "TrainingPlan"]
