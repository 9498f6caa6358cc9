"""Use case for assigning a training plan to a subject."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.domain.entities import PlanExercise, Principal, Role, TrainingPlan
from app.infrastructure.repositories import TrainingPlanRepository, UserRepository
from app.utils.rest import parse_rest


@dataclass
class NewPlanExerciseData:
    exercise_name: str
    sets: int
    reps: int
    rest: int | str | None = None


class SubjectNotFound(LookupError):
    """Raised when the plan targets a user that is not a subject."""


def create_training_plan(
    session: Session,
    *,
    supervisor: Principal,
    subject_id: int,
    title: str,
    notes: str | None,
    exercises: list[NewPlanExerciseData],
) -> TrainingPlan:
    """Store a plan written by ``supervisor`` for ``subject_id``."""

    if not supervisor.is_supervisor():
        raise PermissionError("Apenas professores podem criar treinos")
    if not title.strip() or not exercises:
        raise ValueError("Campos obrigatórios ausentes")

    if UserRepository(session).get_with_role(subject_id, Role.SUBJECT) is None:
        raise SubjectNotFound("Aluno não encontrado")

    plan = TrainingPlan(
        id=None,
        subject_id=subject_id,
        supervisor_id=supervisor.id,
        title=title.strip(),
        notes=notes or "",
        exercises=[
            PlanExercise(
                id=None,
                exercise_name=item.exercise_name,
                sets=item.sets,
                reps=item.reps,
                rest_seconds=parse_rest(item.rest),
                order_index=index,
            )
            for index, item in enumerate(exercises)
        ],
    )
    return TrainingPlanRepository(session).create(plan)
