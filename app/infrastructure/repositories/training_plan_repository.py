"""Persistence layer for training plans."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.domain.entities import PlanExercise, TrainingPlan
from app.infrastructure.models import PlanExerciseModel, TrainingPlanModel
from app.utils import ensure_app_timezone


class TrainingPlanRepository:
    """Store and load training plans together with their exercises."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, plan_id: int) -> TrainingPlan | None:
        model = self.session.get(TrainingPlanModel, plan_id)
        return self._to_entity(model) if model else None

    def create(self, plan: TrainingPlan) -> TrainingPlan:
        model = TrainingPlanModel(
            subject_id=plan.subject_id,
            supervisor_id=plan.supervisor_id,
            title=plan.title,
            notes=plan.notes or "",
        )
        for index, exercise in enumerate(plan.exercises):
            model.exercises.append(
                PlanExerciseModel(
                    exercise_name=exercise.exercise_name,
                    sets=exercise.sets,
                    reps=exercise.reps,
                    rest_seconds=exercise.rest_seconds,
                    order_index=index,
                )
            )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: TrainingPlanModel) -> TrainingPlan:
        return TrainingPlan(
            id=model.id,
            subject_id=model.subject_id,
            supervisor_id=model.supervisor_id,
            title=model.title,
            notes=model.notes or "",
            exercises=[
                PlanExercise(
                    id=exercise.id,
                    exercise_name=exercise.exercise_name,
                    sets=exercise.sets,
                    reps=exercise.reps,
                    rest_seconds=exercise.rest_seconds,
                    order_index=exercise.order_index,
                )
                for exercise in sorted(model.exercises, key=lambda item: item.order_index)
            ],
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["TrainingPlanRepository"]
