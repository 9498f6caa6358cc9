"""Use case for reading a training plan."""

from sqlalchemy.orm import Session

from app.domain.entities import Principal, TrainingPlan
from app.infrastructure.repositories import TrainingPlanRepository


def get_training_plan(session: Session, *, plan_id: int, reader: Principal) -> TrainingPlan | None:
    """Return the plan, ``None`` when missing.

    Raises ``PermissionError`` unless ``reader`` is the assigned subject or the
    supervisor who wrote it.
    """

    plan = TrainingPlanRepository(session).get(plan_id)
    if plan is None:
        return None
    if not plan.can_be_read_by(reader.id):
        raise PermissionError("Acesso negado")
    return plan
