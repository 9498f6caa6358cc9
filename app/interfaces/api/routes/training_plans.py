"""Endpoints para criação e consulta de treinos."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import NotificationServices, announce_new_plan
from app.application.use_cases.training_plans import (
    NewPlanExerciseData,
    SubjectNotFound,
    create_training_plan,
    get_training_plan,
)
from app.domain.entities import Principal, TrainingPlan
from app.domain.exceptions import StorageFailure
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import (
    get_current_principal,
    get_notification_services,
    require_supervisor,
)
from app.interfaces.api.schemas import (
    PlanExerciseRead,
    TrainingPlanCreate,
    TrainingPlanCreated,
    TrainingPlanRead,
)
from app.utils.rest import format_rest

router = APIRouter(prefix="/training-plans", tags=["training-plans"])


def _plan_to_read_model(plan: TrainingPlan) -> TrainingPlanRead:
    return TrainingPlanRead(
        id=plan.id,
        title=plan.title,
        notes=plan.notes,
        subject_id=plan.subject_id,
        supervisor_id=plan.supervisor_id,
        exercises=[
            PlanExerciseRead(
                id=exercise.id,
                exercise_name=exercise.exercise_name,
                sets=exercise.sets,
                reps=exercise.reps,
                rest=exercise.rest_seconds,
                rest_mmss=format_rest(exercise.rest_seconds),
                order_index=exercise.order_index,
            )
            for exercise in plan.exercises
        ],
    )


@router.post("/", response_model=TrainingPlanCreated, status_code=status.HTTP_201_CREATED)
def create_plan(
    payload: TrainingPlanCreate,
    db: Session = Depends(get_db),
    supervisor: Principal = Depends(require_supervisor),
    services: NotificationServices = Depends(get_notification_services),
) -> TrainingPlanCreated:
    """Cria um treino para o aluno e o notifica."""

    try:
        plan = create_training_plan(
            db,
            supervisor=supervisor,
            subject_id=payload.subject_id,
            title=payload.title,
            notes=payload.notes,
            exercises=[
                NewPlanExerciseData(
                    exercise_name=item.exercise_name,
                    sets=item.sets,
                    reps=item.reps,
                    rest=item.rest,
                )
                for item in payload.exercises
            ],
        )
    except SubjectNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    try:
        announce_new_plan(db, services.fanout, plan=plan)
    except StorageFailure as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Não foi possível registrar a notificação",
        ) from exc

    return TrainingPlanCreated(id=plan.id)


@router.get("/{plan_id}", response_model=TrainingPlanRead)
def read_plan(
    plan_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
) -> TrainingPlanRead:
    """Retorna o treino para o aluno designado ou para o professor que o criou."""

    try:
        plan = get_training_plan(db, plan_id=plan_id, reader=principal)
    except PermissionError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc
    if plan is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Treino não encontrado")
    return _plan_to_read_model(plan)
