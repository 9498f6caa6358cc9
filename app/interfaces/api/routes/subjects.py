"""Endpoints para professores consultarem seus alunos."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.application.use_cases.users import list_subjects
from app.domain.entities import Principal
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import require_supervisor
from app.interfaces.api.schemas import SubjectRead

router = APIRouter(prefix="/subjects", tags=["subjects"])


@router.get("/", response_model=list[SubjectRead])
def read_subjects(
    db: Session = Depends(get_db),
    _: Principal = Depends(require_supervisor),
) -> list[SubjectRead]:
    return [SubjectRead.model_validate(user) for user in list_subjects(db)]
