"""Endpoints de cadastro e autenticação."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    NotificationServices,
    announce_new_subject,
)
from app.application.use_cases.users import (
    EmailAlreadyRegistered,
    authenticate_user,
    register_user,
)
from app.domain.exceptions import StorageFailure
from app.infrastructure.database import get_db
from app.infrastructure.security import create_user_token
from app.interfaces.api.dependencies import get_notification_services
from app.interfaces.api.schemas import RegisterRequest, RegisterResponse, Token, UserRead

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/register", response_model=RegisterResponse)
def register(
    payload: RegisterRequest,
    db: Session = Depends(get_db),
    services: NotificationServices = Depends(get_notification_services),
) -> RegisterResponse:
    """Cadastra um usuário; um novo aluno gera notificação para os professores."""

    try:
        user = register_user(
            db,
            name=payload.name,
            email=payload.email,
            password=payload.password,
            role=payload.role,
        )
    except EmailAlreadyRegistered as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    if user.is_subject():
        try:
            announce_new_subject(db, services.fanout, subject=user)
        except StorageFailure as exc:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Não foi possível registrar a notificação",
            ) from exc

    return RegisterResponse(
        access_token=create_user_token(user),
        role=user.role,
        user=UserRead.model_validate(user),
    )


@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
) -> Token:
    """Autentica o usuário pelo e-mail e devolve um token JWT."""

    user = authenticate_user(db, form_data.username, form_data.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Credenciais inválidas",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return Token(access_token=create_user_token(user), role=user.role)
