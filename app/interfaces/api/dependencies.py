"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer

from app.application.use_cases.notifications import NotificationServices
from app.domain.entities import Principal
from app.domain.exceptions import InvalidCredential

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")


def get_notification_services(request: Request) -> NotificationServices:
    """Return the notification services owned by the running application."""

    return request.app.state.notifications


def get_current_principal(
    token: str = Depends(oauth2_scheme),
    services: NotificationServices = Depends(get_notification_services),
) -> Principal:
    """Resolve the authenticated principal from the bearer token."""

    try:
        return services.verifier.verify(token)
    except InvalidCredential as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token inválido",
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc


def require_supervisor(principal: Principal = Depends(get_current_principal)) -> Principal:
    """Ensure the authenticated user is a supervisor."""

    if not principal.is_supervisor():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Acesso negado",
        )
    return principal
