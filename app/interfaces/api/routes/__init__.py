from fastapi import FastAPI

from .auth import router as auth_router
from .notifications import router as notifications_router
from .subjects import router as subjects_router
from .training_plans import router as training_plans_router


def register_routes(app: FastAPI) -> None:
    """Registra todos os routers da API na aplicação FastAPI."""

    app.include_router(auth_router)
    app.include_router(subjects_router)
    app.include_router(training_plans_router)
    app.include_router(notifications_router)
