import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.application.use_cases.notifications import (
    NotificationServices,
    build_notification_services,
)
from app.config import get_settings
from app.infrastructure.database import SessionLocal, engine, initialize_database
from app.interfaces.api.routes import register_routes

logger = logging.getLogger(__name__)


def create_app(notifications: NotificationServices | None = None) -> FastAPI:
    """Cria e configura a aplicação FastAPI principal.

    ``notifications`` permite injetar serviços isolados (por exemplo em testes);
    por padrão eles são construídos a partir da configuração.
    """

    settings = get_settings()
    services = notifications or build_notification_services(settings, SessionLocal)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Inicializa o banco ao subir e aguarda os e-mails pendentes ao encerrar."""

        initialize_database()
        yield
        connected = services.registry.principals()
        if connected:
            logger.info("Shutting down with users %s still connected to notifications", connected)
        await services.fanout.drain()
        engine.dispose()

    app = FastAPI(lifespan=lifespan)
    app.state.notifications = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
