"""Shared fixtures and test doubles for the notification subsystem."""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path
from typing import Any

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "coach_plans_api_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ.pop("SENDGRID_API_KEY", None)
os.environ.pop("SENDGRID_SENDER", None)

from app.config import get_settings  # noqa: E402

get_settings.cache_clear()

from app.domain.entities import Principal  # noqa: E402
from app.domain.exceptions import DeliveryFailure, InvalidCredential  # noqa: E402
from app.infrastructure.database import (  # noqa: E402
    build_engine,
    build_session_factory,
    initialize_database,
)
from app.infrastructure.email import DeliveryOutcome  # noqa: E402


class FakeConnection:
    """In-memory stand-in for a websocket handle."""

    def __init__(self, name: str = "conn", *, fail: bool = False, vanish: bool = False) -> None:
        self.name = name
        self.messages: list[dict[str, Any]] = []
        self._fail = fail
        self._vanish = vanish
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def send_json(self, message: dict[str, Any]) -> None:
        if self._vanish:
            self._closed = True
            raise DeliveryFailure("websocket disconnected mid-send")
        if self._fail:
            raise DeliveryFailure("broken pipe")
        self.messages.append(message)

    def __repr__(self) -> str:
        return f"FakeConnection({self.name!r})"


class RecordingDispatcher:
    """Email dispatcher that keeps every message it was asked to send."""

    def __init__(self, *, fail_for: set[str] | None = None) -> None:
        self.sent: list[tuple[str, str, str]] = []
        self._fail_for = fail_for or set()

    def send(self, destination: str, subject: str, body: str) -> DeliveryOutcome:
        if destination in self._fail_for:
            raise DeliveryFailure(f"smtp outage for {destination}")
        self.sent.append((destination, subject, body))
        return DeliveryOutcome(delivered=True)


class StaticVerifier:
    """Token verifier backed by a fixed token table."""

    def __init__(self, tokens: dict[str, Principal]) -> None:
        self._tokens = tokens

    def verify(self, token: str) -> Principal:
        try:
            return self._tokens[token]
        except KeyError as exc:
            raise InvalidCredential("unknown token") from exc


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture()
def session_factory():
    """Session factory bound to a private in-memory SQLite database."""

    engine = build_engine("sqlite://")
    initialize_database(engine)
    yield build_session_factory(engine)
    engine.dispose()
