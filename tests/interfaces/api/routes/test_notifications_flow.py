"""End-to-end tests for registration, plan assignment and notification delivery."""

from __future__ import annotations

import logging

import anyio
import httpx
import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from conftest import RecordingDispatcher

from app.application.use_cases.notifications import (
    NotificationFanout,
    NotificationLog,
    NotificationServices,
    build_notification_services,
)
from app.config import get_settings
from app.domain.exceptions import StorageFailure
from app.infrastructure.database import Base, SessionLocal, engine, initialize_database
from app.infrastructure.notifications import NotificationPusher, SessionRegistry
from app.infrastructure.security import JwtTokenVerifier
from main import create_app


@pytest.fixture(autouse=True)
def reset_database():
    """Ensure the test database starts from a clean state for each test."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def dispatcher() -> RecordingDispatcher:
    return RecordingDispatcher()


@pytest.fixture()
def client(dispatcher):
    services = build_notification_services(get_settings(), SessionLocal, dispatcher=dispatcher)
    with TestClient(create_app(services)) as test_client:
        yield test_client


def _register(client: TestClient, name: str, email: str, role: str) -> dict:
    response = client.post(
        "/auth/register",
        json={"name": name, "email": email, "password": "Secret123", "role": role},
    )
    assert response.status_code == 200, response.text
    return response.json()


def _headers(account: dict) -> dict[str, str]:
    return {"Authorization": f"Bearer {account['access_token']}"}


def _bind(websocket, account: dict) -> None:
    websocket.send_json({"type": "auth", "token": account["access_token"]})
    assert websocket.receive_json() == {"type": "auth", "data": {"status": "bound"}}


def _create_plan(client: TestClient, supervisor: dict, subject_id: int, title: str = "Treino A"):
    return client.post(
        "/training-plans/",
        json={
            "subject_id": subject_id,
            "title": title,
            "notes": "Aquecer antes",
            "exercises": [
                {"exercise_name": "Agachamento", "sets": 4, "reps": 10, "rest": "01:30"},
                {"exercise_name": "Supino", "sets": 3, "reps": 12, "rest": 60},
            ],
        },
        headers=_headers(supervisor),
    )


def test_new_subject_pushes_to_live_supervisors_and_logs_for_all(client, dispatcher) -> None:
    first = _register(client, "Ana", "ana@example.com", "SUPERVISOR")
    second = _register(client, "Bruno", "bruno@example.com", "SUPERVISOR")
    offline = _register(client, "Carla", "carla@example.com", "SUPERVISOR")

    with client.websocket_connect("/notifications/ws") as ws_first, client.websocket_connect(
        f"/notifications/ws?token={second['access_token']}"
    ) as ws_second:
        _bind(ws_first, first)
        assert ws_second.receive_json() == {"type": "auth", "data": {"status": "bound"}}

        subject = _register(client, "Davi", "davi@example.com", "SUBJECT")

        for websocket in (ws_first, ws_second):
            message = websocket.receive_json()
            assert message["type"] == "notification"
            assert message["data"]["type"] == "NEW_SUBJECT"
            assert message["data"]["payload"] == {
                "subject_id": subject["user"]["id"],
                "subject_name": "Davi",
                "subject_email": "davi@example.com",
            }

    for account in (first, second, offline):
        response = client.get("/notifications/", headers=_headers(account))
        assert response.status_code == 200
        [notification] = response.json()
        assert notification["type"] == "NEW_SUBJECT"
        assert notification["read"] is False

    assert subject["user"]["role"] == "SUBJECT"


def test_rejected_handshake_leaves_socket_open_but_silent(client) -> None:
    _register(client, "Ana", "ana@example.com", "SUPERVISOR")

    with client.websocket_connect("/notifications/ws") as websocket:
        websocket.send_json({"type": "auth", "token": "not-a-jwt"})
        assert websocket.receive_json() == {"type": "auth", "data": {"status": "rejected"}}

        _register(client, "Davi", "davi@example.com", "SUBJECT")

        websocket.send_json({"type": "ping"})
        assert websocket.receive_json() == {"type": "pong"}


def test_plan_for_offline_subject_is_polled_later(client) -> None:
    supervisor = _register(client, "Ana", "ana@example.com", "SUPERVISOR")
    subject = _register(client, "Davi", "davi@example.com", "SUBJECT")

    response = _create_plan(client, supervisor, subject["user"]["id"], title="Hipertrofia")
    assert response.status_code == 201
    plan_id = response.json()["id"]

    notifications = client.get("/notifications/", headers=_headers(subject)).json()
    assert len(notifications) == 1
    assert notifications[0]["type"] == "NEW_PLAN"
    assert notifications[0]["read"] is False
    assert notifications[0]["payload"] == {
        "plan_id": plan_id,
        "title": "Hipertrofia",
        "subject_id": subject["user"]["id"],
        "supervisor_id": supervisor["user"]["id"],
    }


def test_plan_is_pushed_to_connected_subject(client) -> None:
    supervisor = _register(client, "Ana", "ana@example.com", "SUPERVISOR")
    subject = _register(client, "Davi", "davi@example.com", "SUBJECT")

    with client.websocket_connect("/notifications/ws") as websocket:
        _bind(websocket, subject)
        plan_id = _create_plan(client, supervisor, subject["user"]["id"]).json()["id"]

        message = websocket.receive_json()
        assert message["data"]["type"] == "NEW_PLAN"
        assert message["data"]["payload"]["plan_id"] == plan_id


def test_mark_read_is_idempotent_and_owner_scoped(client) -> None:
    supervisor = _register(client, "Ana", "ana@example.com", "SUPERVISOR")
    subject = _register(client, "Davi", "davi@example.com", "SUBJECT")
    [notification] = client.get("/notifications/", headers=_headers(supervisor)).json()

    url = f"/notifications/{notification['id']}/read"
    assert client.post(url, headers=_headers(subject)).json() == {"ok": False}
    assert client.post(url, headers=_headers(supervisor)).json() == {"ok": True}
    assert client.post(url, headers=_headers(supervisor)).json() == {"ok": True}

    [updated] = client.get("/notifications/", headers=_headers(supervisor)).json()
    assert updated["read"] is True


def test_websocket_ack_marks_notifications_read(client) -> None:
    supervisor = _register(client, "Ana", "ana@example.com", "SUPERVISOR")
    _register(client, "Davi", "davi@example.com", "SUBJECT")
    [notification] = client.get("/notifications/", headers=_headers(supervisor)).json()

    with client.websocket_connect("/notifications/ws") as websocket:
        _bind(websocket, supervisor)
        websocket.send_json({"type": "ack", "ids": [notification["id"]]})
        websocket.send_json({"type": "ping"})
        assert websocket.receive_json() == {"type": "pong"}

    [updated] = client.get("/notifications/", headers=_headers(supervisor)).json()
    assert updated["read"] is True


def test_plan_detail_is_limited_to_subject_and_author(client) -> None:
    author = _register(client, "Ana", "ana@example.com", "SUPERVISOR")
    other_supervisor = _register(client, "Bruno", "bruno@example.com", "SUPERVISOR")
    subject = _register(client, "Davi", "davi@example.com", "SUBJECT")
    other_subject = _register(client, "Eva", "eva@example.com", "SUBJECT")
    plan_id = _create_plan(client, author, subject["user"]["id"]).json()["id"]

    for account in (author, subject):
        response = client.get(f"/training-plans/{plan_id}", headers=_headers(account))
        assert response.status_code == 200
        body = response.json()
        assert [exercise["rest"] for exercise in body["exercises"]] == [90, 60]
        assert body["exercises"][0]["rest_mmss"] == "01:30"

    for account in (other_supervisor, other_subject):
        response = client.get(f"/training-plans/{plan_id}", headers=_headers(account))
        assert response.status_code == 403

    missing = client.get("/training-plans/9999", headers=_headers(author))
    assert missing.status_code == 404


def test_only_supervisors_create_plans_for_existing_subjects(client) -> None:
    supervisor = _register(client, "Ana", "ana@example.com", "SUPERVISOR")
    subject = _register(client, "Davi", "davi@example.com", "SUBJECT")

    assert _create_plan(client, subject, subject["user"]["id"]).status_code == 403
    assert _create_plan(client, supervisor, supervisor["user"]["id"]).status_code == 404
    assert client.get("/subjects/", headers=_headers(subject)).status_code == 403

    subjects = client.get("/subjects/", headers=_headers(supervisor)).json()
    assert [item["email"] for item in subjects] == ["davi@example.com"]


def test_duplicate_registration_and_bad_tokens(client) -> None:
    _register(client, "Ana", "ana@example.com", "SUPERVISOR")

    duplicate = client.post(
        "/auth/register",
        json={"name": "Ana", "email": "ANA@example.com", "password": "x", "role": "SUPERVISOR"},
    )
    assert duplicate.status_code == 409

    unauthorized = client.get("/notifications/", headers={"Authorization": "Bearer nope"})
    assert unauthorized.status_code == 401


def test_login_returns_token(client) -> None:
    _register(client, "Ana", "ana@example.com", "SUPERVISOR")

    response = client.post(
        "/auth/token",
        data={"username": "ana@example.com", "password": "Secret123"},
    )

    assert response.status_code == 200
    assert response.json()["role"] == "SUPERVISOR"
    assert client.post(
        "/auth/token", data={"username": "ana@example.com", "password": "wrong"}
    ).status_code == 401


def test_storage_failure_is_reported_to_caller(dispatcher) -> None:
    class BrokenStore:
        def __init__(self, session) -> None:
            pass

        def insert_notification(self, recipient_id, kind, payload_json):
            raise StorageFailure("disk full")

    registry = SessionRegistry()
    log = NotificationLog(SessionLocal, store_factory=BrokenStore)
    services = NotificationServices(
        registry=registry,
        log=log,
        fanout=NotificationFanout(log, NotificationPusher(registry), dispatcher),
        verifier=JwtTokenVerifier(),
    )

    with TestClient(create_app(services)) as client:
        _register(client, "Ana", "ana@example.com", "SUPERVISOR")
        response = client.post(
            "/auth/register",
            json={"name": "Davi", "email": "davi@example.com", "password": "x", "role": "SUBJECT"},
        )

    assert response.status_code == 500


def test_subject_registration_without_supervisors_succeeds(client, dispatcher) -> None:
    subject = _register(client, "Davi", "davi@example.com", "SUBJECT")

    assert client.get("/notifications/", headers=_headers(subject)).json() == []
    assert dispatcher.sent == []


@pytest.mark.anyio
async def test_concurrent_subject_registrations_all_reach_the_log(dispatcher) -> None:
    """More simultaneous fanouts than the database pool holds must still complete."""

    services = build_notification_services(get_settings(), SessionLocal, dispatcher=dispatcher)
    transport = httpx.ASGITransport(app=create_app(services))
    total = 20
    statuses: list[int] = []

    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        response = await client.post(
            "/auth/register",
            json={
                "name": "Ana",
                "email": "ana@example.com",
                "password": "Secret123",
                "role": "SUPERVISOR",
            },
        )
        supervisor_id = response.json()["user"]["id"]

        async def register_subject(index: int) -> None:
            reply = await client.post(
                "/auth/register",
                json={
                    "name": f"Aluno {index}",
                    "email": f"aluno{index}@example.com",
                    "password": "Secret123",
                    "role": "SUBJECT",
                },
            )
            statuses.append(reply.status_code)

        with anyio.fail_after(25):
            async with anyio.create_task_group() as group:
                for index in range(total):
                    group.start_soon(register_subject, index)

    await services.fanout.drain()

    assert statuses == [200] * total
    assert len(services.log.list_recent(supervisor_id)) == total
    assert len(dispatcher.sent) == total


def test_websocket_connect_and_disconnect_update_registry(dispatcher, caplog) -> None:
    services = build_notification_services(get_settings(), SessionLocal, dispatcher=dispatcher)
    registry = services.registry

    with TestClient(create_app(services)) as client:
        supervisor = _register(client, "Ana", "ana@example.com", "SUPERVISOR")
        with caplog.at_level(logging.DEBUG, logger="app.interfaces.api.routes.notifications"):
            with client.websocket_connect("/notifications/ws") as websocket:
                _bind(websocket, supervisor)
                assert registry.principals() == [supervisor["user"]["id"]]
                assert registry.count() == 1

    assert registry.count() == 0
    assert registry.principals() == []
    assert "connected to notifications (1 live connections)" in caplog.text
    assert "disconnected from notifications (0 live connections)" in caplog.text
