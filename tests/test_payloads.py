"""Tests for the tagged notification payloads."""

from __future__ import annotations

import pytest

from app.domain.entities import (
    NewPlanPayload,
    NewSubjectPayload,
    NotificationKind,
    parse_payload,
)


def test_payload_kind_is_fixed_per_type() -> None:
    assert NewSubjectPayload(1, "Ana", "ana@example.com").kind is NotificationKind.NEW_SUBJECT
    assert NewPlanPayload(1, "Força", 2, 3).kind is NotificationKind.NEW_PLAN


def test_to_dict_exposes_only_semantic_fields() -> None:
    payload = NewPlanPayload(plan_id=5, title="Força", subject_id=2, supervisor_id=3)

    assert payload.to_dict() == {"plan_id": 5, "title": "Força", "subject_id": 2, "supervisor_id": 3}


def test_parse_payload_accepts_kind_strings() -> None:
    parsed = parse_payload(
        "NEW_SUBJECT", {"subject_id": 1, "subject_name": "Ana", "subject_email": "ana@example.com"}
    )

    assert parsed == NewSubjectPayload(1, "Ana", "ana@example.com")


def test_parse_payload_rejects_missing_fields() -> None:
    with pytest.raises(ValueError):
        parse_payload(NotificationKind.NEW_PLAN, {"plan_id": 1})


def test_parse_payload_rejects_unknown_kind() -> None:
    with pytest.raises(ValueError):
        parse_payload("NEW_COMMENT", {})
