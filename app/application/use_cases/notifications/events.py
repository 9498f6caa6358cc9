"""Turn completed domain writes into notification fanouts."""

from __future__ import annotations

from anyio import from_thread
from sqlalchemy.orm import Session

from app.domain.entities import (
    NewPlanPayload,
    NewSubjectPayload,
    NotificationPayload,
    Recipient,
    Role,
    TrainingPlan,
    User,
)
from app.infrastructure.repositories import UserRepository

from .fanout import FanoutResult, NotificationFanout


def announce_new_subject(
    session: Session, fanout: NotificationFanout, *, subject: User
) -> FanoutResult:
    """Tell every supervisor that ``subject`` just registered."""

    supervisors = UserRepository(session).list_by_role(Role.SUPERVISOR)
    _release(session)
    payload = NewSubjectPayload(
        subject_id=subject.id,
        subject_name=subject.name,
        subject_email=subject.email,
    )
    return _run_fanout(fanout, payload, [_to_recipient(user) for user in supervisors])


def announce_new_plan(
    session: Session, fanout: NotificationFanout, *, plan: TrainingPlan
) -> FanoutResult:
    """Tell the assigned subject that ``plan`` is available."""

    subject = UserRepository(session).get_with_role(plan.subject_id, Role.SUBJECT)
    _release(session)
    recipients = [_to_recipient(subject)] if subject else []
    payload = NewPlanPayload(
        plan_id=plan.id,
        title=plan.title,
        subject_id=plan.subject_id,
        supervisor_id=plan.supervisor_id,
    )
    return _run_fanout(fanout, payload, recipients)


def _to_recipient(user: User) -> Recipient:
    return Recipient(id=user.id, email=user.email, name=user.name)


def _release(session: Session) -> None:
    # Return the pooled connection before blocking on the fanout, which opens its own.
    session.close()


def _run_fanout(
    fanout: NotificationFanout, payload: NotificationPayload, recipients: list[Recipient]
) -> FanoutResult:
    # Called from request handlers running in the anyio worker threads.
    return from_thread.run(fanout.notify, payload, recipients)


__all__ = ["announce_new_plan", "announce_new_subject"]
