"""Email text for each notification kind."""

from __future__ import annotations

from dataclasses import dataclass

from app.domain.entities import NewPlanPayload, NewSubjectPayload, NotificationPayload, Recipient


@dataclass(frozen=True)
class EmailMessage:
    subject: str
    body: str


def compose_email(payload: NotificationPayload, recipient: Recipient) -> EmailMessage:
    """Build the message sent to ``recipient`` for ``payload``."""

    if isinstance(payload, NewSubjectPayload):
        return EmailMessage(
            subject=f"Novo aluno cadastrado: {payload.subject_name}",
            body=(
                f"Um novo aluno se cadastrou: {payload.subject_name} "
                f"({payload.subject_email})."
            ),
        )
    if isinstance(payload, NewPlanPayload):
        return EmailMessage(
            subject=f"Novo treino disponível: {payload.title}",
            body=(
                f"Olá {recipient.name}, seu professor criou um novo treino: "
                f"{payload.title}. Abra o app para ver os detalhes."
            ),
        )
    raise TypeError(f"Unsupported notification payload: {type(payload).__name__}")


__all__ = ["EmailMessage", "compose_email"]
