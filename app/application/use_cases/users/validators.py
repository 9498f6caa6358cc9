"""Common validation helpers for user use cases."""

from app.domain.entities import Role


def normalize_email(email: str) -> str:
    """Return ``email`` trimmed and lower-cased or raise ``ValueError``."""

    normalized = email.strip().lower()
    local_part, _, domain = normalized.partition("@")
    if not local_part or not domain:
        raise ValueError("E-mail inválido")
    return normalized


def ensure_role(value: str | Role) -> Role:
    try:
        return Role(value)
    except ValueError as exc:
        raise ValueError("Perfil inválido") from exc
