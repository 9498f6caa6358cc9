"""Authenticated identity handed to the notification core."""

from dataclasses import dataclass

from .role import Role


@dataclass(frozen=True)
class Principal:
    """Already-verified caller identity.

    Instances are produced by the token verifier only; nothing downstream
    re-checks credentials, it only authorizes by ``role``.
    """

    id: int
    role: Role

    def is_supervisor(self) -> bool:
        return self.role is Role.SUPERVISOR

    def is_subject(self) -> bool:
        return self.role is Role.SUBJECT


__all__ = ["Principal"]
