"""Security helpers for hashing and token handling."""

from datetime import datetime, timedelta, timezone
from typing import Protocol

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.config import get_settings
from app.domain.entities import Principal, Role, User
from app.domain.exceptions import InvalidCredential

_ALGORITHM = "HS256"

pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
    pbkdf2_sha256__rounds=310_000,
)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


# ---- JWT ----


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    settings = get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode({**data, "exp": expire}, settings.secret_key, algorithm=_ALGORITHM)


def create_user_token(user: User, expires_delta: timedelta | None = None) -> str:
    """Issue the bearer token used by both the HTTP API and the websocket."""

    return create_access_token(
        {"sub": str(user.id), "role": user.role.value, "email": user.email, "name": user.name},
        expires_delta=expires_delta,
    )


def decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(token, get_settings().secret_key, algorithms=[_ALGORITHM])
    except JWTError as exc:
        raise InvalidCredential("Could not validate credentials") from exc


class TokenVerifier(Protocol):
    """Turns a bearer token into an authenticated :class:`Principal`."""

    def verify(self, token: str) -> Principal:  # pragma: no cover - Protocol
        ...


class JwtTokenVerifier:
    """Verify signed access tokens issued by :func:`create_user_token`."""

    def verify(self, token: str) -> Principal:
        if not token:
            raise InvalidCredential("Missing token")

        payload = decode_access_token(token)
        try:
            return Principal(id=int(payload["sub"]), role=Role(payload["role"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidCredential("Malformed token claims") from exc


__all__ = [
    "JwtTokenVerifier",
    "TokenVerifier",
    "create_access_token",
    "create_user_token",
    "decode_access_token",
    "get_password_hash",
    "verify_password",
]
