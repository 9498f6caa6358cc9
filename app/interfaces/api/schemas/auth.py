"""Authentication related schemas."""

from pydantic import BaseModel, EmailStr, Field

from app.domain.entities import Role

from .user import UserRead


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    email: EmailStr
    password: str = Field(..., min_length=1)
    role: Role


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    role: Role


class RegisterResponse(Token):
    user: UserRead
