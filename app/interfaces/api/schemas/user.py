"""User schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr

from app.domain.entities import Role


class UserRead(BaseModel):
    id: int
    name: str
    email: EmailStr
    role: Role

    model_config = ConfigDict(from_attributes=True)


class SubjectRead(BaseModel):
    id: int
    name: str
    email: EmailStr
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
