"""Pydantic DTOs for user administration."""

from datetime import datetime

from pydantic import BaseModel, Field

from baraza.domain.entities import GenderCategory, UserRole


class UserCreate(BaseModel):
    """Schema for creating a user. Credential rules are checked by the service."""

    email: str | None = Field(None, max_length=255)
    password: str | None = None
    password_confirmation: str | None = None
    first_name: str = Field("", max_length=255)
    last_name: str = Field("", max_length=255)
    gender: GenderCategory | None = None
    role: UserRole = UserRole.REGISTERED_USER
    provider: str | None = None
    uid: str | None = None


class UserUpdate(BaseModel):
    first_name: str | None = Field(None, max_length=255)
    last_name: str | None = Field(None, max_length=255)
    gender: GenderCategory | None = None
    role: UserRole | None = None


class EmailChange(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)


class UserResponse(BaseModel):
    id: int
    email: str | None
    first_name: str
    last_name: str
    full_name: str
    gender: GenderCategory | None
    role: UserRole
    provider: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
