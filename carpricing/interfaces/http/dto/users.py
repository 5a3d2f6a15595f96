from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic_core import PydanticCustomError

from carpricing.shared.errors.validation_types import ValidationErrorType

MIN_PASSWORD_LENGTH = 6


def _strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def _validate_password(value: str) -> str:
    if len(value) < MIN_PASSWORD_LENGTH:
        raise PydanticCustomError(
            ValidationErrorType.PASSWORD_TOO_SHORT,
            "Password must be at least {min_length} characters long",
            {"min_length": MIN_PASSWORD_LENGTH},
        )
    return value


def _validate_name(value: str) -> str:
    value = value.strip()
    if not value:
        raise PydanticCustomError(ValidationErrorType.BLANK, "Name cannot be empty", {})
    return value


class RegisterRequestDTO(BaseModel):
    name: str = Field(max_length=128)
    email: EmailStr
    password: str = Field(max_length=128)

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, value: Any) -> Any:
        return _strip(value)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        return _validate_name(value)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return _validate_password(value)


class LoginRequestDTO(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=128)  # No length policy on login

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, value: Any) -> Any:
        return _strip(value)


class EmailQueryDTO(BaseModel):
    email: EmailStr

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, value: Any) -> Any:
        return _strip(value)


class UpdateUserRequestDTO(BaseModel):
    name: str | None = Field(default=None, max_length=128)
    email: EmailStr | None = None
    password: str | None = Field(default=None, max_length=128)

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, value: Any) -> Any:
        return _strip(value)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str | None) -> str | None:
        return None if value is None else _validate_name(value)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str | None) -> str | None:
        return None if value is None else _validate_password(value)


class UserDTO(BaseModel):
    """Outbound user shape; the password hash never leaves through it."""

    model_config = ConfigDict(extra="ignore")

    id: int
    name: str
    email: str
    is_privileged: bool
    created_at: datetime
    updated_at: datetime
