from __future__ import annotations

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic_core import PydanticCustomError

_USERNAME_RE = re.compile(r"[A-Za-z][A-Za-z0-9._\-]*")


def check_username_chars(value: str) -> str:
    if not _USERNAME_RE.fullmatch(value):
        raise PydanticCustomError(
            "username_invalid_chars",
            "Username must start with a letter and contain only letters, digits, '.', '_' or '-'",
            {"pattern": _USERNAME_RE.pattern},
        )
    return value


def check_password_strength(value: str) -> str:
    if not re.search(r"[A-Za-z]", value):
        raise PydanticCustomError(
            "password_no_letter",
            "Password must contain at least one letter",
            {},
        )

    if not re.search(r"[^A-Za-z]", value):
        raise PydanticCustomError(
            "password_no_digit_or_symbol",
            "Password must contain at least one digit or symbol",
            {},
        )

    return value


class RegisterRequestDTO(BaseModel):
    model_config = ConfigDict(extra="forbid")

    username: str = Field(min_length=3, max_length=64)
    password: str = Field(min_length=5, max_length=128, repr=False)
    email: EmailStr | None = None
    display_name: str | None = Field(None, min_length=1, max_length=128)

    @field_validator("username")
    @classmethod
    def validate_username(cls, value: str) -> str:
        return check_username_chars(value)

    @field_validator("password")
    @classmethod
    def validate_password_strength(cls, value: str) -> str:
        return check_password_strength(value)


class LoginRequestDTO(BaseModel):
    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1, max_length=128, repr=False)  # No strength check on login


class RegisteredDTO(BaseModel):
    id: int
    username: str


class TokenDTO(BaseModel):
    token: str
    token_type: str = "Bearer"
    expires_at: datetime
    user_id: int
