from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from usermgmt.domain.users.entities import ProfileChanges

from .auth import check_password_strength


class UpdateProfileRequestDTO(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: EmailStr | None = None
    display_name: str | None = Field(None, min_length=1, max_length=128)
    password: str | None = Field(None, min_length=5, max_length=128, repr=False)

    @field_validator("password")
    @classmethod
    def validate_password_strength(cls, value: str | None) -> str | None:
        if value is None:
            return value
        return check_password_strength(value)

    def to_changes(self) -> ProfileChanges:
        return ProfileChanges(
            email=str(self.email) if self.email is not None else None,
            display_name=self.display_name,
            password=self.password,
        )


class UserProfileDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str | None = None
    display_name: str | None = None
    created_at: datetime
    updated_at: datetime
