# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(slots=True, frozen=True)
class User:

    id: int
    username: str
    password_hash: str = field(repr=False)
    created_at: datetime
    updated_at: datetime
    email: str | None = None
    display_name: str | None = None


@dataclass(slots=True, frozen=True)
class NewUser:

    username: str
    password_hash: str = field(repr=False)
    email: str | None = None
    display_name: str | None = None


@dataclass(slots=True, frozen=True)
class ProfileChanges:
    """Fields to change on an existing user. ``None`` means unchanged."""

    email: str | None = None
    display_name: str | None = None
    password: str | None = field(default=None, repr=False)

    def is_empty(self) -> bool:
        return self.email is None and self.display_name is None and self.password is None


@dataclass(slots=True, frozen=True)
class TokenClaims:

    user_id: int
    issued_at: datetime
    expires_at: datetime


@dataclass(slots=True, frozen=True)
class IssuedToken:

    token: str = field(repr=False)
    user_id: int
    expires_at: datetime
