# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta
from typing import Protocol

from .entities import IssuedToken, NewUser, User


class UserRepository(Protocol):
    """Credential store.

    ``insert`` raises ``UserAlreadyExistsError`` on a duplicate username,
    ``update`` raises ``UserNotFoundError`` for a missing id, and every method
    may raise ``StoreUnavailableError``.
    """

    def find_by_identifier(self, username: str) -> User | None: ...
    def find_by_id(self, user_id: int) -> User | None: ...
    def insert(self, user: NewUser) -> User: ...

    def update(
        self,
        user_id: int,
        *,
        email: str | None = None,
        display_name: str | None = None,
        password_hash: str | None = None,
    ) -> User: ...

    def delete(self, user_id: int) -> bool: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...


class TokenService(Protocol):
    def issue(self, user_id: int, ttl: timedelta | None = None) -> IssuedToken: ...
    def verify(self, token: str) -> int: ...
