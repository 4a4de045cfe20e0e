# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from usermgmt.domain.users.entities import NewUser, User
from usermgmt.domain.users.exceptions import UserAlreadyExistsError
from usermgmt.domain.users.repositories import PasswordHasher, UserRepository
from usermgmt.shared.logging import logger


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(
        self,
        username: str,
        password: str,
        *,
        email: str | None = None,
        display_name: str | None = None,
    ) -> User:
        # Uniqueness is the store's constraint; every path pays for one hash.
        hashed = self._password_hasher.hash(password)
        try:
            user = self._users.insert(
                NewUser(
                    username=username,
                    password_hash=hashed,
                    email=email,
                    display_name=display_name,
                )
            )
        except UserAlreadyExistsError:
            logger.info(f"auth.register: duplicate username={username!r}")
            raise

        logger.info(f"auth.register: ok user_id={user.id} username={username!r}")
        return user
