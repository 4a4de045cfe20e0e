# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from usermgmt.application.services.access_policy import AccessPolicy
from usermgmt.domain.users.entities import ProfileChanges, User
from usermgmt.domain.users.repositories import PasswordHasher, UserRepository
from usermgmt.shared.errors.validation import body_error
from usermgmt.shared.logging import logger


class UpdateProfileUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        access: AccessPolicy,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._access = access
        self._password_hasher = password_hasher

    def execute(self, token: str, user_id: int, changes: ProfileChanges) -> User:
        self._access.authorize(token, user_id)

        if changes.is_empty():
            raise body_error("no_changes", "At least one field must be provided")

        password_hash = None
        if changes.password is not None:
            password_hash = self._password_hasher.hash(changes.password)

        user = self._users.update(
            user_id,
            email=changes.email,
            display_name=changes.display_name,
            password_hash=password_hash,
        )
        logger.info(
            f"users.update: ok user_id={user_id} "
            f"password_changed={password_hash is not None}"
        )
        return user


__all__ = ["UpdateProfileUseCase"]
