# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from usermgmt.application.services.access_policy import AccessPolicy
from usermgmt.domain.users.entities import User
from usermgmt.domain.users.exceptions import UserNotFoundError
from usermgmt.domain.users.repositories import UserRepository


class GetProfileUseCase:
    def __init__(self, *, users: UserRepository, access: AccessPolicy) -> None:
        self._users = users
        self._access = access

    def execute(self, token: str, user_id: int) -> User:
        self._access.authorize(token, user_id)

        user = self._users.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError()
        return user


__all__ = ["GetProfileUseCase"]
