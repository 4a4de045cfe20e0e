# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from usermgmt.domain.users.entities import IssuedToken
from usermgmt.domain.users.exceptions import InvalidCredentialsError
from usermgmt.domain.users.repositories import (PasswordHasher, TokenService,
                                                UserRepository)
from usermgmt.shared.logging import logger


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        tokens: TokenService,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._password_hasher = password_hasher
        # Unknown names verify against this so every miss costs one verify.
        self._dummy_hash = password_hasher.hash("timing-equaliser")

    def execute(self, username: str, password: str) -> IssuedToken:
        user = self._users.find_by_identifier(username)

        if user is None:
            self._password_hasher.verify(password, self._dummy_hash)
            logger.info(f"auth.login: rejected username={username!r} reason=unknown_user")
            raise InvalidCredentialsError("unknown_user")

        if not self._password_hasher.verify(password, user.password_hash):
            logger.info(f"auth.login: rejected username={username!r} reason=bad_password")
            raise InvalidCredentialsError("bad_password")

        issued = self._tokens.issue(user.id)
        logger.info(
            f"auth.login: ok user_id={user.id} exp={issued.expires_at.isoformat()}"
        )
        return issued
