"""Use-case for removing a user account."""

from __future__ import annotations

from usermgmt.application.services.access_policy import AccessPolicy
from usermgmt.domain.users.repositories import UserRepository
from usermgmt.shared.logging import logger


class DeleteUserUseCase:
    def __init__(self, *, users: UserRepository, access: AccessPolicy) -> None:
        self._users = users
        self._access = access

    def execute(self, token: str, user_id: int) -> None:
        """Idempotent: an already-absent user is not an error."""
        self._access.authorize(token, user_id)

        removed = self._users.delete(user_id)
        logger.info(f"users.delete: user_id={user_id} removed={removed}")
