# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from usermgmt.domain.users.exceptions import AccessDeniedError
from usermgmt.domain.users.repositories import TokenService
from usermgmt.shared.logging import logger


class AccessPolicy:
    """Decides whether a token subject may act on a user record.

    Only self-access is granted. Elevated roles would be checked here.
    """

    def __init__(self, *, tokens: TokenService) -> None:
        self._tokens = tokens

    def authorize(self, token: str, target_user_id: int) -> int:
        """Verify ``token`` and return its subject, or raise."""
        subject_id = self._tokens.verify(token)
        self.ensure_can_access(subject_id, target_user_id)
        return subject_id

    def ensure_can_access(self, subject_id: int, target_user_id: int) -> None:
        if subject_id != target_user_id:
            logger.warning(
                f"access: denied subject={subject_id} target={target_user_id}"
            )
            raise AccessDeniedError()
