# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus
from typing import Literal

from usermgmt.shared.errors.base import DomainError, ServiceUnavailableError

CredentialsFailure = Literal["unknown_user", "bad_password"]
TokenFailure = Literal["expired", "bad_signature", "malformed", "missing"]


class UserAlreadyExistsError(DomainError):
    default_code = "user_already_exists"
    default_status = HTTPStatus.CONFLICT


class UserNotFoundError(DomainError):
    default_code = "user_not_found"
    default_status = HTTPStatus.NOT_FOUND


class AccessDeniedError(DomainError):
    default_code = "forbidden"
    default_status = HTTPStatus.FORBIDDEN


class InvalidCredentialsError(DomainError):
    """Login failed; unknown user and wrong password render identically."""

    default_code = "invalid_credentials"
    default_status = HTTPStatus.UNAUTHORIZED

    def __init__(self, reason: CredentialsFailure) -> None:
        super().__init__(reason=reason)


class InvalidTokenError(DomainError):
    """Bearer token rejected; every failure renders as ``unauthorized``."""

    default_code = "unauthorized"
    default_status = HTTPStatus.UNAUTHORIZED

    def __init__(self, reason: TokenFailure) -> None:
        super().__init__(reason=reason)


class StoreUnavailableError(ServiceUnavailableError):
    def __init__(self, reason: str | None = None) -> None:
        super().__init__(reason=reason)
