# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import IssuedToken, NewUser, ProfileChanges, TokenClaims, User
from .exceptions import (AccessDeniedError, InvalidCredentialsError,
                         InvalidTokenError, StoreUnavailableError,
                         UserAlreadyExistsError, UserNotFoundError)
from .repositories import PasswordHasher, TokenService, UserRepository

__all__ = [
    "AccessDeniedError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "IssuedToken",
    "NewUser",
    "PasswordHasher",
    "ProfileChanges",
    "StoreUnavailableError",
    "TokenClaims",
    "TokenService",
    "User",
    "UserAlreadyExistsError",
    "UserNotFoundError",
    "UserRepository",
]
