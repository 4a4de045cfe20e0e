# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Signed bearer tokens.

Tokens are HS256 JWTs carrying ``sub`` (user id), ``iat`` and ``exp``. They
are never stored: a token is valid iff its signature checks out against the
service secret and the current time is before ``exp``.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import jwt

from usermgmt.domain.users.entities import IssuedToken, TokenClaims
from usermgmt.domain.users.exceptions import InvalidTokenError
from usermgmt.domain.users.repositories import TokenService

_ALGORITHM = "HS256"
_REQUIRED_CLAIMS = ["sub", "iat", "exp"]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class JwtTokenService(TokenService):
    def __init__(
        self,
        secret: str,
        *,
        ttl: timedelta = timedelta(hours=1),
        issuer: str | None = None,
        now: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret:
            raise ValueError("token signing secret must not be empty")
        self._secret = secret
        self._ttl = ttl
        self._issuer = issuer
        self._now = now

    def issue(self, user_id: int, ttl: timedelta | None = None) -> IssuedToken:
        lifetime = self._ttl if ttl is None else ttl
        if lifetime <= timedelta(0):
            raise ValueError("token ttl must be positive")

        issued_at = self._now().replace(microsecond=0)
        expires_at = issued_at + lifetime
        claims: dict[str, object] = {
            "sub": str(user_id),
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        if self._issuer:
            claims["iss"] = self._issuer

        token = jwt.encode(claims, self._secret, algorithm=_ALGORITHM)
        return IssuedToken(token=token, user_id=user_id, expires_at=expires_at)

    def verify(self, token: str) -> int:
        return self.decode(token).user_id

    def decode(self, token: str) -> TokenClaims:
        if not token:
            raise InvalidTokenError("missing")

        try:
            # Time-based claims are checked against the injected clock below.
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[_ALGORITHM],
                issuer=self._issuer,
                options={
                    "require": _REQUIRED_CLAIMS,
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except jwt.InvalidSignatureError as exc:
            raise InvalidTokenError("bad_signature") from exc
        except jwt.InvalidTokenError as exc:
            raise InvalidTokenError("malformed") from exc

        try:
            user_id = int(payload["sub"])
            issued_at = datetime.fromtimestamp(int(payload["iat"]), UTC)
            expires_at = datetime.fromtimestamp(int(payload["exp"]), UTC)
        except (TypeError, ValueError, OverflowError) as exc:
            raise InvalidTokenError("malformed") from exc

        if self._now() >= expires_at:
            raise InvalidTokenError("expired")

        return TokenClaims(user_id=user_id, issued_at=issued_at, expires_at=expires_at)


__all__ = ["JwtTokenService"]
