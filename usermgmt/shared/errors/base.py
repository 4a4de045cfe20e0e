# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Typed application errors.

Each error renders as ``{"error": code}`` (plus ``context`` when present) with
its HTTP status. ``reason`` is for logs only and is never rendered.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, ClassVar


@dataclass(slots=True)
class AppError(Exception):
    code: str
    status: HTTPStatus
    context: Mapping[str, Any] | None = None
    reason: str | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.code)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code}
        if self.context:
            payload["context"] = dict(self.context)
        return payload

    def describe(self) -> str:
        text = f"{self.code} ({int(self.status)})"
        if self.reason:
            text += f" reason={self.reason}"
        return text


class DomainError(AppError):
    """Base for business-rule failures; subclasses pin ``code`` and ``status``."""

    default_code: ClassVar[str] = "domain_error"
    default_status: ClassVar[HTTPStatus] = HTTPStatus.BAD_REQUEST

    def __init__(
        self,
        *,
        context: Mapping[str, Any] | None = None,
        reason: str | None = None,
    ) -> None:
        super().__init__(
            code=self.default_code,
            status=self.default_status,
            context=context,
            reason=reason,
        )


class ValidationError(DomainError):
    default_code = "validation_error"
    default_status = HTTPStatus.BAD_REQUEST


class ServiceUnavailableError(AppError):
    """A dependency is saturated or down; the client may retry."""

    def __init__(self, code: str = "service_unavailable", *, reason: str | None = None) -> None:
        super().__init__(code=code, status=HTTPStatus.SERVICE_UNAVAILABLE, reason=reason)
