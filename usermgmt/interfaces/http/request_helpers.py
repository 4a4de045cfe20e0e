# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import TypeVar

from flask import request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from usermgmt.shared.errors.validation import (body_error,
                                               raise_validation_error)

M = TypeVar("M", bound=BaseModel)


def bearer_token() -> str:
    """Token from ``Authorization: Bearer <t>``, or ``""`` when absent."""
    auth = request.headers.get("Authorization", "")
    scheme, _, token = auth.partition(" ")
    if scheme.lower() != "bearer":
        return ""
    return token.strip()


def parse_body(model: type[M]) -> M:
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise body_error("json_object_required", "Request body must be a JSON object")
    try:
        return model.model_validate(payload)
    except PydanticValidationError as exc:
        raise_validation_error(exc)


__all__ = ["bearer_token", "parse_body"]
