# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any, NoReturn

from pydantic import ValidationError as PydanticValidationError

from .base import ValidationError


def _entry(field: str, kind: str, message: str) -> dict[str, str]:
    return {"field": field, "type": kind, "message": message}


def format_pydantic_errors(exc: PydanticValidationError) -> dict[str, Any]:
    """Client-safe summary of a pydantic failure; submitted values are dropped."""
    entries = []
    for error in exc.errors(include_input=False, include_url=False):
        path = ".".join(str(part) for part in error.get("loc", ()))
        entries.append(
            _entry(path or "body", error.get("type", "value_error"), error.get("msg", ""))
        )

    return {
        "fields": sorted({entry["field"] for entry in entries if entry["field"] != "body"}),
        "errors": entries,
    }


def raise_validation_error(exc: PydanticValidationError) -> NoReturn:
    raise ValidationError(context=format_pydantic_errors(exc)) from exc


def body_error(kind: str, message: str) -> ValidationError:
    """Validation error about the request body as a whole."""
    return ValidationError(
        context={"fields": [], "errors": [_entry("body", kind, message)]},
        reason=kind,
    )


__all__ = [
    "body_error",
    "format_pydantic_errors",
    "raise_validation_error",
]
