# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re
from typing import Any

REDACTED = "***REDACTED***"

_RULES: list[tuple[re.Pattern[str], str]] = [
    # Bearer credentials and bare JWTs
    (re.compile(r"(bearer\s+)[A-Za-z0-9_\-.]{20,}", re.IGNORECASE), rf"\1{REDACTED}"),
    (re.compile(r"eyJ[A-Za-z0-9_\-]+\.[A-Za-z0-9_\-]+\.[A-Za-z0-9_\-]+"), REDACTED),
    (re.compile(r"(authorization\s*:\s*['\"]?)[^'\"\n]{10,}", re.IGNORECASE), rf"\1{REDACTED}"),
    (re.compile(r"(token\s*[:=]\s*['\"]?)[A-Za-z0-9_\-.]{20,}", re.IGNORECASE), rf"\1{REDACTED}"),
    (re.compile(r"(secret\s*[:=]\s*['\"]?)[^'\"\s]{8,}", re.IGNORECASE), rf"\1{REDACTED}"),
    # Passwords and stored werkzeug hashes
    (re.compile(r"(password\s*[:=]\s*['\"]?)[^'\"\s,}]+", re.IGNORECASE), rf"\1{REDACTED}"),
    (re.compile(r"((?:scrypt|pbkdf2)[^$\s]*\$)[^$\s]+\$[0-9a-f]+"), rf"\1{REDACTED}"),
    # Credentials embedded in DATABASE_URL
    (re.compile(r"(\w+(?:\+\w+)?://[^:/\s@]+):[^@\s]+@"), rf"\1:{REDACTED}@"),
]


def sanitize_message(message: str) -> str:
    for pattern, replacement in _RULES:
        message = pattern.sub(replacement, message)
    return message


def sanitize_record(record: dict[str, Any]) -> bool:
    """Loguru filter: scrub the message in place, never drop the record."""
    if "message" in record:
        record["message"] = sanitize_message(record["message"])
    return True


__all__ = ["REDACTED", "sanitize_message", "sanitize_record"]
