# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sqlalchemy import text

from usermgmt.domain.users.exceptions import StoreUnavailableError
from usermgmt.infrastructure.db.session import STORE_UNAVAILABLE_ERRORS, Database


def check_database(database: Database) -> bool:
    try:
        with database.engine.connect() as connection:
            connection.execute(text("SELECT 1"))
    except STORE_UNAVAILABLE_ERRORS as exc:
        raise StoreUnavailableError("ping_failed") from exc
    return True


__all__ = ["check_database"]
