# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify

from usermgmt.domain.users.exceptions import StoreUnavailableError
from usermgmt.infrastructure.db.session import Database
from usermgmt.infrastructure.health import check_database
from usermgmt.shared.logging import logger


class MiscController:
    def __init__(self, *, database: Database) -> None:
        self._database = database

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule("/api/health", view_func=self.health, methods=["GET"])
        return bp

    def health(self) -> tuple[Response, int]:
        try:
            check_database(self._database)
        except StoreUnavailableError:
            logger.warning("health: database unavailable")
            return jsonify({"ok": False, "database": "unavailable"}), 503
        return jsonify({"ok": True, "database": "ok"}), 200
