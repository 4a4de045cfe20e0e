# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify

from usermgmt.application.use_cases.users.login_user import LoginUserUseCase
from usermgmt.application.use_cases.users.register_user import \
    RegisterUserUseCase
from usermgmt.interfaces.http.dto.auth import (LoginRequestDTO, RegisteredDTO,
                                               RegisterRequestDTO, TokenDTO)
from usermgmt.interfaces.http.request_helpers import parse_body


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case

    def register(self) -> tuple[Response, int]:
        dto = parse_body(RegisterRequestDTO)

        user = self._register_use_case.execute(
            dto.username,
            dto.password,
            email=str(dto.email) if dto.email is not None else None,
            display_name=dto.display_name,
        )

        payload = RegisteredDTO(id=user.id, username=user.username)
        return jsonify(payload.model_dump()), 201

    def login(self) -> tuple[Response, int]:
        dto = parse_body(LoginRequestDTO)

        issued = self._login_use_case.execute(dto.username, dto.password)

        payload = TokenDTO(
            token=issued.token,
            expires_at=issued.expires_at,
            user_id=issued.user_id,
        )
        response = jsonify(payload.model_dump(mode="json"))
        response.headers["Cache-Control"] = "no-store"
        return response, 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api/auth")
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        return bp
