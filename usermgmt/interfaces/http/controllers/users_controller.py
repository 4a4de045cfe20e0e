# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, g, jsonify

from usermgmt.application.use_cases.users.delete_user import DeleteUserUseCase
from usermgmt.application.use_cases.users.get_profile import GetProfileUseCase
from usermgmt.application.use_cases.users.update_profile import \
    UpdateProfileUseCase
from usermgmt.domain.users.entities import User
from usermgmt.interfaces.http.dto.users import (UpdateProfileRequestDTO,
                                                UserProfileDTO)
from usermgmt.interfaces.http.request_helpers import bearer_token, parse_body


def _profile_response(user: User) -> Response:
    return jsonify(UserProfileDTO.model_validate(user).model_dump(mode="json"))


class UsersController:
    def __init__(
        self,
        *,
        get_profile: GetProfileUseCase,
        update_profile: UpdateProfileUseCase,
        delete_user: DeleteUserUseCase,
    ) -> None:
        self._get_profile = get_profile
        self._update_profile = update_profile
        self._delete_user = delete_user

    def get(self, user_id: int) -> tuple[Response, int]:
        user = self._get_profile.execute(bearer_token(), user_id)
        g.user_id = user.id
        return _profile_response(user), 200

    def update(self, user_id: int) -> tuple[Response, int]:
        token = bearer_token()
        dto = parse_body(UpdateProfileRequestDTO)

        user = self._update_profile.execute(token, user_id, dto.to_changes())
        g.user_id = user.id
        return _profile_response(user), 200

    def delete(self, user_id: int) -> tuple[str, int]:
        self._delete_user.execute(bearer_token(), user_id)
        g.user_id = user_id
        return "", 204

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("users", __name__, url_prefix="/api/users")
        bp.add_url_rule("/<int:user_id>", view_func=self.get, methods=["GET"])
        bp.add_url_rule("/<int:user_id>", view_func=self.update, methods=["PUT"])
        bp.add_url_rule("/<int:user_id>", view_func=self.delete, methods=["DELETE"])
        return bp
