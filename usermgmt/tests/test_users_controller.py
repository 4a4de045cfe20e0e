from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import cast
from unittest.mock import MagicMock

import pytest
from flask import Flask

from usermgmt.application.services.access_policy import AccessPolicy
from usermgmt.application.services.tokens import JwtTokenService
from usermgmt.application.use_cases.users.delete_user import DeleteUserUseCase
from usermgmt.application.use_cases.users.get_profile import GetProfileUseCase
from usermgmt.application.use_cases.users.update_profile import \
    UpdateProfileUseCase
from usermgmt.domain.users.entities import NewUser, User
from usermgmt.interfaces.http.controllers.users_controller import \
    UsersController
from usermgmt.shared.errors import register_error_handler
from usermgmt.tests.fakes import (DeterministicHasher, FakeClock,
                                  InMemoryUserRepository)

SECRET = "controller-secret-with-at-least-32-bytes"


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def tokens(clock: FakeClock) -> JwtTokenService:
    return JwtTokenService(SECRET, ttl=timedelta(minutes=10), now=clock)


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def alice(users: InMemoryUserRepository) -> User:
    return users.insert(
        NewUser(username="alice", password_hash="hashed:P@ss1", email="alice@example.com")
    )


@pytest.fixture()
def flask_app(users: InMemoryUserRepository, tokens: JwtTokenService) -> Flask:
    access = AccessPolicy(tokens=tokens)
    controller = UsersController(
        get_profile=GetProfileUseCase(users=users, access=access),
        update_profile=UpdateProfileUseCase(
            users=users, access=access, password_hasher=DeterministicHasher()
        ),
        delete_user=DeleteUserUseCase(users=users, access=access),
    )
    app = Flask(__name__)
    register_error_handler(app)
    app.register_blueprint(controller.as_blueprint())
    return app


def _auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def test_get_profile_hides_password_hash(
    flask_app: Flask, tokens: JwtTokenService, alice: User
) -> None:
    with flask_app.test_client() as client:
        response = client.get(f"/api/users/{alice.id}", headers=_auth(tokens.issue(alice.id).token))

    assert response.status_code == 200
    body = response.get_json()
    assert body["id"] == alice.id
    assert body["username"] == "alice"
    assert body["email"] == "alice@example.com"
    assert "password_hash" not in body
    assert "password" not in body


@pytest.mark.parametrize(
    "headers",
    [
        {},
        {"Authorization": ""},
        {"Authorization": "Basic YWxpY2U6UEBzczE="},
        {"Authorization": "Bearer"},
        {"Authorization": "Bearer not-a-token"},
    ],
)
def test_missing_or_broken_bearer_is_unauthorized(
    flask_app: Flask, alice: User, headers: dict[str, str]
) -> None:
    with flask_app.test_client() as client:
        response = client.get(f"/api/users/{alice.id}", headers=headers)

    assert response.status_code == 401
    assert response.get_json() == {"error": "unauthorized"}


def test_expired_and_forged_tokens_look_identical(
    flask_app: Flask, tokens: JwtTokenService, clock: FakeClock, alice: User
) -> None:
    forged = JwtTokenService("some-other-secret-of-at-least-32-bytes", now=clock)
    forged_token = forged.issue(alice.id).token
    expired_token = tokens.issue(alice.id).token
    clock.advance(minutes=11)

    with flask_app.test_client() as client:
        expired = client.get(f"/api/users/{alice.id}", headers=_auth(expired_token))
        bad_signature = client.get(f"/api/users/{alice.id}", headers=_auth(forged_token))

    assert expired.status_code == bad_signature.status_code == 401
    assert expired.get_data() == bad_signature.get_data()


def test_other_users_profile_is_forbidden(
    flask_app: Flask, tokens: JwtTokenService, users: InMemoryUserRepository, alice: User
) -> None:
    bob = users.insert(NewUser(username="bob", password_hash="hashed:B0bpass"))

    with flask_app.test_client() as client:
        response = client.get(f"/api/users/{bob.id}", headers=_auth(tokens.issue(alice.id).token))

    assert response.status_code == 403
    assert response.get_json() == {"error": "forbidden"}


def test_update_profile(flask_app: Flask, tokens: JwtTokenService, alice: User) -> None:
    with flask_app.test_client() as client:
        response = client.put(
            f"/api/users/{alice.id}",
            json={"display_name": "Alice A."},
            headers=_auth(tokens.issue(alice.id).token),
        )

    assert response.status_code == 200
    assert response.get_json()["display_name"] == "Alice A."


@pytest.mark.parametrize(
    "payload",
    [
        {"email": "nope"},
        {"password": "abc"},
        {"username": "renamed"},
    ],
)
def test_update_profile_rejects_invalid_body(
    flask_app: Flask, tokens: JwtTokenService, alice: User, payload: dict
) -> None:
    with flask_app.test_client() as client:
        response = client.put(
            f"/api/users/{alice.id}", json=payload, headers=_auth(tokens.issue(alice.id).token)
        )

    assert response.status_code == 400
    assert response.get_json()["error"] == "validation_error"


def test_update_profile_with_empty_body_is_rejected(
    flask_app: Flask, tokens: JwtTokenService, alice: User
) -> None:
    with flask_app.test_client() as client:
        response = client.put(
            f"/api/users/{alice.id}", json={}, headers=_auth(tokens.issue(alice.id).token)
        )

    assert response.status_code == 400


def test_delete_returns_no_content_twice(
    flask_app: Flask, tokens: JwtTokenService, users: InMemoryUserRepository, alice: User
) -> None:
    token = tokens.issue(alice.id).token

    with flask_app.test_client() as client:
        first = client.delete(f"/api/users/{alice.id}", headers=_auth(token))
        second = client.delete(f"/api/users/{alice.id}", headers=_auth(token))

    assert first.status_code == second.status_code == 204
    assert first.get_data() == b""
    assert users.find_by_id(alice.id) is None


def test_deleted_user_profile_is_not_found(
    flask_app: Flask, tokens: JwtTokenService, alice: User
) -> None:
    token = tokens.issue(alice.id).token

    with flask_app.test_client() as client:
        client.delete(f"/api/users/{alice.id}", headers=_auth(token))
        response = client.get(f"/api/users/{alice.id}", headers=_auth(token))

    assert response.status_code == 404
    assert response.get_json() == {"error": "user_not_found"}


def test_non_integer_user_id_is_not_routed(flask_app: Flask) -> None:
    with flask_app.test_client() as client:
        response = client.get("/api/users/alice")

    assert response.status_code == 404
    assert response.get_json() == {"error": "not_found"}


def test_unexpected_use_case_failure_is_internal_error() -> None:
    get_profile = MagicMock()
    get_profile.execute.side_effect = RuntimeError("boom")
    controller = UsersController(
        get_profile=cast(GetProfileUseCase, get_profile),
        update_profile=cast(UpdateProfileUseCase, MagicMock()),
        delete_user=cast(DeleteUserUseCase, MagicMock()),
    )
    app = Flask(__name__)
    register_error_handler(app)
    app.register_blueprint(controller.as_blueprint())

    with app.test_client() as client:
        response = client.get("/api/users/1", headers=_auth("x"))

    assert response.status_code == 500
    body = response.get_json()
    assert body["error"] == "internal_error"
    assert "correlation_id" in body
    assert "boom" not in response.get_data(as_text=True)


def test_profile_timestamps_are_iso_formatted(
    flask_app: Flask, tokens: JwtTokenService, alice: User
) -> None:
    with flask_app.test_client() as client:
        body = client.get(
            f"/api/users/{alice.id}", headers=_auth(tokens.issue(alice.id).token)
        ).get_json()

    assert datetime.fromisoformat(body["created_at"]).tzinfo == UTC
