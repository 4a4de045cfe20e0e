from __future__ import annotations

from datetime import timedelta

import pytest

from usermgmt.application.services.access_policy import AccessPolicy
from usermgmt.application.services.tokens import JwtTokenService
from usermgmt.application.use_cases.users.delete_user import DeleteUserUseCase
from usermgmt.application.use_cases.users.get_profile import GetProfileUseCase
from usermgmt.application.use_cases.users.login_user import LoginUserUseCase
from usermgmt.application.use_cases.users.update_profile import UpdateProfileUseCase
from usermgmt.domain.users.entities import NewUser, ProfileChanges, User
from usermgmt.domain.users.exceptions import (AccessDeniedError,
                                              InvalidTokenError,
                                              UserNotFoundError)
from usermgmt.shared.errors.base import ValidationError
from usermgmt.tests.fakes import (DeterministicHasher, FakeClock,
                                  InMemoryUserRepository)

SECRET = "profile-secret-with-at-least-32-bytes!"


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def tokens(clock: FakeClock) -> JwtTokenService:
    return JwtTokenService(SECRET, ttl=timedelta(minutes=5), now=clock)


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def access(tokens: JwtTokenService) -> AccessPolicy:
    return AccessPolicy(tokens=tokens)


@pytest.fixture()
def alice(users: InMemoryUserRepository) -> User:
    return users.insert(NewUser(username="alice", password_hash="hashed:P@ss1"))


@pytest.fixture()
def bob(users: InMemoryUserRepository) -> User:
    return users.insert(NewUser(username="bob", password_hash="hashed:B0bpass"))


def test_get_own_profile(
    users: InMemoryUserRepository, access: AccessPolicy, tokens: JwtTokenService, alice: User
) -> None:
    use_case = GetProfileUseCase(users=users, access=access)

    assert use_case.execute(tokens.issue(alice.id).token, alice.id) == alice


def test_get_other_profile_is_forbidden(
    users: InMemoryUserRepository,
    access: AccessPolicy,
    tokens: JwtTokenService,
    alice: User,
    bob: User,
) -> None:
    use_case = GetProfileUseCase(users=users, access=access)

    with pytest.raises(AccessDeniedError) as exc_info:
        use_case.execute(tokens.issue(alice.id).token, bob.id)

    assert exc_info.value.status == 403


def test_get_profile_with_expired_token(
    users: InMemoryUserRepository,
    access: AccessPolicy,
    tokens: JwtTokenService,
    clock: FakeClock,
    alice: User,
) -> None:
    use_case = GetProfileUseCase(users=users, access=access)
    token = tokens.issue(alice.id).token
    clock.advance(minutes=5)

    with pytest.raises(InvalidTokenError) as exc_info:
        use_case.execute(token, alice.id)

    assert exc_info.value.reason == "expired"


def test_get_profile_of_deleted_user_is_not_found(
    users: InMemoryUserRepository, access: AccessPolicy, tokens: JwtTokenService, alice: User
) -> None:
    token = tokens.issue(alice.id).token
    users.delete(alice.id)

    with pytest.raises(UserNotFoundError):
        GetProfileUseCase(users=users, access=access).execute(token, alice.id)


def test_update_profile_fields(
    users: InMemoryUserRepository, access: AccessPolicy, tokens: JwtTokenService, alice: User
) -> None:
    hasher = DeterministicHasher()
    use_case = UpdateProfileUseCase(users=users, access=access, password_hasher=hasher)

    updated = use_case.execute(
        tokens.issue(alice.id).token,
        alice.id,
        ProfileChanges(display_name="Alice A.", email="a@example.com"),
    )

    assert updated.display_name == "Alice A."
    assert updated.email == "a@example.com"
    assert updated.password_hash == alice.password_hash
    assert hasher.hash_calls == 0


def test_update_password_allows_login_with_new_password(
    users: InMemoryUserRepository, access: AccessPolicy, tokens: JwtTokenService, alice: User
) -> None:
    hasher = DeterministicHasher()
    update = UpdateProfileUseCase(users=users, access=access, password_hasher=hasher)
    login = LoginUserUseCase(users=users, tokens=tokens, password_hasher=hasher)

    update.execute(tokens.issue(alice.id).token, alice.id, ProfileChanges(password="N3wpass"))

    assert login.execute("alice", "N3wpass").user_id == alice.id


def test_update_without_changes_is_rejected(
    users: InMemoryUserRepository, access: AccessPolicy, tokens: JwtTokenService, alice: User
) -> None:
    use_case = UpdateProfileUseCase(
        users=users, access=access, password_hasher=DeterministicHasher()
    )

    with pytest.raises(ValidationError) as exc_info:
        use_case.execute(tokens.issue(alice.id).token, alice.id, ProfileChanges())

    assert exc_info.value.status == 400


def test_update_other_user_is_forbidden(
    users: InMemoryUserRepository,
    access: AccessPolicy,
    tokens: JwtTokenService,
    alice: User,
    bob: User,
) -> None:
    use_case = UpdateProfileUseCase(
        users=users, access=access, password_hasher=DeterministicHasher()
    )

    with pytest.raises(AccessDeniedError):
        use_case.execute(
            tokens.issue(alice.id).token, bob.id, ProfileChanges(display_name="x")
        )

    assert users.find_by_id(bob.id) == bob


def test_delete_is_idempotent(
    users: InMemoryUserRepository, access: AccessPolicy, tokens: JwtTokenService, alice: User
) -> None:
    use_case = DeleteUserUseCase(users=users, access=access)
    token = tokens.issue(alice.id).token

    use_case.execute(token, alice.id)
    use_case.execute(token, alice.id)

    assert users.find_by_id(alice.id) is None


def test_delete_nonexistent_user_succeeds_twice(
    users: InMemoryUserRepository, access: AccessPolicy, tokens: JwtTokenService
) -> None:
    use_case = DeleteUserUseCase(users=users, access=access)
    token = tokens.issue(999).token

    use_case.execute(token, 999)
    use_case.execute(token, 999)

    assert users.count() == 0


def test_delete_other_user_is_forbidden(
    users: InMemoryUserRepository,
    access: AccessPolicy,
    tokens: JwtTokenService,
    alice: User,
    bob: User,
) -> None:
    with pytest.raises(AccessDeniedError):
        DeleteUserUseCase(users=users, access=access).execute(
            tokens.issue(alice.id).token, bob.id
        )

    assert users.find_by_id(bob.id) == bob
