# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta
from functools import cached_property

from usermgmt.application.services.access_policy import AccessPolicy
from usermgmt.application.services.password_hashing import (
    PooledPasswordHasher, WerkzeugPasswordHasher)
from usermgmt.application.services.tokens import JwtTokenService
from usermgmt.application.use_cases.users.delete_user import DeleteUserUseCase
from usermgmt.application.use_cases.users.get_profile import GetProfileUseCase
from usermgmt.application.use_cases.users.login_user import LoginUserUseCase
from usermgmt.application.use_cases.users.register_user import \
    RegisterUserUseCase
from usermgmt.application.use_cases.users.update_profile import \
    UpdateProfileUseCase
from usermgmt.infrastructure.db.session import Database
from usermgmt.infrastructure.repositories.users.sqlalchemy_user_repository import \
    SqlAlchemyUserRepository
from usermgmt.interfaces.http.controllers.auth_controller import AuthController
from usermgmt.interfaces.http.controllers.misc_controller import MiscController
from usermgmt.interfaces.http.controllers.users_controller import \
    UsersController
from usermgmt.shared.config import AppConfig
from usermgmt.shared.logging import logger


class Container:
    """Process-wide handles, built once per application."""

    def __init__(self, config: AppConfig, *, database: Database | None = None) -> None:
        self.config = config
        if database is not None:
            self.__dict__["database"] = database

    @cached_property
    def database(self) -> Database:
        return Database.from_config(
            self.config.database, production=self.config.is_production()
        )

    @cached_property
    def password_hasher(self) -> PooledPasswordHasher:
        hashing = self.config.hashing
        return PooledPasswordHasher(
            WerkzeugPasswordHasher(hashing.method),
            workers=hashing.workers,
            queue_size=hashing.queue_size,
            timeout=hashing.timeout,
        )

    @cached_property
    def token_service(self) -> JwtTokenService:
        tokens = self.config.tokens
        return JwtTokenService(
            tokens.secret,
            ttl=timedelta(seconds=tokens.ttl_seconds),
            issuer=tokens.issuer,
        )

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.database)

    @cached_property
    def access_policy(self) -> AccessPolicy:
        return AccessPolicy(tokens=self.token_service)

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            tokens=self.token_service,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def get_profile_use_case(self) -> GetProfileUseCase:
        return GetProfileUseCase(users=self.user_repository, access=self.access_policy)

    @cached_property
    def update_profile_use_case(self) -> UpdateProfileUseCase:
        return UpdateProfileUseCase(
            users=self.user_repository,
            access=self.access_policy,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def delete_user_use_case(self) -> DeleteUserUseCase:
        return DeleteUserUseCase(users=self.user_repository, access=self.access_policy)

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
        )

    @cached_property
    def users_controller(self) -> UsersController:
        return UsersController(
            get_profile=self.get_profile_use_case,
            update_profile=self.update_profile_use_case,
            delete_user=self.delete_user_use_case,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(database=self.database)

    def close(self) -> None:
        if "password_hasher" in self.__dict__:
            self.password_hasher.shutdown()
        if "database" in self.__dict__:
            self.database.dispose()
        logger.info("container: resources released")
