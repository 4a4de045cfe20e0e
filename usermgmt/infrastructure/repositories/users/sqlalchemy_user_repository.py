# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError

from usermgmt.domain.users.entities import NewUser
from usermgmt.domain.users.entities import User as DomainUser
from usermgmt.domain.users.exceptions import (UserAlreadyExistsError,
                                              UserNotFoundError)
from usermgmt.domain.users.repositories import UserRepository
from usermgmt.infrastructure.db.models import User
from usermgmt.infrastructure.db.session import Database


def _aware(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back.
    return value if value.tzinfo else value.replace(tzinfo=UTC)


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        username=row.username,
        password_hash=row.password_hash,
        email=row.email,
        display_name=row.display_name,
        created_at=_aware(row.created_at),
        updated_at=_aware(row.updated_at),
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, database: Database) -> None:
        self._db = database

    def find_by_identifier(self, username: str) -> DomainUser | None:
        with self._db.session_scope() as session:
            row = session.scalar(select(User).where(User.username == username))
            return _to_domain(row) if row else None

    def find_by_id(self, user_id: int) -> DomainUser | None:
        with self._db.session_scope() as session:
            row = session.get(User, user_id)
            return _to_domain(row) if row else None

    def insert(self, user: NewUser) -> DomainUser:
        try:
            with self._db.session_scope() as session:
                row = User(
                    username=user.username,
                    password_hash=user.password_hash,
                    email=user.email,
                    display_name=user.display_name,
                )
                session.add(row)
                session.flush()
                session.refresh(row)
                return _to_domain(row)
        except IntegrityError as exc:
            raise UserAlreadyExistsError() from exc

    def update(
        self,
        user_id: int,
        *,
        email: str | None = None,
        display_name: str | None = None,
        password_hash: str | None = None,
    ) -> DomainUser:
        with self._db.session_scope() as session:
            row = session.get(User, user_id, with_for_update=True)
            if row is None:
                raise UserNotFoundError()
            if email is not None:
                row.email = email
            if display_name is not None:
                row.display_name = display_name
            if password_hash is not None:
                row.password_hash = password_hash
            row.updated_at = datetime.now(UTC)
            session.flush()
            return _to_domain(row)

    def delete(self, user_id: int) -> bool:
        with self._db.session_scope() as session:
            result = session.execute(delete(User).where(User.id == user_id))
            return bool(result.rowcount)
