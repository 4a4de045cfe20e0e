# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Database engine and session helpers."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from usermgmt.domain.users.exceptions import StoreUnavailableError
from usermgmt.shared.config import DatabaseConfig
from usermgmt.shared.logging import logger

STORE_UNAVAILABLE_ERRORS = (PoolTimeoutError, OperationalError, InterfaceError)


class Base(DeclarativeBase):
    """Declarative base for ORM models."""


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def _is_memory_sqlite(url: str) -> bool:
    return _is_sqlite(url) and (url in ("sqlite://", "sqlite:///") or ":memory:" in url)


def _set_sqlite_pragmas(dbapi_conn, _) -> None:
    cur = dbapi_conn.cursor()
    try:
        cur.execute("PRAGMA foreign_keys=ON;")
        cur.execute("PRAGMA busy_timeout=30000;")
    finally:
        cur.close()


def build_engine(config: DatabaseConfig, *, production: bool = False) -> Engine:
    if _is_memory_sqlite(config.url):
        if production:
            logger.warning(
                "db.engine: in-memory SQLite shares one connection across all "
                "request threads; use a file or server database in production"
            )
        engine = create_engine(
            config.url,
            future=True,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        connect_args: dict[str, object] = {}
        if _is_sqlite(config.url):
            connect_args = {
                "check_same_thread": False,
                "timeout": int(config.pool_timeout),
            }
        engine = create_engine(
            config.url,
            echo=False,
            future=True,
            pool_pre_ping=True,
            pool_size=config.pool_size,
            max_overflow=config.max_overflow,
            pool_timeout=config.pool_timeout,
            connect_args=connect_args,
        )

    if _is_sqlite(config.url):
        event.listen(engine, "connect", _set_sqlite_pragmas)
    return engine


class Database:
    """Owns the pooled engine and hands out transactional sessions."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self._session_factory = sessionmaker(
            bind=engine, autoflush=False, expire_on_commit=False
        )

    @classmethod
    def from_config(cls, config: DatabaseConfig, *, production: bool = False) -> Database:
        return cls(build_engine(config, production=production))

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        session = self._session_factory()
        logger.debug("db.session: opened session")
        try:
            yield session
            session.commit()
            logger.debug("db.session: committed session")
        except STORE_UNAVAILABLE_ERRORS as exc:
            session.rollback()
            logger.error(f"db.session: store unavailable ({type(exc).__name__})")
            raise StoreUnavailableError(type(exc).__name__) from exc
        except Exception:
            session.rollback()
            logger.debug("db.session: rolled back")
            raise
        finally:
            session.close()

    def init_schema(self) -> None:
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database schema ensured")

    def dispose(self) -> None:
        self.engine.dispose()
        logger.info("Database pool disposed")


__all__ = ["Base", "Database", "STORE_UNAVAILABLE_ERRORS", "build_engine"]
