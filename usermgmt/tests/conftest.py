from __future__ import annotations

from collections.abc import Iterator

import pytest
from flask import Flask
from flask.testing import FlaskClient

from usermgmt.app import create_app
from usermgmt.infrastructure.container import Container
from usermgmt.shared.config import (AppConfig, DatabaseConfig, HashingConfig,
                                    SecurityConfig, TokenConfig)

TEST_SECRET = "test-secret-that-is-long-enough-for-hs256"


@pytest.fixture()
def config(monkeypatch: pytest.MonkeyPatch, tmp_path) -> AppConfig:
    monkeypatch.chdir(tmp_path)
    return AppConfig(
        database=DatabaseConfig(DATABASE_URL="sqlite://"),
        tokens=TokenConfig(JWT_SECRET=TEST_SECRET, TOKEN_TTL_SECONDS=600),
        hashing=HashingConfig(PASSWORD_HASH_METHOD="pbkdf2:sha256:1000", HASH_WORKERS=2),
        security=SecurityConfig(ALLOWED_ORIGINS="http://localhost:3000"),
    )


@pytest.fixture()
def container(config: AppConfig) -> Iterator[Container]:
    container = Container(config)
    yield container
    container.close()


@pytest.fixture()
def app(config: AppConfig, container: Container) -> Flask:
    return create_app(config, container=container)


@pytest.fixture()
def client(app: Flask) -> Iterator[FlaskClient]:
    with app.test_client() as client:
        yield client
