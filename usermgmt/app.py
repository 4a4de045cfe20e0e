# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import atexit
import sys

from flask import Flask
from flask_cors import CORS
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import ArgumentError

from usermgmt.domain.users.exceptions import StoreUnavailableError
from usermgmt.infrastructure.container import Container
from usermgmt.infrastructure.health import check_database
from usermgmt.shared.config import AppConfig, load_config
from usermgmt.shared.errors import register_error_handler
from usermgmt.shared.logging import logger, setup_logging
from usermgmt.shared.middleware.request_logger import configure_request_logging

CONTAINER_EXTENSION = "usermgmt.container"


def create_app(
    config: AppConfig | None = None, *, container: Container | None = None
) -> Flask:
    config = config or load_config()
    container = container or Container(config)
    setup_logging(config.log_level, config.log_file, serialize=config.is_production())

    container.database.init_schema()

    app = Flask(__name__)
    app.extensions[CONTAINER_EXTENSION] = container
    register_error_handler(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)

    cors_kwargs: dict[str, object] = {
        "resources": {r"/api/*": {"origins": config.security.allowed_origins}},
        "expose_headers": ["X-Request-ID"],
    }
    CORS(app, **cors_kwargs)

    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.users_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        return resp

    logger.info("Flask app initialized")
    return app


def _describe_config_error(exc: PydanticValidationError) -> str:
    fields = sorted(
        {".".join(str(part) for part in error["loc"]) or exc.title for error in exc.errors()}
    )
    return ", ".join(fields)


def main() -> None:
    setup_logging()

    try:
        config = load_config()
    except PydanticValidationError as exc:
        logger.error(f"Invalid or missing configuration: {_describe_config_error(exc)}")
        sys.exit(1)

    container = Container(config)
    try:
        check_database(container.database)
    except (ArgumentError, ImportError) as exc:
        logger.error(f"Invalid DATABASE_URL: {type(exc).__name__}")
        container.close()
        sys.exit(1)
    except StoreUnavailableError:
        logger.error("Database is unreachable at startup")
        container.close()
        sys.exit(1)

    app = create_app(config, container=container)
    atexit.register(container.close)

    logger.info(f"Server running on port {config.port}")
    app.run(host=config.host, port=config.port, threaded=True)


if __name__ == "__main__":
    main()
