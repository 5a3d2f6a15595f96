# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask, Response
from flask_cors import CORS

from carpricing.infrastructure.admin_setup import setup_admin_user
from carpricing.infrastructure.container import Container
from carpricing.shared.config import AppConfig, load_config
from carpricing.shared.logging import logger, setup_logging
from carpricing.shared.middleware.error_handler import configure_error_handling
from carpricing.shared.middleware.request_logger import configure_request_logging

EXTENSION_KEY = "carpricing.container"


def _configure_cors(app: Flask, config: AppConfig) -> None:
    cors_kwargs: dict[str, object] = {
        "resources": {r"/api/*": {"origins": config.security.allowed_origins}}
    }
    if any(o != "*" for o in config.security.allowed_origins):
        cors_kwargs["supports_credentials"] = True
    CORS(app, **cors_kwargs)


def _configure_security_headers(app: Flask, config: AppConfig) -> None:
    @app.after_request
    def _add_security_headers(resp: Response) -> Response:
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Cross-Origin-Resource-Policy", "same-origin")

        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )

        return resp


def create_app(config: AppConfig | None = None, *, log_file: str | None = None) -> Flask:
    config = config or load_config()
    setup_logging(config.log_level, log_file=log_file)

    container = Container(config)
    container.database.init_schema()
    setup_admin_user(container.database, config.admin_email)

    app = Flask(__name__)
    app.config.update(SECRET_KEY=config.secret_key, JSON_SORT_KEYS=False)
    app.extensions[EXTENSION_KEY] = container

    configure_error_handling(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)
    _configure_cors(app, config)

    app.register_blueprint(container.users_controller.as_blueprint())
    app.register_blueprint(container.reports_controller.as_blueprint())

    _configure_security_headers(app, config)

    @app.teardown_appcontext
    def _remove_db_session(_exc: BaseException | None) -> None:
        container.database.session_factory.remove()

    logger.info("Flask app initialized")
    return app


def get_container(app: Flask) -> Container:
    return app.extensions[EXTENSION_KEY]


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000, debug=True)
