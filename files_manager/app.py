# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import atexit
import threading

from flask import Flask
from flask_cors import CORS

from files_manager.infrastructure.container import Container, container as default_container
from files_manager.infrastructure.db import init_db
from files_manager.shared.logging import logger, setup_logging
from files_manager.shared.middleware.error_handler import configure_error_handling
from files_manager.shared.middleware.request_logger import configure_request_logging

_BOOTSTRAPPED = threading.Event()


def _start_thumbnail_workers(container: Container) -> None:
    pool = container.thumbnail_worker_pool
    pool.start()
    atexit.register(pool.stop, 5.0)


def create_app(container: Container | None = None) -> Flask:
    container = container or default_container
    config = container.config

    setup_logging(debug_mode=config.debug_logging)
    init_db(container.engine)

    app = Flask(__name__)
    app.config.update(SECRET_KEY=config.secret_key)
    configure_error_handling(app)
    configure_request_logging(app)

    CORS(
        app,
        resources={r"/*": {"origins": config.security.allowed_origins}},
        expose_headers=["X-Request-ID"],
    )
    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.users_controller.as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.files_controller.as_blueprint())
    app.extensions["files_manager.container"] = container

    if config.queue.autostart and not _BOOTSTRAPPED.is_set():
        _BOOTSTRAPPED.set()
        _start_thumbnail_workers(container)

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("Cross-Origin-Resource-Policy", "same-origin")

        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains",
            )

        return resp

    logger.info(f"Flask app initialized env={config.app_env}")
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000)
