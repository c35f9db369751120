# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify
from sqlalchemy.engine import Engine

from files_manager.domain.files.repositories import FileRepository
from files_manager.domain.users.repositories import UserRepository
from files_manager.infrastructure.health import check_database, check_queue
from files_manager.infrastructure.queue import SqlThumbnailQueue


class MiscController:
    def __init__(
        self,
        *,
        engine: Engine,
        queue: SqlThumbnailQueue,
        users: UserRepository,
        files: FileRepository,
    ) -> None:
        self._engine = engine
        self._queue = queue
        self._users = users
        self._files = files

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule("/status", view_func=self.status, methods=["GET"])
        bp.add_url_rule("/stats", view_func=self.stats, methods=["GET"])
        return bp

    def status(self) -> tuple[Response, int]:
        return jsonify({"db": check_database(self._engine), "queue": check_queue(self._queue)}), 200

    def stats(self) -> tuple[Response, int]:
        return jsonify({"users": self._users.count(), "files": self._files.count()}), 200
