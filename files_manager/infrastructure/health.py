# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from files_manager.infrastructure.queue import SqlThumbnailQueue
from files_manager.shared.logging import logger


def check_database(engine: Engine) -> bool:
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.error(f"health: database unreachable: {type(exc).__name__}")
        return False
    return True


def check_queue(queue: SqlThumbnailQueue) -> bool:
    try:
        backlog = queue.pending_count()
    except SQLAlchemyError as exc:
        logger.error(f"health: queue unreachable: {type(exc).__name__}")
        return False
    logger.debug(f"health: queue backlog={backlog}")
    return True


__all__ = ["check_database", "check_queue"]
