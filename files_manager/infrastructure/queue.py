# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Durable thumbnail job queue backed by the metadata database."""

from __future__ import annotations

import uuid
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from sqlalchemy import func, update

from files_manager.domain.files.entities import ThumbnailJob
from files_manager.domain.files.repositories import JobQueue
from files_manager.infrastructure.db.models import ThumbnailJobRow
from files_manager.infrastructure.unit_of_work import SessionFactory, unit_of_work_scope
from files_manager.shared.logging import logger

PENDING = "pending"
INFLIGHT = "inflight"
DONE = "done"


@dataclass(slots=True)
class QueueMessage:
    """Claimed job with the id needed to acknowledge it."""

    payload: ThumbnailJob
    message_id: str
    attempts: int


class SqlThumbnailQueue(JobQueue):
    """At-least-once queue with a visibility timeout.

    A claimed message stays invisible until it is acknowledged or its
    visibility timeout lapses, after which ``requeue_expired`` hands it out
    again. Jobs survive process restarts because they live in the database.
    """

    def __init__(
        self,
        session_factory: SessionFactory,
        *,
        visibility_timeout: float,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._visibility_timeout = timedelta(seconds=visibility_timeout)
        self._clock = clock or (lambda: datetime.now(UTC))

    def put(self, job: ThumbnailJob) -> str:
        message_id = uuid.uuid4().hex
        with unit_of_work_scope(self._session_factory) as session:
            session.add(
                ThumbnailJobRow(
                    message_id=message_id,
                    user_id=job.user_id,
                    file_id=job.file_id,
                    status=PENDING,
                    inserted_at=self._clock(),
                )
            )
        logger.debug(f"queue: put message_id={message_id} file_id={job.file_id}")
        return message_id

    def get(self) -> QueueMessage | None:
        """Claim the oldest pending message, or return ``None`` when idle."""

        with unit_of_work_scope(self._session_factory) as session:
            candidate = (
                session.query(ThumbnailJobRow.id)
                .filter(ThumbnailJobRow.status == PENDING)
                .order_by(ThumbnailJobRow.id.asc())
                .first()
            )
            if candidate is None:
                return None
            # the status guard keeps two workers from claiming the same row
            claimed = session.execute(
                update(ThumbnailJobRow)
                .where(ThumbnailJobRow.id == candidate.id, ThumbnailJobRow.status == PENDING)
                .values(
                    status=INFLIGHT,
                    claimed_at=self._clock(),
                    attempts=ThumbnailJobRow.attempts + 1,
                )
            )
            if claimed.rowcount != 1:
                logger.debug(f"queue: lost claim race row_id={candidate.id}")
                return None
            row = session.get(ThumbnailJobRow, candidate.id)
            session.refresh(row)
            message = QueueMessage(
                payload=ThumbnailJob(user_id=row.user_id, file_id=row.file_id),
                message_id=row.message_id,
                attempts=row.attempts,
            )
        logger.debug(f"queue: get message_id={message.message_id} attempts={message.attempts}")
        return message

    def ack(self, message_id: str) -> None:
        with unit_of_work_scope(self._session_factory) as session:
            session.execute(
                update(ThumbnailJobRow)
                .where(ThumbnailJobRow.message_id == message_id)
                .values(status=DONE)
            )
        logger.debug(f"queue: ack message_id={message_id}")

    def requeue_expired(self) -> int:
        deadline = self._clock() - self._visibility_timeout
        with unit_of_work_scope(self._session_factory) as session:
            result = session.execute(
                update(ThumbnailJobRow)
                .where(
                    ThumbnailJobRow.status == INFLIGHT,
                    ThumbnailJobRow.claimed_at <= deadline,
                )
                .values(status=PENDING, claimed_at=None)
            )
            requeued = int(result.rowcount or 0)
        if requeued:
            logger.warning(f"queue: requeued expired messages count={requeued}")
        return requeued

    def pending_count(self) -> int:
        with unit_of_work_scope(self._session_factory) as session:
            return int(
                session.query(func.count(ThumbnailJobRow.id))
                .filter(ThumbnailJobRow.status != DONE)
                .scalar()
                or 0
            )


__all__ = ["QueueMessage", "SqlThumbnailQueue"]
