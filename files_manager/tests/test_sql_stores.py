from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from loguru import logger as loguru_logger

from files_manager.domain.files.entities import FileKind, FileRecord, ThumbnailJob
from files_manager.domain.users.entities import User
from files_manager.infrastructure.db import SessionLocal
from files_manager.infrastructure.queue import SqlThumbnailQueue
from files_manager.infrastructure.repositories.files.sqlalchemy_file_repository import (
    SqlAlchemyFileRepository,
)
from files_manager.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemySessionStore,
    SqlAlchemyUserRepository,
)
from files_manager.services.thumbnail_worker import ThumbnailWorkerPool

pytestmark = pytest.mark.usefixtures("reset_database")


class FakeClock:
    def __init__(self) -> None:
        self.now = datetime(2025, 1, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def owner() -> User:
    repo = SqlAlchemyUserRepository(SessionLocal)
    return repo.add(User(id=0, email="owner@example.com", password_hash="x"))


def test_user_repository_round_trip(owner) -> None:
    repo = SqlAlchemyUserRepository(SessionLocal)

    assert repo.find_by_email("owner@example.com") == owner
    assert repo.find_by_id(owner.id) == owner
    assert repo.find_by_email("nobody@example.com") is None
    assert repo.count() == 1


def test_session_resolves_until_ttl_elapses(owner, clock) -> None:
    store = SqlAlchemySessionStore(SessionLocal, ttl_seconds=86400, clock=clock)
    session = store.create(owner.id)

    clock.advance(hours=23, minutes=59)
    assert store.resolve(session.token) == owner.id

    clock.advance(minutes=1)
    assert store.resolve(session.token) is None


def test_session_issue_log_omits_token(owner, clock) -> None:
    store = SqlAlchemySessionStore(SessionLocal, ttl_seconds=60, clock=clock)
    messages: list[str] = []
    sink_id = loguru_logger.add(lambda m: messages.append(str(m)), level="DEBUG")
    try:
        token = store.create(owner.id).token
    finally:
        loguru_logger.remove(sink_id)

    issued = [m for m in messages if "sessions: issued" in m]
    assert issued
    assert not any(token[:6] in m for m in issued)


def test_session_destroy_is_idempotent(owner, clock) -> None:
    store = SqlAlchemySessionStore(SessionLocal, ttl_seconds=60, clock=clock)
    token = store.create(owner.id).token

    store.destroy(token)
    store.destroy(token)

    assert store.resolve(token) is None
    assert store.resolve("") is None


def test_file_listing_filters_before_paginating(owner) -> None:
    users = SqlAlchemyUserRepository(SessionLocal)
    other = users.add(User(id=0, email="other@example.com", password_hash="x"))
    repo = SqlAlchemyFileRepository(SessionLocal)

    def _add(owner_id: int, is_public: bool) -> FileRecord:
        return repo.add(
            FileRecord(
                id=0,
                owner_id=owner_id,
                name="f.txt",
                kind=FileKind.FILE,
                is_public=is_public,
                parent_id=0,
                local_path="/tmp/blob",
            )
        )

    hidden = [_add(other.id, False) for _ in range(3)]
    visible = [_add(owner.id, False), _add(other.id, True), _add(owner.id, True)]

    page = repo.list_children(0, viewer_id=owner.id, skip=0, limit=2)
    rest = repo.list_children(0, viewer_id=owner.id, skip=2, limit=2)

    assert [r.id for r in page] == [visible[0].id, visible[1].id]
    assert [r.id for r in rest] == [visible[2].id]
    assert [r.id for r in repo.list_children(0, viewer_id=None, skip=0, limit=20)] == [
        visible[1].id,
        visible[2].id,
    ]
    assert repo.count() == len(hidden) + len(visible)


def test_set_public_updates_only_the_flag(owner) -> None:
    repo = SqlAlchemyFileRepository(SessionLocal)
    record = repo.add(
        FileRecord(
            id=0,
            owner_id=owner.id,
            name="docs",
            kind=FileKind.FOLDER,
            is_public=False,
            parent_id=0,
        )
    )

    updated = repo.set_public(record.id, True)

    assert updated == record.with_visibility(True)
    assert repo.get(record.id) == updated
    assert repo.set_public(999, True) is None


def test_queue_delivers_once_until_acked(clock) -> None:
    queue = SqlThumbnailQueue(SessionLocal, visibility_timeout=30, clock=clock)
    message_id = queue.put(ThumbnailJob(user_id=1, file_id=2))

    message = queue.get()

    assert message is not None
    assert message.message_id == message_id
    assert message.payload == ThumbnailJob(user_id=1, file_id=2)
    assert message.attempts == 1
    assert queue.get() is None

    queue.ack(message_id)
    assert queue.requeue_expired() == 0
    assert queue.pending_count() == 0


def test_queue_redelivers_after_visibility_timeout(clock) -> None:
    queue = SqlThumbnailQueue(SessionLocal, visibility_timeout=30, clock=clock)
    queue.put(ThumbnailJob(user_id=1, file_id=2))
    first = queue.get()

    clock.advance(seconds=10)
    assert queue.requeue_expired() == 0

    clock.advance(seconds=25)
    assert queue.requeue_expired() == 1
    second = queue.get()

    assert second is not None
    assert second.message_id == first.message_id
    assert second.attempts == 2


class ExplodingUseCase:
    def __init__(self) -> None:
        self.calls = 0

    def execute(self, job: ThumbnailJob) -> None:
        self.calls += 1
        raise RuntimeError("metadata store unavailable")


def test_worker_drops_job_after_max_attempts(clock) -> None:
    queue = SqlThumbnailQueue(SessionLocal, visibility_timeout=30, clock=clock)
    queue.put(ThumbnailJob(user_id=1, file_id=2))
    use_case = ExplodingUseCase()
    pool = ThumbnailWorkerPool(
        queue=queue, use_case=use_case, workers=1, poll_interval=0.01, max_attempts=2
    )

    for _ in range(2):
        with pytest.raises(RuntimeError):
            pool.run_once()
        clock.advance(seconds=31)

    assert pool.run_once() is True
    assert use_case.calls == 2
    assert queue.pending_count() == 0
    assert pool.run_once() is False
