from __future__ import annotations

import os
import tempfile
from collections.abc import Iterator, Sequence
from dataclasses import replace
from datetime import UTC, datetime, timedelta
from io import BytesIO
from typing import BinaryIO

_SCRATCH = tempfile.mkdtemp(prefix="files_manager_tests_")
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DATABASE_URL", f"sqlite:///{_SCRATCH}/test.db")
os.environ.setdefault("FOLDER_PATH", os.path.join(_SCRATCH, "blobs"))
os.environ.setdefault("LOG_FILE", os.path.join(_SCRATCH, "test.log"))
os.environ.setdefault("THUMBNAIL_AUTOSTART", "0")

import pytest  # noqa: E402

from files_manager.application.services.access_gate import AccessGate  # noqa: E402
from files_manager.domain.files.entities import FileRecord, ThumbnailJob  # noqa: E402
from files_manager.domain.users.entities import SessionToken, User  # noqa: E402
from files_manager.domain.users.repositories import (  # noqa: E402
    PasswordHasher,
    SessionStore,
    UserRepository,
)
from files_manager.domain.files.repositories import (  # noqa: E402
    BlobStore,
    FileRepository,
    JobQueue,
)


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._seq = 1

    def find_by_email(self, email: str) -> User | None:
        return next((u for u in self._users.values() if u.email == email), None)

    def find_by_id(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    def add(self, user: User) -> User:
        new_user = User(id=self._seq, email=user.email, password_hash=user.password_hash)
        self._seq += 1
        self._users[new_user.id] = new_user
        return new_user

    def count(self) -> int:
        return len(self._users)


class InMemorySessionStore(SessionStore):
    def __init__(self) -> None:
        self._tokens: dict[str, int] = {}
        self._seq = 1

    def create(self, user_id: int) -> SessionToken:
        token = f"token-{user_id}-{self._seq}"
        self._seq += 1
        self._tokens[token] = user_id
        return SessionToken(
            user_id=user_id, token=token, expires_at=datetime.now(UTC) + timedelta(days=1)
        )

    def resolve(self, token: str) -> int | None:
        return self._tokens.get(token)

    def destroy(self, token: str) -> None:
        self._tokens.pop(token, None)


class InMemoryFileRepository(FileRepository):
    def __init__(self) -> None:
        self._rows: dict[int, FileRecord] = {}
        self._seq = 1

    def get(self, file_id: int) -> FileRecord | None:
        return self._rows.get(file_id)

    def add(self, record: FileRecord) -> FileRecord:
        stored = replace(record, id=self._seq)
        self._seq += 1
        self._rows[stored.id] = stored
        return stored

    def set_public(self, file_id: int, is_public: bool) -> FileRecord | None:
        record = self._rows.get(file_id)
        if record is None:
            return None
        self._rows[file_id] = record.with_visibility(is_public)
        return self._rows[file_id]

    def list_children(
        self, parent_id: int, *, viewer_id: int | None, skip: int, limit: int
    ) -> Sequence[FileRecord]:
        visible = [
            r
            for r in sorted(self._rows.values(), key=lambda r: r.id)
            if r.parent_id == parent_id and r.readable_by(viewer_id)
        ]
        return visible[skip : skip + limit]

    def count(self) -> int:
        return len(self._rows)


class InMemoryBlobStore(BlobStore):
    def __init__(self) -> None:
        self.blobs: dict[str, bytes] = {}
        self._seq = 1

    def new_path(self) -> str:
        path = f"/blobs/{self._seq}"
        self._seq += 1
        return path

    def write(self, path: str, data: bytes) -> None:
        self.blobs[path] = data

    def read(self, path: str) -> bytes | None:
        return self.blobs.get(path)

    def exists(self, path: str) -> bool:
        return path in self.blobs

    def open(self, path: str) -> BinaryIO | None:
        data = self.blobs.get(path)
        return BytesIO(data) if data is not None else None


class RecordingQueue(JobQueue):
    def __init__(self, *, fail: bool = False) -> None:
        self.jobs: list[ThumbnailJob] = []
        self._fail = fail

    def put(self, job: ThumbnailJob) -> str:
        if self._fail:
            raise RuntimeError("queue unavailable")
        self.jobs.append(job)
        return f"msg-{len(self.jobs)}"


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def sessions() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture()
def files() -> InMemoryFileRepository:
    return InMemoryFileRepository()


@pytest.fixture()
def blobs() -> InMemoryBlobStore:
    return InMemoryBlobStore()


@pytest.fixture()
def queue() -> RecordingQueue:
    return RecordingQueue()


@pytest.fixture()
def hasher() -> DeterministicHasher:
    return DeterministicHasher()


@pytest.fixture()
def gate(
    sessions: InMemorySessionStore,
    users: InMemoryUserRepository,
    files: InMemoryFileRepository,
) -> AccessGate:
    return AccessGate(sessions=sessions, users=users, files=files)


@pytest.fixture()
def alice(users: InMemoryUserRepository) -> User:
    return users.add(User(id=0, email="alice@example.com", password_hash="hashed:pw"))


@pytest.fixture()
def bob(users: InMemoryUserRepository) -> User:
    return users.add(User(id=0, email="bob@example.com", password_hash="hashed:pw"))


@pytest.fixture()
def alice_token(sessions: InMemorySessionStore, alice: User) -> str:
    return sessions.create(alice.id).token


@pytest.fixture()
def bob_token(sessions: InMemorySessionStore, bob: User) -> str:
    return sessions.create(bob.id).token


@pytest.fixture()
def reset_database() -> Iterator[None]:
    from files_manager.infrastructure.db import ENGINE, Base, init_db

    Base.metadata.drop_all(bind=ENGINE)
    init_db(ENGINE)
    yield
    Base.metadata.drop_all(bind=ENGINE)


@pytest.fixture()
def failing_queue() -> RecordingQueue:
    return RecordingQueue(fail=True)
