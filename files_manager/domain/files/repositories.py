# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from typing import BinaryIO, Protocol

from .entities import FileRecord, ThumbnailJob


class FileRepository(Protocol):
    def get(self, file_id: int) -> FileRecord | None: ...
    def add(self, record: FileRecord) -> FileRecord: ...
    def set_public(self, file_id: int, is_public: bool) -> FileRecord | None: ...
    def list_children(
        self, parent_id: int, *, viewer_id: int | None, skip: int, limit: int
    ) -> Sequence[FileRecord]: ...
    def count(self) -> int: ...


class BlobStore(Protocol):
    def write(self, path: str, data: bytes) -> None: ...
    def read(self, path: str) -> bytes | None: ...
    def exists(self, path: str) -> bool: ...
    def open(self, path: str) -> BinaryIO | None: ...
    def new_path(self) -> str: ...


class JobQueue(Protocol):
    def put(self, job: ThumbnailJob) -> str: ...


class ThumbnailRenderer(Protocol):
    def render(self, data: bytes, width: int) -> bytes: ...
