# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import mimetypes
from dataclasses import dataclass
from typing import BinaryIO

from files_manager.application.services.access_gate import AccessGate
from files_manager.domain.files.entities import THUMBNAIL_SIZES, FileAction, FileRecord
from files_manager.domain.files.exceptions import FolderHasNoContentError
from files_manager.domain.files.repositories import BlobStore, FileRepository
from files_manager.shared.errors.base import NotFoundOrForbiddenError
from files_manager.shared.logging import logger

_VARIANTS = {str(size): size for size in THUMBNAIL_SIZES}


@dataclass(slots=True)
class FileContent:
    stream: BinaryIO
    mimetype: str
    name: str


def guess_mimetype(name: str) -> str:
    mime_type, _ = mimetypes.guess_type(name)
    return mime_type or "application/octet-stream"


class GetFileContentUseCase:
    def __init__(self, *, gate: AccessGate, files: FileRepository, blobs: BlobStore) -> None:
        self._gate = gate
        self._files = files
        self._blobs = blobs

    def execute(self, token: str | None, file_id: int, size: str | None = None) -> FileContent:
        record = self._files.get(file_id)
        if record is None:
            raise NotFoundOrForbiddenError()
        if record.is_folder:
            raise FolderHasNoContentError(file_id)

        self._gate.authorize(self._gate.identify(token), record, FileAction.READ)

        path = self._artifact_path(record, size)
        stream = self._blobs.open(path)
        if stream is None:
            logger.info(f"files.content: artifact missing file_id={file_id} size={size}")
            raise NotFoundOrForbiddenError()
        return FileContent(stream=stream, mimetype=guess_mimetype(record.name), name=record.name)

    @staticmethod
    def _artifact_path(record: FileRecord, size: str | None) -> str:
        variant = _VARIANTS.get(size or "")
        if variant is not None and record.is_image:
            return record.thumbnail_path(variant)
        assert record.local_path is not None
        return record.local_path


__all__ = ["FileContent", "GetFileContentUseCase", "guess_mimetype"]
