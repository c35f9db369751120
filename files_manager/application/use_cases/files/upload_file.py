# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from typing import Any

from files_manager.application.services.access_gate import AccessGate
from files_manager.domain.files.entities import (
    ROOT_PARENT_ID,
    FileKind,
    FileRecord,
    ThumbnailJob,
)
from files_manager.domain.files.exceptions import (
    InvalidDataError,
    InvalidFieldError,
    MissingDataError,
    MissingNameError,
    MissingTypeError,
)
from files_manager.domain.files.repositories import BlobStore, FileRepository, JobQueue
from files_manager.shared.errors.base import InfrastructureError
from files_manager.shared.logging import logger


@dataclass(slots=True, frozen=True)
class UploadFileInput:
    """Raw body values; coercion happens in the use case, in check order."""

    name: Any = None
    type: Any = None
    parent_id: Any = None
    is_public: Any = False
    data: Any = None


class UploadFileUseCase:
    """Create a folder record, or store file bytes and create their record.

    The blob write and the metadata insert are two separate steps. When the
    insert fails the blob stays on disk and the caller gets a 500.
    """

    def __init__(
        self,
        *,
        gate: AccessGate,
        files: FileRepository,
        blobs: BlobStore,
        queue: JobQueue,
    ) -> None:
        self._gate = gate
        self._files = files
        self._blobs = blobs
        self._queue = queue

    def execute(self, token: str | None, payload: UploadFileInput) -> FileRecord:
        user_id = self._gate.authenticate(token)

        if not isinstance(payload.name, str) or not payload.name:
            raise MissingNameError()
        kind = _parse_kind(payload.type)
        if kind is not FileKind.FOLDER and not payload.data:
            raise MissingDataError()
        raw = _decode(payload.data) if kind is not FileKind.FOLDER else b""

        parent_id = _parse_parent_id(payload.parent_id)
        is_public = _parse_flag(payload.is_public)
        self._gate.authorize_parent(user_id, parent_id)

        if kind is FileKind.FOLDER:
            folder = self._files.add(
                FileRecord(
                    id=0,
                    owner_id=user_id,
                    name=payload.name,
                    kind=kind,
                    is_public=is_public,
                    parent_id=parent_id,
                )
            )
            logger.info(f"files.upload: folder created file_id={folder.id} user_id={user_id}")
            return folder

        local_path = self._blobs.new_path()
        try:
            self._blobs.write(local_path, raw)
        except OSError as exc:
            logger.exception(f"files.upload: blob write failed user_id={user_id}")
            raise InfrastructureError(code="blob_write_failed") from exc

        try:
            record = self._files.add(
                FileRecord(
                    id=0,
                    owner_id=user_id,
                    name=payload.name,
                    kind=kind,
                    is_public=is_public,
                    parent_id=parent_id,
                    local_path=local_path,
                )
            )
        except Exception as exc:
            logger.exception(
                f"files.upload: metadata insert failed, stray blob left at {local_path}"
            )
            raise InfrastructureError(code="metadata_write_failed") from exc

        if kind is FileKind.IMAGE:
            self._enqueue_thumbnails(ThumbnailJob(user_id=user_id, file_id=record.id))

        logger.info(
            f"files.upload: ok file_id={record.id} kind={kind} size={len(raw)} user_id={user_id}"
        )
        return record

    def _enqueue_thumbnails(self, job: ThumbnailJob) -> None:
        try:
            message_id = self._queue.put(job)
        except Exception:
            # the upload already succeeded; a missing variant is a valid state
            logger.exception(f"files.upload: thumbnail enqueue failed file_id={job.file_id}")
            return
        logger.debug(f"files.upload: thumbnail job queued message_id={message_id}")


def _parse_kind(value: Any) -> FileKind:
    try:
        return FileKind(value)
    except (TypeError, ValueError) as exc:
        raise MissingTypeError() from exc


def _parse_parent_id(value: Any) -> int:
    if value is None:
        return ROOT_PARENT_ID
    if isinstance(value, bool):
        raise InvalidFieldError("parentId")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    raise InvalidFieldError("parentId")


def _parse_flag(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    raise InvalidFieldError("isPublic")


def _decode(data: Any) -> bytes:
    if not isinstance(data, str):
        raise InvalidDataError()
    try:
        return base64.b64decode("".join(data.split()), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidDataError() from exc


__all__ = ["UploadFileInput", "UploadFileUseCase"]
