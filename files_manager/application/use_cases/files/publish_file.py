# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from files_manager.application.services.access_gate import AccessGate
from files_manager.domain.files.entities import FileAction, FileRecord
from files_manager.domain.files.repositories import FileRepository
from files_manager.shared.errors.base import NotFoundOrForbiddenError
from files_manager.shared.logging import logger


class PublishFileUseCase:
    """Toggle the public flag of a record owned by the caller."""

    def __init__(self, *, gate: AccessGate, files: FileRepository) -> None:
        self._gate = gate
        self._files = files

    def execute(self, token: str | None, file_id: int, *, is_public: bool) -> FileRecord:
        user_id = self._gate.identify(token)
        record = self._gate.load_authorized(user_id, file_id, FileAction.WRITE)
        if record.is_public == is_public:
            return record
        updated = self._files.set_public(record.id, is_public)
        if updated is None:
            raise NotFoundOrForbiddenError()
        logger.info(f"files.visibility: file_id={file_id} is_public={is_public}")
        return updated
