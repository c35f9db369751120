# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence

from files_manager.application.services.access_gate import AccessGate
from files_manager.domain.files.entities import (
    PAGE_SIZE,
    ROOT_PARENT_ID,
    FileAction,
    FileRecord,
)
from files_manager.domain.files.exceptions import InvalidQueryError
from files_manager.domain.files.repositories import FileRepository


class ListFilesUseCase:
    """Page through the children of a folder, or of the root.

    Only records the caller may read are listed, and the filter runs before
    pagination so pages never come back short because of hidden records.
    """

    def __init__(self, *, gate: AccessGate, files: FileRepository) -> None:
        self._gate = gate
        self._files = files

    def execute(
        self, token: str | None, parent_id: int = ROOT_PARENT_ID, page: int = 0
    ) -> Sequence[FileRecord]:
        if parent_id < 0:
            raise InvalidQueryError("parent_id")
        if page < 0:
            raise InvalidQueryError("page")

        user_id = self._gate.identify(token)
        if parent_id != ROOT_PARENT_ID:
            self._gate.load_authorized(user_id, parent_id, FileAction.READ)

        return self._files.list_children(
            parent_id,
            viewer_id=user_id,
            skip=page * PAGE_SIZE,
            limit=PAGE_SIZE,
        )
