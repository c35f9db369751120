# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from files_manager.application.services.access_gate import AccessGate
from files_manager.domain.files.entities import FileAction, FileRecord


class ShowFileUseCase:
    def __init__(self, *, gate: AccessGate) -> None:
        self._gate = gate

    def execute(self, token: str | None, file_id: int) -> FileRecord:
        user_id = self._gate.identify(token)
        return self._gate.load_authorized(user_id, file_id, FileAction.READ)
