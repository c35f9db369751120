# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from files_manager.application.services.access_gate import AccessGate
from files_manager.domain.users.entities import User
from files_manager.domain.users.repositories import UserRepository
from files_manager.shared.errors.base import UnauthenticatedError


class GetCurrentUserUseCase:
    def __init__(self, *, gate: AccessGate, users: UserRepository) -> None:
        self._gate = gate
        self._users = users

    def execute(self, token: str | None) -> User:
        user = self._users.find_by_id(self._gate.authenticate(token))
        if user is None:
            raise UnauthenticatedError()
        return user
