# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from files_manager.domain.users.entities import SessionToken
from files_manager.domain.users.exceptions import InvalidCredentialsError
from files_manager.domain.users.repositories import (
    PasswordHasher,
    SessionStore,
    UserRepository,
)


class LoginUserUseCase:
    """Exchange email/password credentials for a fresh session token."""

    def __init__(
        self,
        *,
        users: UserRepository,
        sessions: SessionStore,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._sessions = sessions
        self._password_hasher = password_hasher

    def execute(self, email: str, password: str) -> SessionToken:
        user = self._users.find_by_email(email)
        if user is None or not self._password_hasher.verify(password, user.password_hash):
            raise InvalidCredentialsError()
        return self._sessions.create(user.id)
