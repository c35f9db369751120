# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from files_manager.domain.users.entities import User
from files_manager.domain.users.exceptions import (
    MissingEmailError,
    MissingPasswordError,
    UserAlreadyExistsError,
)
from files_manager.domain.users.repositories import PasswordHasher, UserRepository


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, email: str | None, password: str | None) -> User:
        if not email:
            raise MissingEmailError()
        if not password:
            raise MissingPasswordError()
        if self._users.find_by_email(email):
            raise UserAlreadyExistsError()
        hashed = self._password_hasher.hash(password)
        return self._users.add(User(id=0, email=email, password_hash=hashed))
