# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from files_manager.shared.errors.base import UnauthenticatedError, ValidationError


class MissingEmailError(ValidationError):
    def __init__(self) -> None:
        super().__init__("missing_email")


class MissingPasswordError(ValidationError):
    def __init__(self) -> None:
        super().__init__("missing_password")


class MissingCredentialsError(ValidationError):
    def __init__(self) -> None:
        super().__init__("missing_credentials")


class UserAlreadyExistsError(ValidationError):
    def __init__(self) -> None:
        super().__init__("already_exist")


class InvalidCredentialsError(UnauthenticatedError):
    pass
