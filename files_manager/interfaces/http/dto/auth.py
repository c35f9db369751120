# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from files_manager.domain.users.entities import User


class RegisterRequestDTO(BaseModel):
    # presence is checked by the use case so the error codes stay specific
    model_config = ConfigDict(extra="ignore")

    email: str | None = Field(default=None, max_length=320)
    password: str | None = Field(default=None, max_length=128)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None


class UserDTO(BaseModel):
    id: int
    email: str

    @classmethod
    def from_user(cls, user: User) -> UserDTO:
        return cls(id=user.id, email=user.email)


class TokenDTO(BaseModel):
    token: str
