# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from files_manager.application.use_cases.files.upload_file import UploadFileInput
from files_manager.domain.files.entities import ROOT_PARENT_ID, FileRecord


class UploadFileRequestDTO(BaseModel):
    """Upload body, kept untyped so the use case reports the first bad field."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: Any = None
    type: Any = None
    parent_id: Any = Field(default=None, alias="parentId")
    is_public: Any = Field(default=False, alias="isPublic")
    data: Any = None

    def to_input(self) -> UploadFileInput:
        return UploadFileInput(
            name=self.name,
            type=self.type,
            parent_id=self.parent_id,
            is_public=self.is_public,
            data=self.data,
        )


class ListFilesQueryDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    parent_id: int = Field(default=ROOT_PARENT_ID, alias="parentId")
    page: int = 0


class ContentQueryDTO(BaseModel):
    model_config = ConfigDict(extra="ignore")

    size: str | None = None


class FileDTO(BaseModel):
    """Wire projection of a record; the blob path never leaves the server."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    user_id: int = Field(alias="userId")
    name: str
    type: str
    is_public: bool = Field(alias="isPublic")
    parent_id: int = Field(alias="parentId")

    @classmethod
    def from_record(cls, record: FileRecord) -> FileDTO:
        return cls(
            id=record.id,
            user_id=record.owner_id,
            name=record.name,
            type=str(record.kind),
            is_public=record.is_public,
            parent_id=record.parent_id,
        )

    def to_wire(self) -> dict[str, object]:
        return self.model_dump(by_alias=True)
