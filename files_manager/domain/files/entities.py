# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""File metadata entities and the rules that bind them."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Final

from files_manager.domain.exceptions import InvariantViolation

ROOT_PARENT_ID: Final = 0
THUMBNAIL_SIZES: Final = (500, 250, 100)
PAGE_SIZE: Final = 20


class FileKind(StrEnum):
    FOLDER = "folder"
    FILE = "file"
    IMAGE = "image"


class FileAction(StrEnum):
    READ = "read"
    WRITE = "write"


@dataclass(slots=True, frozen=True)
class FileRecord:
    """Metadata for a folder, file or image owned by a user.

    ``local_path`` points at the original bytes in the blob store and is
    ``None`` exactly when the record is a folder. ``parent_id`` is either
    ``ROOT_PARENT_ID`` or the id of a folder; it never changes after
    creation, so the hierarchy cannot form cycles.
    """

    id: int
    owner_id: int
    name: str
    kind: FileKind
    is_public: bool
    parent_id: int
    local_path: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", FileKind(self.kind))
        if not self.name:
            raise InvariantViolation("name must not be empty", field="name")
        if self.parent_id < 0:
            raise InvariantViolation("parent id must be >= 0", field="parent_id")
        if self.id and self.parent_id == self.id:
            raise InvariantViolation("record cannot be its own parent", field="parent_id")
        if self.kind is FileKind.FOLDER and self.local_path is not None:
            raise InvariantViolation("folders have no local path", field="local_path")
        if self.kind is not FileKind.FOLDER and not self.local_path:
            raise InvariantViolation("files must have a local path", field="local_path")

    @property
    def is_folder(self) -> bool:
        return self.kind is FileKind.FOLDER

    @property
    def is_image(self) -> bool:
        return self.kind is FileKind.IMAGE

    def is_owned_by(self, user_id: int | None) -> bool:
        return user_id is not None and self.owner_id == user_id

    def readable_by(self, user_id: int | None) -> bool:
        return self.is_public or self.is_owned_by(user_id)

    def thumbnail_path(self, size: int) -> str:
        if not self.is_image or self.local_path is None:
            raise InvariantViolation("only images have thumbnails", field="kind")
        if size not in THUMBNAIL_SIZES:
            raise InvariantViolation(f"unsupported thumbnail size {size}", field="size")
        return f"{self.local_path}_{size}"

    def with_visibility(self, is_public: bool) -> FileRecord:
        return replace(self, is_public=is_public)


@dataclass(slots=True, frozen=True)
class ThumbnailJob:
    """Request to render the thumbnail variants of one uploaded image."""

    user_id: int
    file_id: int


__all__ = [
    "FileAction",
    "FileKind",
    "FileRecord",
    "PAGE_SIZE",
    "ROOT_PARENT_ID",
    "THUMBNAIL_SIZES",
    "ThumbnailJob",
]
