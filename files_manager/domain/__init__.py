# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .exceptions import DomainError, InvariantViolation
from .files.entities import (
    PAGE_SIZE,
    ROOT_PARENT_ID,
    THUMBNAIL_SIZES,
    FileAction,
    FileKind,
    FileRecord,
    ThumbnailJob,
)
from .users.entities import SessionToken, User

__all__ = [
    "PAGE_SIZE",
    "ROOT_PARENT_ID",
    "THUMBNAIL_SIZES",
    "DomainError",
    "FileAction",
    "FileKind",
    "FileRecord",
    "InvariantViolation",
    "SessionToken",
    "ThumbnailJob",
    "User",
]
