# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Blob storage on the local filesystem."""

from __future__ import annotations

import uuid
from pathlib import Path
from typing import BinaryIO

from files_manager.domain.files.repositories import BlobStore
from files_manager.shared.logging import logger


class LocalBlobStore(BlobStore):
    """Stores opaque byte blobs as flat files under a configured root.

    Paths handed out by ``new_path`` are absolute and unique; thumbnail
    variants live next to the original with a ``_<size>`` suffix.
    """

    def __init__(self, root: Path) -> None:
        self._root = root
        self._root.mkdir(parents=True, exist_ok=True)

    @property
    def root(self) -> Path:
        return self._root

    def _resolve(self, path: str) -> Path:
        resolved = (self._root / path).resolve()
        if not resolved.is_relative_to(self._root.resolve()):
            msg = "Attempted directory traversal outside storage root"
            raise ValueError(msg)
        return resolved

    def new_path(self) -> str:
        return str(self._root / str(uuid.uuid4()))

    def write(self, path: str, data: bytes) -> None:
        file_path = self._resolve(path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_bytes(data)
        logger.debug(f"storage: write path={file_path} size={len(data)}")

    def read(self, path: str) -> bytes | None:
        file_path = self._resolve(path)
        if not file_path.is_file():
            logger.debug(f"storage: missing path={file_path}")
            return None
        return file_path.read_bytes()

    def exists(self, path: str) -> bool:
        return self._resolve(path).is_file()

    def open(self, path: str) -> BinaryIO | None:
        file_path = self._resolve(path)
        try:
            return file_path.open("rb")
        except FileNotFoundError:
            logger.debug(f"storage: missing path={file_path}")
            return None


__all__ = ["LocalBlobStore"]
