# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Authentication and per-file authorization decisions."""

from __future__ import annotations

from files_manager.domain.files.entities import ROOT_PARENT_ID, FileAction, FileRecord
from files_manager.domain.files.exceptions import ParentNotFolderError, ParentNotFoundError
from files_manager.domain.files.repositories import FileRepository
from files_manager.domain.users.repositories import SessionStore, UserRepository
from files_manager.shared.errors.base import NotFoundOrForbiddenError, UnauthenticatedError
from files_manager.shared.logging import logger


class AccessGate:
    """Resolves callers from session tokens and decides what they may touch.

    The gate holds no state of its own. Every denial of a read or write is
    reported as ``NotFoundOrForbiddenError`` so a caller can never tell a
    hidden record from a missing one.
    """

    def __init__(
        self,
        *,
        sessions: SessionStore,
        users: UserRepository,
        files: FileRepository,
    ) -> None:
        self._sessions = sessions
        self._users = users
        self._files = files

    def authenticate(self, token: str | None) -> int:
        user_id = self.identify(token)
        if user_id is None:
            raise UnauthenticatedError()
        return user_id

    def identify(self, token: str | None) -> int | None:
        """Return the user behind ``token`` or ``None`` for anonymous callers."""

        if not token:
            return None
        user_id = self._sessions.resolve(token)
        if user_id is None:
            logger.debug("gate: token not found or expired")
            return None
        if self._users.find_by_id(user_id) is None:
            logger.warning(f"gate: session points at missing user_id={user_id}")
            return None
        return user_id

    @staticmethod
    def authorize(
        user_id: int | None, record: FileRecord | None, action: FileAction
    ) -> FileRecord:
        if record is None:
            raise NotFoundOrForbiddenError()
        if action is FileAction.WRITE:
            allowed = record.is_owned_by(user_id)
        else:
            allowed = record.readable_by(user_id)
        if not allowed:
            logger.debug(
                f"gate: deny action={action} file_id={record.id} user_id={user_id}"
            )
            raise NotFoundOrForbiddenError()
        return record

    def load_authorized(
        self, user_id: int | None, file_id: int, action: FileAction
    ) -> FileRecord:
        return self.authorize(user_id, self._files.get(file_id), action)

    def authorize_parent(self, user_id: int, parent_id: int) -> FileRecord | None:
        """Check that ``user_id`` may create records under ``parent_id``.

        Returns ``None`` for the root sentinel and the parent folder otherwise.
        """

        if parent_id == ROOT_PARENT_ID:
            return None
        parent = self._files.get(parent_id)
        if parent is None or not parent.readable_by(user_id):
            raise ParentNotFoundError(parent_id)
        if not parent.is_folder:
            raise ParentNotFolderError(parent_id)
        return parent


__all__ = ["AccessGate"]
