# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func, or_

from files_manager.domain.files.entities import FileKind, FileRecord
from files_manager.domain.files.repositories import FileRepository
from files_manager.infrastructure.db.models import FileRow
from files_manager.infrastructure.unit_of_work import SessionFactory, unit_of_work_scope


def _to_domain(row: FileRow) -> FileRecord:
    return FileRecord(
        id=row.id,
        owner_id=row.owner_id,
        name=row.name,
        kind=FileKind(row.kind),
        is_public=bool(row.is_public),
        parent_id=int(row.parent_id or 0),
        local_path=row.local_path,
    )


class SqlAlchemyFileRepository(FileRepository):
    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    def get(self, file_id: int) -> FileRecord | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(FileRow, file_id)
            return _to_domain(row) if row else None

    def add(self, record: FileRecord) -> FileRecord:
        with unit_of_work_scope(self._session_factory) as session:
            row = FileRow(
                owner_id=record.owner_id,
                name=record.name,
                kind=str(record.kind),
                is_public=record.is_public,
                parent_id=record.parent_id,
                local_path=record.local_path,
            )
            session.add(row)
            session.flush()
            session.refresh(row)
            return _to_domain(row)

    def set_public(self, file_id: int, is_public: bool) -> FileRecord | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(FileRow, file_id)
            if row is None:
                return None
            row.is_public = is_public
            session.flush()
            return _to_domain(row)

    def list_children(
        self, parent_id: int, *, viewer_id: int | None, skip: int, limit: int
    ) -> Sequence[FileRecord]:
        with unit_of_work_scope(self._session_factory) as session:
            query = session.query(FileRow).filter(FileRow.parent_id == parent_id)
            if viewer_id is None:
                query = query.filter(FileRow.is_public.is_(True))
            else:
                query = query.filter(
                    or_(FileRow.owner_id == viewer_id, FileRow.is_public.is_(True))
                )
            rows = query.order_by(FileRow.id.asc()).offset(skip).limit(limit).all()
            return [_to_domain(row) for row in rows]

    def count(self) -> int:
        with unit_of_work_scope(self._session_factory) as session:
            return int(session.query(func.count(FileRow.id)).scalar() or 0)


__all__ = ["SqlAlchemyFileRepository"]
