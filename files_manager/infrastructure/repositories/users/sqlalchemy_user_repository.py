# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from sqlalchemy import func

from files_manager.domain.users.entities import SessionToken as DomainSessionToken
from files_manager.domain.users.entities import User as DomainUser
from files_manager.domain.users.repositories import SessionStore, UserRepository
from files_manager.infrastructure.db.models import SessionToken, User
from files_manager.infrastructure.unit_of_work import SessionFactory, unit_of_work_scope
from files_manager.shared.logging import logger


def _to_domain(row: User) -> DomainUser:
    return DomainUser(id=row.id, email=row.email, password_hash=row.password_hash)


def _utc(value: datetime) -> datetime:
    # sqlite hands timezone-aware columns back naive
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    def find_by_email(self, email: str) -> DomainUser | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.query(User).filter(User.email == email).first()
            return _to_domain(row) if row else None

    def find_by_id(self, user_id: int) -> DomainUser | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(User, user_id)
            return _to_domain(row) if row else None

    def add(self, user: DomainUser) -> DomainUser:
        with unit_of_work_scope(self._session_factory) as session:
            row = User(email=user.email, password_hash=user.password_hash)
            session.add(row)
            session.flush()
            session.refresh(row)
            return _to_domain(row)

    def count(self) -> int:
        with unit_of_work_scope(self._session_factory) as session:
            return int(session.query(func.count(User.id)).scalar() or 0)


class SqlAlchemySessionStore(SessionStore):
    """Session tokens with a fixed lifetime, checked lazily on resolve.

    Tokens are never extended by use and expired rows are not swept; an
    expired token simply stops resolving.
    """

    def __init__(
        self,
        session_factory: SessionFactory,
        *,
        ttl_seconds: int,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock or (lambda: datetime.now(UTC))

    def create(self, user_id: int) -> DomainSessionToken:
        token_value = secrets.token_urlsafe(48)
        expires_at = self._clock() + self._ttl
        with unit_of_work_scope(self._session_factory) as session:
            session.add(SessionToken(user_id=user_id, token=token_value, expires_at=expires_at))
        logger.info(f"sessions: issued user_id={user_id} exp={expires_at.isoformat()}")
        return DomainSessionToken(user_id=user_id, token=token_value, expires_at=expires_at)

    def resolve(self, token: str) -> int | None:
        if not token:
            return None
        with unit_of_work_scope(self._session_factory) as session:
            row = session.query(SessionToken).filter(SessionToken.token == token).first()
            if row is None:
                return None
            live = DomainSessionToken(
                user_id=row.user_id, token=row.token, expires_at=_utc(row.expires_at)
            )
        if not live.is_live(self._clock()):
            return None
        return live.user_id

    def destroy(self, token: str) -> None:
        with unit_of_work_scope(self._session_factory) as session:
            deleted = session.query(SessionToken).filter(SessionToken.token == token).delete()
        logger.debug(f"sessions: destroy removed={deleted}")


__all__ = ["SqlAlchemySessionStore", "SqlAlchemyUserRepository"]
