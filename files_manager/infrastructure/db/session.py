# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from files_manager.shared.config import load_config
from files_manager.shared.logging import logger

_config = load_config()


class Base(DeclarativeBase):
    pass


def build_engine(url: str) -> Engine:
    if url.startswith("sqlite"):
        # request threads and thumbnail workers share the same file
        return create_engine(
            url,
            echo=False,
            future=True,
            connect_args={
                "check_same_thread": False,
                "timeout": int(_config.database.pool_timeout),
            },
        )
    return create_engine(
        url,
        echo=False,
        future=True,
        pool_pre_ping=True,
        pool_size=_config.database.pool_size,
        max_overflow=_config.database.max_overflow,
        pool_timeout=_config.database.pool_timeout,
    )


ENGINE: Engine = build_engine(_config.database.url)


SessionLocal: sessionmaker[Session] = sessionmaker(
    bind=ENGINE, autoflush=False, autocommit=False, expire_on_commit=False
)


def init_db(engine: Engine | None = None) -> None:
    # models must be registered on Base.metadata before create_all
    from files_manager.infrastructure.db import models  # noqa: F401

    Base.metadata.create_all(bind=engine or ENGINE)
    logger.info("Database schema ensured")
