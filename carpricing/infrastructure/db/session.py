# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, scoped_session, sessionmaker
from sqlalchemy.pool import StaticPool

from carpricing.shared.config import DatabaseConfig
from carpricing.shared.logging import logger


class Base(DeclarativeBase):
    pass


MAX_ROW_ID = 2**63 - 1


def is_storable_id(row_id: int) -> bool:
    """Whether ``row_id`` fits the signed 64-bit integer column type."""

    return 0 < row_id <= MAX_ROW_ID


def _is_memory_sqlite(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:")


def build_engine(config: DatabaseConfig) -> Engine:
    if _is_memory_sqlite(config.url):
        # one shared connection, otherwise every checkout sees an empty database
        engine = create_engine(
            config.url,
            future=True,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        connect_args: dict[str, object] = {}
        if config.url.startswith("sqlite"):
            connect_args = {
                "check_same_thread": False,
                "timeout": int(config.pool_timeout),
            }
        engine = create_engine(
            config.url,
            echo=False,
            future=True,
            pool_pre_ping=True,
            pool_size=config.pool_size,
            max_overflow=config.max_overflow,
            pool_timeout=config.pool_timeout,
            connect_args=connect_args,
        )

    if config.url.startswith("sqlite"):
        event.listen(engine, "connect", _set_sqlite_pragmas)
    return engine


def _set_sqlite_pragmas(dbapi_conn, _) -> None:
    cur = dbapi_conn.cursor()
    try:
        cur.execute("PRAGMA foreign_keys=ON;")
    finally:
        cur.close()


class Database:
    """Engine and session factory for one configured database."""

    def __init__(self, config: DatabaseConfig) -> None:
        self.engine = build_engine(config)
        self.session_factory = scoped_session(
            sessionmaker(
                bind=self.engine,
                autoflush=False,
                expire_on_commit=False,
            )
        )

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        session = self.session_factory()
        logger.debug("db.session: opened scoped session")
        try:
            yield session
            session.commit()
            logger.debug("db.session: committed scoped session")
        except Exception:
            logger.debug("db.session: error, rolling back")
            session.rollback()
            raise
        finally:
            session.close()
            self.session_factory.remove()
            logger.debug("db.session: closed scoped session")

    def init_schema(self) -> None:
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database schema ensured")

    def drop_schema(self) -> None:
        Base.metadata.drop_all(bind=self.engine)

    def dispose(self) -> None:
        self.session_factory.remove()
        self.engine.dispose()
