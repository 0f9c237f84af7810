"""Database session and engine utilities.

This module centralises the creation of both asynchronous and synchronous
SQLAlchemy engines. The async engine only serves startup table creation and
the admin back-office; routers and the CSV importer work on synchronous
sessions. A local SQLite fallback keeps development usable when the
configured database is unreachable.
"""

from __future__ import annotations

import logging
import os
from time import perf_counter
from typing import Any, Generator

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.engine.url import URL, make_url
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import settings

logger = logging.getLogger(__name__)


def _derive_sync_connection_parameters(async_url: str) -> tuple[str, dict[str, Any]]:
    """Return a synchronous SQLAlchemy URL matching the async configuration."""

    try:
        parsed_url: URL = make_url(async_url)
    except Exception:
        return async_url.replace("+asyncpg", "").replace("+aiosqlite", ""), {}

    drivername = parsed_url.drivername
    connect_args: dict[str, Any] = {}

    if drivername.startswith("postgresql+"):
        # ``postgresql+asyncpg`` -> ``postgresql`` so psycopg can be used for sync work.
        parsed_url = parsed_url.set(drivername=drivername.split("+", 1)[0])
    elif drivername == "sqlite+aiosqlite":
        parsed_url = parsed_url.set(drivername="sqlite")
        connect_args["check_same_thread"] = False

    return parsed_url.render_as_string(hide_password=False), connect_args


def _should_enable_sqlite_fallback() -> bool:
    environment = (getattr(settings, "ENVIRONMENT", "development") or "").lower()
    if os.getenv("DISABLE_SQLITE_FALLBACK") == "1":
        return False
    return environment in {"development", "local"}


SQLITE_FALLBACK_URL = "sqlite+aiosqlite:///./chineselearn_local.db"

# These globals are populated by ``configure_database``.
async_engine: AsyncEngine
sync_engine: Engine
SessionLocal: sessionmaker


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """Make SQLite enforce ``FOREIGN KEY ... ON DELETE CASCADE`` on every connection.

    SQLite ships with foreign keys disabled, which is how the vocabulary
    tables used to end up with orphaned rows.
    """

    if engine.dialect.name != "sqlite":
        return

    def _set_pragma(dbapi_connection, connection_record):  # type: ignore[no-untyped-def]
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    event.listen(engine, "connect", _set_pragma)


def _install_slow_query_logger(engine: Engine) -> None:
    """Attach callbacks that warn when queries exceed the configured budget."""

    threshold_ms = max(getattr(settings, "SQLALCHEMY_SLOW_QUERY_THRESHOLD_MS", 0) or 0, 0)
    if threshold_ms == 0:
        return

    marker = "_chineselearn_slow_query_hook"
    if getattr(engine, marker, False):
        return

    setattr(engine, marker, True)

    def _before_cursor_execute(conn, cursor, statement, parameters, context, executemany):  # type: ignore[override]
        context._chineselearn_query_start = perf_counter()

    def _after_cursor_execute(conn, cursor, statement, parameters, context, executemany):  # type: ignore[override]
        start = getattr(context, "_chineselearn_query_start", None)
        if start is None:
            return

        elapsed_ms = (perf_counter() - start) * 1000.0
        if elapsed_ms < threshold_ms:
            return

        snippet = " ".join(statement.split()) if isinstance(statement, str) else str(statement)
        if len(snippet) > 200:
            snippet = snippet[:197] + "..."

        logger.warning("SQL lente (%.1f ms) - %s", elapsed_ms, snippet)

    event.listen(engine, "before_cursor_execute", _before_cursor_execute)
    event.listen(engine, "after_cursor_execute", _after_cursor_execute)


def _verify_database_connection(engine: Engine) -> None:
    with engine.connect() as connection:
        connection.execute(text("SELECT 1"))


def configure_database(database_url: str | None = None, *, allow_fallback: bool = True) -> None:
    """Initialise the engines and session factory.

    ``database_url`` defaults to the environment configuration. When the
    connection attempt fails locally we transparently fall back to a SQLite
    database so the API can boot without a running PostgreSQL instance.
    """

    global async_engine, sync_engine, SessionLocal

    async_url = str(database_url or settings.DATABASE_URL)

    logger.info("Configuration de la base de données: %s", make_url(async_url).render_as_string())

    candidate_async_engine = create_async_engine(async_url, echo=False, future=True)

    sync_url, sync_connect_args = _derive_sync_connection_parameters(async_url)
    candidate_sync_engine = create_engine(
        sync_url,
        pool_pre_ping=True,
        connect_args=sync_connect_args,
    )

    enable_sqlite_foreign_keys(candidate_sync_engine)
    enable_sqlite_foreign_keys(candidate_async_engine.sync_engine)
    _install_slow_query_logger(candidate_sync_engine)

    try:
        _verify_database_connection(candidate_sync_engine)
    except (OperationalError, OSError) as exc:
        if allow_fallback and _should_enable_sqlite_fallback():
            logger.warning(
                "Impossible de joindre la base de données '%s' (%s). Bascule automatique vers SQLite.",
                async_url,
                exc,
            )
            candidate_sync_engine.dispose()
            configure_database(SQLITE_FALLBACK_URL, allow_fallback=False)
            return

        logger.error("Connexion à la base de données échouée: %s", exc)
        raise

    async_engine = candidate_async_engine
    sync_engine = candidate_sync_engine
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=sync_engine)


# Initialise the engines at import time so the rest of the application can use
# them immediately.
configure_database()


# Dépendance FastAPI pour les sessions synchrones (utilisée par les routeurs API)
def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
