"""
Database setup for the FastAPI backend.
Provides SQLAlchemy engine/session factories for PostgreSQL (production) and SQLite (dev).

Nothing here is a module-level singleton: the app (or a CLI script) builds an
engine once at startup and hands the session factory to whoever needs it.
"""
import logging
from pathlib import Path
from typing import Any, Dict

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine, URL, make_url
from sqlalchemy.orm import declarative_base, sessionmaker

logger = logging.getLogger(__name__)

Base = declarative_base()

MAINTENANCE_DATABASE = "postgres"


def is_sqlite(url: URL) -> bool:
    return url.get_backend_name() == "sqlite"


def is_postgres(url: URL) -> bool:
    return url.get_backend_name() == "postgresql"


def _is_memory_sqlite(url: URL) -> bool:
    return is_sqlite(url) and url.database in (None, "", ":memory:")


def _connect_args(url: URL, timeout_seconds: float) -> Dict[str, Any]:
    """Driver-level timeouts so a stuck transaction never holds locks forever."""
    if is_sqlite(url):
        # check_same_thread=False allows usage across FastAPI threads
        return {"check_same_thread": False, "timeout": timeout_seconds}
    if is_postgres(url) and url.get_driver_name() in ("psycopg2", "psycopg"):
        ms = int(timeout_seconds * 1000)
        return {"options": f"-c lock_timeout={ms} -c statement_timeout={ms}"}
    return {}


def _use_immediate_transactions(engine: Engine) -> None:
    """
    Make every SQLite transaction start with BEGIN IMMEDIATE.

    pysqlite defers BEGIN until the first write, so two invests could both
    read the same balance before either takes the write lock. Taking the lock
    at BEGIN serializes them instead.
    """

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_db_engine(database_url: str, timeout_seconds: float = 5.0, echo: bool = False) -> Engine:
    """Create the process-wide connection pool for ``database_url``."""
    url = make_url(database_url)
    kwargs: Dict[str, Any] = {
        "connect_args": _connect_args(url, timeout_seconds),
        "echo": echo,
    }
    if not is_sqlite(url):
        kwargs["pool_pre_ping"] = True
    engine = create_engine(url, **kwargs)
    if is_sqlite(url):
        _use_immediate_transactions(engine)
    logger.info("Database engine created for %s", url.render_as_string(hide_password=True))
    return engine


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def ensure_database_exists(database_url: str) -> None:
    """
    Create the target database if it is missing.

    PostgreSQL: connects to the maintenance database and issues CREATE DATABASE
    only when pg_database has no matching row. SQLite: makes sure the parent
    directory of the database file exists (the file itself is created on connect).
    """
    url = make_url(database_url)
    if is_sqlite(url):
        if not _is_memory_sqlite(url):
            Path(url.database).expanduser().resolve().parent.mkdir(parents=True, exist_ok=True)
        return
    if not is_postgres(url):
        logger.info("Skipping database existence check for backend %s", url.get_backend_name())
        return

    name = url.database
    admin_engine = create_engine(
        url.set(database=MAINTENANCE_DATABASE), isolation_level="AUTOCOMMIT"
    )
    try:
        with admin_engine.connect() as conn:
            exists = conn.execute(
                text("SELECT 1 FROM pg_database WHERE datname = :name"), {"name": name}
            ).scalar()
            if exists:
                logger.info("Database %r already exists", name)
                return
            logger.info("Database %r not found. Creating it...", name)
            quoted = admin_engine.dialect.identifier_preparer.quote(name)
            conn.execute(text(f"CREATE DATABASE {quoted}"))
            logger.info("Database %r created", name)
    finally:
        admin_engine.dispose()


def init_db(engine: Engine) -> None:
    """Create tables if they don't exist."""
    from repositories import models  # noqa: F401  Ensures models are registered

    Base.metadata.create_all(bind=engine)
