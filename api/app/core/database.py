from typing import Optional
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine, Session
from app.core.config import settings
import logging

logger = logging.getLogger(__name__)

IN_MEMORY_SQLITE_URLS = ("sqlite://", "sqlite:///:memory:")


def normalize_db_url(db_url: str) -> str:
    """SQLAlchemy prefers postgresql:// over postgres://."""
    if db_url.startswith("postgres://"):
        return db_url.replace("postgres://", "postgresql://", 1)
    return db_url


def _configure_sqlite(engine: Engine) -> None:
    # pysqlite manages BEGIN itself and breaks SAVEPOINT semantics;
    # hand transaction control back to SQLAlchemy.
    @event.listens_for(engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _emit_begin(conn):
        # Take the write lock up front: a second writer waits here instead of
        # failing with "database is locked" after its existence check.
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_db_engine(db_url: Optional[str] = None) -> Engine:
    """Create an engine for the configured database (PostgreSQL in production, SQLite locally)."""
    url = normalize_db_url(db_url or settings.database_url)

    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False, "timeout": 30}}
        if url in IN_MEMORY_SQLITE_URLS:
            # One shared connection, otherwise every session sees an empty database
            kwargs["poolclass"] = StaticPool
        engine = create_engine(url, echo=False, **kwargs)
        _configure_sqlite(engine)
        return engine

    return create_engine(
        url,
        echo=False,  # Set to True to log SQL statements
        pool_pre_ping=True,  # Verify connections before using
        pool_size=5,
        max_overflow=10,
    )


logger.info(f"Connecting to database: {normalize_db_url(settings.database_url)[:20]}...")  # Log partial URL for debugging

engine = create_db_engine()


def get_session():
    """Dependency for getting database sessions."""
    with Session(engine) as session:
        yield session


def init_db():
    """Initialize database tables."""
    SQLModel.metadata.create_all(engine)
