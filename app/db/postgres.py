import logging
from contextlib import contextmanager
from typing import Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from app.core.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

# Session factory, bound to an engine by init_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False)

_engine: Optional[Engine] = None


def init_engine(url: str = None) -> Engine:
    """
    Create the engine and bind the session factory to it.

    PostgreSQL gets a connection pool:
    pool_size=5: maintain 5 connections ready
    max_overflow=10: allow 10 extra connections under load
    SQLite (local dev and tests) uses SQLAlchemy's default pool.
    """
    global _engine
    url = url or settings.sqlalchemy_url

    if _engine is not None:
        _engine.dispose()

    if url.startswith("sqlite"):
        _engine = create_engine(
            url,
            connect_args={"check_same_thread": False},
            echo=settings.debug
        )
    else:
        _engine = create_engine(
            url,
            pool_size=5,
            max_overflow=10,
            echo=settings.debug  # Log SQL queries in debug mode
        )

    SessionLocal.configure(bind=_engine)
    return _engine


def get_engine() -> Engine:
    """Get the engine, creating it from settings on first use."""
    if _engine is None:
        init_engine()
    return _engine


@contextmanager
def get_db_session():
    """
    Context manager for database sessions.
    Usage:
        with get_db_session() as db:
            db.execute(text("SELECT * FROM profiles"))
    """
    get_engine()
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def test_postgres_connection() -> bool:
    """
    Test if the relational store is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        with get_db_session() as db:
            result = db.execute(text("SELECT 1 as test"))
            row = result.fetchone()
            return row[0] == 1
    except SQLAlchemyError as e:
        logger.error("Database connection failed: %s", e)
        return False


def execute_raw_sql(sql: str, params: dict = None) -> list:
    """
    Execute raw SQL and return results as list of dicts.
    This is useful for joins and aggregate queries.
    """
    with get_db_session() as db:
        result = db.execute(text(sql), params or {})
        # Convert rows to dicts
        columns = result.keys()
        return [dict(zip(columns, row)) for row in result.fetchall()]


def like_pattern(term: str) -> str:
    """
    Case-insensitive substring pattern for `LOWER(col) LIKE :p ESCAPE '\\'`.
    % and _ in the term match literally.
    """
    escaped = term.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"
