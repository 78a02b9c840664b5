import logging
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from contextlib import contextmanager
from typing import Optional
from app.core.config import get_settings

logger = logging.getLogger(__name__)

# Global engine (lazy - no database configured means in-memory store)
_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None


def build_engine(url: str, echo: bool = False) -> Engine:
    """
    Create an engine for the given URL.
    SQLite gets no pool sizing; PostgreSQL keeps 5 ready + 10 overflow.
    """
    if url.startswith("sqlite"):
        return create_engine(url, echo=echo)
    return create_engine(url, pool_size=5, max_overflow=10, echo=echo)


def get_engine() -> Optional[Engine]:
    """Get or create the configured engine (singleton). None if no database is configured."""
    global _engine, _session_factory
    if _engine is None:
        settings = get_settings()
        if not settings.sqlalchemy_url:
            return None
        _engine = build_engine(settings.sqlalchemy_url, echo=settings.debug)
        _session_factory = sessionmaker(autocommit=False, autoflush=False, bind=_engine)
    return _engine


def session_factory_for(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextmanager
def get_db_session(factory: sessionmaker = None):
    """
    Context manager for database sessions.
    Usage:
        with get_db_session(factory) as db:
            db.execute(text("SELECT * FROM companies"))
    Commits on clean exit, rolls back on any error.
    """
    if factory is None:
        get_engine()
        factory = _session_factory
    if factory is None:
        raise RuntimeError("No database configured (set DATABASE_URL or POSTGRES_HOST)")
    session: Session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def check_db_connection(factory: sessionmaker = None) -> bool:
    """
    Test if the database is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        with get_db_session(factory) as db:
            result = db.execute(text("SELECT 1 as test"))
            row = result.fetchone()
            return row[0] == 1
    except Exception as e:
        logger.warning("Database connection failed: %s", e)
        return False
