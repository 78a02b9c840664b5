"""
Database module - SQLAlchemy engine and sessions.
"""
from app.db.session import get_db_session, get_engine, build_engine, check_db_connection

__all__ = [
    "get_db_session",
    "get_engine",
    "build_engine",
    "check_db_connection"
]
