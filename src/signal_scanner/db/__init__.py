"""Database layer — engine, session factory, ORM base."""

from signal_scanner.db.base import Base
from signal_scanner.db.engine import create_db_engine, create_session_factory, ensure_psycopg_driver

__all__ = ["Base", "create_db_engine", "create_session_factory", "ensure_psycopg_driver"]
