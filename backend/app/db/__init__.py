"""
Database module: connection management and query functions.
"""

from app.db.database import close_db, get_db, get_db_session, init_db
from app.db.schema import init_database

__all__ = [
    "init_db",
    "close_db",
    "get_db",
    "get_db_session",
    "init_database",
]
