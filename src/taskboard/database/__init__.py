"""
Database module for the Taskboard backend
"""
from .database import create_db_engine, init_db, get_session

__all__ = [
    "create_db_engine",
    "init_db",
    "get_session",
]
