"""
Database module - relational store and MongoDB connections.
"""
from app.db.postgres import get_db_session, execute_raw_sql, init_engine
from app.db.mongodb import get_mongo_db, get_collection

__all__ = [
    "get_db_session",
    "execute_raw_sql",
    "init_engine",
    "get_mongo_db",
    "get_collection",
]
