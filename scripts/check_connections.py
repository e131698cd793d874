#!/usr/bin/env python3
"""
Connection Check Script

Verifies the relational store and MongoDB are reachable, and optionally
creates the local tables and log indexes.

Usage:
    python scripts/check_connections.py
    python scripts/check_connections.py --init
"""
import sys
sys.path.insert(0, '.')

from pymongo.errors import PyMongoError

from app.core.config import get_settings
from app.db.mongodb import init_mongo_indexes, test_mongo_connection
from app.db.postgres import test_postgres_connection
from app.db.tables import init_schema


def main():
    settings = get_settings()
    init = "--init" in sys.argv[1:]

    print("=" * 50)
    print("PLACEMENT PORTAL - CONNECTION CHECK")
    print("=" * 50)

    print("\n[1] Relational store...")
    if settings.database_url:
        print("    URL: (from DATABASE_URL)")
    else:
        print(f"    URL: postgresql://{settings.postgres_user}:****@{settings.postgres_host}:{settings.postgres_port}/{settings.postgres_db}")
    db_ok = test_postgres_connection()
    print("    ✅ CONNECTED" if db_ok else "    ❌ FAILED")
    if db_ok and init:
        init_schema()
        print("    Tables ensured")

    print("\n[2] MongoDB...")
    print(f"    URI: {settings.mongodb_uri}")
    print(f"    Database: {settings.mongodb_db}")
    mongo_ok = test_mongo_connection()
    print("    ✅ CONNECTED" if mongo_ok else "    ❌ FAILED")
    if mongo_ok and init:
        try:
            init_mongo_indexes()
            print("    recommendation_logs indexes ensured")
        except PyMongoError as e:
            print(f"    ⚠️  Index creation failed: {e}")

    print("\n" + "=" * 50)
    print("Connection check complete!")
    print("=" * 50)
    return 0 if db_ok and mongo_ok else 1


if __name__ == "__main__":
    sys.exit(main())
