#!/usr/bin/env python3
"""
Database setup script for the group read service.

Creates the organisation tables the read paths query, and can report on or
rebuild them. The service itself never writes; this script and
``seed_data.py`` are the only writers.

Usage:
    python scripts/setup_db.py            create missing tables and report
    python scripts/setup_db.py verify     report row counts per table
    python scripts/setup_db.py reset      drop and recreate every table
    python scripts/setup_db.py reset -y   same, without the confirmation prompt
"""

import sys
from pathlib import Path

# Add the project root to the Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

from sqlalchemy import func, inspect, text
from groupread.core.database import engine, create_tables, drop_tables, SessionLocal
from groupread.models import Office, Staff, Client, Group, Code, CodeValue
from groupread.config.settings import settings
from groupread.core.logging_config import configure_logging

# Tables in dependency order, with the model that owns each
EXPECTED_TABLES = {
    model.__tablename__: model
    for model in (Office, Staff, Client, Group, Code, CodeValue)
}


def check_database_connection():
    """Check if database connection is working."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print(f"✅ Connected to {engine.url.render_as_string(hide_password=True)}")
        return True
    except Exception as e:
        print(f"❌ Database connection failed: {e}")
        return False


def missing_tables():
    """Names of expected tables not present in the database."""
    existing = set(inspect(engine).get_table_names())
    return [name for name in EXPECTED_TABLES if name not in existing]


def create_database_tables():
    """Create any missing tables; existing tables are left alone."""
    missing = missing_tables()
    if not missing:
        print("✅ All tables already exist")
        return True

    try:
        print(f"📝 Creating tables: {', '.join(missing)}")
        create_tables()
        return not missing_tables()
    except Exception as e:
        print(f"❌ Failed to create tables: {e}")
        return False


def reset_database():
    """Drop and recreate all tables, losing every row."""
    try:
        print("⚠️  Dropping all tables...")
        drop_tables()
        print("📝 Recreating tables...")
        create_tables()
        return True
    except Exception as e:
        print(f"❌ Failed to reset database: {e}")
        return False


def verify_tables():
    """Print row counts for every expected table; False if any is missing."""
    missing = missing_tables()
    for name in missing:
        print(f"❌ Table '{name}' is missing")
    if missing:
        return False

    db = SessionLocal()
    try:
        for name, model in EXPECTED_TABLES.items():
            count = db.query(func.count(model.id)).scalar()
            print(f"✅ Table '{name}': {count} rows")

        # Groups whose office has no hierarchy can never be returned to any caller
        unreachable = (
            db.query(func.count(Group.id))
            .join(Office, Office.id == Group.office_id)
            .filter(Office.hierarchy.is_(None))
            .scalar()
        )
        if unreachable:
            print(f"⚠️  {unreachable} groups belong to offices without a hierarchy")
        return True
    finally:
        db.close()


def main():
    """Main setup function."""
    configure_logging()
    print(f"🚀 {settings.project_name} Database Setup")
    print("=" * 40)

    if not check_database_connection():
        sys.exit(1)

    command = sys.argv[1].lower() if len(sys.argv) > 1 else "create"

    if command == "create":
        if not (create_database_tables() and verify_tables()):
            sys.exit(1)
        print()
        print("Next step: python scripts/seed_data.py")

    elif command == "verify":
        if not verify_tables():
            sys.exit(1)

    elif command == "reset":
        if "-y" not in sys.argv[2:]:
            response = input("This deletes all data. Reset the database? (yes/no): ")
            if response.lower() != "yes":
                print("❌ Database reset cancelled")
                sys.exit(0)
        if not (reset_database() and verify_tables()):
            sys.exit(1)
        print("✅ Database reset completed")

    else:
        print(f"❌ Unknown command: {command}")
        print("Available commands: create, verify, reset")
        sys.exit(1)


if __name__ == "__main__":
    main()
