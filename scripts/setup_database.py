#!/usr/bin/env python3
"""
CoreCare Database Setup Script
==============================

Creates the database tables before the API server starts. Production
deployments should prefer `alembic upgrade head`; this script is for local
and SQLite setups.

Usage:
    python scripts/setup_database.py [--check-only] [--demo-user]
"""

import sys
import logging
import argparse

from corecare.core.database_utils import check_connection, find_missing_tables, get_db_session
from corecare.db.base import Base
from corecare.db.session import engine
from corecare import crud, models  # noqa: F401  registers all tables

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

DEMO_EMAIL = "demo@corecare.app"
DEMO_PASSWORD = "Demo@1234"


def check_tables_exist() -> bool:
    """Check if all required tables exist"""
    try:
        missing_tables = find_missing_tables()
    except Exception as e:
        logger.error(f"Failed to check tables: {e}")
        return False
    if missing_tables:
        logger.warning(f"Missing tables: {missing_tables}")
        return False
    logger.info("All required tables exist")
    return True


def create_tables() -> bool:
    try:
        logger.info("Creating database tables...")
        Base.metadata.create_all(bind=engine)
        logger.info(f"Created tables: {', '.join(Base.metadata.tables)}")
        return True
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        return False


def create_demo_user() -> bool:
    try:
        with get_db_session() as db:
            if crud.user.get_by_email_or_phone(db, identifier=DEMO_EMAIL):
                logger.info("Demo user already exists")
                return True
            demo = crud.user.create(db, email=DEMO_EMAIL, phone=None, password=DEMO_PASSWORD)
            logger.info(f"Created demo user {demo.id}: {DEMO_EMAIL}")
        return True
    except Exception as e:
        logger.error(f"Error creating demo user: {e}")
        return False


def main():
    parser = argparse.ArgumentParser(description='CoreCare Database Setup')
    parser.add_argument('--check-only', action='store_true',
                        help='Only check if tables exist, do not create')
    parser.add_argument('--demo-user', action='store_true',
                        help=f'Create a demo account ({DEMO_EMAIL})')
    args = parser.parse_args()

    logger.info("CoreCare Database Setup")

    if not check_connection():
        logger.error("Cannot proceed without database connection")
        sys.exit(1)

    tables_exist = check_tables_exist()
    if args.check_only:
        sys.exit(0 if tables_exist else 1)

    if not tables_exist and not create_tables():
        sys.exit(1)

    if args.demo_user and not create_demo_user():
        logger.warning("Failed to create demo user (tables created successfully)")

    if not check_tables_exist():
        logger.error("Setup verification failed")
        sys.exit(1)
    logger.info("Database setup completed. Start the server with:")
    logger.info("  uvicorn corecare.main:app --host 0.0.0.0 --port 8000")


if __name__ == "__main__":
    main()
