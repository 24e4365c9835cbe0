"""
Database utility functions for connection management outside of request scope.

Used by the application lifespan, the health check and the setup script.
"""

import logging
from contextlib import contextmanager
from typing import Generator, List

from sqlalchemy import inspect, text
from sqlalchemy.orm import Session

from corecare.db.session import SessionLocal, engine

logger = logging.getLogger(__name__)


@contextmanager
def get_db_session() -> Generator[Session, None, None]:
    """
    Get a database session with proper cleanup using context manager.

    Usage:
        with get_db_session() as db:
            result = db.query(Model).all()

    Commits on success, rolls back and re-raises on any exception.
    """
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"Database session error: {e}")
        raise
    finally:
        db.close()


def check_connection() -> bool:
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database connection check failed: {e}")
        return False


def find_missing_tables() -> List[str]:
    from corecare.db.base import Base
    import corecare.models  # noqa: F401  registers tables on Base.metadata

    existing_tables = inspect(engine).get_table_names()
    return [name for name in Base.metadata.tables if name not in existing_tables]
