"""Database initialization utilities."""

import logging

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from sevaconnect.db.base import Base

logger = logging.getLogger(__name__)


def init_db(engine: Engine) -> None:
    """
    Create all tables that do not exist yet.

    Suitable for development and tests; production schemas are managed
    with migrations.
    """
    existing_tables = inspect(engine).get_table_names()
    Base.metadata.create_all(bind=engine)

    if existing_tables:
        logger.info(f"Database already had {len(existing_tables)} tables; missing ones created")
    else:
        logger.info("Database tables created successfully")


def drop_db(engine: Engine) -> None:
    """
    Drop all database tables.

    WARNING: This will delete all data!
    """
    Base.metadata.drop_all(bind=engine)
    logger.warning("All database tables dropped")


def reset_db(engine: Engine) -> None:
    """Drop and recreate all tables."""
    logger.warning("Resetting database...")
    drop_db(engine)
    init_db(engine)
    logger.info("Database reset complete")
