#!/usr/bin/env python3
"""
Script to completely reset the database - drops all tables and recreates them.

WARNING: This will delete ALL data in the database!
"""

import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Load environment variables from .env file if it exists
from dotenv import load_dotenv
load_dotenv(os.path.join(os.path.dirname(os.path.dirname(__file__)), '.env'))

from sqlalchemy import text
from billing.database import engine, Base
import billing.models  # noqa: F401  (registers tables on Base.metadata)
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def reset_database():
    """Drop all tables and recreate them"""
    db_url = engine.url.render_as_string(hide_password=True)

    logger.warning("=" * 60)
    logger.warning("WARNING: This will DELETE ALL DATA in the database!")
    logger.warning(f"Database URL: {db_url}")
    logger.warning("=" * 60)

    response = input("Are you sure you want to continue? (yes/no): ")
    if response.lower() != "yes":
        logger.info("Aborted.")
        return

    try:
        # Drop all tables
        logger.info("Dropping all tables...")
        Base.metadata.drop_all(bind=engine)
        logger.info("All tables dropped.")

        # Recreate all tables
        logger.info("Creating all tables...")
        Base.metadata.create_all(bind=engine)
        logger.info("All tables created.")

        # Reset Alembic version table
        logger.info("Resetting Alembic version table...")
        with engine.connect() as conn:
            conn.execute(text("DROP TABLE IF EXISTS alembic_version"))
            conn.commit()
        logger.info("Alembic version table reset.")

        logger.info("=" * 60)
        logger.info("Database reset complete!")
        logger.info("You may want to run: alembic stamp head")
        logger.info("to mark all migrations as applied.")
        logger.info("=" * 60)

    except Exception as e:
        logger.error(f"Error resetting database: {e}", exc_info=True)
        raise


if __name__ == "__main__":
    reset_database()
