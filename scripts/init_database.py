#!/usr/bin/env python3
"""
Database Initialization Script

Creates the settings, models_config and worker_keys tables on the configured
database (``DATABASE__URL``) or on the URL given on the command line.
"""

import argparse
import asyncio
import sys

from gateway_config.core.logfire_config import initialize_logfire
from gateway_config.core.logger import get_logger
from gateway_config.stores import database

logger = get_logger(__name__)


async def initialize(url: str | None) -> None:
    """Check connectivity, then create any missing tables."""
    engine = database.create_database_engine(url)
    initialize_logfire(engine)
    try:
        logger.info("Testing database connection...")
        connection_status = await database.test_connection(engine)
        logger.info("Database connection test passed: %s", connection_status)

        await database.init_schema(engine)
    finally:
        await database.dispose_engine(engine)


def main() -> None:
    """Main function to initialize the database."""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--url", help="Database URL overriding DATABASE__URL")
    args = parser.parse_args()

    try:
        logger.info("Starting database initialization...")
        asyncio.run(initialize(args.url))
        logger.info("Database initialization completed successfully")
    except Exception as e:
        logger.error("Database initialization failed: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
