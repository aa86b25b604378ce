"""
Database configuration module for the uptime monitoring system.

This module provides functionality to create and validate a connection pool
to the PostgreSQL database using the asyncpg library. It ensures that the
database is accessible before returning the connection pool.
"""

import logging

import asyncpg

from uptime_monitor.config import MonitoringContext

# Module logger
logger = logging.getLogger(__name__)


async def initiate_db_pool(context: MonitoringContext) -> asyncpg.pool.Pool:
    """
    Create and validate a connection pool to the PostgreSQL database.

    The pool is validated with a trivial query. If the database cannot be
    reached, the pool is closed and the error is re-raised: the monitor cannot
    record results without its store.

    Args:
        context: Configuration context containing database connection parameters.

    Returns:
        asyncpg.pool.Pool: A connection pool that can be used to execute database queries.

    Raises:
        Exception: If the database connection cannot be established.
    """
    pool: asyncpg.pool.Pool = await asyncpg.create_pool(
        dsn=context.dsn, min_size=1, max_size=context.db_pool_size
    )

    try:
        async with pool.acquire() as connection:
            await connection.fetchval("SELECT 1")
        logger.info(f"Database connection pool created (max size: {context.db_pool_size}).")
        return pool
    except Exception as e:
        logger.error(f"Could not connect to the database: {e}")
        await pool.close()
        raise
