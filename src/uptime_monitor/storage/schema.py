"""
Minimal PostgreSQL schema used by the monitoring core.

The tables are created at startup if they do not exist yet. Anything beyond
the columns the core reads and writes belongs to the surrounding application.
"""

import logging
from typing import List

from asyncpg import Pool

# Module logger
logger = logging.getLogger(__name__)

SCHEMA_STATEMENTS: List[str] = [
    "CREATE EXTENSION IF NOT EXISTS pgcrypto",
    """
    CREATE TABLE IF NOT EXISTS websites (
        id varchar PRIMARY KEY DEFAULT gen_random_uuid(),
        name text NOT NULL,
        url text NOT NULL,
        check_interval integer NOT NULL DEFAULT 5 CHECK (check_interval > 0),
        enable_notifications boolean NOT NULL DEFAULT true,
        created_at timestamp NOT NULL DEFAULT now()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS monitoring_results (
        id varchar PRIMARY KEY DEFAULT gen_random_uuid(),
        website_id varchar NOT NULL,
        status_code integer,
        response_time integer,
        is_up boolean NOT NULL,
        error text,
        checked_at timestamp NOT NULL DEFAULT now()
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS idx_monitoring_results_website_checked
        ON monitoring_results (website_id, checked_at DESC)
    """,
    """
    CREATE TABLE IF NOT EXISTS notifications (
        id varchar PRIMARY KEY DEFAULT gen_random_uuid(),
        website_id varchar NOT NULL,
        type text NOT NULL,
        message text NOT NULL,
        email_sent boolean NOT NULL DEFAULT false,
        sms_sent boolean NOT NULL DEFAULT false,
        created_at timestamp NOT NULL DEFAULT now()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS settings (
        id varchar PRIMARY KEY DEFAULT gen_random_uuid(),
        key text NOT NULL UNIQUE,
        value text NOT NULL,
        updated_at timestamp NOT NULL DEFAULT now()
    )
    """,
]


async def ensure_schema(pool: Pool) -> None:
    """
    Creates the tables used by the monitoring core if they are missing.

    Args:
        pool: The database connection pool.
    """
    async with pool.acquire() as conn:
        async with conn.transaction():
            for statement in SCHEMA_STATEMENTS:
                await conn.execute(statement)
    logger.info("Database schema verified.")
