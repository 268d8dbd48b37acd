# backend/db.py
import logging
from contextlib import contextmanager

import psycopg2
from psycopg2.extras import RealDictCursor
from config import DATABASE_URL

logger = logging.getLogger(__name__)


def get_connection(database_url=None):
    """Return a new database connection."""
    return psycopg2.connect(database_url or DATABASE_URL, cursor_factory=RealDictCursor)


@contextmanager
def db_connection(label, database_url=None):
    """
    Yield a connection for one unit of work, or None when the database is unavailable.

    Args:
        label: Short description of the work, used in log messages
        database_url: Optional DSN overriding DATABASE_URL
    """
    dsn = database_url or DATABASE_URL
    if not dsn:
        logger.warning(f"DATABASE_URL not set, skipping {label}")
        yield None
        return

    try:
        conn = get_connection(dsn)
    except psycopg2.OperationalError:
        logger.exception(f"Database unavailable, skipping {label}")
        yield None
        return

    try:
        yield conn
    finally:
        conn.close()
