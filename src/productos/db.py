"""
Database connection and query execution.

Provides the QueryExecutor interface the repositories depend on, and
Database, its psycopg-backed implementation returning rows as dictionaries.

For testing, use Database.set_connection_override() to inject a connection
that will be used instead of creating new ones. This enables transaction
rollback between tests.
"""

import logging
from contextlib import contextmanager
from typing import Any, Protocol

import psycopg
from psycopg.rows import dict_row

from productos.errors import ConnectionFailure, ConstraintViolation

logger = logging.getLogger(__name__)


class QueryExecutor(Protocol):
    """
    Anything that can run a parameterized query and hand back dict rows.

    Queries use %s positional placeholders, bound in order from params.
    """

    def fetch_one(self, query: str, params: tuple = None) -> dict[str, Any] | None:
        ...

    def fetch_all(self, query: str, params: tuple = None) -> list[dict[str, Any]]:
        ...


# =============================================================================
# Error Translation
# =============================================================================


@contextmanager
def translate_errors():
    """
    Re-raise store faults as productos errors.

    OperationalError becomes ConnectionFailure; IntegrityError and DataError
    become ConstraintViolation. Anything else propagates unmodified.
    """
    try:
        yield
    except psycopg.OperationalError as e:
        logger.warning("Store unreachable: %s", e)
        raise ConnectionFailure(str(e)) from e
    except (psycopg.IntegrityError, psycopg.DataError) as e:
        constraint = e.diag.constraint_name
        logger.warning("Store rejected statement (%s, constraint=%s): %s", e.sqlstate, constraint, e)
        raise ConstraintViolation(str(e), constraint=constraint, sqlstate=e.sqlstate) from e


class Database:
    """
    QueryExecutor backed by psycopg.

    One connection per call: commits on success, rolls back on exception,
    closes when done. With an override set, every call shares the override
    connection and the caller owns its transaction.
    """

    def __init__(self, database_url: str):
        self.database_url = database_url
        self._connection_override: psycopg.Connection | None = None

    # =========================================================================
    # Connection Override (for testing)
    # =========================================================================

    def set_connection_override(self, conn: psycopg.Connection) -> None:
        """
        Set a connection to use instead of creating new ones.

        Used by test fixtures to ensure all database operations run
        within a single transaction that can be rolled back.
        """
        self._connection_override = conn

    def clear_connection_override(self) -> None:
        """Clear the connection override, restoring normal behavior."""
        self._connection_override = None

    # =========================================================================
    # Connection Management
    # =========================================================================

    @contextmanager
    def get_connection(self):
        """
        Context manager for database connections.

        Usage:
            with database.get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute("SELECT ...")
        """
        if self._connection_override is not None:
            yield self._connection_override
            return

        with translate_errors():
            conn = psycopg.connect(self.database_url)
        try:
            yield conn
            with translate_errors():
                conn.commit()
        except Exception:
            # A lost connection cannot be rolled back; the server discards the transaction
            if not conn.broken:
                conn.rollback()
            raise
        finally:
            conn.close()

    # =========================================================================
    # Query Helpers
    # =========================================================================

    def fetch_one(self, query: str, params: tuple = None) -> dict[str, Any] | None:
        """
        Execute a query and return a single row as dict.

        Returns:
            Dict of column names to values, or None if no row found
        """
        with self.get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur, translate_errors():
                logger.debug("fetch_one: %s %r", query, params)
                cur.execute(query, params)
                return cur.fetchone()

    def fetch_all(self, query: str, params: tuple = None) -> list[dict[str, Any]]:
        """
        Execute a query and return all rows as list of dicts.

        Returns:
            List of dicts, empty list if no rows found
        """
        with self.get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur, translate_errors():
                logger.debug("fetch_all: %s %r", query, params)
                cur.execute(query, params)
                return cur.fetchall()
