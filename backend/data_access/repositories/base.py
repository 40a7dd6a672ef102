"""
Base repository with connection management.

Every repository call opens its own connection, commits on success, rolls
back on failure and always closes the connection.
"""

from contextlib import contextmanager
from typing import Any, Dict, Generator, List, Optional, Sequence
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from database_postgres import get_connection


class BaseRepository:
    """
    Base class for all repositories.

    Subclasses use self.connection() for writes and self.read_connection()
    (or the fetch helpers) for reads.
    """

    @contextmanager
    def connection(self, auto_commit: bool = True) -> Generator[Any, None, None]:
        """
        Context manager for write operations.

        Yields:
            A tuple of (connection, cursor). The transaction is committed on
            a clean exit (if auto_commit=True) and rolled back on exception.

        Example:
            with self.connection() as (conn, cursor):
                cursor.execute("INSERT INTO arcades ...")
        """
        conn = get_connection()
        cursor = conn.cursor()
        try:
            yield conn, cursor
            if auto_commit:
                conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            cursor.close()
            conn.close()

    @contextmanager
    def read_connection(self) -> Generator[Any, None, None]:
        """
        Context manager for read-only operations (no commit).

        Yields:
            A tuple of (connection, cursor).
        """
        conn = get_connection()
        cursor = conn.cursor()
        try:
            yield conn, cursor
        finally:
            cursor.close()
            conn.close()

    def fetch_all(self, query: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        with self.read_connection() as (conn, cursor):
            cursor.execute(query, tuple(params))
            return [dict(row) for row in cursor.fetchall()]

    def fetch_one(self, query: str, params: Sequence[Any] = ()) -> Optional[Dict[str, Any]]:
        with self.read_connection() as (conn, cursor):
            cursor.execute(query, tuple(params))
            row = cursor.fetchone()
            return dict(row) if row else None
