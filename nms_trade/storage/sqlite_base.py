# nms_trade/storage/sqlite_base.py
import sqlite3
import logging
from pathlib import Path
from typing import Optional, List, Sequence, Any

from ..errors import StorageFailureError, ReferentialViolationError

logger = logging.getLogger(__name__)

IN_MEMORY_PATH = ":memory:"

# Range of a SQLite INTEGER column (signed 64-bit)
SQLITE_INTEGER_MIN = -(2 ** 63)
SQLITE_INTEGER_MAX = 2 ** 63 - 1


class SQLiteDatabase:
    """
    Owner of the application's SQLite connection.

    One instance is created per application (or per test) and handed to
    every store that needs it. The connection is opened lazily with
    foreign-key enforcement switched on, since demand cascades depend on it.
    """

    def __init__(self, db_path: str, timeout: float = 5.0):
        self.db_path = db_path
        self.timeout = timeout
        self._connection: Optional[sqlite3.Connection] = None

    @property
    def is_connected(self) -> bool:
        return self._connection is not None

    async def connect(self) -> sqlite3.Connection:
        """
        Get or create the database connection.

        Ensures the database directory exists on first connection.

        Raises:
            StorageFailureError: If the connection cannot be opened
        """
        if self._connection is None:
            try:
                if self.db_path == IN_MEMORY_PATH:
                    target = self.db_path
                else:
                    db_file = Path(self.db_path).resolve()
                    db_file.parent.mkdir(parents=True, exist_ok=True)
                    target = str(db_file)

                logger.info(f"Attempting to connect to SQLite DB at: {target}")
                # Shared by concurrent requests on the event loop thread
                self._connection = sqlite3.connect(
                    target, timeout=self.timeout, check_same_thread=False
                )
                self._connection.row_factory = sqlite3.Row
                self._connection.execute("PRAGMA foreign_keys = ON")
                logger.info(f"Successfully connected to SQLite DB: {target}")
            except sqlite3.Error as e:
                logger.error(f"Error connecting to SQLite database at {self.db_path}: {e}", exc_info=True)
                self._connection = None
                raise StorageFailureError(str(e)) from e
        return self._connection

    async def close(self) -> None:
        """Close the connection. Safe to call when already closed."""
        if self._connection is not None:
            logger.info("Closing SQLite DB connection.")
            self._connection.close()
            self._connection = None
            logger.info("SQLite DB connection closed.")

    async def execute(self, query: str, params: Sequence[Any] = (), commit: bool = True) -> sqlite3.Cursor:
        """
        Execute a SQL statement with error translation and transaction handling.

        Args:
            query: SQL statement with ``?`` placeholders
            params: Statement parameters
            commit: Whether to commit after the statement

        Returns:
            sqlite3.Cursor: The cursor after execution (rowcount, lastrowid, rows)

        Raises:
            ReferentialViolationError: If a foreign-key constraint fails
            StorageFailureError: For any other SQLite error
        """
        conn = await self.connect()
        cursor = conn.cursor()
        try:
            cursor.execute(query, tuple(params))
            if commit:
                conn.commit()
        except sqlite3.IntegrityError as e:
            logger.error(f"SQLite integrity error executing query '{query}': {e}", exc_info=True)
            if commit:
                conn.rollback()
            if "FOREIGN KEY" in str(e).upper():
                raise ReferentialViolationError(str(e)) from e
            raise StorageFailureError(str(e)) from e
        except sqlite3.Error as e:
            logger.error(f"SQLite error executing query '{query}': {e}", exc_info=True)
            if commit:
                conn.rollback()
            raise StorageFailureError(str(e)) from e
        except OverflowError as e:
            logger.error(f"Parameter out of SQLite range for query '{query}': {e}")
            if commit:
                conn.rollback()
            raise StorageFailureError(str(e)) from e
        return cursor

    async def fetchone(self, query: str, params: Sequence[Any] = ()) -> Optional[sqlite3.Row]:
        cursor = await self.execute(query, params, commit=False)
        return cursor.fetchone()

    async def fetchall(self, query: str, params: Sequence[Any] = ()) -> List[sqlite3.Row]:
        cursor = await self.execute(query, params, commit=False)
        return cursor.fetchall()
