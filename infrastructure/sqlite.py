# ============================================================================
# SQLITE CONNECTION INFRASTRUCTURE
# ============================================================================
# EPOCH: 1 - SCHEMA GENERATION
# STATUS: Infrastructure - SQLite DDL execution
# PURPOSE: Apply generated DDL to a file-backed SQLite database
# CREATED: 18 OCT 2026
# ============================================================================
"""
SQLite Connection Infrastructure

The execution side of schema generation:

    apply_ddl("company.db", User.__sql_ddl__)

Each call opens its own connection, executes, commits and closes. Backend
failures are surfaced as ExecutionError carrying the sqlite3 message
verbatim; nothing is retried.
"""

import sqlite3
from contextlib import contextmanager
from typing import Any, Dict, Iterable, List, Optional, Union

from core.config import get_defaults
from core.logging import get_logger, log_context
from core.models.schema import RecordShape
from core.schema.sql_generator import generate_ddl

logger = get_logger(__name__)


def _first_line(statement: str) -> str:
    return (statement.splitlines() or [""])[0]


# ============================================================================
# ERRORS
# ============================================================================

class RepositoryError(Exception):
    """Base exception for repository operations."""

    def __init__(self, message: str, operation: str = None, entity_id: str = None):
        self.operation = operation
        self.entity_id = entity_id
        super().__init__(message)


class ExecutionError(RepositoryError):
    """Raised when the storage backend rejects or cannot run a statement."""

    def __init__(self, message: str, storage_location: str = None, statement: str = None):
        self.storage_location = storage_location
        self.statement = statement
        super().__init__(message, operation="execute", entity_id=storage_location)


# ============================================================================
# SQLITE REPOSITORY
# ============================================================================

class SQLiteRepository:
    """
    Repository for one SQLite database file.

    Usage:
        repo = SQLiteRepository("company.db")
        repo.apply(ddl)
        repo.get_tables()       # ["products", "users"]
    """

    def __init__(self, database_path: Optional[str] = None, timeout: Optional[float] = None):
        """
        Initialize SQLite repository.

        Args:
            database_path: Database file (default: SCHEMA_DB_PATH / company.db)
            timeout: Busy timeout in seconds (default: SCHEMA_DB_TIMEOUT / 5.0)
        """
        storage = get_defaults().storage
        self.database_path = str(database_path) if database_path is not None else storage.database_path
        self.timeout = timeout if timeout is not None else storage.timeout_seconds

    @contextmanager
    def get_connection(self):
        """
        Context manager for SQLite connections.

        Commits on success, rolls back on error, always closes.

        Yields:
            sqlite3.Connection with sqlite3.Row row factory
        """
        conn = None
        try:
            logger.debug(f"Connecting to SQLite database {self.database_path}")
            conn = sqlite3.connect(self.database_path, timeout=self.timeout)
            conn.row_factory = sqlite3.Row
            yield conn
            conn.commit()

        except sqlite3.Error:
            if conn:
                conn.rollback()
            raise

        finally:
            if conn:
                conn.close()

    @contextmanager
    def _error_context(self, operation: str, statement: Optional[str] = None):
        """Translate sqlite3 errors into ExecutionError."""
        try:
            yield
        except sqlite3.Error as e:
            logger.error(f"{operation} failed on {self.database_path}: {e}")
            raise ExecutionError(str(e), storage_location=self.database_path, statement=statement) from e

    # ========================================================================
    # QUERIES
    # ========================================================================

    def execute(self, query: str, params: tuple = ()) -> None:
        """Execute a statement without returning results."""
        with self._error_context("execute", query):
            with self.get_connection() as conn:
                conn.execute(query, params)

    def fetch_one(self, query: str, params: tuple = ()) -> Optional[Dict[str, Any]]:
        """Execute query and fetch one result as a dict."""
        with self._error_context("fetch_one", query):
            with self.get_connection() as conn:
                row = conn.execute(query, params).fetchone()
                return dict(row) if row is not None else None

    def fetch_all(self, query: str, params: tuple = ()) -> List[Dict[str, Any]]:
        """Execute query and fetch all results as dicts."""
        with self._error_context("fetch_all", query):
            with self.get_connection() as conn:
                return [dict(row) for row in conn.execute(query, params).fetchall()]

    # ========================================================================
    # DDL
    # ========================================================================

    def apply(self, ddl: str) -> None:
        """
        Apply one DDL statement.

        Raises:
            ExecutionError: backend failure, message passed through verbatim
        """
        with log_context(storage_location=self.database_path, operation="apply_ddl"):
            self.execute(ddl)
            logger.info(f"Applied DDL: {_first_line(ddl)}")

    def create_table(self, record: Union[RecordShape, type]) -> str:
        """
        Create the table for a record shape or a @register_record model.

        Returns:
            The DDL that was applied
        """
        if isinstance(record, RecordShape):
            ddl = generate_ddl(record)
        else:
            # Own attribute only; undecorated subclasses have no table
            ddl = vars(record).get("__sql_ddl__") if isinstance(record, type) else None
            if ddl is None:
                raise TypeError(f"{record!r} is neither a RecordShape nor a registered record")

        self.apply(ddl)
        return ddl

    def execute_ddl_statements(self, statements: Iterable[str]) -> Dict[str, Any]:
        """
        Apply several statements, continuing past failures.

        Returns:
            Dict with success flag, executed count and error messages
        """
        executed = 0
        errors: List[str] = []

        for stmt in statements:
            try:
                self.apply(stmt)
                executed += 1
            except ExecutionError as e:
                errors.append(f"{_first_line(stmt)}: {e}")

        return {
            "success": not errors,
            "executed": executed,
            "errors": errors,
        }

    # ========================================================================
    # INTROSPECTION
    # ========================================================================

    def get_tables(self) -> List[str]:
        """List user tables, sorted by name."""
        rows = self.fetch_all(
            "SELECT name FROM sqlite_master "
            "WHERE type = 'table' AND name NOT LIKE 'sqlite_%' ORDER BY name"
        )
        return [row["name"] for row in rows]

    def table_exists(self, table_name: str) -> bool:
        return self.fetch_one(
            "SELECT 1 AS present FROM sqlite_master WHERE type = 'table' AND name = ?",
            (table_name,),
        ) is not None

    def get_columns(self, table_name: str) -> List[Dict[str, Any]]:
        """
        Column info for a table (PRAGMA table_info).

        Returns:
            List of dicts with name, type and pk keys, in column order
        """
        quoted = table_name.replace('"', '""')
        rows = self.fetch_all(f'PRAGMA table_info("{quoted}")')
        return [{"name": r["name"], "type": r["type"], "pk": bool(r["pk"])} for r in rows]


# ============================================================================
# CONVENIENCE FUNCTIONS
# ============================================================================

def apply_ddl(storage_location: str, ddl: str) -> None:
    """
    Apply a DDL statement to the SQLite database at storage_location.

    Raises:
        ExecutionError: the backend rejected the statement or the location
    """
    SQLiteRepository(storage_location).apply(ddl)


__all__ = [
    "RepositoryError",
    "ExecutionError",
    "SQLiteRepository",
    "apply_ddl",
]
