"""Database connection management with SQLAlchemy."""

import logging
from typing import Optional, Union

from sqlalchemy import Connection, Engine, create_engine
from sqlalchemy.engine import CursorResult
from sqlalchemy.exc import DBAPIError, InvalidRequestError, SQLAlchemyError

from db_access.adapters import create_adapter
from db_access.adapters.base import BaseAdapter
from db_access.core.rowset import RowSet, infer_length, infer_type_name
from db_access.models.config import DatabaseConfig
from db_access.models.query import ColumnMetadata, StatementResult

logger = logging.getLogger(__name__)


def extract_error(exc: BaseException) -> tuple[int, str]:
    """
    Get (code, message) from a SQLAlchemy or DBAPI exception.

    MySQL drivers carry ``(errno, message)`` in ``args``; sqlite3 exposes the
    code as ``sqlite_errorcode``. Unknown codes are reported as 0.
    """
    orig = getattr(exc, "orig", None) or exc
    args = getattr(orig, "args", ())
    if len(args) >= 2 and isinstance(args[0], int):
        return args[0], str(args[1])

    code = getattr(orig, "sqlite_errorcode", None)
    if code is None:
        code = getattr(orig, "errno", None)
    message = str(args[0]) if args else str(orig)
    return (code if isinstance(code, int) else 0), message


class DatabaseConnection:
    """
    Single SQLAlchemy connection executing raw SQL text.

    The connection runs in AUTOCOMMIT mode so that every statement takes
    effect immediately; explicit transactions are plain BEGIN/COMMIT/ROLLBACK
    statements. Failures are recorded in ``last_error`` and re-raised.
    """

    def __init__(self, config: DatabaseConfig, adapter: Optional[BaseAdapter] = None):
        """
        Initialize database connection.

        Args:
            config: Database configuration with connection URL
            adapter: Database-specific adapter (derived from the URL if omitted)
        """
        self.config = config
        self.adapter = adapter or create_adapter(config)
        self.engine: Optional[Engine] = None
        self._conn: Optional[Connection] = None
        self.last_error: Optional[tuple[int, str]] = None
        self.query_count: int = 0

    @property
    def dialect(self) -> str:
        """Get database dialect name."""
        return self.config.dialect

    @property
    def is_connected(self) -> bool:
        """Check if a connection is open."""
        return self._conn is not None and not self._conn.closed

    def _record_error(self, exc: BaseException) -> None:
        self.last_error = extract_error(exc)
        logger.warning("Database error #%s: %s", *self.last_error)

    def _require_connection(self) -> Connection:
        if self._conn is None or self._conn.closed:
            raise RuntimeError("DatabaseConnection not connected. Call connect() first.")
        return self._conn

    def connect(self) -> None:
        """
        Create the engine and open the connection.

        Raises:
            SQLAlchemyError: If the server cannot be reached
        """
        if self.is_connected:
            return

        self.last_error = None
        try:
            self.engine = create_engine(
                self.config.url,
                echo=self.config.echo_sql,
                isolation_level="AUTOCOMMIT",
            )
            self._conn = self.engine.connect()
        except SQLAlchemyError as e:
            self._record_error(e)
            self.dispose()
            raise

        logger.info("Connected to %s database", self.dialect)

    def dispose(self) -> None:
        """Close the connection and dispose of the engine."""
        conn, self._conn = self._conn, None
        engine, self.engine = self.engine, None
        try:
            if conn is not None:
                conn.close()
        except SQLAlchemyError as e:
            self._record_error(e)
            raise
        finally:
            if engine is not None:
                engine.dispose()
        if conn is not None:
            logger.info("Closed %s database connection", self.dialect)

    def escape(self, value: object) -> str:
        """Escape text with the engine's string escaping rules."""
        return self.adapter.escape_string(value)

    def execute(self, sql: str) -> Union[RowSet, StatementResult]:
        """
        Execute a raw SQL statement.

        Args:
            sql: Complete SQL statement text

        Returns:
            RowSet for row-producing statements, StatementResult otherwise

        Raises:
            SQLAlchemyError: If the engine rejects the statement
        """
        conn = self._require_connection()
        self.query_count += 1
        self.last_error = None
        logger.debug("Executing SQL: %s", sql)

        try:
            # Literal '%' must reach format-paramstyle drivers untouched
            result = conn.exec_driver_sql(
                sql, execution_options={"no_parameters": True}
            )
            if result.returns_rows:
                return self._build_rowset(sql, result)
        except SQLAlchemyError as e:
            self._record_error(e)
            raise

        return StatementResult(
            query=sql,
            affected_rows=max(result.rowcount or 0, 0),
            last_insert_id=self._get_lastrowid(result),
        )

    def _get_lastrowid(self, result: CursorResult) -> Optional[int]:
        try:
            last_id = result.lastrowid
        except (AttributeError, DBAPIError, InvalidRequestError):
            return None
        return last_id if isinstance(last_id, int) else None

    def _build_rowset(self, sql: str, result: CursorResult) -> RowSet:
        cursor = getattr(result, "cursor", None)
        description = getattr(cursor, "description", None) or []
        names = list(result.keys())
        rows = result.fetchall()

        columns = []
        for index, name in enumerate(names):
            desc = description[index] if index < len(description) else None
            type_code = desc[1] if desc else None
            size = desc[3] if desc and len(desc) > 3 else None
            values = [row[index] for row in rows]
            columns.append(
                ColumnMetadata(
                    name=str(name),
                    data_type=self.adapter.field_type_name(type_code)
                    or infer_type_name(values),
                    length=size
                    if isinstance(size, int) and size >= 0
                    else infer_length(values),
                )
            )
        return RowSet(sql, rows, columns)

    def select_database(self, database: str, charset: Optional[str] = None) -> None:
        """
        Switch the current database and character set.

        Raises:
            NotImplementedError: If the dialect cannot switch databases
            SQLAlchemyError: If the engine rejects a statement
        """
        for query in self.adapter.get_select_database_queries(database, charset):
            self.execute(query)

    def statistics(self) -> dict[str, str]:
        """Server status counters, empty when the dialect reports none."""
        query = self.adapter.get_statistics_query()
        if query is None or not self.adapter.capabilities.statistics:
            return {}
        rowset = self.execute(query)
        if not isinstance(rowset, RowSet):
            return {}
        try:
            return self.adapter.parse_statistics([tuple(row) for row in rowset])
        finally:
            rowset.free()

    def table_names(self) -> list[str]:
        """List tables of the current database."""
        conn = self._require_connection()
        self.query_count += 1
        self.last_error = None
        try:
            return self.adapter.get_table_names(conn)
        except SQLAlchemyError as e:
            self._record_error(e)
            raise

    def column_comments(self, table_name: str) -> dict[str, Optional[str]]:
        """Column comments of a table."""
        conn = self._require_connection()
        self.query_count += 1
        self.last_error = None
        try:
            return self.adapter.get_column_comments(conn, table_name)
        except SQLAlchemyError as e:
            self._record_error(e)
            raise

    def __enter__(self) -> "DatabaseConnection":
        """Context manager entry."""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.dispose()
