"""High-level database access object.

Database wraps a DatabaseConnection with typed CRUD helpers, a cursor over
the last result set and a sticky error state. Failures never raise by
default: operations return False and the reason is available from
error() / error_number(). Set ``throw_exceptions`` to get DatabaseError
raised instead.

Example:
    >>> db = Database(DatabaseConfig(url="sqlite://"))
    >>> _ = db.query("CREATE TABLE t (id INTEGER PRIMARY KEY, name TEXT)")
    >>> db.insert_row("t", {"name": Database.sql_value("Bob")})
    1
    >>> db.select_single_value("t", {"id": 1}, "name")
    'Bob'
"""

import logging
import re
import time
from collections.abc import Mapping
from typing import Any, Callable, Literal, NoReturn, Optional, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.engine import Row

from db_access.core.connection import DatabaseConnection
from db_access.core.cursor import NO_RESULTS, Cursor
from db_access.core.errors import ErrorState
from db_access.core.rowset import RowArray, RowSet
from db_access.exceptions import SQLBuildError
from db_access.models.config import DatabaseConfig
from db_access.models.query import StatementResult
from db_access.models.values import ResultType
from db_access.sql import builder
from db_access.sql.builder import ColumnSpec, FilterSpec, LimitSpec
from db_access.sql.identifiers import quote_identifier, sql_fix, sql_unfix
from db_access.sql.values import (
    build_sql_value,
    get_boolean_value,
    is_date_str,
    sql_boolean_value,
    sql_value,
)

logger = logging.getLogger(__name__)

_INSERT_RE = re.compile(r"\binsert\b", re.IGNORECASE)

Failure = Literal[False]
QueryOutcome = Union[RowSet, StatementResult, Failure]


def _column_index(column: Union[int, str]) -> Optional[int]:
    if isinstance(column, bool):
        return None
    if isinstance(column, int):
        return column
    if isinstance(column, str) and column.strip().isdigit():
        return int(column)
    return None


class Database:
    """Connection, statement execution and result navigation for one database."""

    # Connection-independent SQL helpers
    sql_value = staticmethod(sql_value)
    build_sql_value = staticmethod(build_sql_value)
    sql_boolean_value = staticmethod(sql_boolean_value)
    get_boolean_value = staticmethod(get_boolean_value)
    is_date_str = staticmethod(is_date_str)
    sql_fix = staticmethod(sql_fix)
    sql_unfix = staticmethod(sql_unfix)
    quote_identifier = staticmethod(quote_identifier)

    def __init__(self, config: Optional[DatabaseConfig] = None, connect: bool = True):
        """
        Initialize the database object.

        Args:
            config: Database configuration (read from the environment if omitted)
            connect: Open the connection right away
        """
        self.config = config or DatabaseConfig.from_env()
        self.connection = DatabaseConnection(self.config)
        self.errors = ErrorState(
            engine_error=lambda: self.connection.last_error,
            throw_exceptions=self.config.throw_exceptions,
        )
        self.cursor = Cursor(self.errors)
        self.in_transaction = False
        self.last_insert_id = 0
        self.last_sql = ""
        self._time_start: Optional[float] = None
        self._time_diff = 0.0

        if connect:
            self.open()

    @property
    def throw_exceptions(self) -> bool:
        return self.errors.throw_exceptions

    @throw_exceptions.setter
    def throw_exceptions(self, value: bool) -> None:
        self.errors.throw_exceptions = value

    # ==================== Errors ====================

    def _set_error(self, message: str = "", code: int = 0) -> Failure:
        return self.errors.set_error(message, code)

    def _no_connection(self) -> Failure:
        return self.errors.set_error("No connection", -1)

    def error(self) -> Optional[str]:
        """Description of the last error, or None."""
        return self.errors.error()

    def error_number(self) -> int:
        """Code of the last error, 0 if none."""
        return self.errors.error_number()

    def dying_message(self, message: str = "", prepend_message: bool = True) -> str:
        """
        Build the message reported when giving up on an error.

        Args:
            message: Text to show
            prepend_message: Put message in front of the last error; when
                             False only message is returned

        Returns:
            Message text; in development mode it includes the offending SQL
        """
        if message:
            if not prepend_message:
                return message
            message += " "
        if self.config.development_mode:
            message += f"Offending SQL query: {self.last_sql}\nError Message: "
        return message + (self.error() or "")

    def kill(self, message: str = "", prepend_message: bool = True) -> NoReturn:
        """Stop execution, reporting the last error."""
        text = self.dying_message(message, prepend_message)
        logger.error("Terminating: %s", text)
        raise SystemExit(text)

    # ==================== Connection ====================

    def is_connected(self) -> bool:
        return self.connection.is_connected

    def open(self, url: Optional[str] = None, charset: Optional[str] = None) -> bool:
        """
        Connect to the database server.

        Args:
            url: Connection URL replacing the configured one
            charset: Character set replacing the configured one

        Returns:
            True on success, False on error
        """
        self.errors.reset()

        if url is not None or charset is not None:
            updates: dict[str, Any] = {}
            if url is not None:
                updates["url"] = url
            if charset is not None:
                updates["charset"] = charset
            if self.is_connected():
                self.close()
                self.errors.reset()
            self.config = DatabaseConfig(**{**self.config.model_dump(), **updates})
            self.connection = DatabaseConnection(self.config)

        self.cursor.detach()
        self.in_transaction = False

        try:
            self.connection.connect()
        except SQLAlchemyError:
            return self._set_error()

        capabilities = self.connection.adapter.capabilities
        if self.config.database and capabilities.select_database:
            return self.select_database(self.config.database, self.config.charset)
        return True

    def close(self) -> bool:
        """Release the last result and close the connection."""
        self.errors.reset()
        success = self.release()
        if not success:
            return success
        try:
            self.connection.dispose()
        except SQLAlchemyError:
            return self._set_error()
        self.in_transaction = False
        self.last_sql = ""
        return True

    def select_database(self, database: str, charset: Optional[str] = None) -> bool:
        """Select a different database and character set."""
        charset = charset or self.config.charset
        self.errors.reset()
        if not self.is_connected():
            return self._no_connection()
        try:
            self.connection.select_database(database, charset)
        except NotImplementedError as e:
            return self._set_error(str(e), -1)
        except SQLAlchemyError:
            return self._set_error()
        return True

    def escape_string(self, value: object) -> str:
        """Escape text with the connected engine's rules."""
        return self.connection.escape(value)

    def __enter__(self) -> "Database":
        if not self.is_connected():
            self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # ==================== Statement execution ====================

    def release(self, result: Optional[RowSet] = None) -> bool:
        """
        Free a query result.

        Args:
            result: Result to free; the last query result when omitted

        Returns:
            True on success; False when the result was already released
        """
        self.errors.reset()
        if result is None:
            result = self.cursor.detach()
            # Nothing attached, or it was freed through RowSet.free()
            if result is None or result.freed:
                return True
        elif self.cursor.holds(result):
            self.cursor.detach()
        if not result.free():
            return self._set_error("Query result has already been released", -1)
        logger.debug("Released result set of %r", result.query)
        return True

    def query(self, sql: str) -> QueryOutcome:
        """
        Execute a SQL statement.

        Args:
            sql: Statement text (without trailing semicolon)

        Returns:
            RowSet for SELECT, SHOW and other row-producing statements,
            StatementResult for everything else, False on error
        """
        self.errors.reset()
        if not self.is_connected():
            return self._no_connection()

        self.release()
        self.last_sql = sql
        try:
            outcome = self.connection.execute(sql)
        except SQLAlchemyError:
            self.cursor.active_row = -1
            return self._set_error()

        if isinstance(outcome, RowSet):
            self.cursor.attach(outcome)
            self.last_insert_id = 0
        elif _INSERT_RE.search(sql):
            self.last_insert_id = outcome.last_insert_id or 0
        else:
            self.last_insert_id = 0
        return outcome

    def query_timed(self, sql: str) -> QueryOutcome:
        """Execute a statement and measure its duration (see timer_duration)."""
        self.timer_start()
        result = self.query(sql)
        self.timer_stop()
        if isinstance(result, StatementResult):
            result.execution_time_ms = self._time_diff * 1000
        return result

    def has_records(self, sql: Optional[str] = None) -> bool:
        """
        Check if a query returned any rows.

        Args:
            sql: Query to execute first; the last result is used when omitted
        """
        if sql:
            if self.query(sql) is False:
                return False
        rowset = self.cursor.rowset
        return rowset is not None and rowset.num_rows > 0

    def _has_rows(self) -> bool:
        rowset = self.cursor.rowset
        return rowset is not None and rowset.num_rows > 0

    def query_array(
        self, sql: str, result_type: ResultType = ResultType.ASSOC
    ) -> Union[list[RowArray], Failure]:
        """Execute a query and return all rows as arrays."""
        if self.query(sql) is False:
            return False
        if self._has_rows():
            return self.records_array(result_type)
        return []

    def query_single_row(self, sql: str) -> Union[Row, Failure]:
        """Execute a query and return its first row."""
        if self.query(sql) is False:
            return False
        if self._has_rows():
            return self.row()
        return False

    def query_single_row_array(
        self, sql: str, result_type: ResultType = ResultType.ASSOC
    ) -> Union[RowArray, Failure]:
        """Execute a query and return its first row as an array."""
        if self.query(sql) is False:
            return False
        if self._has_rows():
            return self.row_array(None, result_type)
        return False

    def query_single_value(self, sql: str) -> Any:
        """Execute a query and return the first column of its first row."""
        if self.query(sql) is False:
            return False
        return self._first_value()

    def _first_value(self) -> Any:
        rowset = self.cursor.rowset
        if rowset is None or rowset.num_rows == 0 or rowset.num_fields == 0:
            return False
        row = self.row_array(None, ResultType.NUM)
        if row is False:
            return False
        return row[0]

    # ==================== SQL building ====================

    def _build(self, build: Callable[..., str], *args: Any) -> Union[str, Failure]:
        try:
            return build(*args)
        except SQLBuildError as e:
            return self._set_error(str(e), -1)

    def build_sql_columns(
        self,
        columns: ColumnSpec,
        add_quotes: bool = True,
        show_alias: bool = True,
        with_sort_marker: bool = False,
    ) -> Union[str, Failure]:
        """Build a comma delimited column list (see sql.builder.build_columns)."""
        self.errors.reset()
        return self._build(
            builder.build_columns, columns, add_quotes, show_alias, with_sort_marker
        )

    def build_sql_where_clause(self, where: FilterSpec) -> Union[str, Failure]:
        """Build a WHERE clause (see sql.builder.build_where_clause)."""
        self.errors.reset()
        return self._build(builder.build_where_clause, where)

    def build_sql_select(
        self,
        table_name: str,
        where: Optional[FilterSpec] = None,
        columns: Optional[ColumnSpec] = None,
        sort_columns: Optional[ColumnSpec] = None,
        limit: Optional[LimitSpec] = None,
    ) -> Union[str, Failure]:
        """Build a SELECT statement."""
        self.errors.reset()
        return self._build(
            builder.build_select, table_name, where, columns, sort_columns, limit
        )

    def build_sql_insert(self, table_name: str, values: Mapping) -> Union[str, Failure]:
        """Build an INSERT statement."""
        self.errors.reset()
        return self._build(builder.build_insert, table_name, values)

    def build_sql_update(
        self, table_name: str, values: Mapping, where: Optional[FilterSpec] = None
    ) -> Union[str, Failure]:
        """Build an UPDATE statement."""
        self.errors.reset()
        return self._build(builder.build_update, table_name, values, where)

    def build_sql_delete(
        self, table_name: str, where: Optional[FilterSpec] = None
    ) -> Union[str, Failure]:
        """Build a DELETE statement."""
        self.errors.reset()
        return self._build(builder.build_delete, table_name, where)

    # ==================== CRUD ====================

    def select_rows(
        self,
        table_name: str,
        where: Optional[FilterSpec] = None,
        columns: Optional[ColumnSpec] = None,
        sort_columns: Optional[ColumnSpec] = None,
        limit: Optional[LimitSpec] = None,
    ) -> Union[RowSet, Failure]:
        """
        Select rows of a table.

        Args:
            table_name: Table name
            where: Column -> SQL value mapping, raw fragments, or a WHERE string
            columns: Column or columns to select; mapping keys become aliases
            sort_columns: Column or columns to sort by, prefixed by +/- for
                          ascending/descending
            limit: Row count, (offset, count) pair, or "offset, count" string

        Returns:
            RowSet on success, False on error
        """
        self.errors.reset()
        if not self.is_connected():
            return self._no_connection()

        sql = self._build(
            builder.build_select, table_name, where, columns, sort_columns, limit
        )
        if sql is False:
            return False
        result = self.query(sql)
        if result is False:
            return False
        return self.cursor.rowset if self.cursor.rowset is not None else False

    def select_table(self, table_name: str) -> Union[RowSet, Failure]:
        """Select every row of a table."""
        return self.select_rows(table_name)

    def select_array(
        self,
        table_name: str,
        where: Optional[FilterSpec] = None,
        columns: Optional[ColumnSpec] = None,
        sort_columns: Optional[ColumnSpec] = None,
        limit: Optional[LimitSpec] = None,
        result_type: ResultType = ResultType.ASSOC,
    ) -> Union[list[RowArray], Failure]:
        """Select rows of a table and return them as arrays."""
        if self.select_rows(table_name, where, columns, sort_columns, limit) is False:
            return False
        if self._has_rows():
            return self.records_array(result_type)
        return []

    def select_single_row(
        self,
        table_name: str,
        where: Optional[FilterSpec] = None,
        columns: Optional[ColumnSpec] = None,
        sort_columns: Optional[ColumnSpec] = None,
        limit: Optional[LimitSpec] = None,
    ) -> Union[Row, Failure]:
        """Select the first matching row of a table."""
        if self.select_rows(table_name, where, columns, sort_columns, limit) is False:
            return False
        if self._has_rows():
            return self.row()
        return False

    def select_single_row_array(
        self,
        table_name: str,
        where: Optional[FilterSpec] = None,
        columns: Optional[ColumnSpec] = None,
        sort_columns: Optional[ColumnSpec] = None,
        limit: Optional[LimitSpec] = None,
        result_type: ResultType = ResultType.ASSOC,
    ) -> Union[RowArray, Failure]:
        """Select the first matching row of a table as an array."""
        if self.select_rows(table_name, where, columns, sort_columns, limit) is False:
            return False
        if self._has_rows():
            return self.row_array(None, result_type)
        return False

    def select_single_value(
        self,
        table_name: str,
        where: Optional[FilterSpec] = None,
        columns: Optional[ColumnSpec] = None,
        sort_columns: Optional[ColumnSpec] = None,
        limit: Optional[LimitSpec] = None,
    ) -> Any:
        """Select the first column of the first matching row."""
        if self.select_rows(table_name, where, columns, sort_columns, limit) is False:
            return False
        return self._first_value()

    def insert_row(self, table_name: str, values: Mapping) -> Union[int, Failure]:
        """
        Insert a row.

        Args:
            table_name: Table name
            values: Column -> SQL value mapping (see sql_value)

        Returns:
            Id of the inserted row (0 for tables without auto-increment),
            False on error
        """
        self.errors.reset()
        if not self.is_connected():
            return self._no_connection()

        sql = self._build(builder.build_insert, table_name, values)
        if sql is False:
            return False
        if self.query(sql) is False:
            return False
        return self.last_insert_id

    def update_rows(
        self, table_name: str, values: Mapping, where: Optional[FilterSpec] = None
    ) -> bool:
        """Update rows matching a filter (every row without one)."""
        self.errors.reset()
        if not self.is_connected():
            return self._no_connection()

        sql = self._build(builder.build_update, table_name, values, where)
        if sql is False:
            return False
        return self.query(sql) is not False

    def delete_rows(self, table_name: str, where: Optional[FilterSpec] = None) -> bool:
        """Delete rows matching a filter (every row without one)."""
        self.errors.reset()
        if not self.is_connected():
            return self._no_connection()

        sql = self._build(builder.build_delete, table_name, where)
        if sql is False:
            return False
        return self.query(sql) is not False

    def auto_insert_update(
        self, table_name: str, values: Mapping, where: FilterSpec
    ) -> Union[bool, int]:
        """
        Update the rows matching where, or insert values if there are none.

        Returns:
            True after an update, the insert id after an insert, False on error
        """
        if self.select_rows(table_name, where) is False:
            return False
        if self.has_records():
            return self.update_rows(table_name, values, where)
        return self.insert_row(table_name, values)

    def truncate_table(self, table_name: str) -> bool:
        """Remove all rows of a table."""
        self.errors.reset()
        if not self.is_connected():
            return self._no_connection()
        sql = self.connection.adapter.get_truncate_query(table_name)
        return self.query(sql) is not False

    # ==================== Cursor ====================

    def records(self) -> Optional[RowSet]:
        """Result set of the last query."""
        return self.cursor.rowset

    def records_array(
        self, result_type: ResultType = ResultType.ASSOC
    ) -> Union[list[RowArray], Failure]:
        """All rows of the last query as arrays."""
        return self.cursor.records_array(result_type)

    def row_count(self) -> Union[int, Failure]:
        """Number of rows returned by the last query."""
        self.errors.reset()
        if not self.is_connected():
            return self._no_connection()
        return self.cursor.row_count()

    def seek(self, row_number: int) -> Union[Row, Failure]:
        """Move the cursor to a row and return it."""
        return self.cursor.seek(row_number)

    def seek_position(self) -> int:
        """Current cursor row."""
        return self.cursor.seek_position()

    def move_first(self) -> bool:
        return self.cursor.move_first()

    def move_last(self) -> bool:
        return self.cursor.move_last()

    def beginning_of_seek(self) -> bool:
        """True if the cursor is at the first row."""
        self.errors.reset()
        if not self.is_connected():
            return self._no_connection()
        return self.cursor.beginning_of_seek()

    def end_of_seek(self) -> bool:
        """True if the cursor is past the last row."""
        self.errors.reset()
        if not self.is_connected():
            return self._no_connection()
        return self.cursor.end_of_seek()

    def row(self, row_number: Optional[int] = None) -> Union[Row, Failure]:
        """Read the next (or the given) row as an object."""
        return self.cursor.row(row_number)

    def row_array(
        self,
        row_number: Optional[int] = None,
        result_type: ResultType = ResultType.ASSOC,
    ) -> Union[RowArray, Failure]:
        """Read the next (or the given) row as a dict or list."""
        return self.cursor.row_array(row_number, result_type)

    def get_last_insert_id(self) -> int:
        return self.last_insert_id

    def get_last_sql(self) -> str:
        return self.last_sql

    # ==================== Introspection ====================

    def _sample(self, sql: str) -> Union[RowSet, Failure]:
        """Run a throwaway read-only statement outside the cursor."""
        try:
            outcome = self.connection.execute(sql)
        except SQLAlchemyError:
            return self._set_error()
        if not isinstance(outcome, RowSet):
            return self._set_error("The statement did not return a result set", -1)
        return outcome

    def _sample_table(
        self, table_name: str, column: str = "*"
    ) -> Union[RowSet, Failure]:
        return self._sample(
            f"SELECT {quote_identifier(column)} FROM {quote_identifier(table_name)} LIMIT 1"
        )

    def get_column_count(self, table_name: Optional[str] = None) -> Union[int, Failure]:
        """
        Number of columns of the last result, or of a table.

        Args:
            table_name: Table to sample; the last result is used when omitted
        """
        self.errors.reset()
        if not self.is_connected():
            return self._no_connection()

        if not table_name:
            if self.cursor.rowset is None:
                return self._set_error(NO_RESULTS, -1)
            return self.cursor.rowset.num_fields

        sample = self._sample_table(table_name)
        if sample is False:
            return False
        count = sample.num_fields
        sample.free()
        return count

    def get_column_names(self, table_name: Optional[str] = None) -> Union[list[str], Failure]:
        """Column names of the last result, or of a table."""
        self.errors.reset()
        if not self.is_connected():
            return self._no_connection()

        if not table_name:
            if self.cursor.rowset is None:
                return self._set_error(NO_RESULTS, -1)
            return self.cursor.rowset.column_names

        sample = self._sample_table(table_name)
        if sample is False:
            return False
        names = sample.column_names
        sample.free()
        return names

    def get_column_name(
        self, column_id: int, table_name: Optional[str] = None
    ) -> Union[str, Failure]:
        """Name of the column at a position (0 is the first column)."""
        names = self.get_column_names(table_name)
        if names is False:
            return False
        if not 0 <= column_id < len(names):
            return self._set_error("Column index is out of range", -1)
        return names[column_id]

    def get_column_id(
        self, column: str, table_name: Optional[str] = None
    ) -> Union[int, Failure]:
        """Position of a column by name."""
        names = self.get_column_names(table_name)
        if names is False:
            return False
        if column not in names:
            return self._set_error("Column name not found", -1)
        return names.index(column)

    def _column_metadata(self, column: Union[int, str], table_name: Optional[str]):
        self.errors.reset()
        if not self.is_connected():
            return self._no_connection()

        if not table_name:
            rowset = self.cursor.rowset
            if rowset is None:
                return self._set_error(NO_RESULTS, -1)
            index = _column_index(column)
            if index is None:
                index = self.get_column_id(str(column))
                if index is False:
                    return False
            field = rowset.field(index)
            if field is None:
                return self._set_error("Column index is out of range", -1)
            return field

        index = _column_index(column)
        if index is not None:
            name = self.get_column_name(index, table_name)
            if name is False:
                return False
            column = name
        sample = self._sample_table(table_name, str(column))
        if sample is False:
            return False
        field = sample.field(0)
        sample.free()
        if field is None:
            return self._set_error(
                "The specified column or table does not exist, or no data was returned",
                -1,
            )
        return field

    def get_column_data_type(
        self, column: Union[int, str], table_name: Optional[str] = None
    ) -> Union[str, Failure]:
        """
        Data type of a column of the last result, or of a table.

        Args:
            column: Column name or position (0 is the first column)
            table_name: Table to sample; the last result is used when omitted
        """
        field = self._column_metadata(column, table_name)
        if field is False:
            return False
        return field.data_type or "unknown"

    def get_column_length(
        self, column: Union[int, str], table_name: Optional[str] = None
    ) -> Union[int, Failure]:
        """Declared length of a column of the last result, or of a table."""
        field = self._column_metadata(column, table_name)
        if field is False:
            return False
        return field.length or 0

    def get_column_comments(
        self, table_name: str
    ) -> Union[dict[str, Optional[str]], Failure]:
        """Column comments of a table, keyed by column name."""
        self.errors.reset()
        if not self.is_connected():
            return self._no_connection()
        try:
            return self.connection.column_comments(table_name)
        except SQLAlchemyError:
            return self._set_error()

    def get_tables(self) -> Union[list[str], Failure]:
        """Table names of the current database."""
        self.errors.reset()
        if not self.is_connected():
            return self._no_connection()
        try:
            return self.connection.table_names()
        except SQLAlchemyError:
            return self._set_error()

    # ==================== Transactions ====================

    def transaction_begin(self) -> bool:
        """Start a transaction; nested transactions are rejected."""
        self.errors.reset()
        if not self.is_connected():
            return self._no_connection()
        if not self.connection.adapter.capabilities.transactions:
            return self._set_error("Transactions are not supported", -1)
        if self.in_transaction:
            return self._set_error("Already in transaction", -1)
        try:
            self.connection.execute(
                self.connection.adapter.get_begin_transaction_query()
            )
        except SQLAlchemyError:
            return self._set_error()
        self.in_transaction = True
        return True

    def transaction_end(self) -> bool:
        """Commit the current transaction."""
        self.errors.reset()
        if not self.is_connected():
            return self._no_connection()
        if not self.in_transaction:
            return self._set_error("Not in a transaction", -1)
        try:
            self.connection.execute("COMMIT")
        except SQLAlchemyError:
            return self._set_error()
        self.in_transaction = False
        return True

    def transaction_rollback(self) -> bool:
        """Roll the current transaction back."""
        self.errors.reset()
        if not self.is_connected():
            return self._no_connection()
        try:
            self.connection.execute("ROLLBACK")
        except SQLAlchemyError:
            return self._set_error("Could not rollback transaction", -1)
        self.in_transaction = False
        return True

    # ==================== Timing & statistics ====================

    def timer_start(self) -> None:
        self._time_diff = 0.0
        self._time_start = time.time()

    def timer_stop(self) -> None:
        if self._time_start is not None:
            self._time_diff = time.time() - self._time_start
        self._time_start = None

    def timer_duration(self, decimals: int = 4) -> float:
        """Seconds measured between timer_start() and timer_stop()."""
        return round(self._time_diff, decimals)

    def get_statistics(self) -> Union[dict[str, Any], Failure]:
        """
        Query count of this object plus the server status counters.

        A missing server status is recorded as an error but the query count
        is still returned.
        """
        self.errors.reset()
        if not self.is_connected():
            return self._no_connection()

        info: dict[str, Any] = {"Query Count": self.connection.query_count}
        try:
            stats = self.connection.statistics()
        except SQLAlchemyError:
            stats = {}
        if not stats:
            self._set_error("Failed to obtain database statistics", -1)
            return info
        info.update(stats)
        return info
