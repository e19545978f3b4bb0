"""Base adapter abstract class for database-specific implementations."""

from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

from sqlalchemy import Connection
from sqlalchemy import inspect as sa_inspect

from db_access.models.capabilities import DatabaseCapabilities
from db_access.sql.identifiers import backtick, sql_fix


class BaseAdapter(ABC):
    """Base adapter defining database-specific SQL and escaping rules."""

    @property
    @abstractmethod
    def capabilities(self) -> DatabaseCapabilities:
        """Get capabilities for this database type."""
        ...

    @abstractmethod
    def get_select_database_queries(
        self, database: str, charset: Optional[str]
    ) -> list[str]:
        """
        Generate statements switching the current database and charset.

        Args:
            database: Database name
            charset: Character set name, or None to keep the current one

        Returns:
            Statements to execute in order
        """
        ...

    @abstractmethod
    def get_statistics_query(self) -> Optional[str]:
        """SQL returning (name, value) status rows, or None if unsupported."""
        ...

    def escape_string(self, value: object) -> str:
        """Escape a value for use inside a quoted string literal."""
        return sql_fix(value)

    def get_begin_transaction_query(self) -> str:
        return "START TRANSACTION"

    def get_truncate_query(self, table_name: str) -> str:
        return f"TRUNCATE TABLE {backtick(table_name, self.escape_string)}"

    def field_type_name(self, type_code: Any) -> Optional[str]:
        """
        Map a DBAPI cursor description type code to an engine type name.

        Returns:
            Type name, or None when the driver does not report types
        """
        return None

    def parse_statistics(self, rows: Sequence[Sequence[Any]]) -> dict[str, str]:
        """Turn (name, value) status rows into a statistics dictionary."""
        return {str(row[0]): str(row[1]) for row in rows}

    def get_column_comments(
        self, conn: Connection, table_name: str
    ) -> dict[str, Optional[str]]:
        """
        Get column comments of a table via SQLAlchemy reflection.

        Args:
            conn: Database connection
            table_name: Table name

        Returns:
            Mapping of column name -> comment (None when not set)
        """
        inspector = sa_inspect(conn)
        return {
            column["name"]: column.get("comment")
            for column in inspector.get_columns(table_name)
        }

    def get_table_names(self, conn: Connection) -> list[str]:
        """List table names of the current database."""
        return list(sa_inspect(conn).get_table_names())
