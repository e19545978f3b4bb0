"""SQLite adapter.

SQLite accepts MySQL-style backtick quoting, so the generated SQL text runs
unchanged. It has no server, database switching or status counters.
"""

from typing import Optional

from db_access.adapters.base import BaseAdapter
from db_access.models.capabilities import DatabaseCapabilities
from db_access.sql.identifiers import backtick


class SQLiteAdapter(BaseAdapter):
    """SQLite adapter with basic feature support."""

    @property
    def capabilities(self) -> DatabaseCapabilities:
        return DatabaseCapabilities(
            select_database=False,
            statistics=False,
            transactions=True,
        )

    def get_select_database_queries(
        self, database: str, charset: Optional[str]
    ) -> list[str]:
        raise NotImplementedError("SQLite cannot switch databases on a connection")

    def escape_string(self, value: object) -> str:
        """Double single quotes; SQLite has no backslash escapes."""
        text = "" if value is None else str(value)
        return text.replace("'", "''")

    def get_statistics_query(self) -> Optional[str]:
        return None

    def get_begin_transaction_query(self) -> str:
        return "BEGIN"

    def get_truncate_query(self, table_name: str) -> str:
        return f"DELETE FROM {backtick(table_name, self.escape_string)}"
