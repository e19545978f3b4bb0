"""MySQL/MariaDB adapter."""

from typing import Any, Optional, Sequence

from db_access.adapters.base import BaseAdapter
from db_access.models.capabilities import DatabaseCapabilities
from db_access.sql.identifiers import backtick

# DBAPI (pymysql/mysqlclient) field type codes -> MySQL type names
_FIELD_TYPES = {
    0: "real",  # DECIMAL
    1: "int",  # TINY
    2: "int",  # SHORT
    3: "int",  # LONG
    4: "real",  # FLOAT
    5: "real",  # DOUBLE
    6: "null",
    7: "timestamp",
    8: "int",  # LONGLONG
    9: "int",  # INT24
    10: "date",
    11: "time",
    12: "datetime",
    13: "year",
    14: "date",  # NEWDATE
    15: "string",  # VARCHAR
    16: "int",  # BIT
    245: "string",  # JSON
    246: "real",  # NEWDECIMAL
    247: "string",  # ENUM
    248: "string",  # SET
    249: "blob",
    250: "blob",
    251: "blob",
    252: "blob",
    253: "string",  # VAR_STRING
    254: "string",  # STRING
    255: "geometry",
}

# SHOW GLOBAL STATUS variables -> labels of the classic server status line
_STATUS_LABELS = {
    "Uptime": "Uptime",
    "Threads_connected": "Threads",
    "Questions": "Questions",
    "Slow_queries": "Slow queries",
    "Opened_tables": "Opens",
    "Flush_commands": "Flush tables",
    "Open_tables": "Open tables",
}


class MySQLAdapter(BaseAdapter):
    """MySQL adapter with full feature support."""

    @property
    def capabilities(self) -> DatabaseCapabilities:
        return DatabaseCapabilities(
            select_database=True,
            statistics=True,
            transactions=True,
        )

    def get_select_database_queries(
        self, database: str, charset: Optional[str]
    ) -> list[str]:
        queries = [f"USE {backtick(database, self.escape_string)}"]
        if charset:
            queries.append(f"SET CHARACTER SET '{self.escape_string(charset)}'")
        return queries

    def get_statistics_query(self) -> Optional[str]:
        names = ", ".join(f"'{name}'" for name in _STATUS_LABELS)
        return f"SHOW GLOBAL STATUS WHERE Variable_name IN ({names})"

    def parse_statistics(self, rows: Sequence[Sequence[Any]]) -> dict[str, str]:
        stats = {}
        for name, value in rows:
            stats[_STATUS_LABELS.get(str(name), str(name))] = str(value)
        return stats

    def field_type_name(self, type_code: Any) -> Optional[str]:
        if type_code is None:
            return None
        return _FIELD_TYPES.get(type_code, "unknown")
