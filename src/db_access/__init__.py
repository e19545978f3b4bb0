"""
db_access - SQL text building and convenience access for MySQL databases

Formats Python values as SQL literals, builds SELECT/INSERT/UPDATE/DELETE
statements from mappings and wraps a SQLAlchemy connection with a cursor,
a sticky error state, transactions and simple introspection. SQLite is
supported as a lightweight engine for tests and tooling.
"""

__version__ = "1.0.0"

from db_access.core import Database, DatabaseConnection, RowSet
from db_access.exceptions import (
    ConfigurationError,
    DatabaseError,
    DBAccessError,
    SQLBuildError,
)
from db_access.models.config import DatabaseConfig
from db_access.models.values import ResultType, SemanticValue, SQLValueType
from db_access.sql import quote_identifier, sql_fix, sql_unfix, sql_value

__all__ = [
    "Database",
    "DatabaseConnection",
    "RowSet",
    "DatabaseConfig",
    "ResultType",
    "SemanticValue",
    "SQLValueType",
    "DBAccessError",
    "DatabaseError",
    "ConfigurationError",
    "SQLBuildError",
    "quote_identifier",
    "sql_fix",
    "sql_unfix",
    "sql_value",
]
