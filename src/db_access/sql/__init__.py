"""SQL text generation: identifier quoting, literal formatting, statement builders."""

from db_access.sql.builder import (
    build_columns,
    build_delete,
    build_insert,
    build_select,
    build_update,
    build_where_clause,
    format_limit,
)
from db_access.sql.identifiers import quote_identifier, sql_fix, sql_unfix
from db_access.sql.values import (
    build_sql_value,
    get_boolean_value,
    is_date_str,
    is_numeric,
    sql_boolean_value,
    sql_value,
)

__all__ = [
    "build_columns",
    "build_delete",
    "build_insert",
    "build_select",
    "build_update",
    "build_where_clause",
    "format_limit",
    "quote_identifier",
    "sql_fix",
    "sql_unfix",
    "build_sql_value",
    "get_boolean_value",
    "is_date_str",
    "is_numeric",
    "sql_boolean_value",
    "sql_value",
]
