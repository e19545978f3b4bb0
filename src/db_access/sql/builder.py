"""SQL statement text builders.

All values handed to these builders must already be SQL literal text
(see db_access.sql.values.sql_value); only identifiers are escaped here.
Malformed input raises SQLBuildError.
"""

import re
from collections.abc import Mapping
from typing import Any, Iterable, Optional, Union

from db_access.exceptions import SQLBuildError
from db_access.sql.identifiers import backtick, sql_fix

ColumnSpec = Union[str, Mapping, list, tuple]
FilterSpec = Union[str, Mapping, list, tuple]
LimitSpec = Union[int, str, tuple, list]

_INVALID_LIMIT_RE = re.compile(r"[^0-9 ,]")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _literal(value: Any) -> str:
    return "NULL" if value is None else str(value)


def _entries(spec: Any, what: str) -> Iterable[tuple[Any, Any]]:
    """Yield (key, value) pairs of a mapping, or (position, value) of a sequence."""
    if isinstance(spec, Mapping):
        return spec.items()
    if isinstance(spec, (list, tuple)):
        return enumerate(spec)
    raise SQLBuildError(f"Invalid {what} type: {type(spec).__name__}")


def build_columns(
    columns: ColumnSpec,
    add_quotes: bool = True,
    show_alias: bool = True,
    with_sort_marker: bool = False,
) -> str:
    """
    Build a comma delimited list of columns.

    Args:
        columns: A single column name, a sequence of names, or a mapping of
                 alias -> column name
        add_quotes: Wrap each name in backticks
        show_alias: Emit ``AS "alias"`` for string keys of a mapping
        with_sort_marker: The list is meant for ORDER BY; names may be
                          prefixed by ``+`` (ASC, the default) or ``-`` (DESC)

    Returns:
        Column list text

    Raises:
        SQLBuildError: If columns is not a string, sequence or mapping
    """
    if isinstance(columns, str):
        return backtick(columns) if add_quotes else columns

    parts = []
    for key, value in _entries(columns, "column list"):
        column = _literal(value)
        direction = ""
        if with_sort_marker:
            if column.startswith("+"):
                direction = " ASC"
                column = column[1:]
            elif column.startswith("-"):
                direction = " DESC"
                column = column[1:]
            else:
                direction = " ASC"

        item = backtick(column) if add_quotes else column
        if show_alias and isinstance(key, str) and key:
            item += ' AS "' + sql_fix(key) + '"'
        elif with_sort_marker:
            item += direction
        parts.append(item)
    return ", ".join(parts)


def build_where_clause(where: FilterSpec) -> str:
    """
    Build a WHERE clause.

    A string is returned verbatim. For a mapping, string keys are used as
    column names compared for equality with their (SQL ready) values; other
    keys, as well as sequence items, are inserted as raw expressions. All
    parts are joined with AND.

    Example:
        >>> build_where_clause({"Age": "'777'", 0: "`Id` > 5"})
        "WHERE `Age` = '777' AND `Id` > 5"
    """
    if isinstance(where, str):
        return where

    parts = []
    for key, value in _entries(where, "WHERE clause"):
        if isinstance(key, str) and not key:
            raise SQLBuildError("Invalid key specified in WHERE clause")
        # TODO: integer values skip the emptiness check only for compatibility
        # with existing callers; decide whether 0.0 and False should pass too.
        if not value and not _is_int(value):
            raise SQLBuildError(
                f"Invalid value specified in WHERE clause for key '{key}'"
            )

        if isinstance(key, str):
            parts.append(f"{backtick(key)} = {value}")
        else:
            parts.append(str(value))

    if not parts:
        return ""
    return "WHERE " + " AND ".join(parts)


def format_limit(limit: LimitSpec) -> str:
    """
    Validate and render a LIMIT argument.

    Accepts a row count, an ``(offset, count)`` pair, or a string made of
    digits, spaces and commas only.
    """
    if _is_int(limit):
        if limit < 0:
            raise SQLBuildError(f"Invalid LIMIT clause specified: {limit}")
        return str(limit)
    if isinstance(limit, (tuple, list)):
        if len(limit) != 2 or not all(_is_int(n) and n >= 0 for n in limit):
            raise SQLBuildError(f"Invalid LIMIT clause specified: {limit!r}")
        return f"{limit[0]}, {limit[1]}"
    if isinstance(limit, str):
        if _INVALID_LIMIT_RE.search(limit):
            raise SQLBuildError(f"Invalid LIMIT clause specified: {limit!r}")
        return limit.strip()
    raise SQLBuildError(f"Invalid LIMIT clause specified: {limit!r}")


def build_select(
    table: str,
    where: Optional[FilterSpec] = None,
    columns: Optional[ColumnSpec] = None,
    sort_columns: Optional[ColumnSpec] = None,
    limit: Optional[LimitSpec] = None,
) -> str:
    """
    Build a simple SELECT statement.

    Args:
        table: Table name
        where: Filter (see build_where_clause)
        columns: Columns to select; a mapping key is used as column alias
        sort_columns: Columns to sort by, optionally prefixed by +/-
        limit: Row limit (see format_limit)

    Returns:
        SELECT statement text
    """
    column_sql = ""
    if columns is not None:
        column_sql = build_columns(columns, add_quotes=False, show_alias=True).strip()
    if not column_sql:
        column_sql = "*"

    sql = f"SELECT {column_sql} FROM {backtick(table)}"

    if where is not None:
        where_sql = build_where_clause(where)
        if where_sql:
            sql += " " + where_sql

    if sort_columns is not None:
        order_sql = build_columns(
            sort_columns, add_quotes=False, show_alias=False, with_sort_marker=True
        ).strip()
        if order_sql:
            sql += " ORDER BY " + order_sql

    if limit is not None:
        limit_sql = format_limit(limit)
        if limit_sql:
            sql += " LIMIT " + limit_sql

    return sql


def build_insert(table: str, values: Mapping) -> str:
    """Build an INSERT statement from a column -> SQL value mapping."""
    if not isinstance(values, Mapping):
        raise SQLBuildError("Invalid values type specified for INSERT")

    column_sql = build_columns(list(values.keys()), add_quotes=True, show_alias=False)
    value_sql = build_columns(list(values.values()), add_quotes=False, show_alias=False)
    if not column_sql or not value_sql:
        raise SQLBuildError("Invalid/Empty values specified for INSERT")

    return f"INSERT INTO {backtick(table)} ({column_sql}) VALUES ({value_sql})"


def build_update(
    table: str, values: Mapping, where: Optional[FilterSpec] = None
) -> str:
    """Build an UPDATE statement from a column -> SQL value mapping."""
    if not isinstance(values, Mapping):
        raise SQLBuildError("Invalid values type specified for UPDATE")
    if not values:
        raise SQLBuildError("Invalid/Empty values specified for UPDATE")

    assignments = []
    for key, value in values.items():
        if not value and not _is_int(value):
            raise SQLBuildError(f"Invalid value specified for UPDATE of key '{key}'")
        if not key:
            raise SQLBuildError("Invalid key specified for UPDATE")
        assignments.append(f"{backtick(key)} = {value}")

    sql = f"UPDATE {backtick(table)} SET " + ", ".join(assignments)

    if where is not None:
        where_sql = build_where_clause(where)
        if where_sql:
            sql += " " + where_sql

    return sql


def build_delete(table: str, where: Optional[FilterSpec] = None) -> str:
    """Build a DELETE statement; without a filter every row is deleted."""
    sql = f"DELETE FROM {backtick(table)}"

    if where is not None:
        where_sql = build_where_clause(where)
        if where_sql:
            sql += " " + where_sql

    return sql
