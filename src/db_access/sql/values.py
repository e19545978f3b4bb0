"""Conversion of Python values into SQL literal text.

Every value is formatted according to a declared SQLValueType. The result is
ready to be placed verbatim into a statement built by db_access.sql.builder:
strings are escaped and quoted, missing values become NULL.

Type conversion rules:
- text: '' for an empty str, NULL for other empty values (None, False)
- enum / number / double: quoted numbers, NULL when not numeric
- boolean / bit, y-n, t-f: '1'/'0', 'Y'/'N', 'T'/'F'
- date / datetime / time: quoted ISO-like text, NULL when not a valid date
- null: always NULL
"""

import math
import re
from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import Any, Callable, Optional

import dateutil.parser as dp

from db_access.exceptions import ConfigurationError
from db_access.models.values import SQLValueType
from db_access.sql.identifiers import sql_fix

NULL = "NULL"

TRUE_WORDS = frozenset({"ON", "SELECTED", "CHECKED", "YES", "Y", "TRUE", "T"})

_NUMERIC_RE = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")
_INTEGER_RE = re.compile(r"^\s*[+-]?\d+\s*$")

_DATE_FORMATS = {
    SQLValueType.DATE: "%Y-%m-%d",
    SQLValueType.DATETIME: "%Y-%m-%d %H:%M:%S",
    SQLValueType.TIME: "%H:%M:%S",
}


def is_numeric(value: Any) -> bool:
    """Check whether a value is a number or a numeric string."""
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float, Decimal)):
        return True
    if isinstance(value, str):
        return bool(_NUMERIC_RE.match(value))
    return False


def _to_int(value: Any) -> int:
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _INTEGER_RE.match(value):
        return int(value.strip())
    try:
        return int(float(value))
    except (OverflowError, ValueError):
        return 0


def _format_float(value: float) -> str:
    if value == value and abs(value) < 1e15 and float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def _to_text(value: Any) -> str:
    """Stringify a value the way the formatting rules expect."""
    if value is None or value is False:
        return ""
    if value is True:
        return "1"
    if isinstance(value, float):
        return _format_float(value)
    return str(value)


def _as_utc_timestamp(moment: datetime) -> float:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.timestamp()


def _parse_date(value: str) -> datetime:
    return dp.parse(value.strip())


def get_boolean_value(value: Any) -> bool:
    """
    Interpret any value as a boolean.

    Native booleans are returned as is, numbers are true when positive and
    strings are true only for a fixed vocabulary of words (ON, SELECTED,
    CHECKED, YES, Y, TRUE, T), case-insensitively.

    Args:
        value: Value to analyze

    Returns:
        True or False
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value > 0
    if is_numeric(value):
        return float(value) > 0
    if value is None:
        return False
    return str(value).strip().upper() in TRUE_WORDS


def is_date_str(value: Any) -> bool:
    """
    Check whether a string holds a parsable date and/or time.

    A value parsing to the Unix epoch (or earlier) is not considered a date,
    since that is what zero-like input usually turns into.
    """
    if not isinstance(value, str):
        return False
    try:
        parsed = _parse_date(value)
    except (ValueError, OverflowError, TypeError):
        return False
    return _as_utc_timestamp(parsed) > 0


def _to_datetime(value: Any) -> Optional[datetime]:
    if isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    if isinstance(value, time):
        return datetime.combine(date.today(), value)
    if is_date_str(value):
        return _parse_date(value)
    if isinstance(value, int) and value > 0:
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, ValueError, OSError):
            # Beyond the range of datetime
            return None
    return None


def sql_value(
    value: Any,
    datatype: "str | SQLValueType" = SQLValueType.TEXT,
    escape: Callable[[object], str] = sql_fix,
) -> str:
    """
    Format any value into a string suitable for SQL statements.

    Args:
        value: Value to format
        datatype: Declared type (SQLValueType or a name/alias such as 'varchar')
        escape: String escaping function of the target engine

    Returns:
        SQL literal text, e.g. ``'abc'``, ``'12'`` or ``NULL``

    Raises:
        ConfigurationError: If the declared type is not recognized
    """
    kind = SQLValueType.parse(datatype)
    if kind is None:
        raise ConfigurationError(
            f"Invalid data type specified in sql_value(): {datatype!r}"
        )

    if kind is SQLValueType.TEXT:
        text = _to_text(value)
        if not text:
            # An empty str stays an empty string, a missing value is NULL
            return "''" if isinstance(value, str) else NULL
        return "'" + escape(text) + "'"

    if kind is SQLValueType.ENUM:
        if is_numeric(value):
            return f"'{_to_int(value)}'"
        if value:
            return "'" + escape(_to_text(value)) + "'"
        return NULL

    if kind is SQLValueType.NUMBER:
        if is_numeric(value):
            return f"'{_to_int(value)}'"
        return NULL

    if kind is SQLValueType.DOUBLE:
        if not is_numeric(value):
            return NULL
        try:
            number = float(value)
        except OverflowError:
            # Integer too large for a float keeps all its digits
            return f"'{_to_int(value)}'"
        if not math.isfinite(number):
            return NULL
        return "'" + _format_float(number) + "'"

    if kind in (SQLValueType.BOOLEAN, SQLValueType.BIT):
        return "'1'" if get_boolean_value(value) else "'0'"

    if kind is SQLValueType.Y_N:
        return "'Y'" if get_boolean_value(value) else "'N'"

    if kind is SQLValueType.T_F:
        return "'T'" if get_boolean_value(value) else "'F'"

    if kind in _DATE_FORMATS:
        moment = _to_datetime(value)
        if moment is None:
            return NULL
        return "'" + moment.strftime(_DATE_FORMATS[kind]) + "'"

    return NULL


def _native_type(value: Any) -> SQLValueType:
    if value is None:
        return SQLValueType.NULL
    if isinstance(value, bool):
        return SQLValueType.BOOLEAN
    if isinstance(value, int):
        return SQLValueType.NUMBER
    if isinstance(value, (float, Decimal)):
        return SQLValueType.DOUBLE
    if isinstance(value, datetime):
        return SQLValueType.DATETIME
    if isinstance(value, date):
        return SQLValueType.DATE
    if isinstance(value, time):
        return SQLValueType.TIME
    return SQLValueType.TEXT


def build_sql_value(value: Any, escape: Callable[[object], str] = sql_fix) -> str:
    """Format a value using the SQL type matching its Python type."""
    return sql_value(value, _native_type(value), escape)


def sql_boolean_value(
    value: Any,
    true_value: Any = True,
    false_value: Any = False,
    datatype: "str | SQLValueType" = SQLValueType.TEXT,
) -> str:
    """
    Format true_value or false_value depending on how value reads as a boolean.

    Example:
        >>> sql_boolean_value("checked", "active", "inactive")
        "'active'"
    """
    if get_boolean_value(value):
        return sql_value(true_value, datatype)
    return sql_value(false_value, datatype)
