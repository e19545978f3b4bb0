"""Buffered result set of a row-producing statement."""

from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any, Iterator, Optional, Sequence, Union

from sqlalchemy.engine import Row

from db_access.models.query import ColumnMetadata
from db_access.models.values import ResultType

RowArray = Union[dict[Any, Any], list[Any]]


def infer_type_name(values: Sequence[Any]) -> str:
    """Guess an engine type name from the first non-NULL value of a column."""
    for value in values:
        if value is None:
            continue
        if isinstance(value, (bool, int)):
            return "int"
        if isinstance(value, (float, Decimal)):
            return "real"
        if isinstance(value, datetime):
            return "datetime"
        if isinstance(value, date):
            return "date"
        if isinstance(value, (time, timedelta)):
            return "time"
        if isinstance(value, (bytes, bytearray, memoryview)):
            return "blob"
        return "string"
    return "null"


def infer_length(values: Sequence[Any]) -> int:
    """Longest textual representation among the values of a column."""
    return max((len(str(value)) for value in values if value is not None), default=0)


def shape_row(row: Row, result_type: ResultType = ResultType.ASSOC) -> RowArray:
    """
    Convert a fetched row into the requested array shape.

    Args:
        row: SQLAlchemy row
        result_type: ASSOC (column -> value), NUM (list) or BOTH

    Returns:
        dict or list holding the row values
    """
    if result_type is ResultType.NUM:
        return list(row)
    assoc: dict[Any, Any] = dict(row._mapping)
    if result_type is ResultType.BOTH:
        for index, value in enumerate(row):
            assoc[index] = value
    return assoc


class RowSet:
    """
    Rows and column metadata of one executed statement.

    The set keeps its own fetch pointer, independent of any cursor built on
    top of it: fetch() returns the row at the pointer and advances it,
    data_seek() moves it.
    """

    def __init__(self, query: str, rows: Sequence[Row], columns: Sequence[ColumnMetadata]):
        self.query = query
        self._rows = list(rows)
        self._columns = list(columns)
        self._position = 0
        self._freed = False

    def _check_open(self) -> None:
        if self._freed:
            raise RuntimeError("Result set has already been released")

    @property
    def freed(self) -> bool:
        """Whether free() has been called."""
        return self._freed

    @property
    def num_rows(self) -> int:
        self._check_open()
        return len(self._rows)

    @property
    def num_fields(self) -> int:
        self._check_open()
        return len(self._columns)

    @property
    def columns(self) -> list[ColumnMetadata]:
        self._check_open()
        return list(self._columns)

    @property
    def column_names(self) -> list[str]:
        return [column.name for column in self.columns]

    @property
    def position(self) -> int:
        return self._position

    def field(self, index: int) -> Optional[ColumnMetadata]:
        """Column metadata by position, or None when out of range."""
        self._check_open()
        if 0 <= index < len(self._columns):
            return self._columns[index]
        return None

    def data_seek(self, row_number: int) -> bool:
        """Move the fetch pointer; False when the row does not exist."""
        self._check_open()
        if not 0 <= row_number < len(self._rows):
            return False
        self._position = row_number
        return True

    def fetch(self) -> Optional[Row]:
        """Return the row at the fetch pointer and advance, or None at the end."""
        self._check_open()
        if self._position >= len(self._rows):
            return None
        row = self._rows[self._position]
        self._position += 1
        return row

    def free(self) -> bool:
        """Release the buffered rows. Returns False if already released."""
        if self._freed:
            return False
        self._rows = []
        self._freed = True
        return True

    def __len__(self) -> int:
        return self.num_rows

    def __bool__(self) -> bool:
        # An empty result is still a successful result
        return True

    def __iter__(self) -> Iterator[Row]:
        self._check_open()
        return iter(list(self._rows))

    def __repr__(self) -> str:
        state = "freed" if self._freed else f"{len(self._rows)} rows"
        return f"<RowSet {state}: {self.query!r}>"
