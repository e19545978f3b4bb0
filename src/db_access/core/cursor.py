"""Active-row cursor over the result set of the last query."""

from typing import Literal, Optional, Union

from sqlalchemy.engine import Row

from db_access.core.errors import ErrorState
from db_access.core.rowset import RowArray, RowSet, shape_row
from db_access.models.values import ResultType

NO_RESULTS = "No query results exist"
PAST_END = "Cannot read past the end of the records"


class Cursor:
    """
    Tracks the active row of a RowSet.

    ``active_row`` is -1 when there is no (or an empty) result, otherwise a
    position in ``0..row_count``. Reading without an explicit row number
    advances it by one; all failures are reported through the shared
    ErrorState and signalled by a False return value.
    """

    def __init__(self, errors: ErrorState):
        self.errors = errors
        self._rowset: Optional[RowSet] = None
        self.active_row = -1

    @property
    def rowset(self) -> Optional[RowSet]:
        """Current result set; None when there is none or it was freed."""
        if self._rowset is not None and self._rowset.freed:
            return None
        return self._rowset

    def holds(self, rowset: RowSet) -> bool:
        """Whether rowset is the attached result, freed or not."""
        return rowset is self._rowset

    def attach(self, rowset: RowSet) -> None:
        """Make rowset the current result and position on its first row."""
        self._rowset = rowset
        self.active_row = 0 if rowset.num_rows > 0 else -1

    def detach(self) -> Optional[RowSet]:
        """Forget the current result set and return it."""
        rowset, self._rowset = self._rowset, None
        self.active_row = -1
        return rowset

    def row_count(self) -> Union[int, Literal[False]]:
        """Number of rows in the current result."""
        self.errors.reset()
        if self.rowset is None:
            return self.errors.set_error(NO_RESULTS, -1)
        return self.rowset.num_rows

    def seek(self, row_number: int) -> Union[Row, Literal[False]]:
        """
        Move to a row and return it without consuming it.

        Args:
            row_number: Zero-based row number

        Returns:
            The row at row_number, or False on error
        """
        self.errors.reset()
        row_count = self.row_count()
        if row_count is False:
            return False
        if row_number < 0:
            return self.errors.set_error("Seek parameter must not be negative", -1)
        if row_number >= row_count:
            return self.errors.set_error(
                "Seek parameter is greater than the total number of rows", -1
            )

        assert self.rowset is not None
        self.active_row = row_number
        self.rowset.data_seek(row_number)
        record = self.rowset.fetch()
        if record is None:
            return self.errors.set_error(PAST_END, -1)
        # Go back to the record after grabbing it
        self.rowset.data_seek(row_number)
        return record

    def move_first(self) -> bool:
        """Seek to the first row."""
        self.errors.reset()
        if self.seek(0) is False:
            return self.errors.set_error()
        self.active_row = 0
        return True

    def move_last(self) -> bool:
        """Seek to the last row."""
        self.errors.reset()
        row_count = self.row_count()
        if row_count is False:
            return False
        self.active_row = row_count - 1
        return self.seek(self.active_row) is not False

    def beginning_of_seek(self) -> bool:
        """True if the cursor is at (or before) the first row."""
        self.errors.reset()
        return self.active_row < 1

    def end_of_seek(self) -> bool:
        """True if every row has been read (or there is no result)."""
        self.errors.reset()
        row_count = self.row_count()
        if row_count is False:
            return True
        return self.active_row >= row_count

    def seek_position(self) -> int:
        return self.active_row

    def _fetch(self, row_number: Optional[int]) -> Union[Row, Literal[False]]:
        self.errors.reset()
        if self.rowset is None:
            return self.errors.set_error(NO_RESULTS, -1)

        row_count = self.rowset.num_rows
        if row_number is None:
            if self.active_row > row_count:
                return self.errors.set_error(PAST_END, -1)
            self.active_row += 1
        else:
            if row_number >= row_count:
                return self.errors.set_error(
                    "Row number is greater than the total number of rows", -1
                )
            if row_number < 0:
                return self.errors.set_error("Row number must not be negative", -1)
            self.active_row = row_number
            self.seek(row_number)

        record = self.rowset.fetch()
        if record is None:
            return self.errors.set_error(PAST_END, -1)
        return record

    def row(self, row_number: Optional[int] = None) -> Union[Row, Literal[False]]:
        """
        Read a row as an object with attribute access to its columns.

        Args:
            row_number: Row to read; the next row when omitted

        Returns:
            SQLAlchemy Row, or False on error
        """
        return self._fetch(row_number)

    def row_array(
        self,
        row_number: Optional[int] = None,
        result_type: ResultType = ResultType.ASSOC,
    ) -> Union[RowArray, Literal[False]]:
        """Read a row as a dict or list (see ResultType)."""
        record = self._fetch(row_number)
        if record is False:
            return False
        return shape_row(record, result_type)

    def records_array(
        self, result_type: ResultType = ResultType.ASSOC
    ) -> Union[list[RowArray], Literal[False]]:
        """
        Read all rows of the current result.

        The cursor is left on the first row.
        """
        self.errors.reset()
        if self.rowset is None:
            self.active_row = -1
            return self.errors.set_error(NO_RESULTS, -1)

        rows = [shape_row(record, result_type) for record in self.rowset]
        self.rowset.data_seek(0)
        self.active_row = 0 if rows else -1
        return rows
