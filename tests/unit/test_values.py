"""Unit tests for SQL literal formatting."""

from datetime import date, datetime, time
from decimal import Decimal

import pytest

from db_access.exceptions import ConfigurationError
from db_access.models.values import SemanticValue, SQLValueType
from db_access.sql.values import (
    build_sql_value,
    get_boolean_value,
    is_date_str,
    is_numeric,
    sql_boolean_value,
    sql_value,
)


class TestIsNumeric:
    """Test the numeric detection rule."""

    @pytest.mark.parametrize("value", [0, 7, -3, 1.5, Decimal("2.5"), "12", " 3.5 ", "-1e3", ".5"])
    def test_numeric(self, value):
        """Test values treated as numbers."""
        assert is_numeric(value)

    @pytest.mark.parametrize("value", [None, True, False, "", "abc", "12abc", "1.2.3", [1]])
    def test_not_numeric(self, value):
        """Test values not treated as numbers."""
        assert not is_numeric(value)


class TestGetBooleanValue:
    """Test boolean interpretation of arbitrary values."""

    @pytest.mark.parametrize(
        "value",
        [True, 1, 2.5, 10**400, "1", "on", "Selected", "CHECKED", "yes", "y", " true ", "T"],
    )
    def test_truthy(self, value):
        """Test the true vocabulary and positive numbers."""
        assert get_boolean_value(value) is True

    @pytest.mark.parametrize(
        "value", [False, 0, -1, -(10**400), "0", "-2", None, "", "off", "no", "false", "maybe"]
    )
    def test_falsy(self, value):
        """Test that everything else is false."""
        assert get_boolean_value(value) is False


class TestIsDateStr:
    """Test date string detection."""

    def test_valid_dates(self):
        """Test strings that parse to a moment after the epoch."""
        assert is_date_str("2020-03-01")
        assert is_date_str(" 2020-03-01 12:30:00 ")
        assert is_date_str("March 1, 2020")

    def test_invalid_dates(self):
        """Test garbage, non-strings and the epoch itself."""
        assert not is_date_str("not a date")
        assert not is_date_str("")
        assert not is_date_str("1970-01-01 00:00:00")
        assert not is_date_str(1583020800)
        assert not is_date_str(None)


class TestSqlValueText:
    """Test text formatting and the empty string versus NULL distinction."""

    def test_text_is_quoted_and_escaped(self):
        """Test normal strings."""
        assert sql_value("Bob") == "'Bob'"
        assert sql_value("O'Brien", "text") == "'O\\'Brien'"

    def test_empty_string_stays_empty(self):
        """Test that an empty str is an empty literal, not NULL."""
        assert sql_value("", "text") == "''"

    def test_missing_value_is_null(self):
        """Test that None is NULL."""
        assert sql_value(None, "text") == "NULL"

    def test_numbers_as_text(self):
        """Test numbers formatted with the text rule."""
        assert sql_value(12, "text") == "'12'"
        assert sql_value(0, "text") == "'0'"

    def test_type_aliases(self):
        """Test alternative type names, case-insensitive."""
        assert sql_value("x", "VARCHAR") == "'x'"
        assert sql_value("5", " Int ") == "'5'"
        assert sql_value("1.5", "float") == "'1.5'"

    def test_custom_escape_function(self):
        """Test that the engine specific escaping is used."""
        assert sql_value("a'b", escape=lambda v: str(v).replace("'", "''")) == "'a''b'"


class TestSqlValueNumbers:
    """Test enum, number and double formatting."""

    def test_number(self):
        """Test integer formatting."""
        assert sql_value(7, "number") == "'7'"
        assert sql_value("42", "number") == "'42'"
        assert sql_value(3.9, "number") == "'3'"
        assert sql_value("abc", "number") == "NULL"
        assert sql_value(None, "number") == "NULL"

    def test_double(self):
        """Test float formatting."""
        assert sql_value(1.25, "double") == "'1.25'"
        assert sql_value("3", "double") == "'3'"
        assert sql_value("x", "double") == "NULL"

    def test_double_out_of_float_range(self):
        """Test integers too large for a float and non-finite numbers."""
        assert sql_value(10**400, "double") == f"'{10**400}'"
        assert sql_value("1e400", "double") == "NULL"
        assert sql_value(float("nan"), "double") == "NULL"

    def test_enum(self):
        """Test enum formatting of numbers, words and empties."""
        assert sql_value("3", "enum") == "'3'"
        assert sql_value("red", "enum") == "'red'"
        assert sql_value("", "enum") == "NULL"
        assert sql_value(None, "enum") == "NULL"


class TestSqlValueFlags:
    """Test boolean style formatting."""

    def test_boolean_and_bit(self):
        assert sql_value("yes", "boolean") == "'1'"
        assert sql_value("no", "bit") == "'0'"

    def test_y_n(self):
        assert sql_value(True, "y-n") == "'Y'"
        assert sql_value(0, "y-n") == "'N'"

    def test_t_f(self):
        assert sql_value("checked", "t-f") == "'T'"
        assert sql_value(None, "t-f") == "'F'"


class TestSqlValueDates:
    """Test date, datetime and time formatting."""

    def test_date_string_is_trimmed(self):
        """Test that surrounding whitespace is ignored."""
        assert sql_value(" 2020-03-01 ", "date") == "'2020-03-01'"

    def test_epoch_zero_is_rejected(self):
        """Test that zero does not become 1970-01-01."""
        assert sql_value(0, "date") == "NULL"
        assert sql_value("", "date") == "NULL"

    def test_datetime_and_time(self):
        """Test the datetime and time renderings."""
        assert sql_value("2020-03-01 14:05:09", "datetime") == "'2020-03-01 14:05:09'"
        assert sql_value("2020-03-01 14:05:09", "time") == "'14:05:09'"

    def test_native_objects(self):
        """Test date and datetime objects."""
        assert sql_value(date(2021, 12, 31), "date") == "'2021-12-31'"
        assert sql_value(datetime(2021, 12, 31, 8, 0, 1), "datetime") == "'2021-12-31 08:00:01'"
        assert sql_value(time(23, 59, 58), "time") == "'23:59:58'"

    def test_unix_timestamp(self):
        """Test that positive integers are Unix timestamps (UTC)."""
        assert sql_value(86400, "date") == "'1970-01-02'"

    def test_timestamp_beyond_datetime_range(self):
        """Test timestamps past year 9999."""
        assert sql_value(253402300800, "date") == "NULL"
        assert sql_value(10**400, "datetime") == "NULL"

    def test_invalid_date(self):
        assert sql_value("not a date", "date") == "NULL"


class TestSqlValueMisc:
    """Test the remaining rules."""

    def test_null_type(self):
        assert sql_value("anything", "null") == "NULL"

    def test_unknown_type_raises(self):
        """Test that an unrecognized type is a programming error."""
        with pytest.raises(ConfigurationError):
            sql_value("x", "money")

    def test_build_sql_value_uses_native_type(self):
        """Test type selection from the Python value."""
        assert build_sql_value(None) == "NULL"
        assert build_sql_value("") == "''"
        assert build_sql_value(5) == "'5'"
        assert build_sql_value(2.5) == "'2.5'"
        assert build_sql_value(True) == "'1'"
        assert build_sql_value(date(2020, 1, 2)) == "'2020-01-02'"

    def test_sql_boolean_value(self):
        """Test choosing between two values by a boolean reading."""
        assert sql_boolean_value("checked", "active", "inactive") == "'active'"
        assert sql_boolean_value("", "active", "inactive") == "'inactive'"
        assert sql_boolean_value("on", 1, 0, "number") == "'1'"
        assert sql_boolean_value(True) == "'1'"
        assert sql_boolean_value(False) == "NULL"


class TestSemanticValue:
    """Test the typed value model."""

    def test_alias_datatype(self):
        value = SemanticValue(value="3", datatype="int")
        assert value.datatype is SQLValueType.NUMBER
        assert value.to_sql() == "'3'"

    def test_absent_versus_empty(self):
        """Test that a missing value and an empty string are told apart."""
        absent = SemanticValue(value=None)
        empty = SemanticValue(value="")
        assert absent.is_absent and not absent.is_empty_string
        assert empty.is_empty_string and not empty.is_absent
        assert absent.to_sql() == "NULL"
        assert empty.to_sql() == "''"

    def test_invalid_datatype(self):
        with pytest.raises(ValueError):
            SemanticValue(value=1, datatype="money")
