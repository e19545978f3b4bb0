"""Declared SQL value types and typed value model."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


class SQLValueType(str, Enum):
    """Declared types selecting a literal formatting rule."""

    TEXT = "text"
    ENUM = "enum"
    NUMBER = "number"
    DOUBLE = "double"
    BOOLEAN = "boolean"
    BIT = "bit"
    Y_N = "y-n"
    T_F = "t-f"
    DATE = "date"
    DATETIME = "datetime"
    TIME = "time"
    NULL = "null"

    @classmethod
    def parse(cls, datatype: "str | SQLValueType") -> Optional["SQLValueType"]:
        """
        Resolve a type name or alias (case-insensitive, trimmed).

        Returns:
            Matching SQLValueType, or None if the name is not recognized
        """
        if isinstance(datatype, SQLValueType):
            return datatype
        name = str(datatype).strip().lower()
        name = _ALIASES.get(name, name)
        try:
            return cls(name)
        except ValueError:
            return None


# Alternative spellings, including Python type names used by build_sql_value()
_ALIASES = {
    "string": "text",
    "varchar": "text",
    "char": "text",
    "str": "text",
    "integer": "number",
    "int": "number",
    "float": "double",
    "bool": "boolean",
    "nonetype": "null",
}


class ResultType(str, Enum):
    """Shape of rows returned by the array accessors."""

    ASSOC = "assoc"  # {column: value}
    NUM = "num"  # [value, ...]
    BOTH = "both"  # {column: value, 0: value, ...}


class SemanticValue(BaseModel):
    """A raw value tagged with the declared type used to format it."""

    value: Any = Field(None, description="Raw input value")
    datatype: SQLValueType = Field(
        default=SQLValueType.TEXT, description="Declared SQL value type"
    )

    @field_validator("datatype", mode="before")
    @classmethod
    def validate_datatype(cls, v: Any) -> SQLValueType:
        """Accept aliases such as 'varchar' or 'int'."""
        parsed = SQLValueType.parse(v)
        if parsed is None:
            raise ValueError(f"Invalid data type: {v}")
        return parsed

    @property
    def is_absent(self) -> bool:
        """True when no value was supplied at all."""
        return self.value is None

    @property
    def is_empty_string(self) -> bool:
        """True when the value was supplied as an empty string."""
        return isinstance(self.value, str) and self.value == ""

    def to_sql(self) -> str:
        """Format the value as SQL literal text."""
        from db_access.sql.values import sql_value

        return sql_value(self.value, self.datatype)
