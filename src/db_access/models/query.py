"""Statement execution result models."""

from typing import Optional

from pydantic import BaseModel, Field


class ColumnMetadata(BaseModel):
    """Description of one column of a result set."""

    name: str = Field(..., description="Column name or alias")
    data_type: Optional[str] = Field(
        None, description="Engine data type name, if reported"
    )
    length: Optional[int] = Field(
        None, description="Declared column length, if reported"
    )


class StatementResult(BaseModel):
    """Outcome of a statement that does not produce rows."""

    query: str = Field(..., description="Executed SQL statement")
    affected_rows: int = Field(
        default=0, description="Number of rows changed by the statement"
    )
    last_insert_id: Optional[int] = Field(
        None, description="Auto-increment id generated by an INSERT"
    )
    execution_time_ms: Optional[float] = Field(
        None, description="Execution time in milliseconds"
    )
