"""Pydantic models for configuration, capabilities and results."""

from .capabilities import DatabaseCapabilities
from .config import DatabaseConfig
from .query import ColumnMetadata, StatementResult
from .values import ResultType, SemanticValue, SQLValueType

__all__ = [
    "DatabaseCapabilities",
    "DatabaseConfig",
    "ColumnMetadata",
    "StatementResult",
    "ResultType",
    "SemanticValue",
    "SQLValueType",
]
