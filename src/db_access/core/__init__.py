"""Core functionality for database access."""

from .connection import DatabaseConnection
from .cursor import Cursor
from .database import Database
from .errors import ErrorState
from .rowset import RowSet

__all__ = [
    "Database",
    "DatabaseConnection",
    "Cursor",
    "ErrorState",
    "RowSet",
]
