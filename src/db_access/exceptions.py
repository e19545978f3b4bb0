"""Exception types raised by db_access."""


class DBAccessError(Exception):
    """Base class for db_access exceptions."""


class DatabaseError(DBAccessError):
    """Recorded database error, raised only when throw_exceptions is enabled."""

    def __init__(self, message: str, code: int = 0):
        self.code = code
        super().__init__(message)


class ConfigurationError(DBAccessError):
    """Unrecoverable programming/configuration error (e.g. unknown SQL value type)."""


class SQLBuildError(DBAccessError, ValueError):
    """Malformed input given to one of the SQL statement builders."""
