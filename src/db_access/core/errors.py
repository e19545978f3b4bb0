"""Sticky first-error state shared by all database operations."""

import logging
from typing import Callable, Literal, Optional

from db_access.exceptions import DatabaseError

logger = logging.getLogger(__name__)

EngineErrorSource = Callable[[], Optional[tuple[int, str]]]


def _no_engine_error() -> Optional[tuple[int, str]]:
    return None


class ErrorState:
    """
    Error description and code of the current operation.

    Every public operation starts with reset(); the first error recorded
    afterwards wins and later ones are ignored until the next reset().
    """

    def __init__(
        self,
        engine_error: EngineErrorSource = _no_engine_error,
        throw_exceptions: bool = False,
    ):
        """
        Args:
            engine_error: Returns (code, message) of the last engine failure
            throw_exceptions: Raise DatabaseError whenever an error is set
        """
        self.engine_error = engine_error
        self.throw_exceptions = throw_exceptions
        self.description = ""
        self.code = 0

    def reset(self) -> None:
        """Clear any recorded error."""
        self.description = ""
        self.code = 0

    def set_error(self, message: str = "", code: int = 0) -> Literal[False]:
        """
        Record an error unless one is already recorded.

        Missing message and code are taken from the last engine failure.

        Returns:
            Always False, so callers can ``return errors.set_error(...)``

        Raises:
            DatabaseError: If throw_exceptions is enabled
        """
        if not self.error_number():
            engine_code, engine_message = self.engine_error() or (0, "")
            self.description = message or engine_message
            self.code = code or engine_code
            if self.description or self.code:
                logger.debug("Recorded error: %s", self.error())

        if self.throw_exceptions:
            raise DatabaseError(self.description, self.code)
        return False

    def error(self) -> Optional[str]:
        """
        Human readable description of the recorded error.

        Returns:
            Description (with the code appended when it is meaningful),
            "Unknown Error (#N)" when only a code is known, or None
        """
        if not self.description:
            if self.code != 0:
                return f"Unknown Error (#{self.code})"
            return None
        if self.code > 0 or self.code < -1:
            return f"{self.description} (#{self.code})"
        return self.description

    def error_number(self) -> int:
        """Numeric code of the recorded error; -1 for a message without a code."""
        if self.description:
            return self.code if self.code != 0 else -1
        return self.code

    @property
    def has_error(self) -> bool:
        return self.error_number() != 0
