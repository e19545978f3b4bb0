"""Database capabilities model."""

from pydantic import BaseModel, Field


class DatabaseCapabilities(BaseModel):
    """Flags indicating what features a database supports."""

    select_database: bool = Field(
        default=False,
        description="Database can switch the current database (USE)",
    )
    statistics: bool = Field(
        default=False,
        description="Database reports server status counters",
    )
    transactions: bool = Field(
        default=True,
        description="Database supports transactions",
    )

    def get_supported_features(self) -> list[str]:
        """Get list of supported feature names."""
        return [name for name, enabled in self.model_dump().items() if enabled]
