"""Centralized engine configuration via Pydantic Settings.

Loads the parsing knobs and logging options from env vars into a typed
Settings instance. Front ends read it once per document and pass the
values down, so the heuristics themselves stay pure functions.
"""

from pydantic_settings import BaseSettings
from pydantic import Field


class EngineSettings(BaseSettings):
    """Engine settings loaded from environment variables."""

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Python log level")
    ENVIRONMENT: str = Field(
        default="development",
        description="Runtime environment: development, staging, production",
    )

    # Column detection
    HEADER_SCAN_ROWS: int = Field(
        default=10, ge=1, description="Rows scanned when looking for the header"
    )

    # Normalization
    DESCRIPTION_MAX_LENGTH: int = Field(
        default=100, ge=1, description="Cleaned descriptions are cut to this length"
    )
    DAY_FIRST: bool = Field(
        default=True,
        description="Read ambiguous NN/NN/YYYY dates as day/month (False = month/day)",
    )
    TWO_DIGIT_YEAR_PIVOT: int = Field(
        default=50,
        ge=0,
        le=100,
        description="Two-digit years below the pivot are 20YY, the rest 19YY",
    )

    # Free-text fallback
    MIN_LINE_LENGTH: int = Field(
        default=10, ge=0, description="Shorter text lines are never transactions"
    )

    @property
    def json_logs(self) -> bool:
        """JSON log output everywhere except local development."""
        return self.ENVIRONMENT.lower() != "development"

    @property
    def log_level(self) -> str:
        return self.LOG_LEVEL

    model_config = {"env_file": ".env", "extra": "ignore"}


def get_settings() -> EngineSettings:
    """Factory for EngineSettings, allows test override."""
    return EngineSettings()
