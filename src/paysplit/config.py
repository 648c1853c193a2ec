"""Configuration management for PaySplit."""

from decimal import Decimal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PAYSPLIT_",
        case_sensitive=False,
        extra="ignore",
    )

    # Group roster (JSON list in the environment), "Me" is implicit
    roster: list[str] = []

    # Time zone used for dates recovered from message text
    timezone: str = "UTC"

    # Settlement settings
    settlement_tolerance: Decimal = Decimal("0.01")

    # Message scanning
    scan_days_back: int = 30
    scan_max_workers: int = 10

    # Display
    currency_symbol: str = "₹"

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown time zone: {value}") from e
        return value

    @property
    def tzinfo(self) -> ZoneInfo:
        """Resolve the configured time zone."""
        return ZoneInfo(self.timezone)


def load_settings() -> Settings:
    """Load application settings from environment variables."""
    try:
        return Settings()
    except Exception as e:
        raise ConfigurationError(
            f"Failed to load settings. Check the PAYSPLIT_* variables in your "
            f"environment or .env file.\n"
            f"Error: {e}"
        ) from e
