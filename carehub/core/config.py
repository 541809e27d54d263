"""Configuration management for carehub."""

from zoneinfo import ZoneInfo

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="carehub", description="Service name reported to Logfire and the API docs")
    environment: str = Field(default="development", description="Deployment environment name")

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")

    # Calendar Configuration
    timezone: str = Field(
        default="UTC",
        description="IANA timezone used to decide which calendar day 'today' is",
    )

    # Data Configuration
    seed_demo_data: bool = Field(default=True, description="Load the demo dataset into the store on startup")

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Validate timezone is a known IANA name."""
        try:
            ZoneInfo(v)
        except (KeyError, ValueError) as e:
            msg = f"Unknown timezone: {v}"
            raise ValueError(msg) from e
        return v

    @property
    def tzinfo(self) -> ZoneInfo:
        """Timezone object for the configured timezone."""
        return ZoneInfo(self.timezone)

    @property
    def is_production(self) -> bool:
        """Whether the service runs in production."""
        return self.environment.lower() == "production"


# Application Constants
class Constants:
    """Application-wide constants."""

    # Maintenance status classification
    DUE_SOON_WINDOW_DAYS: int = 7  # Tasks due within this many days are "due soon"

    # Pagination
    MAX_PAGE_SIZE: int = 1000  # Upper bound for list queries and full-collection scans

    # Calendar
    DAYS_PER_WEEK: int = 7


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()
constants = Constants()
