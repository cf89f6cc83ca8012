"""Application configuration using Pydantic Settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application settings
    app_name: str = "spidertype"
    app_version: str = "0.1.0"
    debug: bool = False

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Logging
    log_level: str = "INFO"

    # Typing session settings
    allowed_durations: list[int] = [15, 30, 60, 120]
    default_duration: int = 30
    default_language: str = "javascript"
    tick_interval_seconds: float = 1.0

    # Whether characters typed past the end of the target count as errors
    overflow_counts_as_error: bool = True


# Create a singleton instance
settings = Settings()
