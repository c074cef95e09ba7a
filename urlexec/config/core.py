"""Core configuration settings - HTTP client and logging."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import DEFAULT_RETRIES, DEFAULT_TIMEOUT_MS


# === HTTP Configuration ===


class HTTPSettings(BaseModel):
    """HTTP client configuration settings."""

    model_config = ConfigDict(validate_assignment=True)

    timeout_ms: int = Field(
        default=DEFAULT_TIMEOUT_MS,
        description="Socket timeout for a single request in milliseconds",
        gt=0,
    )

    retries: int = Field(
        default=DEFAULT_RETRIES,
        description="Connection attempts retried by the transport (never after the request was sent)",
        ge=0,
    )


# === Logging Configuration ===


class LoggingSettings(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(validate_assignment=True)

    level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    format: str = Field(
        default="auto",
        description="Logging output format: 'console', 'json' or 'auto' (console on a TTY)",
    )

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        upper_v = v.upper()
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if upper_v not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return upper_v

    @field_validator("format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate and normalize log format."""
        lower_v = v.lower()
        valid_formats = ["auto", "console", "json"]
        if lower_v not in valid_formats:
            raise ValueError(f"Invalid log format: {v}. Must be one of {valid_formats}")
        return lower_v
