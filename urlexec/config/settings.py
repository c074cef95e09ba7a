import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from urlexec.core.errors import ConfigurationError
from urlexec.core.logging import get_logger

from .constants import CONFIG_FILE_ENV, CONFIG_FILE_NAME
from .core import HTTPSettings, LoggingSettings
from .proxy import ProxySettings


__all__ = ["Settings", "ConfigurationError", "get_settings"]

_NESTED_SECTIONS = ("proxy", "logging", "http")


def find_toml_config_file() -> Path | None:
    """Find urlexec.toml in the current directory."""
    candidate = Path.cwd() / CONFIG_FILE_NAME
    if candidate.exists():
        return candidate
    return None


class Settings(BaseSettings):
    """
    Configuration settings for urlexec.

    Settings are loaded from environment variables, .env files, and a TOML
    configuration file. Environment variables take precedence over TOML
    values; explicit overrides passed to from_config take precedence over both.
    Nested values use a double underscore, e.g. PROXY__HOST or LOGGING__LEVEL.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__",
    )

    proxy: ProxySettings = Field(
        default_factory=ProxySettings,
        description="Proxy configuration",
    )

    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Logging configuration",
    )

    http: HTTPSettings = Field(
        default_factory=HTTPSettings,
        description="HTTP client configuration",
    )

    def model_dump_safe(self) -> dict[str, Any]:
        """Dump model data as JSON-compatible values.

        SecretStr fields such as the proxy password are rendered masked.
        """
        return self.model_dump(mode="json")

    @classmethod
    def load_toml_config(cls, toml_path: Path) -> dict[str, Any]:
        """Load configuration from a TOML file."""
        try:
            with toml_path.open("rb") as f:
                return tomllib.load(f)
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read TOML config file {toml_path}: {e}"
            ) from e
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(f"Invalid TOML syntax in {toml_path}: {e}") from e

    @classmethod
    def from_config(
        cls,
        config_path: Path | str | None = None,
        **kwargs: Any,
    ) -> "Settings":
        """Create Settings instance from a configuration file and overrides."""
        if config_path is None:
            config_path_env = os.environ.get(CONFIG_FILE_ENV)
            if config_path_env:
                config_path = Path(config_path_env)

        if isinstance(config_path, str):
            config_path = Path(config_path)

        if config_path is None:
            config_path = find_toml_config_file()

        config_data: dict[str, Any] = {}
        if config_path and config_path.exists():
            config_data = cls.load_toml_config(config_path)
            get_logger(__name__).info(
                "config_file_loaded",
                path=str(config_path),
                category="config",
            )
        elif config_path:
            raise ConfigurationError(f"Config file not found: {config_path}")

        settings = cls()

        for key, value in config_data.items():
            if key in _NESTED_SECTIONS and isinstance(value, dict):
                nested_obj = getattr(settings, key)
                for nested_key, nested_value in value.items():
                    env_key = f"{key.upper()}__{nested_key.upper()}"
                    if os.getenv(env_key) is None and hasattr(nested_obj, nested_key):
                        setattr(nested_obj, nested_key, nested_value)

        def _apply_overrides(target: Any, overrides: dict[str, Any]) -> None:
            for k, v in overrides.items():
                if isinstance(v, dict) and isinstance(getattr(target, k, None), BaseModel):
                    _apply_overrides(getattr(target, k), v)
                elif v is not None:
                    setattr(target, k, v)

        if kwargs:
            _apply_overrides(settings, kwargs)

        return settings


def get_settings(config_path: Path | str | None = None) -> Settings:
    """Load settings from the environment and the optional config file.

    This is the single place where ambient configuration is read; the
    resulting objects are passed explicitly to everything else.
    """
    try:
        return Settings.from_config(config_path=config_path)
    except ValueError as e:
        raise ConfigurationError(str(e)) from e
