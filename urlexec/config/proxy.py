"""Proxy configuration settings."""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

from urlexec.core.logging import get_logger

from .constants import (
    DEFAULT_PROXY_PORT,
    PROPERTY_NON_PROXY_HOSTS,
    PROPERTY_PROXY_HOST,
    PROPERTY_PROXY_PASSWORD,
    PROPERTY_PROXY_PORT,
    PROPERTY_PROXY_SET,
    PROPERTY_PROXY_USER,
)


logger = get_logger(__name__)


class ProxySettings(BaseModel):
    """Proxy used for outgoing requests.

    Built once at the edge of the program (environment, TOML file or a
    Java-style property mapping) and passed explicitly to the executor.
    """

    model_config = ConfigDict(validate_assignment=True)

    enabled: bool = Field(
        default=False,
        description="Route requests through the proxy",
    )

    host: str | None = Field(
        default=None,
        description="Proxy hostname",
    )

    port: int = Field(
        default=DEFAULT_PROXY_PORT,
        description="Proxy port, falls back to 80 when the value is not a valid integer",
    )

    user: str | None = Field(
        default=None,
        description="Username to authenticate with the proxy",
    )

    password: SecretStr | None = Field(
        default=None,
        description="Password to authenticate with the proxy",
    )

    non_proxy_hosts: str | None = Field(
        default=None,
        description="Pipe-separated host patterns ('*' wildcards allowed) that bypass the proxy",
    )

    @field_validator("port", mode="before")
    @classmethod
    def parse_port(cls, v: Any) -> int:
        """Parse the proxy port, falling back to the default port."""
        if v is None or isinstance(v, int):
            return DEFAULT_PROXY_PORT if v is None else v
        text = str(v).strip()
        if not text:
            return DEFAULT_PROXY_PORT
        try:
            return int(text)
        except ValueError:
            logger.warning(
                "invalid_proxy_port",
                value=text,
                fallback_port=DEFAULT_PROXY_PORT,
            )
            return DEFAULT_PROXY_PORT

    @property
    def password_value(self) -> str | None:
        return self.password.get_secret_value() if self.password else None

    @property
    def is_active(self) -> bool:
        """True when the proxy is enabled and a host is configured."""
        return self.enabled and bool(self.host and self.host.strip())

    @classmethod
    def from_properties(cls, properties: Mapping[str, str]) -> "ProxySettings":
        """Create settings from a Java-style system property mapping.

        Host, port, user, password and the non-proxy list are only read when
        ``http.proxySet`` is ``true`` (case-insensitive).
        """
        proxy_set = properties.get(PROPERTY_PROXY_SET) or ""
        if proxy_set.lower() != "true":
            return cls()

        return cls(
            enabled=True,
            host=properties.get(PROPERTY_PROXY_HOST),
            port=properties.get(PROPERTY_PROXY_PORT),
            user=properties.get(PROPERTY_PROXY_USER),
            password=properties.get(PROPERTY_PROXY_PASSWORD),
            non_proxy_hosts=properties.get(PROPERTY_NON_PROXY_HOSTS),
        )
