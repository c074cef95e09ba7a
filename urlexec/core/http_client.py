"""HTTP client construction for urlexec.

Every request gets its own short-lived ``httpx.Client``; nothing is pooled or
shared between calls.
"""

from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

import httpx

from urlexec.config.constants import DEFAULT_RETRIES
from urlexec.core.logging import get_logger


logger = get_logger(__name__)


class HTTPClientFactory:
    """Factory for per-request HTTP clients.

    Clients are created with:
    - An explicit transport, so process-wide proxy variables are never consulted
    - A fixed number of connection retries on the transport
    - A single timeout applied to connect, read, write and pool acquisition
    """

    @staticmethod
    def create_proxy(
        proxy_url: str,
        proxy_user: str | None = None,
        proxy_password: str | None = None,
    ) -> httpx.Proxy:
        """Create the proxy description, with credentials when a user is given."""
        if proxy_user and proxy_user.strip():
            return httpx.Proxy(proxy_url, auth=(proxy_user, proxy_password or ""))
        return httpx.Proxy(proxy_url)

    @staticmethod
    def create_client(
        *,
        timeout: float,
        proxy: httpx.Proxy | None = None,
        auth: httpx.Auth | None = None,
        retries: int = DEFAULT_RETRIES,
        **kwargs: Any,
    ) -> httpx.Client:
        """Create an HTTP client for a single request.

        Args:
            timeout: Timeout in seconds
            proxy: Optional proxy to route the request through
            auth: Optional authentication sent with the first attempt
            retries: Connection attempts retried by the transport. httpx only
                retries failures to establish a connection, so a request
                whose body was already sent is never repeated.
            **kwargs: Additional httpx.Client arguments

        Returns:
            Configured httpx.Client instance
        """
        transport = httpx.HTTPTransport(
            retries=retries,
            proxy=proxy,
        )

        client_config: dict[str, Any] = {
            "timeout": httpx.Timeout(timeout),
            "transport": transport,
            "trust_env": False,
            **kwargs,
        }
        if auth is not None:
            client_config["auth"] = auth

        logger.debug(
            "http_client_created",
            timeout=timeout,
            retries=retries,
            has_proxy=proxy is not None,
            has_auth=auth is not None,
        )

        return httpx.Client(**client_config)

    @staticmethod
    @contextmanager
    def managed_client(**kwargs: Any) -> Generator[httpx.Client, None, None]:
        """Create a client that is closed exactly once when the block exits.

        Example:
            with HTTPClientFactory.managed_client(timeout=5.0) as client:
                response = client.get("http://example.com")
        """
        client = HTTPClientFactory.create_client(**kwargs)
        try:
            yield client
        finally:
            client.close()
            logger.debug("http_client_closed")
