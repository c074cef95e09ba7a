"""Execute a single HTTP request and return its body as text."""

import httpx

from urlexec.config.constants import DEFAULT_RETRIES, DEFAULT_TIMEOUT_MS
from urlexec.config.proxy import ProxySettings
from urlexec.core.http_client import HTTPClientFactory
from urlexec.core.logging import get_logger

from .credentials import extract_credentials, mask_credentials
from .methods import HttpMethod, create_request
from .proxy import build_proxy_url, should_use_proxy


logger = get_logger(__name__)


def execute_url(
    http_method: str | HttpMethod,
    url: str,
    timeout_ms: int,
    proxy: ProxySettings | None = None,
) -> str | None:
    """Execute ``url`` with ``http_method`` using the given proxy settings.

    When ``proxy`` is None or disabled the request goes out directly.

    Args:
        http_method: GET, PUT, POST or DELETE
        url: The URL to execute
        timeout_ms: Socket timeout in milliseconds
        proxy: Proxy settings built at the edge of the program

    Returns:
        The response body or None when the request went wrong
    """
    if proxy is None or not proxy.enabled:
        return execute_url_with_proxy(http_method, url, timeout_ms)

    return execute_url_with_proxy(
        http_method,
        url,
        timeout_ms,
        proxy_host=proxy.host,
        proxy_port=proxy.port,
        proxy_user=proxy.user,
        proxy_password=proxy.password_value,
        non_proxy_hosts=proxy.non_proxy_hosts,
    )


def execute_url_with_proxy(
    http_method: str | HttpMethod,
    url: str,
    timeout_ms: int,
    proxy_host: str | None = None,
    proxy_port: int | None = None,
    proxy_user: str | None = None,
    proxy_password: str | None = None,
    non_proxy_hosts: str | None = None,
    *,
    retries: int = DEFAULT_RETRIES,
) -> str | None:
    """Execute ``url`` with ``http_method``.

    A non-2xx status is logged as a warning but the body is still returned.
    Protocol and transport failures are logged and reported as None.

    Args:
        http_method: GET, PUT, POST or DELETE
        url: The URL to execute
        timeout_ms: Socket timeout in milliseconds
        proxy_host: Hostname of the proxy
        proxy_port: Port of the proxy
        proxy_user: Username to authenticate with the proxy
        proxy_password: Password to authenticate with the proxy
        non_proxy_hosts: Pipe-separated hosts that are not routed through the proxy
        retries: Connection attempts retried by the transport

    Returns:
        The response body or None when the request went wrong

    Raises:
        UnknownHttpMethodError: if ``http_method`` is not GET, PUT, POST or DELETE
    """
    proxy: httpx.Proxy | None = None
    if (
        proxy_host
        and proxy_host.strip()
        and proxy_port is not None
        and should_use_proxy(url, non_proxy_hosts)
    ):
        proxy = HTTPClientFactory.create_proxy(
            build_proxy_url(proxy_host, proxy_port), proxy_user, proxy_password
        )

    request = create_request(http_method, url)

    credentials = extract_credentials(url)
    # an empty auth flow stops httpx from sending the URL userinfo on its own
    auth = credentials.as_auth() if credentials is not None else httpx.Auth()

    timeout = timeout_ms / 1000.0
    logged_url = mask_credentials(url)

    with HTTPClientFactory.managed_client(
        timeout=timeout, proxy=proxy, auth=auth, retries=retries
    ) as client:
        request.extensions["timeout"] = client.timeout.as_dict()
        logger.debug(
            "http_request_executing",
            method=request.method,
            url=logged_url,
            via_proxy=proxy is not None,
        )

        try:
            response = client.send(request)
            try:
                body = response.text
            finally:
                response.close()
        except (httpx.ProtocolError, httpx.DecodingError) as e:
            logger.error(
                "http_protocol_violation",
                method=request.method,
                url=logged_url,
                error=str(e),
            )
            return None
        except (httpx.TransportError, OSError) as e:
            logger.error(
                "http_transport_error",
                method=request.method,
                url=logged_url,
                error=str(e) or type(e).__name__,
            )
            return None

        if not response.is_success:
            logger.warning(
                "http_request_failed_status",
                method=request.method,
                url=logged_url,
                status_code=response.status_code,
                reason=response.reason_phrase,
                http_version=response.http_version,
            )

        if body:
            logger.debug("http_response_body", url=logged_url, body=body)

        return body


class UrlExecutor:
    """Executes requests with a fixed proxy configuration and default timeout.

    Example:
        executor = UrlExecutor(settings.proxy, timeout_ms=settings.http.timeout_ms)
        body = executor.execute("GET", "http://example.com/status")
    """

    def __init__(
        self,
        proxy: ProxySettings | None = None,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        retries: int = DEFAULT_RETRIES,
    ) -> None:
        self.proxy = proxy or ProxySettings()
        self.timeout_ms = timeout_ms
        self.retries = retries

    def execute(
        self, http_method: str | HttpMethod, url: str, timeout_ms: int | None = None
    ) -> str | None:
        """Execute a request; see execute_url_with_proxy for the contract."""
        proxy = self.proxy
        active = proxy.enabled
        return execute_url_with_proxy(
            http_method,
            url,
            timeout_ms if timeout_ms is not None else self.timeout_ms,
            proxy_host=proxy.host if active else None,
            proxy_port=proxy.port if active else None,
            proxy_user=proxy.user if active else None,
            proxy_password=proxy.password_value if active else None,
            non_proxy_hosts=proxy.non_proxy_hosts if active else None,
            retries=self.retries,
        )

    def should_use_proxy(self, url: str) -> bool:
        """True if a request to ``url`` would go through the configured proxy."""
        return self.proxy.is_active and should_use_proxy(
            url, self.proxy.non_proxy_hosts
        )
