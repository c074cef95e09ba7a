"""Decide whether a target host is routed through the proxy."""

import re
from urllib.parse import urlsplit

from urlexec.config.constants import NON_PROXY_HOSTS_SEPARATOR
from urlexec.core.logging import get_logger


logger = get_logger(__name__)


def _extract_host(url: str) -> str:
    """Return the host part of ``url`` as written, or ``url`` itself if it
    cannot be parsed.

    The host keeps its case; IPv6 literals keep their brackets.
    """
    try:
        parts = urlsplit(url)
    except ValueError as e:
        logger.error("malformed_url", url=url, error=str(e))
        return url

    if not parts.scheme or not parts.netloc:
        logger.error("malformed_url", url=url, error="no host")
        return url

    hostport = parts.netloc.rpartition("@")[2]
    if hostport.startswith("["):
        return hostport[: hostport.find("]") + 1] or hostport
    return hostport.partition(":")[0]


def _wildcard_to_regex(pattern: str) -> re.Pattern[str]:
    # '*' matches any sequence, everything else is literal
    return re.compile(".*".join(re.escape(part) for part in pattern.split("*")))


def should_use_proxy(url: str, non_proxy_hosts: str | None) -> bool:
    """Check whether ``url`` should go through the proxy.

    Args:
        url: Target URL
        non_proxy_hosts: Pipe-separated host patterns, e.g.
            ``"localhost|*.internal.example.com"``

    Returns:
        False if the host of ``url`` matches one of the patterns, True otherwise
    """
    if not non_proxy_hosts or not non_proxy_hosts.strip():
        return True

    given_host = _extract_host(url)

    for pattern in non_proxy_hosts.split(NON_PROXY_HOSTS_SEPARATOR):
        if not pattern:
            continue
        if "*" in pattern:
            if _wildcard_to_regex(pattern).fullmatch(given_host):
                return False
        elif given_host == pattern:
            return False

    return True


def build_proxy_url(host: str, port: int) -> str:
    """Render the proxy URL for ``host`` and ``port``."""
    host = host.strip()
    if "://" in host:
        return f"{host.rstrip('/')}:{port}"
    return f"http://{host}:{port}"
