"""urlexec - execute single HTTP requests through an optional proxy."""

from ._version import __version__
from .http.credentials import Credentials, extract_credentials
from .http.executor import UrlExecutor, execute_url, execute_url_with_proxy
from .http.methods import HttpMethod, create_request
from .http.proxy import should_use_proxy


__all__ = [
    "__version__",
    "Credentials",
    "HttpMethod",
    "UrlExecutor",
    "create_request",
    "execute_url",
    "execute_url_with_proxy",
    "extract_credentials",
    "should_use_proxy",
]
