"""HTTP method names and the request factory."""

from enum import Enum

import httpx

from urlexec.core.errors import UnknownHttpMethodError


class HttpMethod(str, Enum):
    """The closed set of methods urlexec can execute."""

    GET = "GET"
    PUT = "PUT"
    POST = "POST"
    DELETE = "DELETE"

    @classmethod
    def parse(cls, method_name: str) -> "HttpMethod":
        """Map a method name to its member.

        Matching is exact and case-sensitive: ``"get"`` is rejected.

        Raises:
            UnknownHttpMethodError: if the name is not GET, PUT, POST or DELETE
        """
        match method_name:
            case "GET":
                return cls.GET
            case "PUT":
                return cls.PUT
            case "POST":
                return cls.POST
            case "DELETE":
                return cls.DELETE
            case _:
                raise UnknownHttpMethodError(method_name)


def create_request(method_name: str | HttpMethod, url: str) -> httpx.Request:
    """Create the request object for ``method_name`` bound to ``url``.

    Raises:
        UnknownHttpMethodError: if the method name is unknown
    """
    if isinstance(method_name, HttpMethod):
        method = method_name
    else:
        method = HttpMethod.parse(method_name)
    return httpx.Request(method.value, url)
