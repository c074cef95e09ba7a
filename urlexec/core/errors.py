"""Custom exceptions for urlexec."""


class UrlExecError(Exception):
    """Base exception for all urlexec errors."""

    pass


class UnknownHttpMethodError(UrlExecError, ValueError):
    """Raised when a method name is none of GET, PUT, POST or DELETE."""

    def __init__(self, method_name: str) -> None:
        super().__init__(f"given http method '{method_name}' is unknown")
        self.method_name = method_name


class ConfigurationError(UrlExecError):
    """Raised when configuration loading or validation fails."""

    pass
