"""Configuration module for urlexec."""

from .core import HTTPSettings, LoggingSettings
from .proxy import ProxySettings
from .settings import Settings, get_settings


__all__ = ["HTTPSettings", "LoggingSettings", "ProxySettings", "Settings", "get_settings"]
