"""Configuration constants for urlexec."""

# Proxy Constants
DEFAULT_PROXY_PORT = 80
NON_PROXY_HOSTS_SEPARATOR = "|"

# HTTP Client Constants
DEFAULT_TIMEOUT_MS = 5000
DEFAULT_RETRIES = 3  # connection attempts retried by the transport

# Java-style system property names understood by ProxySettings.from_properties
PROPERTY_PROXY_SET = "http.proxySet"
PROPERTY_PROXY_HOST = "http.proxyHost"
PROPERTY_PROXY_PORT = "http.proxyPort"
PROPERTY_PROXY_USER = "http.proxyUser"
PROPERTY_PROXY_PASSWORD = "http.proxyPassword"
PROPERTY_NON_PROXY_HOSTS = "http.nonProxyHosts"

# Config file lookup
CONFIG_FILE_NAME = "urlexec.toml"
CONFIG_FILE_ENV = "CONFIG_FILE"
