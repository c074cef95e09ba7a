"""Core building blocks: logging, errors and the HTTP client factory."""
