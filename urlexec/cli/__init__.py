"""Command line interface for urlexec."""
