"""Main entry point for the urlexec command line."""

from pathlib import Path
from typing import Any

import typer

from urlexec._version import __version__
from urlexec.cli.helpers import error, get_rich_toolkit
from urlexec.config.settings import ConfigurationError, Settings
from urlexec.core.errors import UnknownHttpMethodError
from urlexec.core.logging import get_logger, setup_logging
from urlexec.http.executor import UrlExecutor
from urlexec.http.proxy import should_use_proxy


app = typer.Typer(
    rich_markup_mode="rich",
    add_completion=False,
    no_args_is_help=True,
    pretty_exceptions_enable=False,
)

logger = get_logger(__name__)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        toolkit = get_rich_toolkit()
        toolkit.print(f"urlexec {__version__}", tag="version")
        raise typer.Exit()


@app.callback()
def app_main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a TOML configuration file",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    ),
) -> None:
    """Execute single HTTP requests, optionally through a proxy."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config
    ctx.obj["log_level"] = log_level


def _load_settings(ctx: typer.Context, **overrides: Any) -> Settings:
    obj = ctx.obj or {}
    if obj.get("log_level"):
        overrides["logging"] = {"level": obj["log_level"]}
    try:
        settings = Settings.from_config(config_path=obj.get("config_path"), **overrides)
    except (ConfigurationError, ValueError) as e:
        get_rich_toolkit().print(error(f"Configuration error: {e}"), tag="error")
        raise typer.Exit(2) from e

    setup_logging(level=settings.logging.level, fmt=settings.logging.format)
    logger.debug("settings_loaded", settings=settings.model_dump_safe())
    return settings


@app.command()
def request(
    ctx: typer.Context,
    method: str = typer.Argument(..., help="GET, PUT, POST or DELETE"),
    url: str = typer.Argument(..., help="URL to execute"),
    timeout: int | None = typer.Option(
        None, "--timeout", "-t", help="Socket timeout in milliseconds"
    ),
    proxy_host: str | None = typer.Option(None, "--proxy-host", help="Proxy hostname"),
    proxy_port: str | None = typer.Option(None, "--proxy-port", help="Proxy port"),
    proxy_user: str | None = typer.Option(None, "--proxy-user", help="Proxy username"),
    proxy_password: str | None = typer.Option(
        None, "--proxy-password", help="Proxy password"
    ),
    non_proxy_hosts: str | None = typer.Option(
        None,
        "--non-proxy-hosts",
        help="Pipe-separated hosts that bypass the proxy, e.g. 'localhost|*.lan'",
    ),
) -> None:
    """Execute METHOD against URL and print the response body."""
    proxy_overrides: dict[str, Any] = {
        "host": proxy_host,
        "port": proxy_port,
        "user": proxy_user,
        "password": proxy_password,
        "non_proxy_hosts": non_proxy_hosts,
    }
    if proxy_host:
        proxy_overrides["enabled"] = True

    settings = _load_settings(
        ctx,
        proxy=proxy_overrides,
        http={"timeout_ms": timeout},
    )

    executor = UrlExecutor(
        settings.proxy,
        timeout_ms=settings.http.timeout_ms,
        retries=settings.http.retries,
    )

    try:
        body = executor.execute(method, url)
    except UnknownHttpMethodError as e:
        get_rich_toolkit().print(error(str(e)), tag="error")
        raise typer.Exit(2) from e

    if body is None:
        get_rich_toolkit().print(error(f"No usable response from {url}"), tag="error")
        raise typer.Exit(1)

    typer.echo(body)


@app.command("check-proxy")
def check_proxy(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="Target URL"),
    non_proxy_hosts: str | None = typer.Option(
        None,
        "--non-proxy-hosts",
        help="Pipe-separated hosts that bypass the proxy (defaults to the configured list)",
    ),
) -> None:
    """Show whether a request to URL would be routed through the proxy."""
    settings = _load_settings(ctx, proxy={"non_proxy_hosts": non_proxy_hosts})
    toolkit = get_rich_toolkit()

    if non_proxy_hosts is not None and not settings.proxy.is_active:
        # no proxy configured, evaluate the exclusion list on its own
        use_proxy = should_use_proxy(url, non_proxy_hosts)
    else:
        use_proxy = UrlExecutor(settings.proxy).should_use_proxy(url)

    if use_proxy:
        toolkit.print(f"{url} -> proxy", tag="proxy")
    else:
        toolkit.print(f"{url} -> direct", tag="direct")


def main() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    main()
