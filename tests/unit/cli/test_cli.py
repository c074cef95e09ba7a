"""Tests for the urlexec command line."""

from collections.abc import Iterator
from unittest.mock import MagicMock, patch

import httpx
import pytest
from pytest_httpx import HTTPXMock
from structlog.testing import capture_logs
from typer.testing import CliRunner

from urlexec._version import __version__
from urlexec.cli.main import app
from urlexec.core.http_client import HTTPClientFactory


URL = "http://example.com/status"


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def no_logging_setup() -> Iterator[MagicMock]:
    """Keep the CLI from reconfiguring global logging during tests."""
    with patch("urlexec.cli.main.setup_logging") as mock_setup:
        yield mock_setup


@pytest.mark.unit
class TestRequestCommand:
    """Test the request command."""

    def test_prints_body(self, runner: CliRunner, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=URL, text="hello world")

        result = runner.invoke(app, ["request", "GET", URL])

        assert result.exit_code == 0
        assert "hello world" in result.output

    def test_configures_logging_from_option(
        self,
        runner: CliRunner,
        httpx_mock: HTTPXMock,
        no_logging_setup: MagicMock,
    ) -> None:
        httpx_mock.add_response(url=URL, text="ok")

        result = runner.invoke(app, ["--log-level", "debug", "request", "GET", URL])

        assert result.exit_code == 0
        no_logging_setup.assert_called_once_with(level="DEBUG", fmt="auto")

    def test_unknown_method_exits_with_2(
        self, runner: CliRunner, httpx_mock: HTTPXMock
    ) -> None:
        result = runner.invoke(app, ["request", "FETCH", URL])

        assert result.exit_code == 2
        assert httpx_mock.get_requests() == []

    def test_transport_failure_exits_with_1(
        self, runner: CliRunner, httpx_mock: HTTPXMock
    ) -> None:
        httpx_mock.add_exception(httpx.ConnectError("connection refused"))

        result = runner.invoke(app, ["request", "GET", URL, "--timeout", "100"])

        assert result.exit_code == 1

    def test_proxy_options(self, runner: CliRunner, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=URL, text="ok")

        with patch.object(
            HTTPClientFactory, "create_client", wraps=HTTPClientFactory.create_client
        ) as spy:
            result = runner.invoke(
                app,
                [
                    "request",
                    "GET",
                    URL,
                    "--proxy-host",
                    "proxy.local",
                    "--proxy-port",
                    "3128",
                    "--proxy-user",
                    "bob",
                    "--proxy-password",
                    "pw",
                    "--timeout",
                    "1500",
                ],
            )

        assert result.exit_code == 0
        kwargs = spy.call_args.kwargs
        assert kwargs["timeout"] == 1.5
        assert kwargs["proxy"].url.host == "proxy.local"
        assert kwargs["proxy"].auth == ("bob", "pw")

    def test_proxy_settings_from_environment(
        self,
        runner: CliRunner,
        httpx_mock: HTTPXMock,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("PROXY__ENABLED", "true")
        monkeypatch.setenv("PROXY__HOST", "proxy.local")
        monkeypatch.setenv("PROXY__NON_PROXY_HOSTS", "example.com")
        httpx_mock.add_response(url=URL, text="ok")

        with patch.object(
            HTTPClientFactory, "create_client", wraps=HTTPClientFactory.create_client
        ) as spy:
            result = runner.invoke(app, ["request", "GET", URL])

        assert result.exit_code == 0
        assert spy.call_args.kwargs["proxy"] is None

    def test_loaded_settings_are_logged_without_password(
        self, runner: CliRunner, httpx_mock: HTTPXMock
    ) -> None:
        httpx_mock.add_response(url=URL, text="ok")

        with capture_logs() as logs:
            result = runner.invoke(
                app,
                ["request", "GET", URL, "--proxy-user", "bob", "--proxy-password", "hunter2"],
            )

        assert result.exit_code == 0
        loaded = [log for log in logs if log["event"] == "settings_loaded"]
        assert len(loaded) == 1
        assert loaded[0]["settings"]["proxy"]["user"] == "bob"
        assert "hunter2" not in str(logs)


@pytest.mark.unit
class TestCheckProxyCommand:
    """Test the check-proxy command."""

    def test_excluded_host(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app, ["check-proxy", "http://nas.lan/", "--non-proxy-hosts", "*.lan"]
        )

        assert result.exit_code == 0
        assert "direct" in result.output

    def test_not_excluded_host(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app, ["check-proxy", "http://example.com/", "--non-proxy-hosts", "*.lan"]
        )

        assert result.exit_code == 0
        assert "proxy" in result.output
        assert "direct" not in result.output

    def test_no_proxy_configured(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["check-proxy", "http://example.com/"])

        assert result.exit_code == 0
        assert "direct" in result.output

    def test_option_overrides_configured_list(
        self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("PROXY__ENABLED", "true")
        monkeypatch.setenv("PROXY__HOST", "proxy.local")
        monkeypatch.setenv("PROXY__NON_PROXY_HOSTS", "example.com")

        configured = runner.invoke(app, ["check-proxy", "http://example.com/"])
        overridden = runner.invoke(
            app, ["check-proxy", "http://example.com/", "--non-proxy-hosts", "*.lan"]
        )

        assert "direct" in configured.output
        assert "direct" not in overridden.output
        assert "proxy" in overridden.output

    def test_list_only_matches_mixed_case_host(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app,
            ["check-proxy", "http://Intranet.Local/", "--non-proxy-hosts", "Intranet.Local"],
        )

        assert result.exit_code == 0
        assert "direct" in result.output


@pytest.mark.unit
def test_version(runner: CliRunner) -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output
