"""Tests for Click CLI commands."""

import json
from unittest.mock import patch

import httpx
import pytest
from click.testing import CliRunner

from nexus_sync.cli import cli, main
from nexus_sync.models import SyncResult, SyncStatus, TransferOutcome
from nexus_sync.utils.session import create_session_with_retry

SOURCE = ["--from-url", "http://source.example.com:8081", "--from-repo", "maven-releases"]
DESTINATION = ["--to-url", "http://dest.example.com:8081", "--to-repo", "maven-mirror"]


@pytest.fixture
def runner():
    """Click test runner."""
    return CliRunner()


@pytest.fixture
def coordinator_class(mocker):
    """Patched RunCoordinator returning a completed result by default."""
    mock_class = mocker.patch("nexus_sync.cli.sync.RunCoordinator")
    mock_class.return_value.run.return_value = SyncResult(status=SyncStatus.COMPLETED)
    return mock_class


def _context(coordinator_class):
    return coordinator_class.call_args.args[0]


class TestCLIHelp:
    """Test CLI help commands."""

    def test_main_help(self, runner):
        """Test main CLI help output."""
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "nexus-sync" in result.output
        assert "sync" in result.output
        assert "--config" in result.output
        assert "--debug" in result.output
        assert "--max-workers" in result.output

    def test_main_help_short_flag(self, runner):
        """Test main CLI help output with -h flag."""
        result = runner.invoke(cli, ["-h"])
        assert result.exit_code == 0
        assert "-h, --help" in result.output

    def test_sync_help(self, runner):
        """Test sync command help output."""
        result = runner.invoke(cli, ["sync", "-h"])
        assert result.exit_code == 0
        for option in ("--from-url", "--from-user", "--from-pass", "--from-repo", "--to-url", "--to-repo"):
            assert option in result.output
        assert "--dry-run" in result.output
        assert "--results-json" in result.output
        assert "--insecure" in result.output

    def test_version(self, runner):
        """Test version flag."""
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "1.0.0" in result.output


class TestCLIConfiguration:
    """Test endpoint resolution and validation."""

    def test_defaults_are_a_noop(self, runner, coordinator_class, caplog):
        """Test the built-in defaults point both sides at the same repository."""
        result = runner.invoke(cli, ["sync"])

        assert result.exit_code == 1
        assert "The same 'from' and 'to' (http://localhost:8081#maven-releases), no-op" in caplog.text
        coordinator_class.assert_not_called()

    def test_defaults_fill_missing_flags(self, runner, coordinator_class):
        """Test unspecified options fall back to the built-in defaults."""
        result = runner.invoke(cli, ["sync", "--to-repo", "maven-mirror"])

        assert result.exit_code == 0
        context = _context(coordinator_class)
        assert context.source.url == "http://localhost:8081"
        assert context.source.user == "admin"
        assert context.source.password == "admin123"
        assert context.destination.repository == "maven-mirror"
        assert context.max_workers == 16

    def test_underscore_options(self, runner, coordinator_class):
        """Test --from_url is accepted as --from-url."""
        result = runner.invoke(
            cli,
            ["--max_workers", "3", "sync", "--from_url", "http://a:8081", "--to_url", "http://b:8081", "--dry_run"],
        )

        assert result.exit_code == 0
        context = _context(coordinator_class)
        assert context.source.url == "http://a:8081"
        assert context.destination.url == "http://b:8081"
        assert context.max_workers == 3
        assert context.dry_run

    def test_config_file_precedence(self, runner, coordinator_class, tmp_path):
        """Test flags override the config file, which overrides defaults."""
        config = tmp_path / "nexus-sync.toml"
        config.write_text(
            '[from]\nurl = "https://a.example.com"\nuser = "reader"\npassword = "file-secret"\n'
            '[to]\nurl = "https://b.example.com"\nrepository = "mirror"\n',
            encoding="utf-8",
        )

        result = runner.invoke(cli, ["--config", str(config), "sync", "--from-user", "flag-user"])

        assert result.exit_code == 0
        context = _context(coordinator_class)
        assert context.source.url == "https://a.example.com"
        assert context.source.user == "flag-user"
        assert context.source.password == "file-secret"
        assert context.source.repository == "maven-releases"
        assert context.destination.url == "https://b.example.com"
        assert context.destination.repository == "mirror"
        assert context.destination.user == "admin"

    def test_invalid_config_file(self, runner, coordinator_class, tmp_path, caplog):
        """Test unparsable config files are reported as configuration errors."""
        config = tmp_path / "broken.toml"
        config.write_text("[from\n", encoding="utf-8")

        result = runner.invoke(cli, ["--config", str(config), "sync"])

        assert result.exit_code == 1
        assert "Configuration error" in caplog.text

    def test_invalid_url(self, runner, coordinator_class, caplog):
        """Test URLs without http(s) scheme are rejected before any request."""
        result = runner.invoke(cli, ["sync", "--from-url", "ftp://a", *DESTINATION])

        assert result.exit_code == 1
        assert "Invalid URL" in caplog.text
        coordinator_class.assert_not_called()

    def test_invalid_max_workers(self, runner):
        """Test worker count is validated by click."""
        result = runner.invoke(cli, ["--max-workers", "0", "sync"])
        assert result.exit_code == 2

    def test_insecure_and_timeout(self, runner, coordinator_class, mocker):
        """Test TLS and timeout settings reach the shared session."""
        create_session = mocker.patch(
            "nexus_sync.cli.sync.create_session_with_retry", wraps=create_session_with_retry
        )

        result = runner.invoke(cli, ["sync", *SOURCE, *DESTINATION, "--insecure", "--timeout", "42"])

        assert result.exit_code == 0
        kwargs = create_session.call_args.kwargs
        assert kwargs["verify"] is False
        assert kwargs["timeout"] == 42.0
        assert _context(coordinator_class).verify_ssl is False


class TestCLIExitCodes:
    """Test sync exit status."""

    def test_item_failures_exit_zero(self, runner, coordinator_class):
        """Test per-item failures don't fail the command."""
        coordinator_class.return_value.run.return_value = SyncResult(
            status=SyncStatus.COMPLETED,
            diff_paths=["a"],
            outcomes={"a": TransferOutcome.failure("a", 3, "boom")},
        )

        result = runner.invoke(cli, ["sync", *SOURCE, *DESTINATION])

        assert result.exit_code == 0

    @pytest.mark.parametrize("status", [SyncStatus.FAILED, SyncStatus.CANCELLED])
    def test_run_failure_exit_one(self, runner, coordinator_class, status):
        """Test failed or cancelled runs exit with 1."""
        coordinator_class.return_value.run.return_value = SyncResult(status=status, error="boom")

        result = runner.invoke(cli, ["sync", *SOURCE, *DESTINATION])

        assert result.exit_code == 1

    def test_unexpected_error_exit_one(self, runner, coordinator_class, caplog):
        """Test unexpected errors are logged and exit with 1."""
        coordinator_class.return_value.run.side_effect = RuntimeError("bug")

        result = runner.invoke(cli, ["sync", *SOURCE, *DESTINATION])

        assert result.exit_code == 1
        assert "Unexpected error during sync operation: bug" in caplog.text

    def test_results_json(self, runner, coordinator_class, tmp_path):
        """Test the result is written when requested."""
        coordinator_class.return_value.run.return_value = SyncResult(
            status=SyncStatus.COMPLETED, diff_paths=["a"], outcomes={"a": TransferOutcome.success("a", 1)}
        )
        output = tmp_path / "result.json"

        result = runner.invoke(cli, ["sync", *SOURCE, *DESTINATION, "--results-json", str(output)])

        assert result.exit_code == 0
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["transferred_count"] == 1

    def test_keyboard_interrupt(self):
        """Test a second interrupt exits with 130."""
        with patch("nexus_sync.cli.cli", side_effect=KeyboardInterrupt), pytest.raises(SystemExit) as exc_info:
            main()

        assert exc_info.value.code == 130


class TestCLIEndToEnd:
    """Test the sync command against mocked servers."""

    def test_sync_one_item(self, runner, httpx_mock, mock_listing, source_asset):
        """Test a missing item is copied and the command succeeds."""
        mock_listing("http://source.example.com:8081", [[source_asset("a.jar", "a" * 40)]])
        mock_listing("http://dest.example.com:8081", [[]])
        httpx_mock.get("http://source.example.com:8081/repository/maven-releases/a.jar").mock(
            return_value=httpx.Response(200, content=b"content")
        )
        received = {}

        def capture(request):
            received["body"] = request.read()
            return httpx.Response(201)

        upload = httpx_mock.put("http://dest.example.com:8081/repository/maven-mirror/a.jar").mock(side_effect=capture)

        result = runner.invoke(cli, ["sync", *SOURCE, *DESTINATION, "--to-user", "writer"])

        assert result.exit_code == 0
        assert upload.call_count == 1
        assert received["body"] == b"content"
