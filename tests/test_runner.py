"""Tests for the command runner."""
import io
import subprocess
from unittest.mock import MagicMock, patch

import pytest
from rich.console import Console

from lampfm.core.errors import CommandError
from lampfm.core.logger import setup_logging
from lampfm.core.runner import CommandRunner, render


def completed(returncode=0, stdout="", stderr=""):
    return MagicMock(returncode=returncode, stdout=stdout, stderr=stderr)


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def runner(output):
    return CommandRunner(console=Console(file=output, width=200))


@pytest.fixture
def dry_runner(output):
    return CommandRunner(dry_run=True, console=Console(file=output, width=200))


class TestRun:

    def test_runs_command(self, runner):
        with patch("lampfm.core.runner.subprocess.run", return_value=completed(stdout="ok")) as run:
            result = runner.run(["systemctl", "start", "apache2"])

        assert result.ok
        assert result.stdout == "ok"
        assert run.call_args[0][0] == ["systemctl", "start", "apache2"]

    def test_nonzero_raises(self, runner):
        with patch("lampfm.core.runner.subprocess.run",
                   return_value=completed(returncode=100, stderr="E: broken")):
            with pytest.raises(CommandError) as exc_info:
                runner.run(["apt-get", "install", "-y", "nope"])

        assert exc_info.value.returncode == 100
        assert "E: broken" in str(exc_info.value)

    def test_nonzero_without_check(self, runner):
        with patch("lampfm.core.runner.subprocess.run", return_value=completed(returncode=3)):
            result = runner.query(["systemctl", "is-active", "mysql"])
        assert not result.ok

    def test_missing_program(self, runner):
        with patch("lampfm.core.runner.subprocess.run", side_effect=FileNotFoundError()):
            with pytest.raises(CommandError) as exc_info:
                runner.run(["a2ensite", "x.conf"])
        assert exc_info.value.returncode == 127

    def test_timeout(self, runner):
        with patch("lampfm.core.runner.subprocess.run",
                   side_effect=subprocess.TimeoutExpired(["apt-get"], 5)):
            with pytest.raises(CommandError, match="timed out"):
                runner.run(["apt-get", "update"], timeout=5)

    def test_extra_env_merged(self, runner, monkeypatch):
        monkeypatch.setenv("PATH_MARKER", "1")
        with patch("lampfm.core.runner.subprocess.run", return_value=completed()) as run:
            runner.run(["apt-get", "upgrade"], env={"DEBIAN_FRONTEND": "noninteractive"})

        env = run.call_args[1]["env"]
        assert env["DEBIAN_FRONTEND"] == "noninteractive"
        assert env["PATH_MARKER"] == "1"


class TestDryRun:

    def test_mutating_command_not_executed(self, dry_runner, output):
        with patch("lampfm.core.runner.subprocess.run") as run:
            result = dry_runner.run(["apt-get", "install", "-y", "-qq", "php"])

        run.assert_not_called()
        assert result.ok
        assert "[DRY-RUN] apt-get install -y -qq php" in output.getvalue()

    def test_queries_still_run(self, dry_runner):
        with patch("lampfm.core.runner.subprocess.run", return_value=completed()) as run:
            dry_runner.query(["dpkg", "-s", "php"])
        run.assert_called_once()

    def test_dry_run_logged(self, dry_runner, tmp_path):
        log_file = tmp_path / "lampfm.log"
        setup_logging(str(log_file))
        dry_runner.shell("curl -fsSL https://example.test/setup | bash -")
        assert "[DRY-RUN] bash -c 'curl -fsSL https://example.test/setup | bash -'" in log_file.read_text()

    def test_announce_logs_running(self, runner, tmp_path):
        log_file = tmp_path / "lampfm.log"
        setup_logging(str(log_file))
        assert runner.announce(["systemctl", "reload", "apache2"]) is False
        assert "[INFO] Running: systemctl reload apache2" in log_file.read_text()


def test_render_quotes_arguments():
    assert render(["ufw", "allow", "WWW Full"]) == "ufw allow 'WWW Full'"
    assert render("write /etc/x") == "write /etc/x"
