"""Tests for CLI runner."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

from sonarqube_scanner.cli import main
from sonarqube_scanner.cli.commands.scan import exit_status
from sonarqube_scanner.cli.exit_codes import (
    EXIT_INVALID_USAGE,
    EXIT_LAUNCHER_ERROR,
    EXIT_SUCCESS,
)
from sonarqube_scanner.cli.runner import CLIRunner, get_version
from sonarqube_scanner.core.errors import (
    DownloadError,
    LocalExecutableNotFoundError,
    ScannerLaunchError,
    ScannerProcessError,
)

SCAN_MODULE = "sonarqube_scanner.cli.commands.scan"


class TestGetVersion:
    """Tests for get_version function."""

    def test_get_version_from_metadata(self) -> None:
        """Test version retrieval from package metadata."""
        with patch("sonarqube_scanner.cli.runner.version", return_value="1.2.3"):
            assert get_version() == "1.2.3"

    def test_get_version_fallback(self) -> None:
        """Test version fallback when metadata not available."""
        from importlib.metadata import PackageNotFoundError

        from sonarqube_scanner import __version__

        with patch(
            "sonarqube_scanner.cli.runner.version",
            side_effect=PackageNotFoundError("not found"),
        ):
            assert get_version() == __version__


class TestCLIRunner:
    """Tests for CLIRunner class."""

    def test_initialization(self) -> None:
        runner = CLIRunner()
        assert runner.parser is not None
        assert runner.scan_cmd.name == "scan"
        assert runner.local_cmd.name == "local"
        assert runner.status_cmd.name == "status"

    def test_run_help(self, capsys) -> None:
        result = CLIRunner().run(["--help"])

        assert result == EXIT_SUCCESS
        assert "usage:" in capsys.readouterr().out.lower()

    def test_run_version(self, capsys) -> None:
        result = CLIRunner().run(["--version"])

        assert result == EXIT_SUCCESS
        assert capsys.readouterr().out.strip()

    def test_run_no_command(self, capsys) -> None:
        result = CLIRunner().run([])

        assert result == EXIT_SUCCESS
        assert "usage:" in capsys.readouterr().out.lower()

    def test_unknown_arguments_without_scan(self) -> None:
        assert CLIRunner().run(["status", "--bogus"]) == EXIT_INVALID_USAGE


class TestScanCommand:
    """Tests for the scan subcommand."""

    def test_forwards_scanner_arguments(self) -> None:
        with patch(f"{SCAN_MODULE}.scan_cli") as mock_scan:
            result = CLIRunner().run(["scan", "-Dsonar.projectKey=demo", "-X"])

        assert result == EXIT_SUCCESS
        mock_scan.assert_called_once_with(["-Dsonar.projectKey=demo", "-X"], {})

    def test_strips_separator(self) -> None:
        with patch(f"{SCAN_MODULE}.scan_cli") as mock_scan:
            CLIRunner().run(["scan", "--", "-h"])

        mock_scan.assert_called_once_with(["-h"], {})

    def test_scanner_exit_status_is_returned(self) -> None:
        with patch(f"{SCAN_MODULE}.scan_cli", side_effect=ScannerProcessError(7, "sonar-scanner")):
            assert CLIRunner().run(["scan"]) == 7

    def test_scanner_killed_by_signal(self) -> None:
        with patch(f"{SCAN_MODULE}.scan_cli", side_effect=ScannerProcessError(-15, "sonar-scanner")):
            assert CLIRunner().run(["scan"]) == 143

    def test_launcher_error(self) -> None:
        with patch(f"{SCAN_MODULE}.scan_cli", side_effect=DownloadError("offline")):
            assert CLIRunner().run(["scan"]) == EXIT_LAUNCHER_ERROR

    def test_scanner_could_not_start(self) -> None:
        with patch(f"{SCAN_MODULE}.scan_cli", side_effect=ScannerLaunchError("sonar-scanner", "missing")):
            assert CLIRunner().run(["scan"]) == EXIT_LAUNCHER_ERROR

    def test_exit_status(self) -> None:
        assert exit_status(0) == 0
        assert exit_status(3) == 3
        assert exit_status(-9) == 137

    def test_main_entrypoint(self) -> None:
        with patch(f"{SCAN_MODULE}.scan_cli"):
            assert main(["scan"]) == EXIT_SUCCESS


class TestLocalCommand:
    """Tests for the local subcommand."""

    def test_success(self) -> None:
        with patch(f"{SCAN_MODULE}.scan_with_local_scanner") as mock_scan:
            assert CLIRunner().run(["local"]) == EXIT_SUCCESS
        mock_scan.assert_called_once_with({})

    def test_not_found(self) -> None:
        with patch(
            f"{SCAN_MODULE}.scan_with_local_scanner",
            side_effect=LocalExecutableNotFoundError("sonar-scanner"),
        ):
            assert CLIRunner().run(["local"]) == EXIT_LAUNCHER_ERROR

    def test_scanner_killed_by_signal(self) -> None:
        with patch(
            f"{SCAN_MODULE}.scan_with_local_scanner",
            side_effect=ScannerProcessError(-15, "sonar-scanner"),
        ):
            assert CLIRunner().run(["local"]) == 143

    def test_rejects_extra_arguments(self) -> None:
        with patch(f"{SCAN_MODULE}.scan_with_local_scanner") as mock_scan:
            assert CLIRunner().run(["local", "-X"]) == EXIT_INVALID_USAGE
        mock_scan.assert_not_called()


class TestStatusCommand:
    """Tests for the status subcommand."""

    def test_not_downloaded(self, tmp_path: Path, monkeypatch, capsys) -> None:
        monkeypatch.setenv("SONAR_BINARY_CACHE", str(tmp_path))
        monkeypatch.setenv("SONAR_SCANNER_TARGET_OS", "linux")

        result = CLIRunner().run(["status"])

        out = capsys.readouterr().out
        assert result == EXIT_SUCCESS
        assert "Platform: linux" in out
        assert "SonarScanner version: 4.5.0.2216" in out
        assert str(tmp_path / ".sonar" / "native-sonar-scanner") in out
        assert "not downloaded" in out
        assert "sonar-scanner-cli-4.5.0.2216-linux.zip" in out

    def test_installed(self, tmp_path: Path, monkeypatch, capsys) -> None:
        scanner = tmp_path / "sonar-scanner"
        scanner.write_text("#!/bin/sh\n")
        monkeypatch.setenv("SONAR_SCANNER_BIN", str(scanner))
        monkeypatch.setenv("SONAR_SCANNER_TARGET_OS", "universal")

        result = CLIRunner().run(["status"])

        out = capsys.readouterr().out
        assert result == EXIT_SUCCESS
        assert "Status: installed" in out
        assert "SONAR_SCANNER_BIN" in out

    def test_unsupported_platform(self, monkeypatch) -> None:
        monkeypatch.setenv("SONAR_SCANNER_TARGET_OS", "amiga")
        assert CLIRunner().run(["status"]) == EXIT_LAUNCHER_ERROR
