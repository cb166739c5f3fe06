"""Status command implementation."""

from __future__ import annotations

from argparse import Namespace
from typing import List

from sonarqube_scanner.bootstrap.executable import get_scanner_installation
from sonarqube_scanner.bootstrap.platform import find_target_os
from sonarqube_scanner.cli.commands import Command
from sonarqube_scanner.cli.exit_codes import EXIT_LAUNCHER_ERROR, EXIT_SUCCESS
from sonarqube_scanner.config.settings import LauncherSettings
from sonarqube_scanner.core.errors import UnsupportedPlatformError
from sonarqube_scanner.core.logging import get_logger

LOGGER = get_logger(__name__)


class StatusCommand(Command):
    """Shows the scanner version, platform and cache status."""

    def __init__(self, version: str):
        """Initialize StatusCommand.

        Args:
            version: Current sonarqube-scanner version string.
        """
        self._version = version

    @property
    def name(self) -> str:
        """Command identifier."""
        return "status"

    def execute(self, args: Namespace, extra_args: List[str]) -> int:
        """Execute the status command.

        Returns:
            EXIT_SUCCESS, or EXIT_LAUNCHER_ERROR on an unsupported platform.
        """
        settings = LauncherSettings.load()

        print(f"sonarqube-scanner version: {self._version}")
        print(f"SonarScanner version: {settings.version}")
        print(f"Mirror: {settings.mirror}")

        try:
            target_os = find_target_os()
            installation = get_scanner_installation(settings=settings)
        except UnsupportedPlatformError as e:
            LOGGER.error(str(e))
            return EXIT_LAUNCHER_ERROR

        print(f"Platform: {target_os}")
        print(f"Cache folder: {installation.install_folder}")

        executable = settings.scanner_bin or installation.executable
        if settings.scanner_bin:
            print(f"Executable (SONAR_SCANNER_BIN): {executable}")
        else:
            print(f"Executable: {executable}")

        if executable.exists():
            print("Status: installed")
        else:
            print(f"Status: not downloaded (will download {installation.archive_name} on first scan)")

        return EXIT_SUCCESS
