"""Scan command implementations."""

from __future__ import annotations

from argparse import Namespace
from typing import List

from sonarqube_scanner.api import scan_cli, scan_with_local_scanner
from sonarqube_scanner.cli.commands import Command
from sonarqube_scanner.cli.exit_codes import (
    EXIT_INVALID_USAGE,
    EXIT_LAUNCHER_ERROR,
    EXIT_SUCCESS,
)
from sonarqube_scanner.core.errors import ScannerProcessError, SonarScannerError
from sonarqube_scanner.core.logging import get_logger

LOGGER = get_logger(__name__)


def exit_status(returncode: int) -> int:
    """Map a scanner return code to a process exit status (signals become 128 + signal)."""
    if returncode < 0:
        return 128 - returncode
    return returncode


def _strip_separator(extra_args: List[str]) -> List[str]:
    if extra_args and extra_args[0] == "--":
        return extra_args[1:]
    return extra_args


class ScanCommand(Command):
    """Runs an analysis with the cached (or downloaded) scanner."""

    @property
    def name(self) -> str:
        """Command identifier."""
        return "scan"

    def execute(self, args: Namespace, extra_args: List[str]) -> int:
        """Execute the scan command.

        Args:
            args: Parsed command-line arguments.
            extra_args: Arguments forwarded to the scanner.

        Returns:
            0 on success, the scanner's exit status if it fails, or
            EXIT_LAUNCHER_ERROR if the scanner could not be run.
        """
        try:
            scan_cli(_strip_separator(extra_args), {})
        except ScannerProcessError as e:
            LOGGER.error(str(e))
            return exit_status(e.returncode)
        except SonarScannerError as e:
            LOGGER.error(str(e))
            return EXIT_LAUNCHER_ERROR
        return EXIT_SUCCESS


class LocalScanCommand(Command):
    """Runs an analysis with a scanner installed on the PATH."""

    @property
    def name(self) -> str:
        """Command identifier."""
        return "local"

    def execute(self, args: Namespace, extra_args: List[str]) -> int:
        if extra_args:
            LOGGER.error(f"Unexpected arguments for 'local': {' '.join(extra_args)}")
            return EXIT_INVALID_USAGE
        try:
            scan_with_local_scanner({})
        except ScannerProcessError as e:
            LOGGER.error(str(e))
            return exit_status(e.returncode)
        except SonarScannerError as e:
            LOGGER.error(str(e))
            return EXIT_LAUNCHER_ERROR
        return EXIT_SUCCESS
