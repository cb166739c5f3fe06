"""CLI commands package.

This module provides the base Command class and exports all command implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from argparse import Namespace
from typing import List


class Command(ABC):
    """Base class for CLI commands.

    All CLI commands should inherit from this class and implement
    the execute method.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Command identifier."""

    @abstractmethod
    def execute(self, args: Namespace, extra_args: List[str]) -> int:
        """Execute the command.

        Args:
            args: Parsed command-line arguments.
            extra_args: Arguments not recognized by the CLI itself.

        Returns:
            Exit code (0 for success, non-zero for error).
        """


# ruff: noqa: E402
from sonarqube_scanner.cli.commands.scan import LocalScanCommand, ScanCommand
from sonarqube_scanner.cli.commands.status import StatusCommand

__all__ = [
    "Command",
    "LocalScanCommand",
    "ScanCommand",
    "StatusCommand",
]
