"""CLI runner orchestration.

This module handles command dispatch and execution for the sonarqube-scanner CLI.
"""

from __future__ import annotations

from typing import Iterable, Optional

from importlib.metadata import version, PackageNotFoundError

from sonarqube_scanner.cli.arguments import build_parser
from sonarqube_scanner.cli.commands.scan import LocalScanCommand, ScanCommand
from sonarqube_scanner.cli.commands.status import StatusCommand
from sonarqube_scanner.cli.exit_codes import EXIT_INVALID_USAGE, EXIT_SUCCESS
from sonarqube_scanner.core.logging import configure_logging, get_logger

LOGGER = get_logger(__name__)


def get_version() -> str:
    """Get sonarqube-scanner version.

    Returns:
        Version string from package metadata or fallback.
    """
    try:
        return version("sonarqube-scanner")
    except PackageNotFoundError:
        # Fallback for editable installs that have not yet built metadata.
        from sonarqube_scanner import __version__
        return __version__


class CLIRunner:
    """Orchestrates CLI execution with subcommand dispatch."""

    def __init__(self) -> None:
        """Initialize CLIRunner with parser and commands."""
        self.parser = build_parser()
        self._version = get_version()
        self.scan_cmd = ScanCommand()
        self.local_cmd = LocalScanCommand()
        self.status_cmd = StatusCommand(version=self._version)

    def run(self, argv: Optional[Iterable[str]] = None) -> int:
        """Run the CLI.

        Args:
            argv: Command-line arguments (defaults to sys.argv).

        Returns:
            Exit code.
        """
        argv_list = list(argv) if argv is not None else None

        # Handle --help specially to return 0
        if argv_list and argv_list[0] in ("--help", "-h"):
            self.parser.print_help()
            return EXIT_SUCCESS

        args, extra_args = self.parser.parse_known_args(argv_list)

        # Configure logging as early as possible
        configure_logging(debug=args.debug, quiet=args.quiet)

        if args.version:
            print(self._version)
            return EXIT_SUCCESS

        command = getattr(args, "command", None)

        if command == "scan":
            return self.scan_cmd.execute(args, extra_args)

        if extra_args and command != "local":
            LOGGER.error(f"Unrecognized arguments: {' '.join(extra_args)}")
            return EXIT_INVALID_USAGE

        if command == "local":
            return self.local_cmd.execute(args, extra_args)
        elif command == "status":
            return self.status_cmd.execute(args, extra_args)
        else:
            # No command specified - show help
            self.parser.print_help()
            return EXIT_SUCCESS
