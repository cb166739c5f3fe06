"""Argument parser construction for the sonarqube-scanner CLI.

Subcommands:
- sonarqube-scanner scan   - Run an analysis, downloading the scanner if needed
- sonarqube-scanner local  - Run an analysis with a scanner found on the PATH
- sonarqube-scanner status - Show platform, version and cache information
"""

from __future__ import annotations

import argparse


def _add_global_options(parser: argparse.ArgumentParser) -> None:
    """Add global options available to all commands."""
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show sonarqube-scanner version and exit.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging.",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Reduce logging output to errors only.",
    )


def _build_scan_parser(subparsers: argparse._SubParsersAction) -> None:
    """Build the 'scan' subcommand parser."""
    subparsers.add_parser(
        "scan",
        help="Run an analysis with the SonarScanner for this platform.",
        description=(
            "Download the SonarScanner for this platform if it is not cached yet "
            "and run it. All further arguments (e.g. -Dsonar.projectKey=demo) are "
            "passed to the scanner unchanged."
        ),
        add_help=False,
    )


def _build_local_parser(subparsers: argparse._SubParsersAction) -> None:
    """Build the 'local' subcommand parser."""
    subparsers.add_parser(
        "local",
        help="Run an analysis with a SonarScanner installed on the PATH.",
        description=(
            "Run the sonar-scanner command found on the PATH. "
            "Nothing is downloaded."
        ),
    )


def _build_status_parser(subparsers: argparse._SubParsersAction) -> None:
    """Build the 'status' subcommand parser."""
    subparsers.add_parser(
        "status",
        help="Show platform, scanner version and cache status.",
        description=(
            "Display the target platform, the scanner version and mirror in use, "
            "and whether the scanner is already in the cache."
        ),
    )


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance with subcommands.
    """
    parser = argparse.ArgumentParser(
        prog="sonarqube-scanner",
        description="Download and run the SonarScanner CLI.",
        epilog=(
            "Examples:\n"
            "  sonarqube-scanner scan                             # Analyze the current directory\n"
            "  sonarqube-scanner scan -Dsonar.projectKey=demo     # Pass properties to the scanner\n"
            "  sonarqube-scanner local                            # Use sonar-scanner from the PATH\n"
            "  sonarqube-scanner status                           # Show cache status\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    _add_global_options(parser)

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        description="Available commands:",
        metavar="COMMAND",
    )

    _build_scan_parser(subparsers)
    _build_local_parser(subparsers)
    _build_status_parser(subparsers)

    return parser
