"""Programmatic entry points for running an analysis."""

from __future__ import annotations

from pathlib import Path
from typing import List, Mapping, Optional, Sequence, Union

from sonarqube_scanner import __version__
from sonarqube_scanner.bootstrap.executable import (
    resolve_executable_path,
    resolve_local_executable,
)
from sonarqube_scanner.config.params import ParamsLike, prepare_exec_environment
from sonarqube_scanner.config.settings import get_forced_scanner_version
from sonarqube_scanner.core.logging import get_logger
from sonarqube_scanner.core.subprocess_runner import ExecOptions, run_scanner

LOGGER = get_logger(__name__)

CLIENT_NAME = "ScannerNpm"

# Scanners older than this do not understand the --from identity flag
MIN_VERSION_WITH_IDENTITY = "4.4"


def from_param(
    env: Optional[Mapping[str, str]] = None,
    project_base_dir: Optional[Path] = None,
) -> List[str]:
    """Return the client identity arguments passed to the scanner.

    The flag is left out when an older scanner version is forced. Versions
    are compared as strings.
    """
    forced_version = get_forced_scanner_version(env, project_base_dir)
    if forced_version and forced_version < MIN_VERSION_WITH_IDENTITY:
        return []
    return [f"--from={CLIENT_NAME}/{__version__}"]


def _execute(command: Union[str, Path], args: Sequence[str], options: ExecOptions) -> None:
    run_scanner(command, args, options)
    LOGGER.info("Analysis finished.")


def scan(params: ParamsLike = None, cwd: Optional[Path] = None) -> None:
    """Run an analysis with the downloaded scanner.

    Args:
        params: Caller parameters (``server_url``, ``token``, ``options``).
        cwd: Project directory (defaults to the current directory).

    Raises:
        SonarScannerError: If the analysis cannot be run or the scanner fails.
    """
    scan_cli([], params, cwd=cwd)


def scan_cli(
    cli_args: Sequence[str],
    params: ParamsLike = None,
    cwd: Optional[Path] = None,
) -> None:
    """Run an analysis with the downloaded scanner, forwarding ``cli_args``.

    Raises:
        MalformedEnvironmentParamsError: If SONARQUBE_SCANNER_PARAMS is malformed.
        UnsupportedPlatformError: If the platform is not supported.
        DownloadError: If the scanner cannot be downloaded.
        ScannerProcessError: If the scanner exits with a non-zero status.
    """
    LOGGER.info("Starting analysis...")

    options = prepare_exec_environment(params, cwd=cwd)
    executable = resolve_executable_path(project_base_dir=cwd)

    _execute(executable, from_param(project_base_dir=cwd) + list(cli_args), options)


def scan_with_local_scanner(params: ParamsLike = None, cwd: Optional[Path] = None) -> None:
    """Run an analysis with a SonarScanner already installed on the PATH.

    Raises:
        MalformedEnvironmentParamsError: If SONARQUBE_SCANNER_PARAMS is malformed.
        LocalExecutableNotFoundError: If no scanner is found on the PATH.
        ScannerProcessError: If the scanner exits with a non-zero status.
    """
    LOGGER.info("Starting analysis (with local install of the SonarScanner)...")

    options = prepare_exec_environment(params, cwd=cwd)
    command = resolve_local_executable()

    _execute(command, from_param(project_base_dir=cwd), options)
