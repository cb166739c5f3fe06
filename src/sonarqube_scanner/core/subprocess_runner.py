"""Subprocess helpers for running the scanner.

The scanner writes straight to the parent's stdin/stdout/stderr, so nothing
is captured here apart from the exit status.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from sonarqube_scanner.core.errors import ScannerLaunchError, ScannerProcessError
from sonarqube_scanner.core.logging import get_logger

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class ExecOptions:
    """Options used to spawn the scanner process.

    Attributes:
        env: Complete environment for the child, including
            SONARQUBE_SCANNER_PARAMS.
        cwd: Working directory for the child (None keeps the current one).
    """

    env: Dict[str, str] = field(default_factory=dict)
    cwd: Optional[Path] = None


def run_scanner(
    command: Union[str, Path],
    args: Sequence[str],
    options: ExecOptions,
) -> subprocess.CompletedProcess:
    """Run the scanner with inherited stdio and wait for it to finish.

    Args:
        command: Executable to run (path or bare command name).
        args: Arguments appended after the command.
        options: Environment and working directory for the child.

    Returns:
        The completed process (return code 0).

    Raises:
        ScannerProcessError: If the scanner exits with a non-zero status.
        ScannerLaunchError: If the scanner cannot be started.
    """
    cmd: List[str] = [str(command), *args]
    LOGGER.debug(f"Executing: {cmd}")

    try:
        result = subprocess.run(
            cmd,
            env=options.env,
            cwd=str(options.cwd) if options.cwd is not None else None,
            check=False,
        )
    except OSError as e:
        raise ScannerLaunchError(str(command), str(e)) from e

    if result.returncode != 0:
        raise ScannerProcessError(result.returncode, str(command))

    return result


def probe_command(command: str, *args: str, timeout: int = 60) -> bool:
    """Return True if ``command`` can be executed and exits successfully."""
    try:
        result = subprocess.run(
            [command, *args],
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        LOGGER.debug(f"Probe of {command} failed: {e}")
        return False
    return result.returncode == 0
