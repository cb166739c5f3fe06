"""Platform detection for the SonarScanner distribution.

Determines which platform-specific scanner archive to download.
"""

from __future__ import annotations

import os
import sys
from typing import Mapping, Optional, Tuple

from sonarqube_scanner.config.settings import TARGET_OS_ENV
from sonarqube_scanner.core.errors import UnsupportedPlatformError

# Platforms SonarScanner CLI archives are published for
SUPPORTED_PLATFORMS = ("windows", "linux", "macosx", "universal")

# OS identity prefixes (sys.platform) mapped to scanner platforms
_OS_PREFIXES: Tuple[Tuple[str, str], ...] = (
    ("win", "windows"),
    ("linux", "linux"),
    ("darwin", "macosx"),
)


def host_identity() -> str:
    """Return the raw identity of the running OS (``sys.platform``)."""
    return sys.platform


def is_windows(identity: Optional[str] = None) -> bool:
    """Check whether the host (or ``identity``) is Windows."""
    return (host_identity() if identity is None else identity).startswith("win")


def map_os_identity(identity: str) -> str:
    """Map a raw OS identity to a scanner platform.

    Unknown identities are returned unchanged.
    """
    for prefix, target in _OS_PREFIXES:
        if identity.startswith(prefix):
            return target
    return identity


def validate_platform(platform: str) -> str:
    """Return ``platform`` if supported.

    Raises:
        UnsupportedPlatformError: If the platform is not supported.
    """
    if platform not in SUPPORTED_PLATFORMS:
        raise UnsupportedPlatformError(platform)
    return platform


def find_target_os(
    env: Optional[Mapping[str, str]] = None,
    identity: Optional[str] = None,
) -> str:
    """Determine the platform of the scanner to run.

    A non-empty SONAR_SCANNER_TARGET_OS wins over the detected OS.

    Args:
        env: Environment to read the override from (defaults to os.environ).
        identity: Raw OS identity (defaults to sys.platform).

    Returns:
        One of SUPPORTED_PLATFORMS.

    Raises:
        UnsupportedPlatformError: If the resulting platform is not supported.
    """
    environ = os.environ if env is None else env
    override = environ.get(TARGET_OS_ENV)
    if override:
        return validate_platform(override)

    raw = host_identity() if identity is None else identity
    return validate_platform(map_os_identity(raw))


def get_platform_suffix(platform: str) -> str:
    """Return the archive suffix for ``platform`` ("" for universal, "-<platform>" otherwise).

    Raises:
        UnsupportedPlatformError: If the platform is not supported.
    """
    validate_platform(platform)
    if platform == "universal":
        return ""
    return f"-{platform}"
