"""Resolution of the SonarScanner executable.

Two modes are supported:

- ``resolve_executable_path``: use the cached scanner for the target
  platform, downloading it from the mirror first if it is missing.
- ``resolve_local_executable``: use a ``sonar-scanner`` found on the PATH,
  never downloading anything.
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, Optional

from sonarqube_scanner.bootstrap.download import download_and_extract
from sonarqube_scanner.bootstrap.paths import (
    SCANNER_COMMAND,
    WINDOWS_EXTENSION,
    ScannerInstallation,
    install_folder_for,
)
from sonarqube_scanner.bootstrap.platform import (
    find_target_os,
    get_platform_suffix,
    is_windows,
)
from sonarqube_scanner.config.settings import LauncherSettings
from sonarqube_scanner.core.errors import DownloadError, LocalExecutableNotFoundError
from sonarqube_scanner.core.logging import get_logger
from sonarqube_scanner.core.subprocess_runner import probe_command

LOGGER = get_logger(__name__)

INSTALL_DOC_URL = "https://redirect.sonarsource.com/doc/install-configure-scanner.html"


def get_scanner_installation(
    env: Optional[Mapping[str, str]] = None,
    project_base_dir: Optional[Path] = None,
    settings: Optional[LauncherSettings] = None,
) -> ScannerInstallation:
    """Describe where the scanner for the target platform lives in the cache.

    Raises:
        UnsupportedPlatformError: If the target platform is not supported.
    """
    settings = settings or LauncherSettings.load(env, project_base_dir)
    target_os = find_target_os(env)
    return ScannerInstallation(
        install_folder=install_folder_for(settings.binary_cache),
        version=settings.version,
        platform_suffix=get_platform_suffix(target_os),
        binary_extension=WINDOWS_EXTENSION if is_windows() else "",
    )


def resolve_executable_path(
    env: Optional[Mapping[str, str]] = None,
    project_base_dir: Optional[Path] = None,
) -> Path:
    """Return the scanner executable, downloading the scanner if needed.

    SONAR_SCANNER_BIN, when set, is used as the executable path. Otherwise
    the executable is looked up in the cache and, when absent, the archive
    is downloaded from the mirror and extracted into the cache.

    Raises:
        UnsupportedPlatformError: If the target platform is not supported.
        DownloadError: If the scanner is missing and cannot be downloaded.
    """
    settings = LauncherSettings.load(env, project_base_dir)
    target_os = find_target_os(env)
    installation = get_scanner_installation(env, project_base_dir, settings=settings)

    # Absolute: the scanner may run from a different working directory
    executable = (settings.scanner_bin or installation.executable).absolute()
    LOGGER.info(f"Checking if executable exists: {executable}")
    if executable.exists():
        LOGGER.info("Platform binaries for SonarScanner found. Using it.")
        return executable
    LOGGER.info(f'Could not find executable in "{installation.install_folder}".')

    LOGGER.info("Proceed with download of the platform binaries for SonarScanner...")
    LOGGER.info(f"Creating {installation.install_folder}")
    installation.install_folder.mkdir(parents=True, exist_ok=True)

    url = installation.download_url(settings.mirror)
    LOGGER.info(f"Downloading from {url}")
    LOGGER.info(f"(executable will be saved in cache folder: {installation.install_folder})")

    try:
        download_and_extract(url, installation.install_folder)
        if not executable.exists():
            raise DownloadError(f"{executable} not found in the downloaded archive")
    except DownloadError as e:
        LOGGER.error(f"ERROR: impossible to download and extract binary: {e}")
        LOGGER.error(f"       SonarScanner binaries probably don't exist for your OS ({target_os}).")
        LOGGER.error(
            "       In such situation, the best solution is to install the standard SonarScanner (requires a JVM)."
        )
        LOGGER.error(f"       Check it out at {INSTALL_DOC_URL}")
        raise DownloadError(
            f"Impossible to download and extract binary: {e}. "
            f"SonarScanner binaries probably don't exist for your OS ({target_os}); "
            f"install the standard SonarScanner (requires a JVM), see {INSTALL_DOC_URL}"
        ) from e

    LOGGER.debug(f"Resolved executable: {executable}")
    return executable


def resolve_local_executable() -> str:
    """Return the name of a SonarScanner installed on the PATH.

    Raises:
        LocalExecutableNotFoundError: If ``sonar-scanner -v`` cannot be run.
    """
    command = SCANNER_COMMAND
    if is_windows():
        command += WINDOWS_EXTENSION

    LOGGER.info("Trying to find a local install of the SonarScanner")
    if not probe_command(command, "-v"):
        raise LocalExecutableNotFoundError(command)

    LOGGER.info("Local install of SonarScanner found. Using it.")
    return command
