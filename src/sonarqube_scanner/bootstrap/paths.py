"""Path management for the SonarScanner binary cache.

Layout:
    <cache base>/.sonar/native-sonar-scanner/
        sonar-scanner-<version><suffix>/
            bin/sonar-scanner[.bat]
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from sonarqube_scanner.config.settings import LauncherSettings

CACHE_SUBDIRS = (".sonar", "native-sonar-scanner")
SCANNER_COMMAND = "sonar-scanner"
WINDOWS_EXTENSION = ".bat"


def get_install_folder_path(
    env: Optional[Mapping[str, str]] = None,
    project_base_dir: Optional[Path] = None,
) -> Path:
    """Get the folder holding downloaded scanners.

    Resolution order for the base folder:
    1. SONAR_BINARY_CACHE environment variable
    2. ``binary-cache`` in [tool.sonarqube-scanner] of pyproject.toml
    3. the user's home directory

    Returns:
        ``<base>/.sonar/native-sonar-scanner``
    """
    settings = LauncherSettings.load(env, project_base_dir)
    return install_folder_for(settings.binary_cache)


def install_folder_for(binary_cache: Path) -> Path:
    """Return the install folder under a cache base directory."""
    return binary_cache.joinpath(*CACHE_SUBDIRS)


@dataclass(frozen=True)
class ScannerInstallation:
    """Location of one scanner version/platform inside the cache.

    Attributes:
        install_folder: Cache folder (``.../.sonar/native-sonar-scanner``).
        version: Scanner version.
        platform_suffix: "" or "-<platform>".
        binary_extension: ".bat" on Windows hosts, "" elsewhere.
    """

    install_folder: Path
    version: str
    platform_suffix: str
    binary_extension: str = ""

    @property
    def dirname(self) -> str:
        """Name of the folder the archive extracts to."""
        return f"sonar-scanner-{self.version}{self.platform_suffix}"

    @property
    def home(self) -> Path:
        """Root of the extracted scanner distribution."""
        return self.install_folder / self.dirname

    @property
    def executable(self) -> Path:
        """Path to the scanner launch script."""
        return self.home / "bin" / f"{SCANNER_COMMAND}{self.binary_extension}"

    @property
    def archive_name(self) -> str:
        """File name of the distribution archive on the mirror."""
        return f"sonar-scanner-cli-{self.version}{self.platform_suffix}.zip"

    def download_url(self, mirror: str) -> str:
        """Build the download URL of the archive on ``mirror``."""
        if not mirror.endswith("/"):
            mirror += "/"
        return f"{mirror}{self.archive_name}"

    def is_installed(self) -> bool:
        """Check whether the scanner executable is present in the cache."""
        return self.executable.exists()
