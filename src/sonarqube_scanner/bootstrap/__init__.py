"""
Bootstrap module for the SonarScanner binary.

This module handles:
- Platform detection (windows, linux, macosx, universal)
- Scanner cache layout (~/.sonar/native-sonar-scanner/)
- Download and extraction of scanner archives
- Executable resolution from the cache or the PATH
"""

from sonarqube_scanner.bootstrap.executable import (
    get_scanner_installation,
    resolve_executable_path,
    resolve_local_executable,
)
from sonarqube_scanner.bootstrap.paths import ScannerInstallation, get_install_folder_path
from sonarqube_scanner.bootstrap.platform import (
    SUPPORTED_PLATFORMS,
    find_target_os,
    get_platform_suffix,
)

__all__ = [
    "SUPPORTED_PLATFORMS",
    "ScannerInstallation",
    "find_target_os",
    "get_install_folder_path",
    "get_platform_suffix",
    "get_scanner_installation",
    "resolve_executable_path",
    "resolve_local_executable",
]
