"""Error types raised by the scanner launcher.

Every failure the launcher can report derives from ``SonarScannerError`` so
the CLI can map them to an exit code in one place.
"""

from __future__ import annotations


class SonarScannerError(Exception):
    """Base class for launcher errors."""

    pass


class UnsupportedPlatformError(SonarScannerError):
    """The target platform is not one of the supported platforms."""

    def __init__(self, platform: str) -> None:
        self.platform = platform
        super().__init__(f"Your platform '{platform}' is currently not supported.")


class LocalExecutableNotFoundError(SonarScannerError):
    """No SonarScanner could be executed from the PATH."""

    def __init__(self, command: str) -> None:
        self.command = command
        super().__init__("Local install of SonarScanner not found.")


class DownloadError(SonarScannerError):
    """Downloading or extracting the scanner archive failed."""

    pass


class MalformedEnvironmentParamsError(SonarScannerError):
    """SONARQUBE_SCANNER_PARAMS does not hold a JSON object."""

    pass


class ScannerProcessError(SonarScannerError):
    """The scanner process exited with a non-zero status."""

    def __init__(self, returncode: int, command: str) -> None:
        self.returncode = returncode
        self.command = command
        super().__init__(f"{command} exited with status {returncode}")


class ScannerLaunchError(SonarScannerError):
    """The scanner process could not be started."""

    def __init__(self, command: str, reason: str) -> None:
        self.command = command
        super().__init__(f"Could not start {command}: {reason}")
