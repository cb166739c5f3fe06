"""sonarqube-scanner: download and run the SonarScanner CLI from Python."""

from __future__ import annotations

__version__ = "0.1.0"

from sonarqube_scanner.api import (  # noqa: E402
    from_param,
    scan,
    scan_cli,
    scan_with_local_scanner,
)

__all__ = [
    "__version__",
    "from_param",
    "scan",
    "scan_cli",
    "scan_with_local_scanner",
]
