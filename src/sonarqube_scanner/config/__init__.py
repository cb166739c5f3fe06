"""Configuration: launcher settings and analysis parameters."""

from sonarqube_scanner.config.params import (
    ScanParams,
    define_scanner_params,
    prepare_exec_environment,
    read_env_params,
)
from sonarqube_scanner.config.settings import LauncherSettings

__all__ = [
    "LauncherSettings",
    "ScanParams",
    "define_scanner_params",
    "prepare_exec_environment",
    "read_env_params",
]
