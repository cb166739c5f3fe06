"""Shared pytest fixtures."""

from __future__ import annotations

import pytest

LAUNCHER_ENV_VARS = (
    "SONARQUBE_SCANNER_PARAMS",
    "SONAR_SCANNER_VERSION",
    "SONAR_SCANNER_MIRROR",
    "SONAR_SCANNER_TARGET_OS",
    "SONAR_SCANNER_BIN",
    "SONAR_BINARY_CACHE",
)


@pytest.fixture(autouse=True)
def clean_launcher_env(monkeypatch: pytest.MonkeyPatch, tmp_path_factory) -> None:
    """Remove launcher variables and run from an empty project directory."""
    for name in LAUNCHER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path_factory.mktemp("project"))
