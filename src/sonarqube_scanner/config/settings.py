"""Launcher settings resolved from an ordered chain of sources.

Each setting is looked up in turn from:
1. an environment variable,
2. the ``[tool.sonarqube-scanner]`` table of the project's pyproject.toml,
3. a built-in default.

The first source that yields a non-empty value wins.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Sequence

from sonarqube_scanner.config.manifest import load_pyproject
from sonarqube_scanner.core.logging import get_logger

LOGGER = get_logger(__name__)

DEFAULT_SCANNER_VERSION = "4.5.0.2216"
DEFAULT_SCANNER_MIRROR = "https://binaries.sonarsource.com/Distribution/sonar-scanner-cli/"

# Environment variables consumed by the launcher
SCANNER_PARAMS_ENV = "SONARQUBE_SCANNER_PARAMS"
SCANNER_VERSION_ENV = "SONAR_SCANNER_VERSION"
SCANNER_MIRROR_ENV = "SONAR_SCANNER_MIRROR"
TARGET_OS_ENV = "SONAR_SCANNER_TARGET_OS"
SCANNER_BIN_ENV = "SONAR_SCANNER_BIN"
BINARY_CACHE_ENV = "SONAR_BINARY_CACHE"

TOOL_TABLE = "sonarqube-scanner"

SettingSource = Callable[[], Optional[str]]


def from_env(name: str, env: Optional[Mapping[str, str]] = None) -> SettingSource:
    """Source reading an environment variable."""

    def source() -> Optional[str]:
        environ = os.environ if env is None else env
        return environ.get(name) or None

    return source


def from_tool_table(key: str, project_base_dir: Optional[Path] = None) -> SettingSource:
    """Source reading ``[tool.sonarqube-scanner]`` from the project's pyproject.toml."""

    def source() -> Optional[str]:
        value = load_tool_settings(project_base_dir).get(key)
        if value is None or value == "":
            return None
        return str(value)

    return source


def from_tool_table_path(key: str, project_base_dir: Optional[Path] = None) -> SettingSource:
    """Like ``from_tool_table``, resolving relative paths against the project directory."""
    lookup = from_tool_table(key, project_base_dir)

    def source() -> Optional[str]:
        value = lookup()
        if value is None:
            return None
        base_dir = Path.cwd() if project_base_dir is None else project_base_dir
        return str((base_dir / value).absolute())

    return source


def from_default(value: Optional[str]) -> SettingSource:
    """Source returning a fixed value."""

    def source() -> Optional[str]:
        return value

    return source


def resolve_setting(sources: Sequence[SettingSource]) -> Optional[str]:
    """Return the first non-empty value produced by ``sources``."""
    for source in sources:
        value = source()
        if value:
            return value
    return None


def load_tool_settings(project_base_dir: Optional[Path] = None) -> Dict[str, Any]:
    """Return the ``[tool.sonarqube-scanner]`` table, or an empty dict."""
    base_dir = Path.cwd() if project_base_dir is None else project_base_dir
    data = load_pyproject(base_dir)
    tool = data.get("tool", {})
    if not isinstance(tool, dict):
        LOGGER.warning("Ignoring [tool] in pyproject.toml: not a table")
        return {}
    table = tool.get(TOOL_TABLE, {})
    if not isinstance(table, dict):
        LOGGER.warning(f"Ignoring [tool.{TOOL_TABLE}] in pyproject.toml: not a table")
        return {}
    return table


@dataclass(frozen=True)
class LauncherSettings:
    """Settings that drive executable resolution.

    Attributes:
        version: SonarScanner version to run or download.
        mirror: Base URL the scanner archives are downloaded from.
        binary_cache: Base folder of the on-disk scanner cache.
        scanner_bin: Explicit executable path bypassing resolution, if any.
    """

    version: str
    mirror: str
    binary_cache: Path
    scanner_bin: Optional[Path] = None

    @classmethod
    def load(
        cls,
        env: Optional[Mapping[str, str]] = None,
        project_base_dir: Optional[Path] = None,
    ) -> "LauncherSettings":
        """Resolve every setting from the environment, pyproject.toml and defaults."""
        version = resolve_setting([
            from_env(SCANNER_VERSION_ENV, env),
            from_tool_table("version", project_base_dir),
            from_default(DEFAULT_SCANNER_VERSION),
        ])
        mirror = resolve_setting([
            from_env(SCANNER_MIRROR_ENV, env),
            from_tool_table("mirror", project_base_dir),
            from_default(DEFAULT_SCANNER_MIRROR),
        ])
        binary_cache = resolve_setting([
            from_env(BINARY_CACHE_ENV, env),
            from_tool_table_path("binary-cache", project_base_dir),
            from_default(str(Path.home())),
        ])
        scanner_bin = resolve_setting([from_env(SCANNER_BIN_ENV, env)])

        return cls(
            version=version or DEFAULT_SCANNER_VERSION,
            mirror=mirror or DEFAULT_SCANNER_MIRROR,
            binary_cache=Path(binary_cache or Path.home()),
            scanner_bin=Path(scanner_bin) if scanner_bin else None,
        )


def get_forced_scanner_version(
    env: Optional[Mapping[str, str]] = None,
    project_base_dir: Optional[Path] = None,
) -> Optional[str]:
    """Return the scanner version explicitly requested by the user, if any."""
    return resolve_setting([
        from_env(SCANNER_VERSION_ENV, env),
        from_tool_table("version", project_base_dir),
    ])
