"""Analysis parameter resolution.

Builds the parameter set handed to the scanner through the
SONARQUBE_SCANNER_PARAMS environment variable. Sources are merged from
lowest to highest priority:

1. built-in defaults and values read from the project manifest
2. parameters already exported in SONARQUBE_SCANNER_PARAMS
3. parameters supplied by the caller
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from sonarqube_scanner.config.manifest import (
    COVERAGE_REPORT,
    has_sonar_project_properties,
    read_project_manifest,
)
from sonarqube_scanner.config.settings import SCANNER_PARAMS_ENV
from sonarqube_scanner.core.errors import MalformedEnvironmentParamsError
from sonarqube_scanner.core.logging import get_logger
from sonarqube_scanner.core.subprocess_runner import ExecOptions

LOGGER = get_logger(__name__)

DEFAULT_DESCRIPTION = "No description."
DEFAULT_SOURCES = "."
DEFAULT_EXCLUSIONS = "node_modules/**,bower_components/**,jspm_packages/**,typings/**,lib-cov/**"


@dataclass
class ScanParams:
    """Parameters supplied by the caller of a scan.

    Attributes:
        server_url: SonarQube server URL (sonar.host.url).
        token: Authentication token (sonar.login).
        options: Any other sonar.* properties; applied last.
    """

    server_url: Optional[str] = None
    token: Optional[str] = None
    options: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "ScanParams":
        """Create from a plain mapping.

        Accepts ``server_url``/``token``/``options`` as well as the
        ``serverUrl`` spelling used by existing callers.
        """
        if not data:
            return cls()
        return cls(
            server_url=data.get("server_url") or data.get("serverUrl"),
            token=data.get("token"),
            options=dict(data.get("options") or {}),
        )

    def to_properties(self) -> Dict[str, Any]:
        """Return the sonar.* properties these parameters translate to."""
        properties: Dict[str, Any] = {}
        if self.server_url:
            properties["sonar.host.url"] = self.server_url
        if self.token:
            properties["sonar.login"] = self.token
        properties.update(self.options)
        return properties


ParamsLike = Union[ScanParams, Mapping[str, Any], None]


def read_env_params(env: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Decode SONARQUBE_SCANNER_PARAMS from ``env``.

    Returns:
        The decoded parameters, or an empty dict when the variable is unset.

    Raises:
        MalformedEnvironmentParamsError: If the variable does not hold a JSON object.
    """
    environ = os.environ if env is None else env
    raw = environ.get(SCANNER_PARAMS_ENV)
    if not raw:
        return {}

    try:
        decoded = json.loads(raw)
    except json.JSONDecodeError as e:
        raise MalformedEnvironmentParamsError(
            f"{SCANNER_PARAMS_ENV} is not valid JSON: {e}"
        ) from e

    if not isinstance(decoded, dict):
        raise MalformedEnvironmentParamsError(
            f"{SCANNER_PARAMS_ENV} must be a JSON object, got {type(decoded).__name__}"
        )
    return decoded


def default_params(project_base_dir: Path) -> Dict[str, str]:
    """Return the default parameters for a project without sonar-project.properties."""
    if has_sonar_project_properties(project_base_dir):
        LOGGER.debug("sonar-project.properties found, not adding default parameters")
        return {}

    params = {
        "sonar.projectDescription": DEFAULT_DESCRIPTION,
        "sonar.sources": DEFAULT_SOURCES,
        "sonar.exclusions": DEFAULT_EXCLUSIONS,
    }

    manifest = read_project_manifest(project_base_dir)
    if manifest is not None:
        LOGGER.debug(f"Reading project metadata for '{manifest.name}' from pyproject.toml")
        params.update(manifest.to_params())
        if (project_base_dir / COVERAGE_REPORT).is_file():
            params["sonar.python.coverage.reportPaths"] = COVERAGE_REPORT

    return params


def define_scanner_params(
    params: ParamsLike,
    project_base_dir: Path,
    env_params: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """Merge defaults, environment parameters and caller parameters.

    Args:
        params: Caller parameters (highest priority).
        project_base_dir: Directory the analysis runs from.
        env_params: Parameters decoded from SONARQUBE_SCANNER_PARAMS.

    Returns:
        The merged parameter set; later sources override earlier ones.
    """
    scan_params = params if isinstance(params, ScanParams) else ScanParams.from_mapping(params)

    merged: Dict[str, Any] = dict(default_params(project_base_dir))
    if env_params:
        merged.update(env_params)
    merged.update(scan_params.to_properties())
    return merged


def prepare_exec_environment(
    params: ParamsLike = None,
    env: Optional[Mapping[str, str]] = None,
    cwd: Optional[Path] = None,
) -> ExecOptions:
    """Build the options used to spawn the scanner.

    The inherited environment is kept as is and SONARQUBE_SCANNER_PARAMS is
    replaced by the merged parameter set.

    Raises:
        MalformedEnvironmentParamsError: If SONARQUBE_SCANNER_PARAMS is malformed.
    """
    environ = dict(os.environ if env is None else env)
    project_base_dir = Path.cwd() if cwd is None else cwd

    scanner_params = define_scanner_params(params, project_base_dir, read_env_params(environ))

    environ[SCANNER_PARAMS_ENV] = json.dumps(scanner_params)
    return ExecOptions(env=environ, cwd=cwd)
