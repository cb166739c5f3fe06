"""Project manifest discovery.

Reads the files in the project base directory that influence the default
analysis parameters: ``sonar-project.properties`` and ``pyproject.toml``.
"""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from sonarqube_scanner.core.logging import get_logger

LOGGER = get_logger(__name__)

SONAR_PROJECT_PROPERTIES = "sonar-project.properties"
PYPROJECT_TOML = "pyproject.toml"
COVERAGE_REPORT = "coverage.xml"

# [project.urls] labels mapped to sonar.links.* properties (matched lowercase)
_URL_LABELS = {
    "homepage": ("homepage", "home", "documentation"),
    "issue": ("issues", "issue", "bug tracker", "bugs", "tracker"),
    "scm": ("repository", "source", "source code", "code"),
}


def has_sonar_project_properties(project_base_dir: Path) -> bool:
    """Return True if the project carries its own sonar-project.properties."""
    return (project_base_dir / SONAR_PROJECT_PROPERTIES).is_file()


def load_pyproject(project_base_dir: Path) -> Dict[str, Any]:
    """Parse ``pyproject.toml`` in ``project_base_dir``.

    Returns an empty dict when the file is absent. A file that exists but
    cannot be parsed is reported and treated as absent.
    """
    pyproject_path = project_base_dir / PYPROJECT_TOML
    if not pyproject_path.is_file():
        return {}

    try:
        with open(pyproject_path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as e:
        LOGGER.warning(f"Could not read {pyproject_path}: {e}")
        return {}


def slugify(name: str) -> str:
    """Turn a distribution name into a valid sonar.projectKey."""
    slug = re.sub(r"[^A-Za-z0-9_.:-]+", "-", name.strip())
    return slug.strip("-")


@dataclass(frozen=True)
class ProjectManifest:
    """Project metadata read from the ``[project]`` table of pyproject.toml."""

    name: str
    version: Optional[str] = None
    description: Optional[str] = None
    homepage: Optional[str] = None
    issue_tracker: Optional[str] = None
    scm: Optional[str] = None

    @classmethod
    def from_pyproject(cls, data: Dict[str, Any]) -> Optional["ProjectManifest"]:
        """Build a manifest from parsed pyproject data, or None without a project name."""
        project = data.get("project")
        if not isinstance(project, dict) or not project.get("name"):
            return None

        raw_urls = project.get("urls") or {}
        if not isinstance(raw_urls, dict):
            LOGGER.warning("Ignoring [project.urls] in pyproject.toml: not a table")
            raw_urls = {}
        urls = {str(label).lower(): str(url) for label, url in raw_urls.items()}

        def _pick(kind: str) -> Optional[str]:
            for label in _URL_LABELS[kind]:
                if label in urls:
                    return urls[label]
            return None

        version = project.get("version")
        description = project.get("description")
        return cls(
            name=str(project["name"]),
            version=str(version) if version else None,
            description=str(description) if description else None,
            homepage=_pick("homepage"),
            issue_tracker=_pick("issue"),
            scm=_pick("scm"),
        )

    def to_params(self) -> Dict[str, str]:
        """Return the sonar.* parameters derived from this manifest."""
        params = {
            "sonar.projectKey": slugify(self.name),
            "sonar.projectName": self.name,
        }
        if self.version:
            params["sonar.projectVersion"] = self.version
        if self.description:
            params["sonar.projectDescription"] = self.description
        if self.homepage:
            params["sonar.links.homepage"] = self.homepage
        if self.issue_tracker:
            params["sonar.links.issue"] = self.issue_tracker
        if self.scm:
            params["sonar.links.scm"] = self.scm
        return params


def read_project_manifest(project_base_dir: Path) -> Optional[ProjectManifest]:
    """Read the project manifest from ``project_base_dir``, if there is one."""
    return ProjectManifest.from_pyproject(load_pyproject(project_base_dir))
