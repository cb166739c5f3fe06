"""Download and extraction of SonarScanner archives.

Downloads use certifi's CA bundle so TLS verification works on systems
where Python cannot reach the platform certificate store.
"""

from __future__ import annotations

import os
import shutil
import ssl
import tempfile
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from urllib.error import HTTPError, URLError
from urllib.parse import urlparse
from urllib.request import Request, urlopen

import certifi

from sonarqube_scanner import __version__
from sonarqube_scanner.core.errors import DownloadError
from sonarqube_scanner.core.logging import get_logger

LOGGER = get_logger(__name__)

CHUNK_SIZE = 64 * 1024
ALLOWED_SCHEMES = ("https", "http")


def get_ssl_context() -> ssl.SSLContext:
    """Get an SSL context that uses certifi's CA bundle."""
    return ssl.create_default_context(cafile=certifi.where())


@dataclass
class DownloadProgress:
    """Progress of a single download, reported through the logger.

    A new instance is created for every download.

    Attributes:
        total: Expected size in bytes, or None when the server did not say.
        received: Bytes received so far.
        step: Percentage interval between two progress lines.
    """

    total: Optional[int] = None
    received: int = 0
    step: int = 10
    _last_reported: int = 0

    def start(self, total: Optional[int]) -> None:
        self.total = total
        if total:
            LOGGER.info(f"Downloaded total: {total} bytes ({total / 1024 / 1024:.1f} MB)")

    def tick(self, size: int) -> None:
        self.received += size
        percent = self.percent
        if percent is None:
            return
        if percent >= self._last_reported + self.step or percent == 100:
            if percent != self._last_reported:
                self._last_reported = percent
                LOGGER.info(f"Downloading... {percent}%")

    @property
    def percent(self) -> Optional[int]:
        if not self.total:
            return None
        return min(100, int(self.received * 100 / self.total))


def secure_urlopen(url: str, timeout: Optional[float] = 60.0):
    """Open a URL with certificate verification.

    Raises:
        ValueError: If the URL scheme is not http(s).
        URLError: If the URL cannot be opened.
    """
    scheme = urlparse(url).scheme
    if scheme not in ALLOWED_SCHEMES:
        raise ValueError(f"Only HTTP(S) URLs are supported: {url}")

    request = Request(url, headers={"User-Agent": f"sonarqube-scanner-py/{__version__}"})
    return urlopen(request, timeout=timeout, context=get_ssl_context())  # nosec B310


def download_file(
    url: str,
    dest_path: Path,
    progress: Optional[DownloadProgress] = None,
    timeout: Optional[float] = 60.0,
) -> None:
    """Download ``url`` to ``dest_path``, reporting progress as bytes arrive.

    Raises:
        DownloadError: If the download fails.
    """
    progress = progress or DownloadProgress()
    try:
        with secure_urlopen(url, timeout=timeout) as response:
            length = response.getheader("Content-Length")
            progress.start(int(length) if length and length.isdigit() else None)
            with open(dest_path, "wb") as f:
                while True:
                    chunk = response.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    f.write(chunk)
                    progress.tick(len(chunk))
    except HTTPError as e:
        raise DownloadError(f"HTTP {e.code} - {e.reason} for {url}") from e
    except URLError as e:
        raise DownloadError(f"{e.reason} for {url}. Check your network connection.") from e
    except (OSError, ValueError) as e:
        raise DownloadError(str(e)) from e


def _check_member(dest_dir: Path, name: str) -> None:
    member_path = (dest_dir / name).resolve()
    if not member_path.is_relative_to(dest_dir.resolve()):
        raise DownloadError(f"Path traversal detected: {name}")


def extract_zip(archive_path: Path, dest_dir: Path) -> None:
    """Extract a zip archive, restoring the unix permission bits it records.

    Raises:
        DownloadError: If the archive is invalid or contains unsafe paths.
    """
    try:
        with zipfile.ZipFile(archive_path, "r") as zf:
            members = zf.infolist()
            for member in members:
                _check_member(dest_dir, member.filename)
            zf.extractall(dest_dir)

            for member in members:
                mode = (member.external_attr >> 16) & 0o777
                if mode and not member.is_dir():
                    (dest_dir / member.filename).chmod(mode)
    except zipfile.BadZipFile as e:
        raise DownloadError(f"Invalid archive {archive_path.name}: {e}") from e
    except OSError as e:
        raise DownloadError(f"Failed to extract {archive_path.name}: {e}") from e


def download_and_extract(url: str, dest_dir: Path, timeout: Optional[float] = 60.0) -> None:
    """Download the zip at ``url`` and extract it into ``dest_dir``.

    The archive is extracted into a temporary folder inside ``dest_dir`` and
    each top-level entry is then renamed into place. An entry already present
    in ``dest_dir`` (left by a concurrent download) is kept.

    Raises:
        DownloadError: If downloading or extracting fails.
    """
    dest_dir.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(suffix=".zip", dir=dest_dir)
    os.close(fd)
    archive_path = Path(tmp_name)
    staging_dir = Path(tempfile.mkdtemp(prefix=".extract-", dir=dest_dir))

    try:
        download_file(url, archive_path, progress=DownloadProgress(), timeout=timeout)
        extract_zip(archive_path, staging_dir)

        for entry in staging_dir.iterdir():
            target = dest_dir / entry.name
            if target.exists():
                LOGGER.debug(f"{target} already exists, keeping it")
                continue
            os.replace(entry, target)
    finally:
        archive_path.unlink(missing_ok=True)
        shutil.rmtree(staging_dir, ignore_errors=True)
