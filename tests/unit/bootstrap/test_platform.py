"""Tests for platform detection functionality."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from sonarqube_scanner.bootstrap.platform import (
    SUPPORTED_PLATFORMS,
    find_target_os,
    get_platform_suffix,
    is_windows,
    map_os_identity,
)
from sonarqube_scanner.core.errors import UnsupportedPlatformError


class TestMapOsIdentity:
    """Tests for OS identity mapping."""

    def test_win32(self) -> None:
        assert map_os_identity("win32") == "windows"

    def test_win(self) -> None:
        assert map_os_identity("win") == "windows"

    def test_linux(self) -> None:
        assert map_os_identity("linux") == "linux"

    def test_darwin(self) -> None:
        assert map_os_identity("darwin") == "macosx"

    def test_unknown_is_carried_through(self) -> None:
        assert map_os_identity("freebsd13") == "freebsd13"


class TestFindTargetOS:
    """Tests for target platform resolution."""

    @pytest.mark.parametrize(
        "identity,expected",
        [("win32", "windows"), ("darwin", "macosx"), ("linux", "linux")],
    )
    def test_detects_platform(self, identity: str, expected: str) -> None:
        assert find_target_os(env={}, identity=identity) == expected

    def test_uses_sys_platform_by_default(self) -> None:
        with patch("sonarqube_scanner.bootstrap.platform.host_identity", return_value="linux"):
            assert find_target_os(env={}) == "linux"

    def test_unknown_platform_raises(self) -> None:
        with pytest.raises(UnsupportedPlatformError, match=r"Your platform 'foo' is currently not supported\."):
            find_target_os(env={}, identity="foo")

    @pytest.mark.parametrize("override", list(SUPPORTED_PLATFORMS))
    def test_env_override_wins(self, override: str) -> None:
        env = {"SONAR_SCANNER_TARGET_OS": override}
        assert find_target_os(env=env, identity="foo") == override

    def test_invalid_env_override_raises(self) -> None:
        env = {"SONAR_SCANNER_TARGET_OS": "bar"}
        with pytest.raises(UnsupportedPlatformError, match=r"Your platform 'bar' is currently not supported\."):
            find_target_os(env=env, identity="linux")

    def test_empty_env_override_is_ignored(self) -> None:
        env = {"SONAR_SCANNER_TARGET_OS": ""}
        assert find_target_os(env=env, identity="win32") == "windows"

    def test_reads_os_environ(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SONAR_SCANNER_TARGET_OS", "universal")
        assert find_target_os(identity="linux") == "universal"

    def test_error_carries_platform(self) -> None:
        with pytest.raises(UnsupportedPlatformError) as exc_info:
            find_target_os(env={}, identity="sunos5")
        assert exc_info.value.platform == "sunos5"


class TestGetPlatformSuffix:
    """Tests for platform suffix computation."""

    def test_universal_has_no_suffix(self) -> None:
        assert get_platform_suffix("universal") == ""

    @pytest.mark.parametrize("platform", ["windows", "linux", "macosx"])
    def test_suffix_is_hyphenated_platform(self, platform: str) -> None:
        assert get_platform_suffix(platform) == f"-{platform}"

    def test_invalid_platform_raises(self) -> None:
        with pytest.raises(UnsupportedPlatformError, match=r"Your platform 'bar' is currently not supported\."):
            get_platform_suffix("bar")


class TestIsWindows:
    """Tests for host OS checks."""

    def test_windows_identity(self) -> None:
        assert is_windows("win32") is True

    def test_other_identity(self) -> None:
        assert is_windows("linux") is False
