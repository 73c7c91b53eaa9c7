"""
Tests for host platform detection.
"""

from unittest.mock import patch

import pytest

from rustndk.core.platform import HostInfo, clear_host_cache, detect_host, host_tag


class TestDetectHost:
    """Tests for detect_host()."""

    @pytest.mark.parametrize(
        "system,machine,expected",
        [
            ("Linux", "x86_64", HostInfo("linux", "x86_64")),
            ("Linux", "aarch64", HostInfo("linux", "arm64")),
            ("Darwin", "arm64", HostInfo("macos", "arm64")),
            ("Windows", "AMD64", HostInfo("windows", "x86_64")),
            ("Windows", "x86", HostInfo("windows", "x86")),
            ("CYGWIN_NT-10.0", "x86_64", HostInfo("windows", "x86_64")),
        ],
    )
    def test_normalization(self, system, machine, expected):
        """Test OS and architecture names are normalized."""
        with patch("platform.system", return_value=system), patch(
            "platform.machine", return_value=machine
        ):
            clear_host_cache()
            assert detect_host() == expected

    def test_detection_is_cached(self):
        """Test detection only runs once per process."""
        with patch("platform.system", return_value="Linux") as system, patch(
            "platform.machine", return_value="x86_64"
        ):
            detect_host()
            detect_host()

        assert system.call_count == 1

    def test_str(self):
        assert str(HostInfo("linux", "x86_64")) == "linux-x86_64"


class TestHostTag:
    """Tests for the NDK host tag."""

    def test_windows_x86_64(self, windows_host):
        assert host_tag(windows_host) == "windows-x86_64"

    def test_windows_other_arch(self):
        assert host_tag(HostInfo("windows", "x86")) == "windows"

    def test_macos_any_arch(self, macos_host):
        assert host_tag(macos_host) == "darwin-x86_64"
        assert host_tag(HostInfo("macos", "x86_64")) == "darwin-x86_64"

    def test_linux(self, linux_host):
        assert host_tag(linux_host) == "linux-x86_64"

    def test_unknown_os_falls_back_to_linux(self):
        assert host_tag(HostInfo("freebsd", "x86_64")) == "linux-x86_64"

    def test_detects_host_when_omitted(self):
        with patch(
            "rustndk.core.platform.detect_host",
            return_value=HostInfo("windows", "x86_64"),
        ):
            assert host_tag() == "windows-x86_64"
