"""
Pytest configuration and shared fixtures for rustndk tests.
"""

import subprocess
from pathlib import Path
from typing import Callable, List

import pytest

from rustndk.core.platform import HostInfo


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture
def linux_host() -> HostInfo:
    """Linux x86_64 host."""
    return HostInfo("linux", "x86_64")


@pytest.fixture
def windows_host() -> HostInfo:
    """Windows x86_64 host."""
    return HostInfo("windows", "x86_64")


@pytest.fixture
def macos_host() -> HostInfo:
    """macOS arm64 host."""
    return HostInfo("macos", "arm64")


@pytest.fixture
def fake_ndk(tmp_path: Path) -> Callable[[str], Path]:
    """Factory creating an NDK directory with a given Pkg.Revision."""

    def make(version: str = "25.2.9519653") -> Path:
        ndk = tmp_path / f"ndk-{version}"
        ndk.mkdir(parents=True, exist_ok=True)
        (ndk / "source.properties").write_text(
            f"Pkg.Desc = Android NDK\nPkg.Revision = {version}\n"
        )
        return ndk

    return make


class FakeRunner:
    """
    Stand-in for subprocess.run.

    rustc invocations print ``host: <host_triple>``; everything else returns
    ``returncode`` and optionally calls ``on_build`` to simulate cargo output.
    """

    def __init__(self, host_triple="x86_64-unknown-linux-gnu", returncode=0, on_build=None):
        self.host_triple = host_triple
        self.returncode = returncode
        self.on_build = on_build
        self.calls: List[dict] = []

    def __call__(self, command, **kwargs):
        self.calls.append({"command": list(command), **kwargs})
        if len(command) > 1 and command[1:] == ["--version", "--verbose"]:
            if self.host_triple is None:
                return subprocess.CompletedProcess(command, 1, stdout="", stderr="")
            stdout = f"rustc 1.75.0\nbinary: rustc\nhost: {self.host_triple}\n"
            return subprocess.CompletedProcess(command, 0, stdout=stdout, stderr="")
        if self.on_build is not None:
            self.on_build(command, kwargs)
        return subprocess.CompletedProcess(command, self.returncode)

    @property
    def build_calls(self) -> List[dict]:
        return [c for c in self.calls if "build" in c["command"]]


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def make_runner():
    """The FakeRunner class, for tests that need non-default behaviour."""
    return FakeRunner


@pytest.fixture(autouse=True)
def reset_caches():
    """Reset module-level caches between tests."""
    from rustndk.core import platform

    platform.clear_host_cache()
    yield
