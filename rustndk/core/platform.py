"""
Host platform detection for rustndk.

The NDK ships one prebuilt LLVM toolchain per host, and wrapper scripts and
compiler drivers differ between Windows and everything else. This module
normalizes the host OS and CPU architecture and derives the NDK host tag.

Usage:
    from rustndk.core.platform import detect_host, host_tag

    host = detect_host()
    print(host.os, host.arch)
    print(host_tag(host))  # e.g. 'linux-x86_64'
"""

import functools
import platform
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class HostInfo:
    """
    Normalized host information.

    Attributes:
        os: Operating system ('windows', 'macos', 'linux', or the raw lowercase name)
        arch: CPU architecture ('x86_64', 'arm64', 'x86', 'arm', or the raw name)
    """

    os: str
    arch: str

    @property
    def is_windows(self) -> bool:
        return self.os == "windows"

    @property
    def is_macos(self) -> bool:
        return self.os == "macos"

    def __str__(self) -> str:
        return f"{self.os}-{self.arch}"


@functools.lru_cache(maxsize=1)
def detect_host() -> HostInfo:
    """
    Detect the current host.

    This function is cached - it only runs detection once per process.

    Returns:
        HostInfo for the running interpreter
    """
    return HostInfo(os=_detect_os(), arch=_detect_architecture())


def _detect_os() -> str:
    system = platform.system().lower()

    if system == "windows" or system.startswith(("cygwin", "msys", "mingw")):
        return "windows"
    elif system == "darwin":
        return "macos"
    elif system == "linux":
        return "linux"
    return system


def _detect_architecture() -> str:
    machine = platform.machine().lower()

    if machine in ("x86_64", "amd64", "x64"):
        return "x86_64"
    elif machine in ("aarch64", "arm64"):
        return "arm64"
    elif machine in ("i386", "i686", "x86"):
        return "x86"
    elif machine.startswith("arm"):
        return "arm"
    return machine


def host_tag(host: Optional[HostInfo] = None) -> str:
    """
    Get the NDK prebuilt host tag.

    The tag names the directory under ``toolchains/llvm/prebuilt`` that holds
    the host's LLVM toolchain. Apple Silicon hosts still use the
    ``darwin-x86_64`` directory, which the NDK ships as a universal binary.

    Args:
        host: Host to derive the tag for. If None, detects the current host.

    Returns:
        One of 'windows-x86_64', 'windows', 'darwin-x86_64', 'linux-x86_64'

    Example:
        >>> host_tag(HostInfo('windows', 'x86_64'))
        'windows-x86_64'
    """
    if host is None:
        host = detect_host()

    if host.is_windows and host.arch == "x86_64":
        return "windows-x86_64"
    if host.is_windows:
        return "windows"
    if host.is_macos:
        return "darwin-x86_64"
    return "linux-x86_64"


def clear_host_cache():
    """
    Clear the host detection cache.

    Forces the next call to detect_host() to re-detect.
    """
    detect_host.cache_clear()


__all__ = [
    "HostInfo",
    "detect_host",
    "host_tag",
    "clear_host_cache",
]
