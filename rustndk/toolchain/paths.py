"""
Compiler and archiver path resolution for NDK toolchains.

Paths are derived purely from naming rules; nothing here checks that the
files exist. A wrong path shows up when cargo runs the tool.

Layouts:
    prebuilt   <ndk>/toolchains/llvm/prebuilt/<host-tag>/bin/<triple><api>-clang
    generated  <ndk>/toolchains/llvm/prebuilt/<host-tag>/<platform>-<api>/bin/<triple>-clang

A configured toolchain directory replaces the generated layout's root.

NDK r23 removed the per-triple GNU binutils, so every layout uses
``bin/llvm-ar`` from that release on.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from rustndk.core.exceptions import ToolchainError
from rustndk.core.platform import HostInfo, detect_host, host_tag
from rustndk.toolchain.ndk import NdkInstallation
from rustndk.toolchain.registry import ToolchainDescriptor, ToolchainKind

logger = logging.getLogger(__name__)

LLVM_AR_MIN_NDK = 23


@dataclass(frozen=True)
class ToolchainPaths:
    """Absolute tool paths for one (toolchain, API level) pair."""

    cc: Path
    cxx: Path
    ar: Path


def _require_ndk_toolchain(toolchain: ToolchainDescriptor) -> None:
    if toolchain.is_desktop:
        raise ToolchainError(
            f"Desktop toolchain '{toolchain.platform}' uses the host compiler "
            "and has no NDK tool paths"
        )


def _api_bin_dir(toolchain: ToolchainDescriptor, api_level: int) -> Path:
    return Path(f"{toolchain.platform}-{api_level}", "bin")


def compiler_path(
    toolchain: ToolchainDescriptor,
    api_level: int,
    cxx: bool = False,
    host: Optional[HostInfo] = None,
) -> Path:
    """
    Get the clang driver path relative to the toolchain root.

    Args:
        toolchain: Android toolchain descriptor
        api_level: Android API level the driver targets
        cxx: Return the C++ driver (clang++) instead of clang
        host: Host to resolve for. If None, detects the current host.

    Returns:
        Relative path of the driver

    Raises:
        ToolchainError: For desktop toolchains

    Example:
        >>> compiler_path(arm64_generated, 21)
        PosixPath('arm64-21/bin/aarch64-linux-android-clang')
    """
    _require_ndk_toolchain(toolchain)
    if host is None:
        host = detect_host()

    driver = "clang++" if cxx else "clang"
    suffix = ".cmd" if host.is_windows else ""

    if toolchain.kind is ToolchainKind.ANDROID_PREBUILT:
        return Path("bin", f"{toolchain.compiler_triple}{api_level}-{driver}{suffix}")
    return _api_bin_dir(toolchain, api_level) / f"{toolchain.compiler_triple}-{driver}{suffix}"


def archiver_path(
    toolchain: ToolchainDescriptor, api_level: int, ndk_version_major: int
) -> Path:
    """
    Get the archiver path relative to the toolchain root.

    Args:
        toolchain: Android toolchain descriptor
        api_level: Android API level
        ndk_version_major: Major version of the installed NDK

    Returns:
        Relative path of the archiver

    Raises:
        ToolchainError: For desktop toolchains
    """
    _require_ndk_toolchain(toolchain)

    if ndk_version_major >= LLVM_AR_MIN_NDK:
        return Path("bin", "llvm-ar")
    if toolchain.kind is ToolchainKind.ANDROID_PREBUILT:
        return Path("bin", f"{toolchain.binutils_triple}-ar")
    return _api_bin_dir(toolchain, api_level) / f"{toolchain.binutils_triple}-ar"


def toolchain_root(
    toolchain: ToolchainDescriptor,
    ndk: NdkInstallation,
    toolchain_directory: Optional[Path] = None,
    host: Optional[HostInfo] = None,
) -> Path:
    """
    Get the directory the relative tool paths are resolved against.

    Prebuilt toolchains live inside the NDK. Generated standalone toolchains
    live in ``toolchain_directory`` when one is configured, otherwise next to
    the prebuilt toolchain.
    """
    _require_ndk_toolchain(toolchain)

    prebuilt = Path(ndk.path, "toolchains", "llvm", "prebuilt", host_tag(host))
    if toolchain.kind is ToolchainKind.ANDROID_GENERATED and toolchain_directory:
        return Path(toolchain_directory)
    return prebuilt


def resolve_tools(
    toolchain: ToolchainDescriptor,
    ndk: NdkInstallation,
    api_level: int,
    toolchain_directory: Optional[Path] = None,
    host: Optional[HostInfo] = None,
) -> ToolchainPaths:
    """
    Resolve absolute cc, c++ and ar paths for a toolchain.

    Raises:
        ToolchainError: For desktop toolchains
        NdkVersionError: If the NDK version cannot be parsed
    """
    if host is None:
        host = detect_host()

    root = toolchain_root(toolchain, ndk, toolchain_directory, host).absolute()
    paths = ToolchainPaths(
        cc=root / compiler_path(toolchain, api_level, host=host),
        cxx=root / compiler_path(toolchain, api_level, cxx=True, host=host),
        ar=root / archiver_path(toolchain, api_level, ndk.version_major),
    )
    logger.debug(
        f"Toolchain {toolchain.platform}-{api_level}: cc={paths.cc} ar={paths.ar}"
    )
    return paths
