"""
Toolchain module for rustndk.

This module provides functionality for:
- The catalog of supported platforms
- NDK installation metadata
- Compiler and archiver path resolution
- Default target triple detection
"""

from rustndk.toolchain.registry import (
    TOOLCHAINS,
    ToolchainDescriptor,
    ToolchainKind,
    ToolchainRegistry,
    use_prebuilt_toolchains,
)
from rustndk.toolchain.ndk import NdkInstallation
from rustndk.toolchain.paths import (
    ToolchainPaths,
    archiver_path,
    compiler_path,
    resolve_tools,
    toolchain_root,
)
from rustndk.toolchain.detector import detect_host_triple, parse_host_triple

__all__ = [
    "TOOLCHAINS",
    "ToolchainDescriptor",
    "ToolchainKind",
    "ToolchainRegistry",
    "use_prebuilt_toolchains",
    "NdkInstallation",
    "ToolchainPaths",
    "archiver_path",
    "compiler_path",
    "resolve_tools",
    "toolchain_root",
    "detect_host_triple",
    "parse_host_triple",
]
