"""
Core functionality for rustndk.

This package contains the foundational modules that other components depend on.
"""

from .platform import (
    HostInfo,
    detect_host,
    host_tag,
    clear_host_cache,
)

from .exceptions import (
    RustNdkError,
    ConfigurationError,
    UnknownPlatformError,
    NdkVersionError,
    MissingSettingError,
    ConfigError,
    ToolchainError,
    InvocationError,
    CargoBuildError,
)

__all__ = [
    "HostInfo",
    "detect_host",
    "host_tag",
    "clear_host_cache",
    "RustNdkError",
    "ConfigurationError",
    "UnknownPlatformError",
    "NdkVersionError",
    "MissingSettingError",
    "ConfigError",
    "ToolchainError",
    "InvocationError",
    "CargoBuildError",
]
