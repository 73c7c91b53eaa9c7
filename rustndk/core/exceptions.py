"""
Centralized exception hierarchy for rustndk.

Configuration problems are raised before any subprocess runs. A failed
``cargo`` invocation is raised per build unit. Default-target detection
failures and empty artifact copies are not errors and never appear here.
"""

from typing import List, Optional


# ============================================================================
# Base Exceptions
# ============================================================================


class RustNdkError(Exception):
    """Base exception for all rustndk errors."""

    pass


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigurationError(RustNdkError):
    """Base exception for invalid or missing configuration."""

    pass


class UnknownPlatformError(ConfigurationError):
    """Raised when a requested platform name has no toolchain entry."""

    def __init__(self, platform: str, known: Optional[List[str]] = None):
        self.platform = platform
        self.known = list(known or [])
        msg = f"Target '{platform}' is not a recognized toolchain."
        if self.known:
            msg += f" Known targets: {', '.join(self.known)}"
        super().__init__(msg)


class NdkVersionError(ConfigurationError):
    """Raised when the NDK version string cannot be parsed."""

    def __init__(self, version: str):
        self.version = version
        super().__init__(f"Unparseable NDK version: '{version}'")


class MissingSettingError(ConfigurationError):
    """Raised when a mandatory setting is not configured."""

    pass


class ConfigError(ConfigurationError):
    """Configuration file parsing or validation error."""

    pass


# ============================================================================
# Toolchain Exceptions
# ============================================================================


class ToolchainError(RustNdkError):
    """Raised when a toolchain cannot provide the requested tool."""

    pass


# ============================================================================
# Invocation Exceptions
# ============================================================================


class InvocationError(RustNdkError):
    """Base exception for failed external process invocations."""

    pass


class CargoBuildError(InvocationError):
    """Raised when the cargo build subprocess exits with a non-zero status."""

    def __init__(self, returncode: int, command: Optional[List[str]] = None):
        self.returncode = returncode
        self.command = list(command or [])
        msg = f"cargo build failed with exit code {returncode}"
        if self.command:
            msg += f": {' '.join(self.command)}"
        super().__init__(msg)
