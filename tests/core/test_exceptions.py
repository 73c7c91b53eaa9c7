"""
Tests for the exception hierarchy.
"""

import pytest

from rustndk.core.exceptions import (
    CargoBuildError,
    ConfigError,
    ConfigurationError,
    InvocationError,
    MissingSettingError,
    NdkVersionError,
    RustNdkError,
    ToolchainError,
    UnknownPlatformError,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "exc_type",
        [UnknownPlatformError, NdkVersionError, MissingSettingError, ConfigError],
    )
    def test_configuration_errors(self, exc_type):
        assert issubclass(exc_type, ConfigurationError)
        assert issubclass(exc_type, RustNdkError)

    def test_invocation_errors(self):
        assert issubclass(CargoBuildError, InvocationError)
        assert issubclass(InvocationError, RustNdkError)
        assert not issubclass(CargoBuildError, ConfigurationError)

    def test_toolchain_error(self):
        assert issubclass(ToolchainError, RustNdkError)


class TestMessages:
    def test_unknown_platform(self):
        error = UnknownPlatformError("mips", ["arm", "arm64"])

        assert error.platform == "mips"
        assert "'mips'" in str(error)
        assert "arm, arm64" in str(error)

    def test_ndk_version(self):
        error = NdkVersionError("r21e")

        assert error.version == "r21e"
        assert "r21e" in str(error)

    def test_cargo_build_error(self):
        error = CargoBuildError(101, ["cargo", "build"])

        assert error.returncode == 101
        assert error.command == ["cargo", "build"]
        assert "101" in str(error)
        assert "cargo build" in str(error)
