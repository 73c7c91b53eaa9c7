"""
Tests for the toolchain registry.
"""

import pytest

from rustndk.core.exceptions import ConfigurationError, UnknownPlatformError
from rustndk.toolchain.registry import (
    TOOLCHAINS,
    ToolchainDescriptor,
    ToolchainKind,
    ToolchainRegistry,
    use_prebuilt_toolchains,
)


@pytest.fixture
def registry():
    return ToolchainRegistry()


class TestToolchainDescriptor:
    """Tests for ToolchainDescriptor."""

    def test_abi_from_folder(self, registry):
        assert registry.resolve("arm64").abi == "arm64-v8a"
        assert registry.resolve("arm").abi == "armeabi-v7a"
        assert registry.resolve("linux-x86-64").abi == "linux-x86-64"

    def test_env_target(self, registry):
        toolchain = registry.resolve("arm")
        assert toolchain.env_target == "ARMV7_LINUX_ANDROIDEABI"

    def test_immutable(self, registry):
        toolchain = registry.resolve("arm64")
        with pytest.raises(AttributeError):
            toolchain.target = "other"


class TestResolve:
    """Tests for ToolchainRegistry.resolve()."""

    @pytest.mark.parametrize("platform", ["arm", "arm64", "x86", "x86_64"])
    def test_android_platforms_exist_in_both_kinds(self, registry, platform):
        prebuilt = registry.resolve(platform, prebuilt=True)
        generated = registry.resolve(platform, prebuilt=False)

        assert prebuilt.kind is ToolchainKind.ANDROID_PREBUILT
        assert generated.kind is ToolchainKind.ANDROID_GENERATED
        assert prebuilt.target == generated.target

    def test_arm_prefixes_differ_between_kinds(self, registry):
        prebuilt = registry.resolve("arm", prebuilt=True)
        generated = registry.resolve("arm", prebuilt=False)

        assert prebuilt.compiler_triple == "armv7a-linux-androideabi"
        assert prebuilt.binutils_triple == "arm-linux-androideabi"
        assert generated.compiler_triple == "arm-linux-androideabi"

    @pytest.mark.parametrize("prebuilt", [True, False])
    def test_desktop_matches_either_way(self, registry, prebuilt):
        toolchain = registry.resolve("darwin-aarch64", prebuilt=prebuilt)

        assert toolchain.kind is ToolchainKind.DESKTOP
        assert toolchain.target == "aarch64-apple-darwin"

    def test_shared_triple_distinct_platforms(self, registry):
        """Two desktop entries share a triple and are both kept."""
        assert registry.resolve("darwin").target == "x86_64-apple-darwin"
        assert registry.resolve("darwin-x86-64").target == "x86_64-apple-darwin"
        assert registry.resolve("darwin").folder != registry.resolve("darwin-x86-64").folder

    def test_unknown_platform(self, registry):
        with pytest.raises(UnknownPlatformError) as exc_info:
            registry.resolve("mips")

        assert exc_info.value.platform == "mips"
        assert "arm64" in exc_info.value.known
        assert isinstance(exc_info.value, ConfigurationError)

    def test_lookup_is_not_by_triple(self, registry):
        with pytest.raises(UnknownPlatformError):
            registry.resolve("aarch64-linux-android")

    def test_generated_by_default(self, registry):
        assert registry.resolve("x86").kind is ToolchainKind.ANDROID_GENERATED
        assert registry.resolve("arm").compiler_triple == "arm-linux-androideabi"


class TestCatalog:
    """Tests for the catalog as a whole."""

    def test_entry_count(self, registry):
        assert len(registry.descriptors()) == len(TOOLCHAINS) == 14

    def test_platforms_are_distinct_and_ordered(self, registry):
        platforms = registry.platforms()

        assert platforms[0] == "linux-x86-64"
        assert len(platforms) == len(set(platforms)) == 10

    def test_duplicate_key_rejected(self):
        entry = ToolchainDescriptor(
            "arm64", ToolchainKind.ANDROID_PREBUILT, "t", "c", "b", "android/arm64-v8a"
        )
        with pytest.raises(ValueError, match="Duplicate"):
            ToolchainRegistry([entry, entry])


class TestUsePrebuiltToolchains:
    """Tests for the prebuilt toolchain decision."""

    def test_generated_by_default(self):
        assert use_prebuilt_toolchains() is False

    def test_configured_override(self):
        assert use_prebuilt_toolchains(configured=True) is True
        assert use_prebuilt_toolchains(configured=False) is False

    def test_local_setting_overrides_configured(self):
        assert use_prebuilt_toolchains(local_setting=False, configured=True) is False
        assert use_prebuilt_toolchains(local_setting=True, configured=False) is True
