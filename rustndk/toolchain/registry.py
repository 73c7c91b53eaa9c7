"""
Static catalog of supported build platforms.

Each entry describes how one platform names and lays out its compiler and
binutils. Several Android platforms appear twice, once for standalone
toolchains generated by ``make_standalone_toolchain.py`` and once for the
prebuilt LLVM toolchain shipped with NDK r19+. Both share a target triple, so
entries are keyed by platform name and kind, never by triple.

See https://forge.rust-lang.org/platform-support.html.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from rustndk.core.exceptions import UnknownPlatformError

logger = logging.getLogger(__name__)


class ToolchainKind(Enum):
    """Layout convention of a toolchain."""

    ANDROID_PREBUILT = "android-prebuilt"
    ANDROID_GENERATED = "android-generated"
    DESKTOP = "desktop"


@dataclass(frozen=True)
class ToolchainDescriptor:
    """
    Naming and layout of one platform's toolchain.

    Attributes:
        platform: Platform name used in configuration (e.g. 'arm64')
        kind: Layout convention
        target: Rust target triple passed to cargo
        compiler_triple: Prefix of the clang driver binaries
        binutils_triple: Prefix of the binutils binaries (ar)
        folder: Output subfolder, e.g. 'android/arm64-v8a'
    """

    platform: str
    kind: ToolchainKind
    target: str
    compiler_triple: str
    binutils_triple: str
    folder: str

    @property
    def abi(self) -> str:
        """ABI directory name, e.g. 'arm64-v8a'."""
        return self.folder.rsplit("/", 1)[-1]

    @property
    def is_desktop(self) -> bool:
        return self.kind is ToolchainKind.DESKTOP

    @property
    def env_target(self) -> str:
        """Target triple in the upper-case form cargo uses for env keys."""
        return self.target.upper().replace("-", "_")


def _desktop(platform: str, target: str, folder: str) -> ToolchainDescriptor:
    return ToolchainDescriptor(
        platform,
        ToolchainKind.DESKTOP,
        target,
        "<compilerTriple>",
        "<binutilsTriple>",
        folder,
    )


TOOLCHAINS: Tuple[ToolchainDescriptor, ...] = (
    _desktop("linux-x86-64", "x86_64-unknown-linux-gnu", "desktop/linux-x86-64"),
    # Superseded by darwin-x86-64, kept for existing configurations.
    _desktop("darwin", "x86_64-apple-darwin", "desktop/darwin"),
    _desktop("darwin-x86-64", "x86_64-apple-darwin", "desktop/darwin-x86-64"),
    _desktop("darwin-aarch64", "aarch64-apple-darwin", "desktop/darwin-aarch64"),
    _desktop("win32-x86-64-msvc", "x86_64-pc-windows-msvc", "desktop/win32-x86-64"),
    _desktop("win32-x86-64-gnu", "x86_64-pc-windows-gnu", "desktop/win32-x86-64"),
    ToolchainDescriptor(
        "arm",
        ToolchainKind.ANDROID_GENERATED,
        "armv7-linux-androideabi",
        "arm-linux-androideabi",
        "arm-linux-androideabi",
        "android/armeabi-v7a",
    ),
    ToolchainDescriptor(
        "arm64",
        ToolchainKind.ANDROID_GENERATED,
        "aarch64-linux-android",
        "aarch64-linux-android",
        "aarch64-linux-android",
        "android/arm64-v8a",
    ),
    ToolchainDescriptor(
        "x86",
        ToolchainKind.ANDROID_GENERATED,
        "i686-linux-android",
        "i686-linux-android",
        "i686-linux-android",
        "android/x86",
    ),
    ToolchainDescriptor(
        "x86_64",
        ToolchainKind.ANDROID_GENERATED,
        "x86_64-linux-android",
        "x86_64-linux-android",
        "x86_64-linux-android",
        "android/x86_64",
    ),
    # 32-bit ARM clang drivers are prefixed armv7a-linux-androideabi while
    # binutils keep arm-linux-androideabi.
    ToolchainDescriptor(
        "arm",
        ToolchainKind.ANDROID_PREBUILT,
        "armv7-linux-androideabi",
        "armv7a-linux-androideabi",
        "arm-linux-androideabi",
        "android/armeabi-v7a",
    ),
    ToolchainDescriptor(
        "arm64",
        ToolchainKind.ANDROID_PREBUILT,
        "aarch64-linux-android",
        "aarch64-linux-android",
        "aarch64-linux-android",
        "android/arm64-v8a",
    ),
    ToolchainDescriptor(
        "x86",
        ToolchainKind.ANDROID_PREBUILT,
        "i686-linux-android",
        "i686-linux-android",
        "i686-linux-android",
        "android/x86",
    ),
    ToolchainDescriptor(
        "x86_64",
        ToolchainKind.ANDROID_PREBUILT,
        "x86_64-linux-android",
        "x86_64-linux-android",
        "x86_64-linux-android",
        "android/x86_64",
    ),
)


class ToolchainRegistry:
    """
    Lookup table of toolchain descriptors keyed by (platform, kind).

    Example:
        >>> registry = ToolchainRegistry()
        >>> registry.resolve("arm64").kind
        <ToolchainKind.ANDROID_GENERATED: 'android-generated'>
    """

    def __init__(self, toolchains: Sequence[ToolchainDescriptor] = TOOLCHAINS):
        self._table: Dict[Tuple[str, ToolchainKind], ToolchainDescriptor] = {}
        for toolchain in toolchains:
            key = (toolchain.platform, toolchain.kind)
            if key in self._table:
                raise ValueError(
                    f"Duplicate toolchain entry: {toolchain.platform} ({toolchain.kind.value})"
                )
            self._table[key] = toolchain

    def resolve(self, platform: str, prebuilt: bool = False) -> ToolchainDescriptor:
        """
        Find the toolchain for a platform name.

        Args:
            platform: Platform name (e.g. 'arm64', 'linux-x86-64')
            prebuilt: Select the NDK's prebuilt toolchain over the generated
                standalone one, which is the default. Desktop platforms match
                either way.

        Returns:
            Matching ToolchainDescriptor

        Raises:
            UnknownPlatformError: If no entry matches
        """
        excluded = (
            ToolchainKind.ANDROID_GENERATED if prebuilt else ToolchainKind.ANDROID_PREBUILT
        )
        for kind in ToolchainKind:
            if kind is excluded:
                continue
            toolchain = self._table.get((platform, kind))
            if toolchain is not None:
                logger.debug(
                    f"Resolved platform {platform} to {toolchain.target} ({kind.value})"
                )
                return toolchain

        raise UnknownPlatformError(platform, self.platforms())

    def platforms(self) -> List[str]:
        """Distinct platform names in catalog order."""
        seen: List[str] = []
        for platform, _ in self._table:
            if platform not in seen:
                seen.append(platform)
        return seen

    def descriptors(self) -> List[ToolchainDescriptor]:
        """All catalog entries in catalog order."""
        return list(self._table.values())


def use_prebuilt_toolchains(
    local_setting: Optional[bool] = None,
    configured: Optional[bool] = None,
) -> bool:
    """
    Decide whether Android targets use the NDK's prebuilt toolchains.

    Args:
        local_setting: Machine-level override (``rust.prebuiltToolchains``)
        configured: Project-level ``prebuilt_toolchains`` value

    Returns:
        True for prebuilt toolchains. Generated toolchains unless overridden.
    """
    if local_setting is not None:
        return local_setting
    if configured is not None:
        return configured
    return False
