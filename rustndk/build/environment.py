"""
Environment synthesis for cross-compiling cargo invocations.

The returned mapping is meant for one subprocess only. ``CLANG_PATH`` in
particular is a single global name, so applying these values to
``os.environ`` would let concurrent builds for different targets clobber
each other.
"""

import logging
import os
from pathlib import Path
from typing import Dict, Mapping, Optional

from rustndk.core.platform import HostInfo, detect_host
from rustndk.toolchain.ndk import NdkInstallation
from rustndk.toolchain.paths import resolve_tools
from rustndk.toolchain.registry import ToolchainDescriptor

logger = logging.getLogger(__name__)

ENV_PREFIX = "RUST_ANDROID_GRADLE"


def linker_wrapper_script(linker_wrapper_dir: Path, host: HostInfo) -> Path:
    """Path of the host's linker wrapper entry point."""
    name = "linker-wrapper.bat" if host.is_windows else "linker-wrapper.sh"
    return Path(linker_wrapper_dir, name).absolute()


def link_arg(libname: str, generate_build_id: bool = False) -> str:
    """
    Extra linker argument passed through the wrapper.

    Example:
        >>> link_arg("foo", generate_build_id=True)
        '-Wl,--build-id,-Wl,-soname,libfoo.so'
    """
    soname = f"-Wl,-soname,lib{libname}.so"
    return f"-Wl,--build-id,{soname}" if generate_build_id else soname


def synthesize_environment(
    toolchain: ToolchainDescriptor,
    ndk: Optional[NdkInstallation],
    api_level: int,
    libname: str,
    generate_build_id: bool,
    linker_wrapper_dir: Path,
    python_command: str = "python",
    toolchain_directory: Optional[Path] = None,
    host: Optional[HostInfo] = None,
) -> Dict[str, str]:
    """
    Compute the environment variables for one cargo build.

    Desktop toolchains build with the unmodified host toolchain and get an
    empty mapping.

    Args:
        toolchain: Toolchain being built for
        ndk: Installed NDK (unused for desktop toolchains)
        api_level: Android API level
        libname: Library name, used for the soname
        generate_build_id: Ask the linker for a build-id note
        linker_wrapper_dir: Directory holding the staged linker wrappers
        python_command: Interpreter the shell/batch wrapper runs
        toolchain_directory: Root of generated standalone toolchains
        host: Host to resolve for. If None, detects the current host.

    Returns:
        Variable name to value mapping

    Raises:
        ValueError: If ``ndk`` is None for an Android toolchain
        NdkVersionError: If the NDK version cannot be parsed
    """
    if toolchain.is_desktop:
        return {}
    if ndk is None:
        raise ValueError(f"An NDK is required to build for {toolchain.platform}")
    if host is None:
        host = detect_host()

    tools = resolve_tools(toolchain, ndk, api_level, toolchain_directory, host)
    cc = str(tools.cc)
    wrapper_dir = Path(linker_wrapper_dir).absolute()

    env = {
        f"CARGO_TARGET_{toolchain.env_target}_LINKER": str(
            linker_wrapper_script(wrapper_dir, host)
        ),
        # cc-rs build scripts look these up by the exact target triple.
        f"CC_{toolchain.target}": cc,
        f"CXX_{toolchain.target}": str(tools.cxx),
        f"AR_{toolchain.target}": str(tools.ar),
        # clang-sys
        "CLANG_PATH": cc,
        f"{ENV_PREFIX}_PYTHON_COMMAND": python_command,
        f"{ENV_PREFIX}_LINKER_WRAPPER_PY": str(wrapper_dir / "linker-wrapper.py"),
        f"{ENV_PREFIX}_CC": cc,
        f"{ENV_PREFIX}_CC_LINK_ARG": link_arg(libname, generate_build_id),
    }

    logger.debug(f"Environment for {toolchain.target}: {env}")
    return env


def subprocess_environment(
    overrides: Mapping[str, str], base: Optional[Mapping[str, str]] = None
) -> Dict[str, str]:
    """
    Merge overrides over a copy of the base environment.

    Args:
        overrides: Synthesized variables
        base: Starting environment (default: a copy of os.environ)

    Returns:
        New mapping; neither input is modified
    """
    env = dict(os.environ if base is None else base)
    env.update(overrides)
    return env
