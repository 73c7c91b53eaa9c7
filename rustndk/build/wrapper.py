"""
Linker wrapper staging.

Cargo calls the linker named by ``CARGO_TARGET_<TRIPLE>_LINKER`` with its own
arguments. The bundled wrappers add the soname argument and forward to the NDK
clang driver. They are copied once per root build into
``<root-build>/linker-wrapper`` and shared by every build unit.
"""

import logging
import os
from importlib import resources
from pathlib import Path

from filelock import FileLock, Timeout as LockTimeout

logger = logging.getLogger(__name__)

WRAPPER_DIR_NAME = "linker-wrapper"
WRAPPER_FILES = ("linker-wrapper.py", "linker-wrapper.sh", "linker-wrapper.bat")


def _bundled(name: str) -> bytes:
    return (
        resources.files("rustndk.resources")
        .joinpath(WRAPPER_DIR_NAME)
        .joinpath(name)
        .read_bytes()
    )


def stage_linker_wrappers(root_build_dir: Path, timeout: int = 60) -> Path:
    """
    Copy the bundled linker wrappers into the root build directory.

    Files already present with identical content are left alone, so calling
    this from every build unit is safe.

    Args:
        root_build_dir: Build directory of the root project
        timeout: Seconds to wait for another process staging the same files

    Returns:
        Directory containing the wrappers

    Raises:
        LockTimeout: If the staging lock can't be acquired within timeout
    """
    wrapper_dir = Path(root_build_dir) / WRAPPER_DIR_NAME
    wrapper_dir.mkdir(parents=True, exist_ok=True)
    lock_path = Path(root_build_dir) / f"{WRAPPER_DIR_NAME}.lock"

    try:
        with FileLock(lock_path, timeout=timeout):
            for name in WRAPPER_FILES:
                content = _bundled(name)
                target = wrapper_dir / name
                if target.exists() and target.read_bytes() == content:
                    continue
                target.write_bytes(content)
                os.chmod(target, 0o755)
                logger.debug(f"Staged linker wrapper: {target}")
    except LockTimeout:
        logger.error(
            f"Could not acquire linker wrapper lock after {timeout}s: {lock_path}"
        )
        raise

    return wrapper_dir
