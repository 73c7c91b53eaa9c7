"""
Build output discovery and staging.

After cargo finishes, the library is copied from cargo's target directory into
``<destination>/<abi>/`` where the packaging step picks it up. A copy that
matches nothing is not an error here; the packaging step reports the missing
library.
"""

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StagedArtifact:
    """
    Result of staging build output.

    Attributes:
        destination: Per-ABI directory the files were copied into
        files: Copied files, in copy order
    """

    destination: Path
    files: List[Path] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.files)


def resolve_cargo_target_dir(
    module_dir: Path,
    local_properties: Optional[Mapping[str, str]] = None,
    environ: Optional[Mapping[str, str]] = None,
    target_directory: Optional[str] = None,
) -> Path:
    """
    Find cargo's target directory.

    Precedence: ``rust.cargoTargetDir`` in local.properties, then
    ``CARGO_TARGET_DIR``, then the configured ``target_directory``, then
    ``<module>/target``.
    """
    local_properties = local_properties or {}
    environ = environ or {}

    for source, value in (
        ("local.properties", local_properties.get("rust.cargoTargetDir")),
        ("CARGO_TARGET_DIR", environ.get("CARGO_TARGET_DIR")),
        ("target_directory", target_directory),
    ):
        if value:
            logger.debug(f"Cargo target directory from {source}: {value}")
            return Path(value)

    return Path(module_dir) / "target"


def cargo_output_dir(
    target_root: Path, target: str, default_target: Optional[str], profile: str
) -> Path:
    """
    Directory holding the built library.

    Cargo nests cross-compiled output one level deeper, under the triple.

    Example:
        >>> cargo_output_dir(Path("target"), "aarch64-linux-android", None, "release")
        PosixPath('target/aarch64-linux-android/release')
    """
    if target == default_target:
        return Path(target_root) / profile
    return Path(target_root) / target / profile


def default_includes(libname: str) -> List[str]:
    """Candidate library filenames on Linux/Android, macOS and Windows."""
    return [f"lib{libname}.so", f"lib{libname}.dylib", f"{libname}.dll"]


def stage_artifacts(
    source_dir: Path,
    destination_root: Path,
    abi: str,
    includes: Optional[Sequence[str]],
    libname: str,
) -> StagedArtifact:
    """
    Copy matching build output into ``<destination_root>/<abi>/``.

    Args:
        source_dir: Cargo output directory (see cargo_output_dir)
        destination_root: Staging root
        abi: Target identifier, e.g. 'arm64-v8a'
        includes: Glob patterns relative to ``source_dir`` ('**' recurses).
            Empty or None falls back to default_includes(libname).
        libname: Library name

    Returns:
        StagedArtifact listing the copied files
    """
    source_dir = Path(source_dir)
    destination = Path(destination_root) / abi
    destination.mkdir(parents=True, exist_ok=True)

    patterns = list(includes) if includes else default_includes(libname)

    if not source_dir.is_dir():
        logger.debug(f"Cargo output directory does not exist: {source_dir}")
        return StagedArtifact(destination=destination)

    matched = []
    for pattern in patterns:
        for path in sorted(source_dir.glob(pattern)):
            if path.is_file() and path not in matched:
                matched.append(path)

    copied = []
    for path in matched:
        target = destination / path.relative_to(source_dir)
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(path, target)
        copied.append(target)
        logger.debug(f"Staged {path} -> {target}")

    if copied:
        logger.info(f"Staged {len(copied)} file(s) into {destination}")
    else:
        logger.debug(f"No files in {source_dir} matched {patterns}")

    return StagedArtifact(destination=destination, files=copied)
