"""
Android NDK installation metadata.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from rustndk.config.properties import load_properties
from rustndk.core.exceptions import NdkVersionError

logger = logging.getLogger(__name__)

DEFAULT_NDK_VERSION = "0.0"


@dataclass(frozen=True)
class NdkInstallation:
    """
    An installed NDK.

    Attributes:
        path: NDK root directory
        version: ``Pkg.Revision`` from source.properties (e.g. '25.2.9519653')
    """

    path: Path
    version: str

    @property
    def version_major(self) -> int:
        """
        Leading numeric component of the version.

        Raises:
            NdkVersionError: If the version is not a non-negative integer prefix
        """
        head = self.version.strip().split(".")[0]
        try:
            major = int(head)
        except ValueError:
            raise NdkVersionError(self.version) from None
        if major < 0:
            raise NdkVersionError(self.version)
        return major

    @classmethod
    def from_directory(cls, path: Path) -> "NdkInstallation":
        """
        Read NDK metadata from its root directory.

        A missing ``source.properties`` file or ``Pkg.Revision`` key yields
        version '0.0'.

        Args:
            path: NDK root directory

        Returns:
            NdkInstallation for the directory
        """
        path = Path(path)
        properties = load_properties(path / "source.properties")
        version = properties.get("Pkg.Revision", DEFAULT_NDK_VERSION)
        logger.debug(f"NDK at {path} reports version {version}")
        return cls(path=path, version=version)
