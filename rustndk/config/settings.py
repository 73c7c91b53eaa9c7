"""Machine-level settings resolution.

Settings that vary per machine (tool commands, NDK location, target
overrides) are looked up in ``local.properties`` first, then in the process
environment. A non-empty value from ``rustndk.yaml`` always wins over both.
"""

import logging
import os
from pathlib import Path
from typing import List, Mapping, Optional

from rustndk.config.parser import CargoConfig
from rustndk.config.properties import load_properties
from rustndk.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

LOCAL_PROPERTIES_FILE = "local.properties"


class Settings:
    """
    Layered view over ``local.properties`` and environment variables.

    Attributes:
        local_properties: Parsed local.properties entries
        environ: Environment mapping consulted after local properties
        config: Project configuration whose non-empty values take priority
    """

    def __init__(
        self,
        local_properties: Optional[Mapping[str, str]] = None,
        environ: Optional[Mapping[str, str]] = None,
        config: Optional[CargoConfig] = None,
    ):
        self.local_properties = dict(local_properties or {})
        self.environ = dict(os.environ if environ is None else environ)
        self.config = config or CargoConfig()

    @classmethod
    def load(
        cls,
        root_dir: Path,
        config: Optional[CargoConfig] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "Settings":
        """Load settings from ``<root_dir>/local.properties``."""
        properties = load_properties(Path(root_dir) / LOCAL_PROPERTIES_FILE)
        return cls(properties, environ, config)

    def get_property(self, camel_case_name: str, snake_case_name: str) -> Optional[str]:
        """
        Look up a setting.

        Args:
            camel_case_name: local.properties key (e.g. 'rust.cargoCommand')
            snake_case_name: Environment variable name

        Returns:
            Local property, else environment value, else None
        """
        local = self.local_properties.get(camel_case_name)
        if local is not None:
            return local
        return self.environ.get(snake_case_name)

    def get_flag_property(
        self, camel_case_name: str, snake_case_name: str, if_unset: bool
    ) -> bool:
        """
        Look up a boolean setting.

        Raises:
            ConfigError: If the value is set but not 0/1/true/false
        """
        value = self.get_property(camel_case_name, snake_case_name)
        if value in ("1", "true"):
            return True
        if value in ("0", "false"):
            return False
        if value is None or value == "":
            return if_unset
        raise ConfigError(
            f'Illegal value for property "{camel_case_name}" / "{snake_case_name}". '
            "Must be 0/1/true/false if set"
        )

    def _command(self, configured: str, camel: str, snake: str, default: str) -> str:
        if configured:
            return configured
        return self.get_property(camel, snake) or default

    @property
    def cargo_command(self) -> str:
        return self._command(
            self.config.cargo_command,
            "rust.cargoCommand",
            "RUST_ANDROID_GRADLE_CARGO_COMMAND",
            "cargo",
        )

    @property
    def rustup_channel(self) -> str:
        return self._command(
            self.config.rustup_channel,
            "rust.rustupChannel",
            "RUST_ANDROID_GRADLE_RUSTUP_CHANNEL",
            "",
        )

    @property
    def python_command(self) -> str:
        return self._command(
            self.config.python_command,
            "rust.pythonCommand",
            "RUST_ANDROID_GRADLE_PYTHON_COMMAND",
            "python",
        )

    @property
    def rustc_command(self) -> str:
        # Only used to find the default target triple; a missing rustc is not fatal.
        return self._command(
            self.config.rustc_command,
            "rust.rustcCommand",
            "RUST_ANDROID_GRADLE_RUSTC_COMMAND",
            "rustc",
        )

    @property
    def toolchain_directory(self) -> Optional[Path]:
        """
        Directory holding generated standalone toolchains, if one is set.

        ``rust.androidNdkToolchainDir`` wins over ``ANDROID_NDK_TOOLCHAIN_DIR``.
        When neither is set, generated toolchains live under the NDK's own
        prebuilt host directory.
        """
        local = self.local_properties.get("rust.androidNdkToolchainDir")
        if local is not None:
            return Path(local).absolute()

        global_dir = self.environ.get("ANDROID_NDK_TOOLCHAIN_DIR")
        if global_dir is not None:
            return Path(global_dir).absolute()

        return None

    @property
    def prebuilt_toolchains(self) -> Optional[bool]:
        """Machine-level ``rust.prebuiltToolchains`` override, if set."""
        value = self.get_property(
            "rust.prebuiltToolchains", "RUST_ANDROID_GRADLE_PREBUILT_TOOLCHAINS"
        )
        if value is None or value == "":
            return None
        return self.get_flag_property(
            "rust.prebuiltToolchains", "RUST_ANDROID_GRADLE_PREBUILT_TOOLCHAINS", False
        )

    @property
    def verbose(self) -> bool:
        if self.config.verbose is not None:
            return self.config.verbose
        return logging.getLogger().isEnabledFor(logging.INFO)

    def targets(self, project_name: Optional[str] = None) -> Optional[List[str]]:
        """
        Target platform names.

        ``rust.targets.<project>`` and ``rust.targets`` in local.properties
        replace the configured list.
        """
        local = None
        if project_name:
            local = self.local_properties.get(f"rust.targets.{project_name}")
        if local is None:
            local = self.local_properties.get("rust.targets")
        if local is not None:
            targets = [t.strip() for t in local.split(",") if t.strip()]
            logger.debug(f"Targets overridden by local.properties: {targets}")
            return targets
        return self.config.targets

    def ndk_directory(self) -> Optional[Path]:
        """NDK root from ``ndk.dir``, ANDROID_NDK_HOME, ANDROID_NDK_ROOT or config."""
        for value in (
            self.local_properties.get("ndk.dir"),
            self.environ.get("ANDROID_NDK_HOME"),
            self.environ.get("ANDROID_NDK_ROOT"),
            self.config.ndk_path,
        ):
            if value:
                return Path(value)
        return None
