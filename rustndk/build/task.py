"""
A single (variant, target) cargo build unit.

Sequence:
    1. Pick the API level for the target
    2. Detect rustc's default target triple
    3. Build the cargo command and its environment
    4. Run cargo in the Rust module directory
    5. Stage the library into ``<output>/<abi>/``
"""

import logging
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from rustndk.build.artifacts import (
    StagedArtifact,
    cargo_output_dir,
    resolve_cargo_target_dir,
    stage_artifacts,
)
from rustndk.build.command import build_cargo_command
from rustndk.build.environment import subprocess_environment, synthesize_environment
from rustndk.config.features import Features
from rustndk.config.parser import CargoConfig
from rustndk.config.settings import Settings
from rustndk.core.exceptions import CargoBuildError, MissingSettingError
from rustndk.core.platform import HostInfo
from rustndk.toolchain.detector import detect_host_triple
from rustndk.toolchain.ndk import NdkInstallation
from rustndk.toolchain.registry import ToolchainDescriptor

logger = logging.getLogger(__name__)

_UNSET = object()


@dataclass(frozen=True)
class BuildRequest:
    """
    Inputs of one build unit.

    Attributes:
        name: Unit name, e.g. 'cargoBuildReleaseArm64'
        variant: Build variant name
        platform: Requested platform name
        toolchain: Toolchain resolved for the platform
        profile: 'debug' or 'release'
        libname: Library name
        module: Rust crate directory
        output_directory: Staging root; the library lands in ``<abi>/`` below it
        extra_args: Extra cargo arguments
        features: Feature selection
        includes: Staging include patterns (empty for the defaults)
    """

    name: str
    variant: str
    platform: str
    toolchain: ToolchainDescriptor
    profile: str
    libname: str
    module: Path
    output_directory: Path
    extra_args: Tuple[str, ...] = ()
    features: Optional[Features] = None
    includes: Tuple[str, ...] = ()

    @property
    def abi(self) -> str:
        return self.toolchain.abi


@dataclass(frozen=True)
class BuildInvocation:
    """What a build unit would run."""

    command: List[str]
    cwd: Path
    environment: Dict[str, str] = field(default_factory=dict)
    default_target: Optional[str] = None


class CargoBuildTask:
    """
    Runs cargo for one build request and stages its output.

    Attributes:
        request: The build request
        config: Project configuration
        settings: Machine-level settings
        ndk: Installed NDK, required for Android toolchains
        linker_wrapper_dir: Directory of the staged linker wrappers
    """

    def __init__(
        self,
        request: BuildRequest,
        config: CargoConfig,
        settings: Settings,
        ndk: Optional[NdkInstallation],
        linker_wrapper_dir: Path,
        runner: Optional[Callable] = None,
        host: Optional[HostInfo] = None,
    ):
        self.request = request
        self.config = config
        self.settings = settings
        self.ndk = ndk
        self.linker_wrapper_dir = Path(linker_wrapper_dir)
        self.runner = runner
        self.host = host
        self._default_target = _UNSET

    @property
    def name(self) -> str:
        return self.request.name

    def api_level(self) -> int:
        """
        API level for this target.

        Raises:
            MissingSettingError: If neither a per-platform nor a global level is set
        """
        platform = self.request.platform
        level = self.config.api_levels.get(platform, self.config.api_level)
        if level is None:
            raise MissingSettingError(
                f"api_level for {platform} is not set in api_levels or api_level"
            )
        return level

    def default_target(self) -> Optional[str]:
        """rustc's host triple, detected once per task."""
        if self._default_target is _UNSET:
            self._default_target = detect_host_triple(
                self.settings.rustc_command, runner=self.runner
            )
        return self._default_target

    def describe(self) -> BuildInvocation:
        """
        Compute the command, working directory and environment without running.

        Raises:
            ConfigurationError: On missing settings or a bad NDK version
        """
        request = self.request
        toolchain = request.toolchain
        default_target = self.default_target()

        environment: Dict[str, str] = {}
        if not toolchain.is_desktop:
            if self.ndk is None:
                raise MissingSettingError(
                    f"An Android NDK is required to build for {request.platform}; "
                    "set ndk.dir in local.properties or ANDROID_NDK_HOME"
                )
            environment = synthesize_environment(
                toolchain,
                self.ndk,
                self.api_level(),
                request.libname,
                self.config.generate_build_id,
                self.linker_wrapper_dir,
                python_command=self.settings.python_command,
                toolchain_directory=self.settings.toolchain_directory,
                host=self.host,
            )

        command = build_cargo_command(
            self.settings.cargo_command,
            self.settings.rustup_channel,
            self.settings.verbose,
            request.features,
            request.profile,
            toolchain.target,
            default_target,
            request.extra_args,
        )

        return BuildInvocation(
            command=command,
            cwd=Path(request.module).resolve(),
            environment=environment,
            default_target=default_target,
        )

    def output_dir(self) -> Path:
        """Directory cargo writes this target's library into."""
        target_root = resolve_cargo_target_dir(
            self.request.module,
            self.settings.local_properties,
            self.settings.environ,
            self.config.target_directory,
        )
        return cargo_output_dir(
            target_root,
            self.request.toolchain.target,
            self.default_target(),
            self.request.profile,
        )

    def run(self) -> StagedArtifact:
        """
        Run cargo and stage the result.

        Returns:
            The staged artifact (may list no files)

        Raises:
            ConfigurationError: Before cargo runs, on invalid configuration
            CargoBuildError: If cargo exits with a non-zero status
        """
        invocation = self.describe()
        logger.info(f"{self.name}: {' '.join(invocation.command)}")

        runner = self.runner or subprocess.run
        result = runner(
            invocation.command,
            cwd=str(invocation.cwd),
            env=subprocess_environment(invocation.environment, self.settings.environ),
            check=False,
        )
        if result.returncode != 0:
            raise CargoBuildError(result.returncode, invocation.command)

        return stage_artifacts(
            self.output_dir(),
            self.request.output_directory,
            self.request.abi,
            self.request.includes,
            self.request.libname,
        )
