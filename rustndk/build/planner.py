"""
Per-variant build planning.

A variant (e.g. 'debug', 'release') gets one build unit per requested target
and an umbrella unit that runs them all. All configuration checks happen while
planning, so a bad setting fails before any process is started.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional

from rustndk.build.artifacts import StagedArtifact
from rustndk.build.task import BuildRequest, CargoBuildTask
from rustndk.build.wrapper import stage_linker_wrappers
from rustndk.config.parser import CargoConfig
from rustndk.config.settings import Settings
from rustndk.core.exceptions import MissingSettingError, RustNdkError
from rustndk.core.platform import HostInfo
from rustndk.toolchain.ndk import NdkInstallation
from rustndk.toolchain.registry import ToolchainRegistry, use_prebuilt_toolchains

logger = logging.getLogger(__name__)


def _capitalize(name: str) -> str:
    return name[:1].upper() + name[1:]


@dataclass(frozen=True)
class Variant:
    """
    A build variant.

    Attributes:
        name: Variant name, e.g. 'freeRelease'
        build_type: Build type name, e.g. 'release'
        debuggable: Whether the variant is debuggable
    """

    name: str
    build_type: Optional[str] = None
    debuggable: bool = True

    @property
    def profile(self) -> str:
        if self.build_type == "release" or not self.debuggable:
            return "release"
        return "debug"

    @classmethod
    def named(cls, name: str) -> "Variant":
        """Variant whose build type is its name; 'release' is not debuggable."""
        return cls(name=name, build_type=name, debuggable=name != "release")


class VariantBuild:
    """
    Umbrella unit running every target of one variant.

    Attributes:
        name: Umbrella unit name, e.g. 'cargoBuildRelease'
        variant: The variant
        tasks: Build units in target order
    """

    def __init__(
        self,
        variant: Variant,
        tasks: List[CargoBuildTask],
        root_build_dir: Path,
        needs_linker_wrappers: bool,
    ):
        self.variant = variant
        self.name = f"cargoBuild{_capitalize(variant.name)}"
        self.tasks = tasks
        self.root_build_dir = Path(root_build_dir)
        self.needs_linker_wrappers = needs_linker_wrappers

    def run(self, keep_going: bool = False) -> Dict[str, StagedArtifact]:
        """
        Run all build units.

        Args:
            keep_going: Continue after a failed unit; the first failure is
                raised once the remaining units have run

        Returns:
            Staged artifact per unit name

        Raises:
            RustNdkError: The first unit failure
        """
        if self.needs_linker_wrappers:
            stage_linker_wrappers(self.root_build_dir)

        results: Dict[str, StagedArtifact] = {}
        first_error: Optional[RustNdkError] = None

        for task in self.tasks:
            try:
                results[task.name] = task.run()
            except RustNdkError as e:
                logger.error(f"{task.name} failed: {e}")
                if not keep_going:
                    raise
                if first_error is None:
                    first_error = e

        if first_error is not None:
            raise first_error

        logger.info(f"{self.name}: built {len(results)} target(s)")
        return results


class BuildPlanner:
    """
    Turns project configuration into build units.

    Attributes:
        config: Project configuration
        settings: Machine-level settings
        project_dir: Project directory; relative paths are resolved against it
        project_name: Used for ``rust.targets.<project>`` overrides
    """

    def __init__(
        self,
        config: CargoConfig,
        settings: Settings,
        project_dir: Path,
        project_name: Optional[str] = None,
        registry: Optional[ToolchainRegistry] = None,
        runner: Optional[Callable] = None,
        host: Optional[HostInfo] = None,
    ):
        self.config = config
        self.settings = settings
        self.project_dir = Path(project_dir).absolute()
        self.project_name = project_name or self.project_dir.name
        self.registry = registry or ToolchainRegistry()
        self.runner = runner
        self.host = host
        self._ndk: Optional[NdkInstallation] = None

    @property
    def root_build_dir(self) -> Path:
        return self.project_dir / "build"

    def ndk(self) -> Optional[NdkInstallation]:
        """The configured NDK, or None if no NDK location is set."""
        if self._ndk is None:
            ndk_dir = self.settings.ndk_directory()
            if ndk_dir is not None:
                if not ndk_dir.is_absolute():
                    ndk_dir = self.project_dir / ndk_dir
                self._ndk = NdkInstallation.from_directory(ndk_dir)
        return self._ndk

    def targets(self) -> List[str]:
        """
        Requested platform names.

        Raises:
            MissingSettingError: If module, libname or targets are not set
        """
        if not self.config.module or not self.config.libname:
            raise MissingSettingError("`module` and `libname` properties must be set.")

        targets = self.settings.targets(self.project_name)
        if not targets:
            raise MissingSettingError("`targets` must be set.")
        return targets

    def use_prebuilt(self) -> bool:
        return use_prebuilt_toolchains(
            local_setting=self.settings.prebuilt_toolchains,
            configured=self.config.prebuilt_toolchains,
        )

    def output_directory(self, variant: Variant, platform: str) -> Path:
        return (
            self.root_build_dir
            / "intermediates"
            / "rustJniLibs"
            / variant.name
            / platform
        )

    def plan(self, variant: Variant, only: Optional[List[str]] = None) -> VariantBuild:
        """
        Create the build units of a variant.

        Args:
            variant: Variant to plan
            only: Restrict to these platform names (must be configured targets)

        Returns:
            Umbrella unit holding one task per target

        Raises:
            ConfigurationError: On unknown platforms or missing settings
        """
        targets = self.targets()
        if only:
            missing = [t for t in only if t not in targets]
            if missing:
                raise MissingSettingError(
                    f"Targets not configured: {', '.join(missing)}"
                )
            targets = [t for t in targets if t in only]

        prebuilt = self.use_prebuilt()
        module = Path(self.config.module)
        if not module.is_absolute():
            module = self.project_dir / module

        tasks = []
        needs_ndk = False
        for platform in targets:
            toolchain = self.registry.resolve(platform, prebuilt=prebuilt)
            request = BuildRequest(
                name=f"cargoBuild{_capitalize(variant.name)}{_capitalize(platform)}",
                variant=variant.name,
                platform=platform,
                toolchain=toolchain,
                profile=variant.profile,
                libname=self.config.libname,
                module=module,
                output_directory=self.output_directory(variant, platform),
                extra_args=tuple(self.config.extra_cargo_build_arguments or ()),
                features=self.config.features,
                includes=tuple(self.config.target_includes or ()),
            )
            task = CargoBuildTask(
                request,
                self.config,
                self.settings,
                self.ndk(),
                self.root_build_dir / "linker-wrapper",
                runner=self.runner,
                host=self.host,
            )
            if not toolchain.is_desktop:
                needs_ndk = True
                task.api_level()
            tasks.append(task)
            logger.debug(
                f"Planned {request.name}: {toolchain.target} -> {request.output_directory}"
            )

        if needs_ndk and self.ndk() is None:
            raise MissingSettingError(
                "An Android NDK is required; set ndk.dir in local.properties, "
                "ANDROID_NDK_HOME, or ndk_path in the configuration"
            )

        return VariantBuild(variant, tasks, self.root_build_dir, needs_ndk)
