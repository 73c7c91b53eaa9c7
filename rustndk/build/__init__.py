"""
Cargo build orchestration for rustndk.

This package turns a toolchain and project configuration into a cargo
invocation and stages what it produces:
- Cargo command line construction
- Per-invocation environment synthesis
- Build output discovery and staging
- Linker wrapper staging
- Build units and per-variant planning
"""

from rustndk.build.artifacts import (
    StagedArtifact,
    cargo_output_dir,
    default_includes,
    resolve_cargo_target_dir,
    stage_artifacts,
)
from rustndk.build.command import build_cargo_command
from rustndk.build.environment import (
    link_arg,
    subprocess_environment,
    synthesize_environment,
)
from rustndk.build.wrapper import stage_linker_wrappers
from rustndk.build.task import BuildInvocation, BuildRequest, CargoBuildTask
from rustndk.build.planner import BuildPlanner, Variant, VariantBuild

__all__ = [
    "StagedArtifact",
    "cargo_output_dir",
    "default_includes",
    "resolve_cargo_target_dir",
    "stage_artifacts",
    "build_cargo_command",
    "link_arg",
    "subprocess_environment",
    "synthesize_environment",
    "stage_linker_wrappers",
    "BuildInvocation",
    "BuildRequest",
    "CargoBuildTask",
    "BuildPlanner",
    "Variant",
    "VariantBuild",
]
