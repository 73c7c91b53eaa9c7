"""
Shared utilities for CLI commands.

Provides project loading helpers used across commands.
"""

import logging
from pathlib import Path
from typing import Optional

from rustndk.build.planner import BuildPlanner, Variant
from rustndk.config.parser import CONFIG_FILE_NAME, CargoConfig, parse_config
from rustndk.config.settings import Settings

logger = logging.getLogger(__name__)


def config_path(args) -> Path:
    """Configuration file from --config, else ``<project-root>/rustndk.yaml``."""
    if getattr(args, "config", None):
        return Path(args.config).resolve()
    return Path(args.project_root).resolve() / CONFIG_FILE_NAME


def load_config(args) -> CargoConfig:
    """
    Load project configuration.

    Raises:
        ConfigError: If the file is missing or invalid
    """
    path = config_path(args)
    logger.debug(f"Loading configuration from {path}")
    return parse_config(path)


def load_settings(args, config: Optional[CargoConfig] = None) -> Settings:
    """Load machine-level settings from the project root."""
    return Settings.load(Path(args.project_root).resolve(), config)


def load_planner(args) -> BuildPlanner:
    """Create a planner for the project named by the arguments."""
    config = load_config(args)
    settings = load_settings(args, config)
    return BuildPlanner(config, settings, Path(args.project_root).resolve())


def variant_from_args(args) -> Variant:
    """Build a Variant from --variant, --build-type and --debuggable."""
    default = Variant.named(args.variant)
    build_type = args.build_type or default.build_type
    debuggable = args.debuggable
    if debuggable is None:
        debuggable = build_type != "release"
    return Variant(name=args.variant, build_type=build_type, debuggable=debuggable)
