"""YAML configuration parser for rustndk.

This module parses ``rustndk.yaml``, the project-level description of the Rust
library to build and the platforms to build it for.

Example::

    module: ../rust
    libname: rust
    targets: [arm, arm64, x86_64, linux-x86-64]
    api_level: 21
    api_levels: {arm: 19}
    features:
      default_and: [logging]
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from rustndk.config.features import Features, parse_features
from rustndk.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "rustndk.yaml"


@dataclass
class CargoConfig:
    """Project-level build configuration."""

    module: Optional[str] = None
    libname: Optional[str] = None
    targets: Optional[List[str]] = None
    prebuilt_toolchains: Optional[bool] = None
    verbose: Optional[bool] = None
    target_directory: Optional[str] = None
    target_includes: Optional[List[str]] = None
    extra_cargo_build_arguments: Optional[List[str]] = None
    api_level: Optional[int] = None
    api_levels: Dict[str, int] = field(default_factory=dict)
    generate_build_id: bool = False
    features: Optional[Features] = None
    cargo_command: str = ""
    rustup_channel: str = ""
    python_command: str = ""
    rustc_command: str = ""
    ndk_path: Optional[str] = None


_STRING_FIELDS = (
    "module",
    "libname",
    "target_directory",
    "cargo_command",
    "rustup_channel",
    "python_command",
    "rustc_command",
    "ndk_path",
)
_BOOL_FIELDS = ("prebuilt_toolchains", "verbose", "generate_build_id")
_LIST_FIELDS = ("targets", "target_includes", "extra_cargo_build_arguments")


def parse_config(config_path: Path) -> CargoConfig:
    """
    Parse a rustndk.yaml configuration file.

    Args:
        config_path: Path to rustndk.yaml

    Returns:
        Parsed and validated configuration

    Raises:
        ConfigError: If configuration is invalid
    """
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax: {e}")

    if data is None:
        data = {}

    logger.debug(f"Loaded configuration from {config_path}")
    return parse_config_data(data)


def parse_config_data(data: dict) -> CargoConfig:
    """Parse and validate configuration data."""
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")

    known = set(CargoConfig.__dataclass_fields__)
    unknown = set(data) - known
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

    values = {}

    for name in _STRING_FIELDS:
        if data.get(name) is not None:
            if not isinstance(data[name], str):
                raise ConfigError(f"{name} must be a string")
            values[name] = data[name]

    for name in _BOOL_FIELDS:
        if data.get(name) is not None:
            if not isinstance(data[name], bool):
                raise ConfigError(f"{name} must be true or false")
            values[name] = data[name]

    for name in _LIST_FIELDS:
        if data.get(name) is not None:
            values[name] = _parse_string_list(name, data[name])

    if data.get("api_level") is not None:
        values["api_level"] = _parse_api_level("api_level", data["api_level"])

    api_levels = data.get("api_levels") or {}
    if not isinstance(api_levels, dict):
        raise ConfigError("api_levels must be a mapping of platform to API level")
    values["api_levels"] = {
        str(platform): _parse_api_level(f"api_levels.{platform}", level)
        for platform, level in api_levels.items()
    }

    values["features"] = parse_features(data.get("features"))

    return CargoConfig(**values)


def _parse_string_list(name: str, value) -> List[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{name} must be a list of strings")
    return list(value)


def _parse_api_level(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigError(f"{name} must be a positive integer")
    return value
