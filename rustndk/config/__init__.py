"""Configuration handling for rustndk."""

from rustndk.config.features import (
    AllFeatures,
    DefaultAnd,
    Features,
    NoDefaultBut,
    feature_flags,
    parse_features,
)
from rustndk.config.parser import (
    CONFIG_FILE_NAME,
    CargoConfig,
    parse_config,
    parse_config_data,
)
from rustndk.config.properties import load_properties, parse_properties
from rustndk.config.settings import Settings

__all__ = [
    "AllFeatures",
    "DefaultAnd",
    "Features",
    "NoDefaultBut",
    "feature_flags",
    "parse_features",
    "CONFIG_FILE_NAME",
    "CargoConfig",
    "parse_config",
    "parse_config_data",
    "load_properties",
    "parse_properties",
    "Settings",
]
