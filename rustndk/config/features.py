"""Cargo feature selection.

Exactly one selection mode is active at a time:

- ``AllFeatures``: enable every feature (``--all-features``)
- ``DefaultAnd``: default features plus a set
- ``NoDefaultBut``: only the listed features (``--no-default-features``)

Feature names keep their first-seen order so generated command lines are
reproducible.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple, Union

from rustndk.core.exceptions import ConfigError


def _ordered_unique(names: Iterable[str]) -> Tuple[str, ...]:
    return tuple(dict.fromkeys(names))


@dataclass(frozen=True)
class AllFeatures:
    """Enable all features."""


@dataclass(frozen=True)
class DefaultAnd:
    """Default features plus ``features``."""

    features: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "features", _ordered_unique(self.features))


@dataclass(frozen=True)
class NoDefaultBut:
    """Only ``features``, without the default set."""

    features: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "features", _ordered_unique(self.features))


Features = Union[AllFeatures, DefaultAnd, NoDefaultBut]


def feature_flags(features: Optional[Features]) -> List[str]:
    """
    Translate a feature selection into cargo flags.

    Args:
        features: Selection, or None for cargo's defaults

    Returns:
        Flags in command-line order

    Example:
        >>> feature_flags(NoDefaultBut(("x", "y")))
        ['--no-default-features', '--features', 'x y']
    """
    if features is None:
        return []
    if isinstance(features, AllFeatures):
        return ["--all-features"]
    if isinstance(features, DefaultAnd):
        if features.features:
            return ["--features", " ".join(features.features)]
        return []
    if isinstance(features, NoDefaultBut):
        flags = ["--no-default-features"]
        if features.features:
            flags += ["--features", " ".join(features.features)]
        return flags
    raise TypeError(f"Unsupported feature selection: {features!r}")


def parse_features(data) -> Optional[Features]:
    """
    Parse the ``features`` section of a configuration file.

    Accepted forms::

        features: {all: true}
        features: {default_and: [a, b]}
        features: {no_default_but: [a]}

    Raises:
        ConfigError: If the section is malformed or names several modes
    """
    if data is None:
        return None
    if not isinstance(data, dict):
        raise ConfigError("features must be a mapping")

    modes = [key for key in ("all", "default_and", "no_default_but") if key in data]
    unknown = set(data) - {"all", "default_and", "no_default_but"}
    if unknown:
        raise ConfigError(f"Unknown features mode: {', '.join(sorted(unknown))}")
    if len(modes) > 1:
        raise ConfigError(
            f"features modes are mutually exclusive, got: {', '.join(modes)}"
        )
    if not modes:
        return None

    mode = modes[0]
    if mode == "all":
        if data["all"] is not True:
            raise ConfigError("features.all must be true when set")
        return AllFeatures()

    names = data[mode] or []
    if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
        raise ConfigError(f"features.{mode} must be a list of feature names")
    if mode == "default_and":
        return DefaultAnd(tuple(names))
    return NoDefaultBut(tuple(names))
