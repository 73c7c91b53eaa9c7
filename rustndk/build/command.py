"""
Cargo command line construction.

The argument order is fixed so command lines are reproducible:

    <cargo> [+<channel>] build [--verbose] [feature flags] [--release]
        [--target=<triple>] [extra args...]

Extra arguments come last so they can override anything before them.
"""

from typing import List, Optional, Sequence

from rustndk.config.features import Features, feature_flags

RELEASE_PROFILE = "release"


def build_cargo_command(
    cargo_command: str,
    rustup_channel: str,
    verbose: bool,
    features: Optional[Features],
    profile: str,
    target: str,
    default_target: Optional[str],
    extra_args: Optional[Sequence[str]] = None,
) -> List[str]:
    """
    Build the ``cargo build`` argument vector.

    Args:
        cargo_command: Cargo executable
        rustup_channel: Toolchain channel ('' for none); '+' is added if missing
        verbose: Pass ``--verbose``
        features: Feature selection, or None
        profile: 'release' adds ``--release``; anything else builds debug
        target: Rust target triple to build
        default_target: Host triple, or None if unknown
        extra_args: Arguments appended verbatim

    Returns:
        Command line, program first

    Example:
        >>> build_cargo_command("cargo", "nightly", False, None, "release",
        ...                     "aarch64-linux-android", "x86_64-unknown-linux-gnu")
        ['cargo', '+nightly', 'build', '--release', '--target=aarch64-linux-android']
    """
    command = [cargo_command]

    if rustup_channel:
        channel = rustup_channel if rustup_channel.startswith("+") else f"+{rustup_channel}"
        command.append(channel)

    command.append("build")

    if verbose:
        command.append("--verbose")

    command.extend(feature_flags(features))

    if profile == RELEASE_PROFILE:
        command.append("--release")

    if target != default_target:
        command.append(f"--target={target}")

    if extra_args:
        command.extend(extra_args)

    return command
