"""
Default target triple detection.

Cargo places artifacts for the host target in ``target/<profile>`` and for any
explicit ``--target`` in ``target/<triple>/<profile>``. Cargo cannot report
its host triple, so it is parsed out of ``rustc --version --verbose``.
"""

import logging
import subprocess
from typing import Callable, Optional

logger = logging.getLogger(__name__)

HOST_PREFIX = "host:"


def parse_host_triple(output: str) -> Optional[str]:
    """
    Extract the host triple from ``rustc --version --verbose`` output.

    Args:
        output: Captured standard output

    Returns:
        Triple following the first ``host:`` line, or None

    Example:
        >>> parse_host_triple("rustc 1.75.0\\nhost: x86_64-unknown-linux-gnu\\n")
        'x86_64-unknown-linux-gnu'
    """
    for line in output.splitlines():
        if line.startswith(HOST_PREFIX):
            return line[len(HOST_PREFIX):].strip()
    return None


def detect_host_triple(
    rustc: str = "rustc", runner: Optional[Callable] = None
) -> Optional[str]:
    """
    Ask the compiler driver for its default target triple.

    Failure is not fatal: the triple only decides whether ``--target`` and a
    nested output directory are needed, and without it the build is treated
    as a cross build.

    Args:
        rustc: Compiler driver command
        runner: ``subprocess.run`` compatible callable (default: subprocess.run)

    Returns:
        Host triple, or None if it could not be determined
    """
    if runner is None:
        runner = subprocess.run

    command = [rustc, "--version", "--verbose"]
    try:
        result = runner(
            command, capture_output=True, text=True, errors="replace", check=False
        )
    except OSError as e:
        logger.warning(
            f"Could not determine default rust target triple. "
            f"`{' '.join(command)}` failed to start: {e}"
        )
        return None

    if result.returncode != 0:
        logger.warning(
            f"Could not determine default rust target triple. "
            f"`{' '.join(command)}` returned {result.returncode}"
        )
        return None

    triple = parse_host_triple(result.stdout or "")
    if triple is None:
        logger.warning(
            f"Could not determine default rust target triple. "
            f"`{' '.join(command)}` printed no '{HOST_PREFIX}' line"
        )
        return None

    logger.debug(f"Default rust target triple: {triple}")
    return triple
