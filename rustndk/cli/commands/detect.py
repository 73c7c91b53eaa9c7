"""
Detect command implementation.

Prints rustc's default target triple.
"""

import logging

from rustndk.cli.utils import config_path, load_config, load_settings
from rustndk.toolchain.detector import detect_host_triple

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the detect command.

    The project configuration is optional here. Detection failure is
    reported but is not an error.
    """
    rustc = args.rustc
    if not rustc:
        config = load_config(args) if config_path(args).exists() else None
        rustc = load_settings(args, config).rustc_command
    triple = detect_host_triple(rustc)
    if triple is None:
        print("unknown")
    else:
        print(triple)
    return 0
