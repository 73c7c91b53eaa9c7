"""
Build command implementation.

Runs cargo for every configured target of a variant and stages the libraries.
"""

import logging

from rustndk.cli.utils import load_planner, variant_from_args

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the build command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    logger.debug(f"Arguments: {args}")

    planner = load_planner(args)
    variant = variant_from_args(args)
    umbrella = planner.plan(variant, only=args.target)

    logger.info(f"{umbrella.name}: {len(umbrella.tasks)} target(s), profile {variant.profile}")
    results = umbrella.run(keep_going=args.keep_going)

    for name, artifact in results.items():
        if artifact.files:
            for path in artifact.files:
                print(f"{name}: {path}")
        else:
            logger.warning(f"{name}: no library matched in cargo output")

    return 0
