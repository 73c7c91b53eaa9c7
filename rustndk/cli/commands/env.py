"""
Env command implementation.

Prints the cargo command, working directory and environment for one target.
"""

import logging
import shlex

import yaml

from rustndk.cli.utils import load_planner, variant_from_args

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the env command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    planner = load_planner(args)
    umbrella = planner.plan(variant_from_args(args), only=[args.target])
    task = umbrella.tasks[0]
    invocation = task.describe()

    if args.format == "yaml":
        document = {
            "task": task.name,
            "command": invocation.command,
            "cwd": str(invocation.cwd),
            "default_target": invocation.default_target,
            "environment": invocation.environment,
            "output": str(task.output_dir()),
        }
        print(yaml.safe_dump(document, sort_keys=False), end="")
        return 0

    print(f"# {task.name}")
    print(f"cd {shlex.quote(str(invocation.cwd))}")
    for key, value in invocation.environment.items():
        print(f"export {key}={shlex.quote(value)}")
    print(shlex.join(invocation.command))
    return 0
