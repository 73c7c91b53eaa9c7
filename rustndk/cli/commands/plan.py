"""
Plan command implementation.

Lists the build units of a variant without running anything.
"""

from rustndk.cli.utils import load_planner, variant_from_args


def run(args) -> int:
    planner = load_planner(args)
    variant = variant_from_args(args)
    umbrella = planner.plan(variant)

    print(f"{umbrella.name} ({variant.profile})")
    for task in umbrella.tasks:
        request = task.request
        print(
            f"  {request.name}: {request.toolchain.target} "
            f"[{request.abi}] -> {request.output_directory}"
        )
    return 0
