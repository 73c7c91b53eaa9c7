"""
Targets command implementation.

Lists the toolchain catalog.
"""

from rustndk.toolchain.registry import ToolchainRegistry


def run(args) -> int:
    registry = ToolchainRegistry()
    for toolchain in registry.descriptors():
        print(
            f"{toolchain.platform:<20} {toolchain.kind.value:<18} "
            f"{toolchain.target:<28} {toolchain.abi}"
        )
    return 0
