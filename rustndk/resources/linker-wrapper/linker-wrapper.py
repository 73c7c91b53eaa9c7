"""Linker wrapper invoked by cargo through CARGO_TARGET_<TRIPLE>_LINKER.

Runs the NDK clang driver from RUST_ANDROID_GRADLE_CC with the soname
argument from RUST_ANDROID_GRADLE_CC_LINK_ARG prepended to cargo's linker
arguments.
"""

import os
import shlex
import subprocess
import sys


def main(argv):
    args = [os.environ["RUST_ANDROID_GRADLE_CC"], os.environ["RUST_ANDROID_GRADLE_CC_LINK_ARG"]]

    for arg in argv:
        # NDK r23 dropped libgcc; libunwind provides the unwinder instead.
        if arg == "-lgcc":
            args.append("-lunwind")
        else:
            args.append(arg)

    result = subprocess.run(args)
    if result.returncode != 0:
        # Only shown on failure, where the full command is the useful part.
        print(" ".join(shlex.quote(arg) for arg in args), file=sys.stderr)
    return result.returncode


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
