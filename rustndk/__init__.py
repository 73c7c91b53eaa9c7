"""
rustndk - cross-compile Rust libraries with the Android NDK.

Resolves NDK toolchain paths, cargo environment variables and command lines
per target platform, runs cargo, and stages the produced libraries per ABI.
"""
