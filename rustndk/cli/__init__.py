"""
Command-line interface for rustndk.
"""

from rustndk.cli.parser import CLI, main

__all__ = ["CLI", "main"]
