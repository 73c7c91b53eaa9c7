"""
rustndk CLI argument parser.

This module implements the command-line interface for rustndk using argparse.
"""

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rustndk.core.exceptions import CargoBuildError, RustNdkError

# Get version from package
try:
    from importlib.metadata import version, PackageNotFoundError

    __version__ = version("rustndk")
except PackageNotFoundError:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)


class CLI:
    """rustndk command-line interface."""

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="rustndk",
            description="rustndk - Cross-compile Rust libraries with the Android NDK",
            epilog='Use "rustndk COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"rustndk {__version__}"
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to configuration file (default: ./rustndk.yaml)",
        )
        parser.add_argument(
            "--project-root",
            type=Path,
            metavar="PATH",
            default=Path.cwd(),
            help="Project root directory (default: current directory)",
        )

        # Subcommands
        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_build_command(subparsers)
        self._add_plan_command(subparsers)
        self._add_env_command(subparsers)
        self._add_targets_command(subparsers)
        self._add_detect_command(subparsers)

        return parser

    def _add_variant_arguments(self, parser):
        parser.add_argument(
            "--variant",
            default="debug",
            metavar="NAME",
            help="Build variant (default: debug)",
        )
        parser.add_argument(
            "--build-type",
            metavar="TYPE",
            help="Build type of the variant (default: the variant name)",
        )
        parser.add_argument(
            "--debuggable",
            action=argparse.BooleanOptionalAction,
            default=None,
            help="Whether the variant is debuggable (default: unless release)",
        )

    def _add_build_command(self, subparsers):
        """Add 'build' subcommand."""
        parser = subparsers.add_parser(
            "build",
            help="Build the Rust library for all targets",
            description="Run cargo for every configured target and stage the libraries",
        )
        self._add_variant_arguments(parser)
        parser.add_argument(
            "--target",
            action="append",
            metavar="PLATFORM",
            help="Only build this platform (can be used multiple times)",
        )
        parser.add_argument(
            "--keep-going",
            action="store_true",
            help="Continue building other targets after a failure",
        )

    def _add_plan_command(self, subparsers):
        """Add 'plan' subcommand."""
        parser = subparsers.add_parser(
            "plan",
            help="Show the build units of a variant",
            description="List build units, ABIs, profiles and output directories",
        )
        self._add_variant_arguments(parser)

    def _add_env_command(self, subparsers):
        """Add 'env' subcommand."""
        parser = subparsers.add_parser(
            "env",
            help="Show the cargo command and environment for a target",
            description="Print what would be run for one target without running it",
        )
        self._add_variant_arguments(parser)
        parser.add_argument(
            "--target",
            required=True,
            metavar="PLATFORM",
            help="Platform to describe (e.g. arm64)",
        )
        parser.add_argument(
            "--format",
            choices=["text", "yaml"],
            default="text",
            help="Output format (default: text)",
        )

    def _add_targets_command(self, subparsers):
        """Add 'targets' subcommand."""
        subparsers.add_parser(
            "targets",
            help="List supported platforms",
            description="List every platform in the toolchain catalog",
        )

    def _add_detect_command(self, subparsers):
        """Add 'detect' subcommand."""
        parser = subparsers.add_parser(
            "detect",
            help="Detect the default rust target triple",
            description="Run rustc --version --verbose and print its host triple",
        )
        parser.add_argument(
            "--rustc",
            metavar="COMMAND",
            help="rustc command (default: from settings, else 'rustc')",
        )

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        # Configure logging
        self._configure_logging(parsed_args)

        # Check if command specified
        if not parsed_args.command:
            self.parser.print_help()
            return 1

        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except CargoBuildError as e:
            logger.error(f"Error: {e}")
            return e.returncode
        except RustNdkError as e:
            logger.error(f"Error: {e}")
            return 1

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            force=True,  # Reconfigure if already configured
        )

    def _dispatch_command(self, args) -> int:
        """
        Dispatch to appropriate command handler.

        Args:
            args: Parsed arguments with command field

        Returns:
            Exit code from command handler
        """
        command_map = {
            "build": "rustndk.cli.commands.build",
            "plan": "rustndk.cli.commands.plan",
            "env": "rustndk.cli.commands.env",
            "targets": "rustndk.cli.commands.targets",
            "detect": "rustndk.cli.commands.detect",
        }

        module_name = command_map.get(args.command)
        if not module_name:
            logger.error(f"Unknown command: {args.command}")
            return 1

        module = importlib.import_module(module_name)
        return module.run(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
