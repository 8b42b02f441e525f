"""
jdkkit CLI argument parser.

This module implements the command-line interface for jdkkit using argparse.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Get version from package
try:
    from importlib.metadata import version

    __version__ = version("jdkkit")
except Exception:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)


class CLI:
    """jdkkit command-line interface."""

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
            prog="jdkkit",
            description="jdkkit - Download and install JDK releases",
            epilog='Use "jdkkit COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"jdkkit {__version__}"
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
            help="Path to configuration file (default: ./jdkkit.yaml)",
        )

        # Subcommands
        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_detect_command(subparsers)
        self._add_list_command(subparsers)
        self._add_locate_command(subparsers)
        self._add_install_command(subparsers)

        return parser

    def _add_detect_command(self, subparsers):
        """Add 'detect' subcommand."""
        subparsers.add_parser(
            "detect",
            help="Show the platform and CPU of this machine",
            description="Detect the platform and CPU used to pick a JDK bundle",
        )

    def _add_list_command(self, subparsers):
        """Add 'list' subcommand."""
        parser = subparsers.add_parser(
            "list",
            help="List installable JDK releases",
            description="List the releases in the JDK catalog",
        )
        parser.add_argument(
            "--files", action="store_true", help="Also list each release's files"
        )

    def _add_locate_command(self, subparsers):
        """Add 'locate' subcommand."""
        parser = subparsers.add_parser(
            "locate",
            help="Download a JDK bundle into the local cache",
            description="Download a JDK bundle into the local cache and print its path",
        )
        parser.add_argument("release_id", metavar="ID", help="JDK release id")
        parser.add_argument(
            "--platform",
            choices=["linux", "solaris", "windows"],
            help="Target platform (default: this machine)",
        )
        parser.add_argument(
            "--cpu",
            choices=["x86_32", "x86_64", "sparc", "itanium"],
            help="Target CPU (default: this machine)",
        )

    def _add_install_command(self, subparsers):
        """Add 'install' subcommand."""
        parser = subparsers.add_parser(
            "install",
            help="Install a JDK release on this machine",
            description="Download a JDK release and install it into a directory",
        )
        parser.add_argument("release_id", metavar="ID", help="JDK release id")
        parser.add_argument(
            "directory", type=Path, metavar="DIR", help="Installation directory"
        )
        parser.add_argument(
            "--accept-license",
            action="store_true",
            help="Accept the JDK license agreement",
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

        # Dispatch to command handler
        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except Exception as e:
            logger.error(f"Error: {e}")
            if parsed_args.verbose:
                import traceback

                traceback.print_exc()
            return 1

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Args:
            args: Parsed arguments with verbose and quiet flags
        """
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s]: %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.WARNING
            format_str = "%(levelname)s: %(message)s"

        logging.basicConfig(
            level=level, format=format_str, stream=sys.stderr, force=True
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
            "detect": "jdkkit.cli.commands.detect",
            "list": "jdkkit.cli.commands.list_releases",
            "locate": "jdkkit.cli.commands.locate",
            "install": "jdkkit.cli.commands.install",
        }

        module_name = command_map.get(args.command)
        if not module_name:
            logger.error(f"Unknown command: {args.command}")
            return 1

        # Dynamic import of command module
        import importlib

        module = importlib.import_module(module_name)
        return module.run(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
