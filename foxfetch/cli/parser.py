"""
foxfetch CLI argument parser.

This module implements the command-line interface for foxfetch using argparse.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Get version from package
try:
    from importlib.metadata import version

    __version__ = version("foxfetch")
except Exception:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)


class CLI:
    """foxfetch command-line interface."""

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
            prog="foxfetch",
            description="foxfetch - Download and cache Firefox builds for CI",
            epilog='Use "foxfetch COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"foxfetch {__version__}"
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
            help="Path to configuration file (default: ./foxfetch.yaml)",
        )

        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_download_command(subparsers)
        self._add_check_geckodriver_command(subparsers)

        return parser

    def _add_download_command(self, subparsers):
        """Add 'download' subcommand."""
        parser = subparsers.add_parser(
            "download",
            help="Download and extract a Firefox build",
            description=(
                "Download and extract a Firefox binary from a URL.\n\n"
                "The binary path is exported as FIREFOX_BINARY for later CI steps."
            ),
            epilog=(
                "Examples:\n"
                "  # Firefox release (.tar.bz2)\n"
                "  foxfetch download https://ftp.mozilla.org/pub/firefox/releases/"
                "128.0/linux-x86_64/en-US/firefox-128.0.tar.bz2\n\n"
                "  # Firefox CI build, path saved to .env\n"
                "  foxfetch download https://firefox-ci-tc.services.mozilla.com/api/"
                "queue/v1/task/TASK_ID/artifacts/public/build/firefox.tar.bz2 --output-env"
            ),
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        parser.add_argument(
            "url",
            metavar="URL",
            help="URL to Firefox archive (.tar.bz2, .tar.gz or .dmg)",
        )
        parser.add_argument(
            "--cache-dir",
            type=Path,
            metavar="PATH",
            help="Directory to cache downloads (default: OS temp dir)",
        )
        parser.add_argument(
            "--force",
            action="store_true",
            default=None,
            help="Force re-download even if cached",
        )
        parser.add_argument(
            "--output-env",
            action="store_true",
            default=None,
            help="Write FIREFOX_BINARY to .env file in current directory",
        )

    def _add_check_geckodriver_command(self, subparsers):
        """Add 'check-geckodriver' subcommand."""
        subparsers.add_parser(
            "check-geckodriver",
            help="Check that geckodriver is installed",
            description="Verify geckodriver is installed and accessible",
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

        self._configure_logging(parsed_args)

        if not parsed_args.command:
            self.parser.print_help()
            return 1

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
            "download": "foxfetch.cli.commands.download",
            "check-geckodriver": "foxfetch.cli.commands.geckodriver",
        }

        module_name = command_map.get(args.command)
        if not module_name:
            logger.error(f"Unknown command: {args.command}")
            return 1

        import importlib

        module = importlib.import_module(module_name)
        return module.run(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
