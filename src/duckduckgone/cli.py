#!/usr/bin/env python
import asyncio
import argparse
import sys
from typing import Callable, List, Optional

from . import __version__
from .base import Configuration, DuckError, ErrorKind
from .clipboard import ClipboardResult, copy_to_clipboard
from .services.base import BaseEmailService
from .services.duck_service import DuckEmailService
from .setup_flow import (
    apply_settings,
    ensure_config,
    format_settings,
    reset_config,
)
from .storage import ConfigStore
from .logging_config import setup_logging, get_logger

# Get module logger
logger = get_logger(__name__)

ORANGE = "\033[38;5;214m"
CYAN = "\033[36m"
RED = "\033[31m"
RESET = "\033[0m"

BANNER = r""" ____             _    ____             _     ____
|  _ \ _   _  ___| | _|  _ \ _   _  ___| | __/ ___| ___  _ __   ___
| | | | | | |/ __| |/ / | | | | | |/ __| |/ / |  _ / _ \| '_ \ / _ \
| |_| | |_| | (__|   <| |_| | |_| | (__|   <| |_| | (_) | | | |  __/
|____/ \__,_|\___|_|\_\____/ \__,_|\___|_|\_\\____|\___/|_| |_|\___|"""

SETUP_GUIDANCE = (
    "It looks like you haven't finished setting up DuckDuckGone! "
    "Please run ddg to get started."
)


class DuckCLI:
    """Command line front end for the Duck address generator"""

    def __init__(
        self,
        store: Optional[ConfigStore] = None,
        service_factory: Callable[[], BaseEmailService] = DuckEmailService,
        prompt: Callable[[str], str] = input,
        clipboard: Callable[[str], ClipboardResult] = copy_to_clipboard,
    ):
        self.store = store or ConfigStore()
        self.service_factory = service_factory
        self.prompt = prompt
        self.clipboard = clipboard
        self.parser = self._create_parser()
        self.commands = {
            "gen": self.generate,
            "generate": self.generate,
            "settings": self.settings,
            "reset": self.reset,
            "version": self.version,
            "help": self.help,
        }

    async def run(self, argv: Optional[List[str]] = None) -> int:
        """Main CLI entry point, returns the process exit code"""
        args = self.parser.parse_args(argv)

        # Console logging only when a level is asked for explicitly
        console_logging = bool(args.log_level) and not args.quiet
        setup_logging(
            level=args.log_level,
            log_file=args.log_file,
            console=console_logging,
        )
        logger.debug(f"CLI run with command: {args.command!r}")

        if not args.no_banner:
            print(f"{ORANGE}{BANNER}{RESET}\n")

        if args.command is None:
            handler = self.default
        else:
            command = args.command.lower()
            handler = self.commands.get(command)
            if handler is None:
                logger.warning(f"Unknown command: {command}")
                print(f"Unknown command: {command}\n", file=sys.stderr)
                return await self.help(args.args)

        try:
            return await handler(args.args)
        except DuckError as e:
            return self._report_error(e)

    def _create_parser(self) -> argparse.ArgumentParser:
        """Top level parser, command arguments are parsed per command"""
        parser = argparse.ArgumentParser(
            prog="ddg",
            description="DuckDuckGone - generate private @duck.com email addresses",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Commands:
  gen, generate    Generate new Duck email
  settings         View or change settings
  reset            Reset the application
  version          Show the version
  help             Show this help

Settings options:
  --apikey <key>         Set the API key
  --clipboard yes|no     Copy emails to the clipboard
  --ddggen yes|no        Generate an email when running plain 'ddg'

Examples:
  ddg                                # Set up on first run, then generate
  ddg gen                            # Generate a new address
  ddg settings                       # Show current settings
  ddg settings --clipboard no        # Stop copying to the clipboard
            """,
        )

        # Global options
        parser.add_argument(
            "--log-level",
            choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
            type=str.upper,
            default=None,
            help="Set logging level",
        )
        parser.add_argument("--log-file", help="Log to specified file")
        parser.add_argument(
            "--quiet",
            action="store_true",
            help="Suppress console logging (logs to file only if --log-file is set)",
        )
        parser.add_argument(
            "--no-banner",
            action="store_true",
            help="Do not print the banner",
        )

        parser.add_argument("command", nargs="?", help="Command to run")
        parser.add_argument(
            "args", nargs=argparse.REMAINDER, help="Arguments for the command"
        )
        return parser

    def _create_settings_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="ddg settings", description="View or change settings"
        )
        parser.add_argument("--apikey", help="API key for DuckDuckGo email protection")
        parser.add_argument("--clipboard", help="Copy emails to clipboard (yes/no)")
        parser.add_argument(
            "--ddggen", help="Generate an email when running plain 'ddg' (yes/no)"
        )
        return parser

    def _ignore_extra(self, command: str, argv: List[str]):
        if argv:
            logger.warning(f"Ignoring extra arguments for {command}: {argv}")

    async def default(self, argv: List[str]) -> int:
        """Bare ``ddg``: set up if needed, then generate or show help"""
        config = ensure_config(self.store, allow_setup=True, prompt=self.prompt)
        if config.with_defaults().auto_generate_on_launch:
            return await self._generate(config)

        return await self.help(argv)

    async def generate(self, argv: List[str]) -> int:
        """Handle ``ddg gen``"""
        self._ignore_extra("generate", argv)
        config = ensure_config(self.store, allow_setup=False)
        return await self._generate(config)

    async def _generate(self, config: Configuration) -> int:
        config = config.with_defaults()
        logger.info("Requesting a new address")

        async with self.service_factory() as service:
            email = await service.request_email(config.api_key)

        logger.info(f"Generated address: {email.address}")
        print(f"{CYAN}{email.address}{RESET}")

        if config.clipboard_enabled:
            if self.clipboard(email.address) is ClipboardResult.COPIED:
                print("(copied to clipboard)")
        return 0

    async def settings(self, argv: List[str]) -> int:
        """Show settings, or merge the ones given as flags"""
        args = self._create_settings_parser().parse_args(argv)

        if args.apikey is None and args.clipboard is None and args.ddggen is None:
            config = ensure_config(self.store, allow_setup=False)
            print(format_settings(config))
            return 0

        apply_settings(
            self.store,
            apikey=args.apikey,
            clipboard=args.clipboard,
            ddggen=args.ddggen,
        )
        print("✅ Settings updated.")
        return 0

    async def reset(self, argv: List[str]) -> int:
        self._ignore_extra("reset", argv)
        if reset_config(self.store, prompt=self.prompt):
            print("✅ Application reset. Run 'ddg' again to set up.")
        else:
            print("❌ Reset cancelled.")
        return 0

    async def version(self, argv: List[str]) -> int:
        print(f"ddg version {__version__}")
        return 0

    async def help(self, argv: List[str]) -> int:
        self.parser.print_help()
        return 0

    def _report_error(self, error: DuckError) -> int:
        logger.error(f"{error.kind.value}: {error}")

        if error.kind is ErrorKind.INVALID_CREDENTIAL:
            print(f"{RED}Error! Invalid token{RESET}", file=sys.stderr)
        elif error.kind is ErrorKind.MISSING_CREDENTIAL:
            print(f"Error: {error}", file=sys.stderr)
            print(SETUP_GUIDANCE, file=sys.stderr)
        else:
            print(f"Error: {error}", file=sys.stderr)
        return 1


def main():
    """Entry point"""
    cli = DuckCLI()

    try:
        exit_code = asyncio.run(cli.run())
    except KeyboardInterrupt:
        logger.info("Application terminated by user")
        print("\n👋 Exiting...")
        sys.exit(130)
    except Exception as e:
        logger.critical(f"Application error: {e}", exc_info=True)
        print(f"💥 Error: {e}", file=sys.stderr)
        sys.exit(1)

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
