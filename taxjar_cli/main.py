"""Main CLI entry point - parse, dispatch one command, exit."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

import httpx

from taxjar_cli import __app_name__, __version__
from taxjar_cli.commands.base import BaseCommand, CommandParser
from taxjar_cli.commands.categories import CategoriesCommand
from taxjar_cli.commands.config import ConfigCommand
from taxjar_cli.commands.nexus import NexusCommand
from taxjar_cli.commands.orders import OrdersCommand
from taxjar_cli.commands.rates import RatesCommand
from taxjar_cli.commands.refunds import RefundsCommand
from taxjar_cli.commands.tax import TaxCommand
from taxjar_cli.commands.validate import ValidateCommand
from taxjar_cli.core.config import CLIConfig
from taxjar_cli.core.errors import MissingCredentialError, TaxJarError, UsageError
from taxjar_cli.core.log import setup_logging
from taxjar_cli.ui.console import err_console, print_error

logger = logging.getLogger(__name__)

MISSING_KEY_HINT = (
    "Set your API key with:\n"
    "  taxjar config set --api-key <your-api-key>\n"
    "Or set the TAXJAR_API_KEY environment variable."
)

COMMAND_CLASSES: list[type[BaseCommand]] = [
    ConfigCommand,
    TaxCommand,
    RatesCommand,
    NexusCommand,
    CategoriesCommand,
    OrdersCommand,
    RefundsCommand,
    ValidateCommand,
]


class TaxJarCLI:
    """Main CLI application."""

    def __init__(
        self,
        config: Optional[CLIConfig] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.config = config or CLIConfig.from_env()

        # Command registry
        self.commands: dict[str, BaseCommand] = {
            cls.name: cls(self.config, transport=transport) for cls in COMMAND_CLASSES
        }
        self.parser = self._build_parser()

    def _build_parser(self) -> argparse.ArgumentParser:
        parser = CommandParser(
            prog="taxjar",
            description="TaxJar CLI - Sales tax calculation and reporting",
            allow_abbrev=False,
        )
        parser.add_argument(
            "--version",
            action="version",
            version=f"{__app_name__} {__version__}",
        )
        parser.add_argument(
            "-v", "--verbose",
            action="store_true",
            help="Log requests and responses to stderr",
        )
        subparsers = parser.add_subparsers(dest="command", metavar="<command>", required=True)
        for command in self.commands.values():
            command.register(subparsers)
        return parser

    def run(self, argv: Optional[Sequence[str]] = None) -> int:
        """Run one command and return the process exit code."""
        try:
            args = self.parser.parse_args(argv)
        except UsageError as e:
            return self._usage_error(e)
        except SystemExit as e:
            # --help and --version
            return e.code if isinstance(e.code, int) else 0

        if args.verbose:
            self.config.verbose = True
        setup_logging(self.config.verbose)

        command = self.commands[args.command]
        logger.debug("Dispatching %s %s", args.command, args.action)
        try:
            success = command.execute(args)
        except MissingCredentialError as e:
            print_error(str(e), hint=MISSING_KEY_HINT)
            return 1
        except UsageError as e:
            return self._usage_error(e)
        except TaxJarError as e:
            print_error(str(e))
            return 1
        except KeyboardInterrupt:
            err_console.print("\n[warning]Interrupted[/warning]")
            return 1
        finally:
            command.close()

        return 0 if success else 1

    @staticmethod
    def _usage_error(error: UsageError) -> int:
        if error.usage:
            err_console.print(error.usage, end="", markup=False, highlight=False)
        print_error(str(error), title="Usage Error")
        return 1


def main():
    """Main entry point."""
    sys.exit(TaxJarCLI().run())


if __name__ == "__main__":
    main()
