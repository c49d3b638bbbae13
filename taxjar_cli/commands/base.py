"""Base command class for CLI commands."""

from __future__ import annotations

import argparse
from abc import ABC, abstractmethod
from collections.abc import Callable
from decimal import Decimal, InvalidOperation
from typing import Any, NoReturn, Optional, Union

import httpx

from taxjar_cli.core.api_client import APIClient, APIResponse
from taxjar_cli.core.config import CLIConfig
from taxjar_cli.core.errors import UsageError
from taxjar_cli.ui.console import print_error, print_json, print_status
from taxjar_cli.ui.spinners import create_spinner


class CommandParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting with status 2."""

    def error(self, message: str) -> NoReturn:
        raise UsageError(message, usage=self.format_usage())


def amount(text: str) -> Decimal:
    """argparse type for monetary flags.

    Rejects anything that is not a finite number, and numbers a float cannot
    hold exactly.
    """
    try:
        value = Decimal(text.strip())
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"invalid amount: {text!r}") from None
    if not value.is_finite():
        raise argparse.ArgumentTypeError(f"invalid amount: {text!r}")
    # Amounts travel as JSON floats
    if Decimal(repr(float(value))) != value:
        raise argparse.ArgumentTypeError(f"amount has too many digits: {text!r}")
    return value


class BaseCommand(ABC):
    """Base class for a verb group such as `orders` or `rates`."""

    name: str = "base"
    description: str = "Base command"

    def __init__(self, config: CLIConfig, transport: Optional[httpx.BaseTransport] = None):
        self.config = config
        self.transport = transport
        self._api: Optional[APIClient] = None

    @property
    def api(self) -> APIClient:
        """API client for this invocation. Raises MissingCredentialError."""
        if self._api is None:
            self._api = APIClient.from_credential(
                self.config.credential(),
                timeout=self.config.timeout,
                transport=self.transport,
            )
        return self._api

    def close(self) -> None:
        if self._api is not None:
            self._api.close()
            self._api = None

    def register(self, subparsers: argparse._SubParsersAction) -> None:
        """Add this group and its subcommands to the top-level parser."""
        parser = subparsers.add_parser(self.name, help=self.description, description=self.description)
        actions = parser.add_subparsers(dest="action", metavar="<command>", required=True)
        self.add_actions(actions)

    @abstractmethod
    def add_actions(self, actions: argparse._SubParsersAction) -> None:
        """Declare the subcommands and their flags."""

    def add_action(
        self,
        actions: argparse._SubParsersAction,
        name: str,
        handler: Callable[[argparse.Namespace], bool],
        description: str,
        json_flag: bool = True,
    ) -> argparse.ArgumentParser:
        parser = actions.add_parser(name, help=description, description=description)
        parser.set_defaults(handler=handler)
        if json_flag:
            parser.add_argument("--json", action="store_true", help="Output raw JSON")
        return parser

    def execute(self, args: argparse.Namespace) -> bool:
        """
        Execute the parsed subcommand.

        Returns:
            True if successful, False otherwise
        """
        return args.handler(args)

    def call(
        self,
        message: str,
        request: Callable[[APIClient], APIResponse],
        success: Union[str, Callable[[Any], str]],
        failure: str,
    ) -> APIResponse:
        """Send one request behind a spinner and report how it ended."""
        api = self.api
        with create_spinner(message, style="loading"):
            response = request(api)

        if not response.success:
            print_status(failure, ok=False)
            print_error(str(response.error))
            return response

        print_status(success(response.data) if callable(success) else success)
        return response

    def respond(
        self,
        args: argparse.Namespace,
        message: str,
        request: Callable[[APIClient], APIResponse],
        success: Union[str, Callable[[Any], str]],
        failure: str,
        render: Callable[[Any], None],
    ) -> bool:
        """Call the API, then print the result as JSON or through `render`."""
        response = self.call(message, request, success, failure)
        if not response.success:
            return False

        if getattr(args, "json", False):
            print_json(response.data)
        else:
            render(response.data)
        return True
