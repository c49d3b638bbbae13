"""Config command - store and show the API key and base URL."""

from __future__ import annotations

import argparse

from taxjar_cli.commands.base import BaseCommand
from taxjar_cli.core.config import SANDBOX_BASE_URL
from taxjar_cli.core.errors import UsageError
from taxjar_cli.ui.console import print_hint, print_success
from taxjar_cli.ui.tables import print_fields


class ConfigCommand(BaseCommand):
    """Manage CLI configuration."""

    name = "config"
    description = "Manage CLI configuration"

    def add_actions(self, actions: argparse._SubParsersAction) -> None:
        parser = self.add_action(actions, "set", self.set, "Set configuration values", json_flag=False)
        self._set_parser = parser
        parser.add_argument("--api-key", metavar="<key>", help="TaxJar API key")
        url = parser.add_mutually_exclusive_group()
        url.add_argument("--base-url", metavar="<url>", help="API base URL")
        url.add_argument(
            "--sandbox",
            action="store_true",
            help=f"Use the sandbox API ({SANDBOX_BASE_URL})",
        )

        self.add_action(actions, "show", self.show, "Show current configuration", json_flag=False)

    def set(self, args: argparse.Namespace) -> bool:
        """Persist the API key and/or base URL."""
        base_url = SANDBOX_BASE_URL if args.sandbox else args.base_url
        if not args.api_key and not base_url:
            raise UsageError(
                "one of the arguments --api-key --base-url --sandbox is required",
                usage=self._set_parser.format_usage(),
            )

        store = self.config.store
        if args.api_key:
            store.set_api_key(args.api_key)
            print_success("API key saved successfully.")
            print_hint("You can also set TAXJAR_API_KEY as an environment variable.")
        if base_url:
            store.set_base_url(base_url)
            print_success(f"Base URL set to {base_url.rstrip('/')}.")
        return True

    def show(self, args: argparse.Namespace) -> bool:
        """Show the configuration with the key masked."""
        view = self.config.store.show()
        key = view.masked_api_key
        if view.source:
            key = f"{key} (from {view.source})"

        print_fields(
            [
                ("API Key", key, "secondary"),
                ("Base URL", view.base_url, "secondary"),
                ("Config file", view.storage_location, "path"),
            ],
            title="TaxJar CLI Configuration",
        )
        return True
