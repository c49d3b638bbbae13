"""Validate command - standardize addresses and check VAT numbers."""

from __future__ import annotations

import argparse

from rich.text import Text

from taxjar_cli.commands.base import BaseCommand
from taxjar_cli.core.params import AddressParams
from taxjar_cli.ui.console import console
from taxjar_cli.ui.tables import print_fields, yes_no

ADDRESS_FIELDS = [
    ("street", "Street"),
    ("city", "City"),
    ("state", "State"),
    ("zip", "ZIP"),
    ("country", "Country"),
]


def print_address_matches(addresses: list) -> None:
    """Number each candidate address: `Match 1:`, `Match 2:`..."""
    if not addresses:
        console.print(Text("No matching addresses found.", style="warning"))
        return
    for i, address in enumerate(addresses, start=1):
        console.print()
        console.print(Text(f"Match {i}:", style="heading"))
        print_fields([
            (label, str(address[key]), "text")
            for key, label in ADDRESS_FIELDS
            if address.get(key)
        ])


class ValidateCommand(BaseCommand):
    """Validation commands."""

    name = "validate"
    description = "Validation commands"

    def add_actions(self, actions: argparse._SubParsersAction) -> None:
        parser = self.add_action(actions, "address", self.address, "Validate and standardize a US address")
        parser.add_argument("--country", required=True, metavar="<code>", help="Country code (US)")
        parser.add_argument("--state", metavar="<state>", help="State code")
        parser.add_argument("--zip", metavar="<zip>", help="ZIP code")
        parser.add_argument("--city", metavar="<city>", help="City")
        parser.add_argument("--street", metavar="<street>", help="Street address")

        parser = self.add_action(actions, "vat", self.vat, "Validate a VAT identification number")
        parser.add_argument("vat_number", metavar="<vat-number>")

    def address(self, args: argparse.Namespace) -> bool:
        params = AddressParams(
            country=args.country,
            state=args.state or None,
            zip=args.zip or None,
            city=args.city or None,
            street=args.street or None,
        )
        return self.respond(
            args,
            "Validating address...",
            lambda api: api.validate_address(params),
            success=lambda addresses: f"Found {len(addresses or [])} address match(es)",
            failure="Address validation failed",
            render=print_address_matches,
        )

    def vat(self, args: argparse.Namespace) -> bool:
        def render(result: dict) -> None:
            result = result or {}
            fields = [
                ("VAT Number", str(result.get("vat_number") or args.vat_number), "text"),
                ("Valid", yes_no(result.get("valid")), "success" if result.get("valid") else "error"),
            ]
            if result.get("name"):
                fields.append(("Name", str(result["name"]), "text"))
            if result.get("country_code"):
                fields.append(("Country", str(result["country_code"]), "text"))
            print_fields(fields, title="VAT Validation Result")

        return self.respond(
            args,
            f"Validating VAT: {args.vat_number}...",
            lambda api: api.validate_vat(args.vat_number),
            success="VAT validation complete",
            failure="VAT validation failed",
            render=render,
        )
