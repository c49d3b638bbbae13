"""Tax command - calculate sales tax for an order."""

from __future__ import annotations

import argparse
from decimal import Decimal

from taxjar_cli.commands.base import BaseCommand, amount
from taxjar_cli.core.params import TaxCalculationParams
from taxjar_cli.ui.tables import format_money, format_rate, print_fields, yes_no

BREAKDOWN_FIELDS = [
    ("state_tax_collectable", "State Tax"),
    ("county_tax_collectable", "County Tax"),
    ("city_tax_collectable", "City Tax"),
    ("special_district_tax_collectable", "Special District"),
]


class TaxCommand(BaseCommand):
    """Tax calculation commands."""

    name = "tax"
    description = "Tax calculation commands"

    def add_actions(self, actions: argparse._SubParsersAction) -> None:
        parser = self.add_action(actions, "calculate", self.calculate, "Calculate sales tax for an order")
        required = parser.add_argument_group("required arguments")
        required.add_argument("--from-country", required=True, metavar="<code>", help="Origin country code (e.g. US)")
        required.add_argument("--from-zip", required=True, metavar="<zip>", help="Origin postal code")
        required.add_argument("--from-state", required=True, metavar="<state>", help="Origin state code (e.g. CA)")
        required.add_argument("--to-country", required=True, metavar="<code>", help="Destination country code (e.g. US)")
        required.add_argument("--to-zip", required=True, metavar="<zip>", help="Destination postal code")
        required.add_argument("--to-state", required=True, metavar="<state>", help="Destination state code (e.g. NY)")
        required.add_argument(
            "--amount", required=True, type=amount, metavar="<amount>",
            help="Order amount (subtotal, excluding shipping)",
        )
        parser.add_argument("--shipping", type=amount, default=Decimal("0"), metavar="<amount>", help="Shipping amount (default: 0)")
        parser.add_argument("--from-city", metavar="<city>", help="Origin city")
        parser.add_argument("--from-street", metavar="<street>", help="Origin street address")
        parser.add_argument("--to-city", metavar="<city>", help="Destination city")
        parser.add_argument("--to-street", metavar="<street>", help="Destination street address")

    def calculate(self, args: argparse.Namespace) -> bool:
        """Calculate tax and show the amount to collect."""
        params = TaxCalculationParams(
            from_country=args.from_country,
            from_zip=args.from_zip,
            from_state=args.from_state,
            to_country=args.to_country,
            to_zip=args.to_zip,
            to_state=args.to_state,
            amount=args.amount,
            shipping=args.shipping,
            from_city=args.from_city or None,
            from_street=args.from_street or None,
            to_city=args.to_city or None,
            to_street=args.to_street or None,
        )

        def render(tax: dict) -> None:
            tax = tax or {}
            print_fields(
                [
                    ("Order Amount", format_money(params.amount), "money"),
                    ("Taxable Amount", format_money(tax.get("taxable_amount")), "money"),
                    ("Shipping", format_money(params.shipping), "money"),
                    ("Freight Taxable", yes_no(tax.get("freight_taxable")), "text"),
                    ("Tax Rate", format_rate(tax.get("rate")), "rate"),
                    ("Tax to Collect", format_money(tax.get("amount_to_collect")), "money.total"),
                    ("Has Nexus", yes_no(tax.get("has_nexus")), "text"),
                ],
                title="Tax Calculation Result",
            )

            breakdown = tax.get("breakdown") or {}
            fields = [
                (label, format_money(breakdown[key]), "money")
                for key, label in BREAKDOWN_FIELDS
                if breakdown.get(key)
            ]
            if fields:
                print_fields(fields, title="Breakdown")

        return self.respond(
            args,
            "Calculating tax...",
            lambda api: api.calculate_tax(params),
            success="Tax calculated",
            failure="Tax calculation failed",
            render=render,
        )
