"""Rates command - look up tax rates for a location or every region."""

from __future__ import annotations

import argparse

from taxjar_cli.commands.base import BaseCommand
from taxjar_cli.core.params import RateParams
from taxjar_cli.ui.console import console
from taxjar_cli.ui.tables import format_rate, print_fields, print_table, yes_no

RATE_COMPONENTS = [
    ("state_rate", "State Rate"),
    ("county_rate", "County Rate"),
    ("city_rate", "City Rate"),
    ("combined_district_rate", "District Rate"),
]

SUMMARY_COLUMNS = [
    ("country_code", "Country"),
    ("country", "Country Name"),
    ("region_code", "Region"),
    ("region", "Region Name"),
    ("minimum_rate.rate", "Min Rate"),
    ("average_rate.rate", "Avg Rate"),
]


class RatesCommand(BaseCommand):
    """Tax rate lookup commands."""

    name = "rates"
    description = "Tax rate lookup commands"

    def add_actions(self, actions: argparse._SubParsersAction) -> None:
        parser = self.add_action(actions, "get", self.get, "Get tax rates for a location")
        parser.add_argument("--zip", required=True, metavar="<zip>", help="Postal code")
        parser.add_argument("--country", default="US", metavar="<code>", help="Country code (default: US)")
        parser.add_argument("--city", metavar="<city>", help="City name")
        parser.add_argument("--street", metavar="<street>", help="Street address")
        parser.add_argument("--state", metavar="<state>", help="State code")

        self.add_action(actions, "summary", self.summary, "Get a summary of tax rates for all regions")

    def get(self, args: argparse.Namespace) -> bool:
        """Show the rate breakdown for one location."""
        params = RateParams(
            country=args.country,
            city=args.city or None,
            street=args.street or None,
            state=args.state or None,
        )

        def render(rate: dict) -> None:
            rate = rate or {}
            places = [
                (label, str(rate[key]), "text")
                for key, label in (("city", "City"), ("state", "State"), ("county", "County"))
                if rate.get(key)
            ]
            print_fields(places, title=f"Tax Rates for {args.zip} ({args.country})")

            rates = [
                (label, format_rate(rate[key]), "rate")
                for key, label in RATE_COMPONENTS
                if rate.get(key) not in (None, "")
            ]
            rates.append(("Combined Rate", format_rate(rate.get("combined_rate")), "rate.total"))
            if "freight_taxable" in rate:
                rates.append(("Freight Taxable", yes_no(rate["freight_taxable"]), "text"))
            if places:
                console.print()
            print_fields(rates)

        return self.respond(
            args,
            f"Fetching rates for {args.zip}...",
            lambda api: api.get_rates(args.zip, params),
            success="Rates retrieved",
            failure="Failed to fetch rates",
            render=render,
        )

    def summary(self, args: argparse.Namespace) -> bool:
        """Show minimum and average rates for every region."""
        return self.respond(
            args,
            "Fetching summary rates...",
            lambda api: api.get_summary_rates(),
            success=lambda rates: f"Retrieved {len(rates or [])} region summaries",
            failure="Failed to fetch summary rates",
            render=lambda rates: print_table(rates or [], SUMMARY_COLUMNS),
        )

