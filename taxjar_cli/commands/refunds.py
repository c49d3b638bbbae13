"""Refunds command - list, inspect and create refund transactions."""

from __future__ import annotations

import argparse

from taxjar_cli.commands.base import BaseCommand, amount
from taxjar_cli.commands.orders import print_transaction_ids
from taxjar_cli.core.params import RefundListParams, RefundParams
from taxjar_cli.ui.tables import format_money, print_fields


class RefundsCommand(BaseCommand):
    """Refund transaction commands.

    Refund amounts are negative by convention (`--amount -10.00`); the API
    decides whether to accept positive values.
    """

    name = "refunds"
    description = "Refund transaction commands"

    def add_actions(self, actions: argparse._SubParsersAction) -> None:
        parser = self.add_action(actions, "list", self.list_refunds, "List refund transactions")
        parser.add_argument("--from-date", metavar="<date>", help="Start date (YYYY-MM-DD)")
        parser.add_argument("--to-date", metavar="<date>", help="End date (YYYY-MM-DD)")

        parser = self.add_action(actions, "get", self.get_refund, "Get a specific refund transaction")
        parser.add_argument("transaction_id", metavar="<transaction-id>")

        parser = self.add_action(actions, "create", self.create_refund, "Create a refund transaction")
        required = parser.add_argument_group("required arguments")
        required.add_argument("--transaction-id", required=True, metavar="<id>", help="Unique refund transaction ID")
        required.add_argument("--transaction-date", required=True, metavar="<date>", help="Transaction date (YYYY-MM-DD)")
        required.add_argument(
            "--transaction-reference-id", required=True, metavar="<id>",
            help="Original order transaction ID",
        )
        required.add_argument("--to-country", required=True, metavar="<code>", help="Destination country code")
        required.add_argument("--to-zip", required=True, metavar="<zip>", help="Destination postal code")
        required.add_argument("--to-state", required=True, metavar="<state>", help="Destination state code")
        required.add_argument("--amount", required=True, type=amount, metavar="<amount>", help="Refund amount (negative value)")
        required.add_argument(
            "--shipping", required=True, type=amount, metavar="<amount>",
            help="Shipping amount (negative if refunding)",
        )
        required.add_argument("--sales-tax", required=True, type=amount, metavar="<tax>", help="Sales tax to refund (negative value)")

    def list_refunds(self, args: argparse.Namespace) -> bool:
        params = RefundListParams(
            from_transaction_date=args.from_date or None,
            to_transaction_date=args.to_date or None,
        )
        return self.respond(
            args,
            "Fetching refunds...",
            lambda api: api.list_refunds(params),
            success=lambda refunds: f"Found {len(refunds or [])} refund(s)",
            failure="Failed to fetch refunds",
            render=lambda refunds: print_transaction_ids(refunds, "No refunds found for the given criteria."),
        )

    def get_refund(self, args: argparse.Namespace) -> bool:
        def render(refund: dict) -> None:
            refund = refund or {}
            print_fields(
                [
                    ("Transaction Date", str(refund.get("transaction_date", "")), "text"),
                    ("Refund Amount", format_money(refund.get("amount")), "money"),
                    ("Sales Tax Refund", format_money(refund.get("sales_tax")), "money.total"),
                ],
                title=f"Refund: {refund.get('transaction_id', args.transaction_id)}",
            )

        return self.respond(
            args,
            f"Fetching refund {args.transaction_id}...",
            lambda api: api.get_refund(args.transaction_id),
            success="Refund retrieved",
            failure="Failed to fetch refund",
            render=render,
        )

    def create_refund(self, args: argparse.Namespace) -> bool:
        params = RefundParams(
            transaction_id=args.transaction_id,
            transaction_date=args.transaction_date,
            transaction_reference_id=args.transaction_reference_id,
            to_country=args.to_country,
            to_zip=args.to_zip,
            to_state=args.to_state,
            amount=args.amount,
            shipping=args.shipping,
            sales_tax=args.sales_tax,
        )

        def render(refund: dict) -> None:
            refund = refund or {}
            print_fields([
                ("Transaction ID", str(refund.get("transaction_id", "")), "id"),
                ("Refund Amount", format_money(refund.get("amount")), "money"),
                ("Sales Tax", format_money(refund.get("sales_tax")), "money.total"),
            ])

        return self.respond(
            args,
            "Creating refund...",
            lambda api: api.create_refund(params),
            success="Refund created successfully",
            failure="Failed to create refund",
            render=render,
        )
