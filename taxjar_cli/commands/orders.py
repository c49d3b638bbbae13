"""Orders command - list, inspect, create, update and delete order transactions."""

from __future__ import annotations

import argparse

from taxjar_cli.commands.base import BaseCommand, amount
from taxjar_cli.core.params import OrderListParams, OrderParams, OrderUpdateParams
from taxjar_cli.ui.console import console, print_hint
from taxjar_cli.ui.tables import format_location, format_money, print_fields, print_heading, print_table

ORDER_STATUSES = ["authorized", "captured", "refunded", "voided"]

LINE_ITEM_COLUMNS = [
    ("id", "ID"),
    ("description", "Description"),
    ("quantity", "Qty"),
    ("unit_price", "Unit Price"),
    ("sales_tax", "Sales Tax"),
]

TRANSACTION_COLUMNS = [("transaction_id", "Transaction ID")]


def print_transaction_ids(ids: list, empty_message: str) -> None:
    """List endpoints return bare transaction ids."""
    print_table([{"transaction_id": i} for i in ids or []], TRANSACTION_COLUMNS, empty_message=empty_message)


def print_order_summary(order: dict) -> None:
    order = order or {}
    print_fields([
        ("Transaction ID", str(order.get("transaction_id", "")), "id"),
        ("Amount", format_money(order.get("amount")), "money"),
        ("Sales Tax", format_money(order.get("sales_tax")), "money.total"),
    ])


class OrdersCommand(BaseCommand):
    """Order transaction commands."""

    name = "orders"
    description = "Order transaction commands"

    def add_actions(self, actions: argparse._SubParsersAction) -> None:
        parser = self.add_action(actions, "list", self.list_orders, "List order transactions")
        parser.add_argument("--from-date", metavar="<date>", help="Start date (YYYY-MM-DD)")
        parser.add_argument("--to-date", metavar="<date>", help="End date (YYYY-MM-DD)")
        parser.add_argument(
            "--status", metavar="<status>",
            help=f"Filter by status ({', '.join(ORDER_STATUSES)})",
        )

        parser = self.add_action(actions, "get", self.get_order, "Get a specific order transaction")
        parser.add_argument("transaction_id", metavar="<transaction-id>")

        parser = self.add_action(actions, "create", self.create_order, "Create an order transaction")
        required = parser.add_argument_group("required arguments")
        required.add_argument("--transaction-id", required=True, metavar="<id>", help="Unique transaction ID")
        required.add_argument("--transaction-date", required=True, metavar="<date>", help="Transaction date (YYYY-MM-DD)")
        required.add_argument("--to-country", required=True, metavar="<code>", help="Destination country code")
        required.add_argument("--to-zip", required=True, metavar="<zip>", help="Destination postal code")
        required.add_argument("--to-state", required=True, metavar="<state>", help="Destination state code")
        required.add_argument("--amount", required=True, type=amount, metavar="<amount>", help="Total order amount")
        required.add_argument("--shipping", required=True, type=amount, metavar="<amount>", help="Shipping amount")
        required.add_argument("--sales-tax", required=True, type=amount, metavar="<tax>", help="Sales tax collected")
        parser.add_argument("--from-country", metavar="<code>", help="Origin country code")
        parser.add_argument("--from-zip", metavar="<zip>", help="Origin postal code")
        parser.add_argument("--from-state", metavar="<state>", help="Origin state code")
        parser.add_argument("--to-city", metavar="<city>", help="Destination city")
        parser.add_argument("--from-city", metavar="<city>", help="Origin city")

        parser = self.add_action(actions, "update", self.update_order, "Update an existing order transaction")
        parser.add_argument("transaction_id", metavar="<transaction-id>")
        parser.add_argument("--amount", type=amount, metavar="<amount>", help="Total order amount")
        parser.add_argument("--shipping", type=amount, metavar="<amount>", help="Shipping amount")
        parser.add_argument("--sales-tax", type=amount, metavar="<tax>", help="Sales tax collected")
        parser.add_argument("--transaction-date", metavar="<date>", help="Transaction date (YYYY-MM-DD)")

        parser = self.add_action(actions, "delete", self.delete_order, "Delete an order transaction")
        parser.add_argument("transaction_id", metavar="<transaction-id>")

    def list_orders(self, args: argparse.Namespace) -> bool:
        params = OrderListParams(
            from_transaction_date=args.from_date or None,
            to_transaction_date=args.to_date or None,
            status=args.status or None,
        )

        def render(orders: list) -> None:
            print_transaction_ids(orders, "No orders found for the given criteria.")
            if orders:
                console.print()
                print_hint("Use `taxjar orders get <transaction-id>` to see order details.")

        return self.respond(
            args,
            "Fetching orders...",
            lambda api: api.list_orders(params),
            success=lambda orders: f"Found {len(orders or [])} order(s)",
            failure="Failed to fetch orders",
            render=render,
        )

    def get_order(self, args: argparse.Namespace) -> bool:
        def render(order: dict) -> None:
            order = order or {}
            fields = [
                ("Transaction Date", str(order.get("transaction_date", "")), "text"),
                ("Amount", format_money(order.get("amount")), "money"),
                ("Shipping", format_money(order.get("shipping")), "money"),
                ("Sales Tax", format_money(order.get("sales_tax")), "money.total"),
            ]
            if order.get("to_country"):
                fields.append(("Destination", format_location(order, "to"), "text"))
            if order.get("from_country"):
                fields.append(("Origin", format_location(order, "from"), "text"))
            print_fields(fields, title=f"Order: {order.get('transaction_id', args.transaction_id)}")

            line_items = order.get("line_items") or []
            if line_items:
                console.print()
                print_heading("Line Items")
                print_table(line_items, LINE_ITEM_COLUMNS)

        return self.respond(
            args,
            f"Fetching order {args.transaction_id}...",
            lambda api: api.get_order(args.transaction_id),
            success="Order retrieved",
            failure="Failed to fetch order",
            render=render,
        )

    def create_order(self, args: argparse.Namespace) -> bool:
        params = OrderParams(
            transaction_id=args.transaction_id,
            transaction_date=args.transaction_date,
            to_country=args.to_country,
            to_zip=args.to_zip,
            to_state=args.to_state,
            amount=args.amount,
            shipping=args.shipping,
            sales_tax=args.sales_tax,
            from_country=args.from_country or None,
            from_zip=args.from_zip or None,
            from_state=args.from_state or None,
            from_city=args.from_city or None,
            to_city=args.to_city or None,
        )
        return self.respond(
            args,
            "Creating order...",
            lambda api: api.create_order(params),
            success="Order created successfully",
            failure="Failed to create order",
            render=print_order_summary,
        )

    def update_order(self, args: argparse.Namespace) -> bool:
        params = OrderUpdateParams(
            transaction_id=args.transaction_id,
            amount=args.amount,
            shipping=args.shipping,
            sales_tax=args.sales_tax,
            transaction_date=args.transaction_date or None,
        )
        return self.respond(
            args,
            f"Updating order {args.transaction_id}...",
            lambda api: api.update_order(args.transaction_id, params),
            success="Order updated successfully",
            failure="Failed to update order",
            render=print_order_summary,
        )

    def delete_order(self, args: argparse.Namespace) -> bool:
        def render(order: dict) -> None:
            print_fields([("Deleted transaction", args.transaction_id, "id")])

        return self.respond(
            args,
            f"Deleting order {args.transaction_id}...",
            lambda api: api.delete_order(args.transaction_id),
            success="Order deleted successfully",
            failure="Failed to delete order",
            render=render,
        )
