"""Categories command - list product tax categories."""

from __future__ import annotations

import argparse

from taxjar_cli.commands.base import BaseCommand
from taxjar_cli.ui.tables import print_table

CATEGORY_COLUMNS = [
    ("product_tax_code", "Tax Code"),
    ("name", "Name"),
    ("description", "Description"),
]


class CategoriesCommand(BaseCommand):
    """Product tax category commands."""

    name = "categories"
    description = "Product tax category commands"

    def add_actions(self, actions: argparse._SubParsersAction) -> None:
        self.add_action(actions, "list", self.list_categories, "List all product tax categories")

    def list_categories(self, args: argparse.Namespace) -> bool:
        return self.respond(
            args,
            "Fetching categories...",
            lambda api: api.get_categories(),
            success=lambda categories: f"Found {len(categories or [])} categories",
            failure="Failed to fetch categories",
            render=lambda categories: print_table(categories or [], CATEGORY_COLUMNS),
        )
