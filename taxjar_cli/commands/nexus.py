"""Nexus command - list the regions where the account collects tax."""

from __future__ import annotations

import argparse

from taxjar_cli.commands.base import BaseCommand
from taxjar_cli.ui.tables import print_table

NEXUS_COLUMNS = [
    ("country_code", "Country"),
    ("country", "Country Name"),
    ("region_code", "State/Region"),
    ("region", "Region Name"),
]


class NexusCommand(BaseCommand):
    """Nexus region commands."""

    name = "nexus"
    description = "Nexus region commands"

    def add_actions(self, actions: argparse._SubParsersAction) -> None:
        self.add_action(actions, "list", self.list_regions, "List nexus regions for your account")

    def list_regions(self, args: argparse.Namespace) -> bool:
        return self.respond(
            args,
            "Fetching nexus regions...",
            lambda api: api.get_nexus_regions(),
            success=lambda regions: f"Found {len(regions or [])} nexus region(s)",
            failure="Failed to fetch nexus regions",
            render=lambda regions: print_table(regions or [], NEXUS_COLUMNS),
        )
