"""CLI Commands for TaxJar."""

from taxjar_cli.commands.categories import CategoriesCommand
from taxjar_cli.commands.config import ConfigCommand
from taxjar_cli.commands.nexus import NexusCommand
from taxjar_cli.commands.orders import OrdersCommand
from taxjar_cli.commands.rates import RatesCommand
from taxjar_cli.commands.refunds import RefundsCommand
from taxjar_cli.commands.tax import TaxCommand
from taxjar_cli.commands.validate import ValidateCommand

__all__ = [
    "ConfigCommand",
    "TaxCommand",
    "RatesCommand",
    "NexusCommand",
    "CategoriesCommand",
    "OrdersCommand",
    "RefundsCommand",
    "ValidateCommand",
]
