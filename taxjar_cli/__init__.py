"""
TaxJar CLI - sales tax calculation and reporting from the terminal.

Every command maps onto one TaxJar v2 API resource:
- Tax calculation and rate lookups
- Nexus regions and product tax categories
- Order and refund transactions
- Address and VAT number validation
"""

__version__ = "1.0.0"
__app_name__ = "TaxJar CLI"
