"""Request parameter models for the TaxJar API.

Optional fields default to None and are left out of the payload entirely,
so the API never sees empty-string placeholders.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Any, Optional

from pydantic import BaseModel, ConfigDict, PlainSerializer

# Monetary values are parsed as Decimal and sent as JSON numbers
Money = Annotated[Decimal, PlainSerializer(float, return_type=float)]


class RequestParams(BaseModel):
    """Base class for request bodies and query strings."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    def to_payload(self) -> dict[str, Any]:
        """Dump the set fields only."""
        return self.model_dump(exclude_none=True)


class TaxCalculationParams(RequestParams):
    from_country: str
    from_zip: str
    from_state: str
    to_country: str
    to_zip: str
    to_state: str
    amount: Money
    shipping: Money = Decimal("0")
    from_city: Optional[str] = None
    from_street: Optional[str] = None
    to_city: Optional[str] = None
    to_street: Optional[str] = None


class RateParams(RequestParams):
    """Query string for a rate lookup; the zip goes in the path."""

    country: Optional[str] = "US"
    city: Optional[str] = None
    street: Optional[str] = None
    state: Optional[str] = None


class RefundListParams(RequestParams):
    from_transaction_date: Optional[str] = None
    to_transaction_date: Optional[str] = None


class OrderListParams(RefundListParams):
    status: Optional[str] = None


class OrderParams(RequestParams):
    transaction_id: str
    transaction_date: str
    to_country: str
    to_zip: str
    to_state: str
    amount: Money
    shipping: Money
    sales_tax: Money
    from_country: Optional[str] = None
    from_zip: Optional[str] = None
    from_state: Optional[str] = None
    from_city: Optional[str] = None
    to_city: Optional[str] = None


class OrderUpdateParams(RequestParams):
    transaction_id: str
    amount: Optional[Money] = None
    shipping: Optional[Money] = None
    sales_tax: Optional[Money] = None
    transaction_date: Optional[str] = None


class RefundParams(RequestParams):
    """
    A refund transaction.

    By convention amount, shipping and sales_tax are negative. The API
    enforces that, this model does not.
    """

    transaction_id: str
    transaction_date: str
    transaction_reference_id: str
    to_country: str
    to_zip: str
    to_state: str
    amount: Money
    shipping: Money
    sales_tax: Money


class AddressParams(RequestParams):
    country: str
    state: Optional[str] = None
    zip: Optional[str] = None
    city: Optional[str] = None
    street: Optional[str] = None
