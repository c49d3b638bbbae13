"""API Client for the TaxJar v2 REST API."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import quote

import httpx

from taxjar_cli import __version__
from taxjar_cli.core.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, Credential
from taxjar_cli.core.errors import ApiError, NetworkError, RequestError, TaxJarError
from taxjar_cli.core.params import (
    AddressParams,
    OrderListParams,
    OrderParams,
    OrderUpdateParams,
    RateParams,
    RefundListParams,
    RefundParams,
    TaxCalculationParams,
)

logger = logging.getLogger(__name__)


@dataclass
class APIResponse:
    """Result of one API call: the unwrapped data or a translated error."""
    success: bool
    data: Any = None
    error: Optional[TaxJarError] = None
    status_code: int = 0


def extract_error_message(response: httpx.Response) -> str:
    """Pull `detail`, then `error`, out of an error body; fall back to the raw text."""
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict):
        message = body.get("detail") or body.get("error")
        if message:
            return str(message)
    return response.text


class APIClient:
    """HTTP client for the TaxJar API. One method per remote capability."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport
        self._client: Optional[httpx.Client] = None

    @classmethod
    def from_credential(
        cls,
        credential: Credential,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> "APIClient":
        return cls(credential.api_key, credential.base_url, timeout=timeout, transport=transport)

    @property
    def client(self) -> httpx.Client:
        """Lazy-initialize the HTTP client."""
        if self._client is None:
            self._client = httpx.Client(
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                    "User-Agent": f"taxjar-cli/{__version__}",
                },
                timeout=self.timeout,
                transport=self.transport,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> "APIClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def _request(
        self,
        method: str,
        endpoint: str,
        key: str,
        json: Optional[dict] = None,
        params: Optional[dict] = None,
        default: Any = None,
    ) -> APIResponse:
        """Make an HTTP request and unwrap `key` from the response envelope.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint path, already percent-encoded
            key: Envelope field holding the result
            json: JSON body for the request
            params: Query parameters
            default: Value used when the envelope lacks `key`
        """
        url = f"{self.base_url}{endpoint}"
        logger.debug("%s %s params=%s", method, url, params)

        try:
            scheme = httpx.URL(url).scheme
        except httpx.InvalidURL as e:
            return APIResponse(success=False, error=RequestError(f"Invalid URL {url!r}: {e}"))
        if scheme not in ("http", "https"):
            return APIResponse(
                success=False,
                error=RequestError(f"URL {url!r} is missing an 'http://' or 'https://' protocol"),
            )

        try:
            response = self.client.request(method, url, json=json, params=params or None)
        except (httpx.UnsupportedProtocol, httpx.InvalidURL) as e:
            return APIResponse(success=False, error=RequestError(str(e)))
        except (httpx.TimeoutException, httpx.NetworkError, httpx.ProtocolError) as e:
            logger.debug("No response from %s: %s: %s", url, type(e).__name__, e)
            return APIResponse(success=False, error=NetworkError())
        except (httpx.HTTPError, ValueError, TypeError) as e:
            return APIResponse(success=False, error=RequestError(f"{type(e).__name__}: {e}"))

        logger.debug("%s %s -> %d", method, url, response.status_code)

        if not response.is_success:
            return APIResponse(
                success=False,
                error=ApiError(response.status_code, extract_error_message(response)),
                status_code=response.status_code,
            )

        try:
            envelope = response.json()
        except ValueError:
            return APIResponse(
                success=False,
                error=ApiError(response.status_code, f"Invalid JSON response: {response.text[:200]}"),
                status_code=response.status_code,
            )

        data = envelope.get(key, default) if isinstance(envelope, dict) else default
        return APIResponse(success=True, data=data, status_code=response.status_code)

    @staticmethod
    def _segment(value: str) -> str:
        """Percent-encode one path segment. Dot segments are escaped too, so
        httpx does not collapse them into the parent path."""
        segment = quote(str(value), safe="")
        if segment in (".", ".."):
            return "%2E" * len(segment)
        return segment

    # Taxes
    def calculate_tax(self, params: TaxCalculationParams) -> APIResponse:
        """Calculate sales tax for an order."""
        return self._request("POST", "/taxes", "tax", json=params.to_payload())

    # Rates
    def get_rates(self, zip_code: str, params: Optional[RateParams] = None) -> APIResponse:
        """Get rates for a location."""
        query = params.to_payload() if params else None
        return self._request("GET", f"/rates/{self._segment(zip_code)}", "rate", params=query)

    def get_summary_rates(self) -> APIResponse:
        """Get minimum and average rates for every region."""
        return self._request("GET", "/summary_rates", "summary_rates", default=[])

    # Nexus
    def get_nexus_regions(self) -> APIResponse:
        """List the nexus regions for the account."""
        return self._request("GET", "/nexus/regions", "regions", default=[])

    # Categories
    def get_categories(self) -> APIResponse:
        """List product tax categories."""
        return self._request("GET", "/categories", "categories", default=[])

    # Orders
    def list_orders(self, params: Optional[OrderListParams] = None) -> APIResponse:
        """List order transaction ids, filtered by date range and status."""
        query = params.to_payload() if params else None
        return self._request("GET", "/transactions/orders", "orders", params=query, default=[])

    def get_order(self, transaction_id: str) -> APIResponse:
        return self._request("GET", f"/transactions/orders/{self._segment(transaction_id)}", "order")

    def create_order(self, params: OrderParams) -> APIResponse:
        return self._request("POST", "/transactions/orders", "order", json=params.to_payload())

    def update_order(self, transaction_id: str, params: OrderUpdateParams) -> APIResponse:
        return self._request(
            "PUT",
            f"/transactions/orders/{self._segment(transaction_id)}",
            "order",
            json=params.to_payload(),
        )

    def delete_order(self, transaction_id: str) -> APIResponse:
        return self._request("DELETE", f"/transactions/orders/{self._segment(transaction_id)}", "order")

    # Refunds
    def list_refunds(self, params: Optional[RefundListParams] = None) -> APIResponse:
        """List refund transaction ids, filtered by date range."""
        query = params.to_payload() if params else None
        return self._request("GET", "/transactions/refunds", "refunds", params=query, default=[])

    def get_refund(self, transaction_id: str) -> APIResponse:
        return self._request("GET", f"/transactions/refunds/{self._segment(transaction_id)}", "refund")

    def create_refund(self, params: RefundParams) -> APIResponse:
        return self._request("POST", "/transactions/refunds", "refund", json=params.to_payload())

    # Validation
    def validate_address(self, params: AddressParams) -> APIResponse:
        """Validate and standardize a US address."""
        return self._request("POST", "/addresses/validate", "addresses", json=params.to_payload(), default=[])

    def validate_vat(self, vat_number: str) -> APIResponse:
        """Validate a VAT identification number."""
        return self._request("GET", "/validation", "validation", params={"vat": vat_number})
