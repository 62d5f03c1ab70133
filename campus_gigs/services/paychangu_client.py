"""
PayChangu hosted-checkout client.

Every call is a single synchronous HTTPS request with a bounded timeout.
Nothing is retried: any failure (non-2xx, transport error, timeout or a
body without the expected fields) raises GatewayError and aborts the
operation that needed it.
"""
import logging
import uuid
from decimal import Decimal
from typing import Any, Dict, Optional

import httpx

from campus_gigs.core import config
from campus_gigs.core.errors import GatewayError
from campus_gigs.core.logging_config import sanitize_log_data

logger = logging.getLogger(__name__)

ESCROW_PREFIX = "escrow_"
SUBSCRIPTION_PREFIX = "sub_"
FREE_SUBSCRIPTION_PREFIX = "sub_free_"


def generate_tx_ref(prefix: str) -> str:
    """
    Generate a globally unique transaction reference.

    Format: {prefix}{uuid4}, e.g. escrow_6f1c...; the prefix only helps humans
    tell escrow and subscription payments apart in provider dashboards.
    """
    return f"{prefix}{uuid.uuid4()}"


class PayChanguClient:
    """Thin wrapper around the PayChangu REST API."""

    def __init__(
        self,
        secret_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.secret_key = secret_key if secret_key is not None else config.PAYCHANGU_SECRET_KEY
        self.base_url = (base_url or config.PAYCHANGU_API_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else config.PAYCHANGU_TIMEOUT_SECONDS
        self.transport = transport

    def _client(self) -> httpx.Client:
        if not self.secret_key:
            raise GatewayError("PayChangu secret key is not configured")
        return httpx.Client(
            base_url=self.base_url,
            headers={
                "Authorization": f"Bearer {self.secret_key}",
                "Accept": "application/json",
            },
            timeout=self.timeout,
            transport=self.transport,
        )

    def _request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        try:
            with self._client() as client:
                resp = client.request(method, path, json=payload)
        except httpx.TimeoutException as e:
            raise GatewayError(f"PayChangu {method} {path} timed out after {self.timeout}s: {e}")
        except httpx.HTTPError as e:
            raise GatewayError(f"PayChangu {method} {path} failed: {e}")

        if resp.status_code >= 400:
            raise GatewayError(
                f"PayChangu {method} {path} returned HTTP {resp.status_code}: {resp.text[:500]}"
            )

        try:
            body = resp.json()
        except ValueError:
            raise GatewayError(f"PayChangu {method} {path} returned a non-JSON body")

        if not isinstance(body, dict) or not isinstance(body.get("data"), dict):
            raise GatewayError(f"PayChangu {method} {path} returned an unexpected body: {str(body)[:500]}")

        return body["data"]

    def initiate_checkout(
        self,
        *,
        amount,
        currency: str,
        tx_ref: str,
        callback_url: Optional[str],
        return_url: Optional[str],
        metadata: Optional[Dict[str, Any]] = None,
        title: str = "Payment",
        logo: Optional[str] = None,
    ) -> str:
        """
        Create a hosted checkout session.

        Args:
            amount: Amount to charge, in major currency units
            currency: ISO currency code (MWK)
            tx_ref: Caller-generated reference echoed back in webhooks
            callback_url: Where PayChangu posts the payment result
            return_url: Where the payer is sent if they leave checkout
            metadata: Opaque ``meta`` block stored with the transaction
            title: Checkout page title

        Returns:
            The checkout URL to redirect the payer to

        Raises:
            GatewayError: on any provider or transport failure
        """
        payload = {
            "amount": float(Decimal(str(amount))),
            "currency": currency,
            "tx_ref": tx_ref,
            "callback_url": callback_url,
            "return_url": return_url,
            "meta": metadata or {},
            "uuid": tx_ref,
            "customization": {
                "title": title,
                "logo": logo if logo is not None else config.APP_LOGO_URL,
            },
        }
        logger.debug(f"Initiating PayChangu checkout: {sanitize_log_data(payload)}")

        data = self._request("POST", "/payment", payload)
        checkout_url = data.get("checkout_url")
        if not checkout_url:
            raise GatewayError(f"PayChangu checkout response missing checkout_url for tx_ref={tx_ref}")

        logger.info(f"PayChangu checkout created: tx_ref={tx_ref}, amount={amount} {currency}")
        return checkout_url

    def verify_transaction(self, tx_ref: str) -> Dict[str, Any]:
        """
        Look up a transaction by reference.

        Returns:
            The provider's ``data`` mapping; ``status`` is "success" once paid

        Raises:
            GatewayError: on any provider or transport failure
        """
        data = self._request("GET", f"/verify-payment/{tx_ref}")
        logger.info(f"PayChangu verification: tx_ref={tx_ref}, status={data.get('status')}")
        return data


def get_payment_gateway() -> PayChanguClient:
    """FastAPI dependency returning a client built from configuration."""
    return PayChanguClient()
