"""
Unit tests for the PayChangu client.
"""
import httpx
import pytest

from campus_gigs.core.errors import GatewayError
from campus_gigs.services.paychangu_client import (
    ESCROW_PREFIX,
    PayChanguClient,
    generate_tx_ref,
)


def test_generate_tx_ref_unique():
    """Test references carry the prefix and never repeat."""
    refs = {generate_tx_ref(ESCROW_PREFIX) for _ in range(100)}
    assert len(refs) == 100
    assert all(ref.startswith("escrow_") for ref in refs)


def test_initiate_checkout_request(fake_gateway, gateway):
    """Test the checkout request body and auth header."""
    url = gateway.initiate_checkout(
        amount="10000.00",
        currency="MWK",
        tx_ref="escrow_abc",
        callback_url="https://app.test/callback",
        return_url="https://app.test/return",
        metadata={"gigId": 4},
        title="Escrow Deposit",
    )

    assert url == "https://checkout.paychangu.test/abc"

    request = fake_gateway.requests[-1]
    assert request.method == "POST"
    assert request.url.path == "/payment"
    assert request.headers["Authorization"] == "Bearer sk_test_123"

    payload = fake_gateway.last_payload()
    assert payload["amount"] == 10000.0
    assert payload["currency"] == "MWK"
    assert payload["tx_ref"] == "escrow_abc"
    assert payload["meta"] == {"gigId": 4}
    assert payload["customization"]["title"] == "Escrow Deposit"


def test_initiate_checkout_http_error(fake_gateway, gateway):
    """Test a non-2xx provider response raises GatewayError."""
    fake_gateway.status_code = 500
    fake_gateway.body = {"message": "boom"}

    with pytest.raises(GatewayError) as exc:
        gateway.initiate_checkout(
            amount=100, currency="MWK", tx_ref="escrow_x", callback_url=None, return_url=None
        )
    assert "HTTP 500" in exc.value.detail


def test_initiate_checkout_missing_url(fake_gateway, gateway):
    """Test a success body without checkout_url is treated as a failure."""
    fake_gateway.body = {"status": "success", "data": {}}

    with pytest.raises(GatewayError):
        gateway.initiate_checkout(
            amount=100, currency="MWK", tx_ref="escrow_x", callback_url=None, return_url=None
        )


def test_timeout_fails_closed(fake_gateway, gateway):
    """Test a transport timeout raises GatewayError instead of hanging or succeeding."""
    fake_gateway.exception = httpx.ConnectTimeout("timed out")

    with pytest.raises(GatewayError) as exc:
        gateway.verify_transaction("escrow_x")
    assert "timed out" in exc.value.detail


def test_missing_secret_key():
    """Test the client refuses to call out without a secret key."""
    client = PayChanguClient(secret_key="", base_url="https://api.paychangu.test")
    with pytest.raises(GatewayError):
        client.verify_transaction("escrow_x")


def test_verify_transaction(fake_gateway, gateway):
    """Test verification returns the provider's data block."""
    fake_gateway.body = {"status": "success", "data": {"status": "success", "reference": "PC123"}}

    data = gateway.verify_transaction("escrow_abc")

    assert data["reference"] == "PC123"
    assert fake_gateway.requests[-1].url.path == "/verify-payment/escrow_abc"
