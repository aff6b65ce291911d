"""Unit tests for PaystackClient

Uses httpx.MockTransport so no request leaves the process.
"""

import hashlib
import hmac
import json

import httpx
import pytest

from src.adapter.services.paystack_client import PaystackClient
from src.app.errors import ProviderError

SECRET = "sk_test_secret"


def make_client(handler) -> PaystackClient:
    return PaystackClient(
        secret_key=SECRET,
        base_url="https://api.paystack.test",
        transport=httpx.MockTransport(handler),
    )


def sign(body: bytes) -> str:
    return hmac.new(SECRET.encode(), body, hashlib.sha512).hexdigest()


class TestWebhookSignature:
    def test_valid_signature(self):
        client = make_client(lambda request: httpx.Response(200))
        body = json.dumps({"event": "transfer.success", "data": {"reference": "ref_1"}}).encode()

        assert client.verify_webhook_signature(body, sign(body)) is True

    def test_tampered_body_is_rejected(self):
        client = make_client(lambda request: httpx.Response(200))
        body = b'{"event":"transfer.success"}'

        assert client.verify_webhook_signature(body + b" ", sign(body)) is False

    def test_missing_signature_is_rejected(self):
        client = make_client(lambda request: httpx.Response(200))

        assert client.verify_webhook_signature(b"{}", None) is False


@pytest.mark.asyncio
class TestTransfers:
    async def test_initiate_transfer_sends_minor_units_and_reference(self):
        seen = {}

        def handler(request: httpx.Request):
            seen["path"] = request.url.path
            seen["auth"] = request.headers["Authorization"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                200,
                json={"status": True, "data": {"transfer_code": "TRF_1", "reference": "ref_1", "status": "pending"}},
            )

        client = make_client(handler)

        transfer = await client.initiate_transfer(5000, "RCP_1", "ref_1")

        assert transfer.transfer_code == "TRF_1"
        assert seen["path"] == "/transfer"
        assert seen["auth"] == f"Bearer {SECRET}"
        assert seen["body"]["amount"] == 5000
        assert seen["body"]["recipient"] == "RCP_1"
        assert seen["body"]["reference"] == "ref_1"

    async def test_non_2xx_raises_provider_error(self):
        client = make_client(lambda request: httpx.Response(400, json={"status": False, "message": "Balance"}))

        with pytest.raises(ProviderError) as exc:
            await client.initiate_transfer(5000, "RCP_1", "ref_1")

        assert exc.value.status_code == 400

    async def test_timeout_raises_provider_error(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        client = make_client(handler)

        with pytest.raises(ProviderError):
            await client.initiate_transfer(5000, "RCP_1", "ref_1")


@pytest.mark.asyncio
class TestCustomers:
    async def test_fetch_missing_customer_returns_none(self):
        client = make_client(lambda request: httpx.Response(404, json={"status": False}))

        assert await client.fetch_customer("ada@example.com") is None

    async def test_fetch_customer_with_subscriptions(self):
        payload = {
            "status": True,
            "data": {
                "customer_code": "CUS_1",
                "email": "ada@example.com",
                "subscriptions": [{"subscription_code": "SUB_1", "status": "active"}],
            },
        }
        client = make_client(lambda request: httpx.Response(200, json=payload))

        customer = await client.fetch_customer("ada@example.com")

        assert customer.customer_code == "CUS_1"
        assert customer.current_subscription().subscription_code == "SUB_1"

    async def test_unresolvable_account_returns_false(self):
        client = make_client(lambda request: httpx.Response(422, json={"status": False}))

        assert await client.resolve_account_number("0000000000", "058") is False

    async def test_resolvable_account(self):
        seen = {}

        def handler(request):
            seen["params"] = dict(request.url.params)
            return httpx.Response(200, json={"status": True, "data": {"account_name": "ADA OBI"}})

        client = make_client(handler)

        assert await client.resolve_account_number("0123456789", "058") is True
        assert seen["params"] == {"account_number": "0123456789", "bank_code": "058"}
