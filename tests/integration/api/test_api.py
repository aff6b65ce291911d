"""Integration tests for the payout service HTTP API"""

import json

import pytest
from httpx import AsyncClient

from src.domain.ledger import Ledger
from src.domain.payout import Payout, PayoutStatus
from src.domain.payout_account import PayoutAccount
from tests.integration.helpers import reload, sign


def account_payload(user_id: str, account_number: str = "0123456789") -> dict:
    return {
        "user_id": user_id,
        "account_number": account_number,
        "account_name": "Ada Obi",
        "bank_code": "058",
        "bank_name": "GTBank",
    }


async def post_webhook(client: AsyncClient, event: dict, signature: str = None):
    body = json.dumps(event).encode()
    headers = {"content-type": "application/json"}
    headers["x-paystack-signature"] = signature if signature is not None else sign(body)
    return await client.post("/webhooks/paystack", content=body, headers=headers)


class TestHealthAndEarningsAPI:
    @pytest.mark.asyncio
    async def test_health(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    @pytest.mark.asyncio
    async def test_earnings_for_user_without_ledger(self, client: AsyncClient):
        response = await client.get("/earnings/users/nobody")

        assert response.status_code == 200
        data = response.json()
        assert data["total_earnings"] == 0
        assert data["available_earnings"] == 0

    @pytest.mark.asyncio
    async def test_earnings_summary(self, client: AsyncClient, make_user):
        await make_user("a@example.com", total_earnings=7000)
        await make_user("b@example.com", total_earnings=3000)

        response = await client.get("/earnings/summary")

        assert response.status_code == 200
        assert response.json()["total_earnings"] == 10000
        assert response.json()["available_earnings"] == 10000
        assert response.json()["platform_revenue"] == 0


class TestPayoutAccountsAPI:
    @pytest.mark.asyncio
    async def test_add_account_returns_201(self, client: AsyncClient, make_user):
        user = await make_user("seller@example.com")

        response = await client.post("/payout-accounts", json=account_payload(user.id))

        assert response.status_code == 201
        data = response.json()
        assert data["account_number"] == "0123456789"
        assert data["active"] is True

    @pytest.mark.asyncio
    async def test_duplicate_account_returns_409(self, client: AsyncClient, make_user):
        user = await make_user("seller@example.com")
        await client.post("/payout-accounts", json=account_payload(user.id))

        response = await client.post("/payout-accounts", json=account_payload(user.id))

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "DUPLICATE_ACCOUNT"

    @pytest.mark.asyncio
    async def test_non_digit_account_number_rejected(self, client: AsyncClient, make_user):
        user = await make_user("seller@example.com")

        response = await client.post("/payout-accounts", json=account_payload(user.id, "01234abcde"))

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_activate_second_account(self, client: AsyncClient, db_session, make_user):
        user = await make_user("seller@example.com")
        first = (await client.post("/payout-accounts", json=account_payload(user.id))).json()
        second = (
            await client.post("/payout-accounts", json=account_payload(user.id, "0987654321"))
        ).json()

        response = await client.post(
            f"/payout-accounts/{second['id']}/activate", json={"user_id": user.id}
        )
        active = await client.get(f"/payout-accounts/users/{user.id}/active")

        assert response.status_code == 200
        assert active.json()["id"] == second["id"]
        accounts = {a.id: a.active for a in await reload(db_session, PayoutAccount, user_id=user.id)}
        assert accounts == {first["id"]: False, second["id"]: True}

    @pytest.mark.asyncio
    async def test_activate_other_users_account_returns_404(self, client: AsyncClient, make_user):
        owner = await make_user("owner@example.com")
        intruder = await make_user("intruder@example.com")
        account = (await client.post("/payout-accounts", json=account_payload(owner.id))).json()

        response = await client.post(
            f"/payout-accounts/{account['id']}/activate", json={"user_id": intruder.id}
        )

        assert response.status_code == 404


class TestWithdrawAPI:
    @pytest.mark.asyncio
    async def test_withdraw_without_account_returns_400(self, client: AsyncClient, make_user):
        user = await make_user("seller@example.com", total_earnings=10000)

        response = await client.post("/earnings/withdraw", json={"user_id": user.id, "amount": 5000})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "NO_PAYOUT_ACCOUNT"

    @pytest.mark.asyncio
    async def test_withdraw_more_than_available_returns_402(self, client: AsyncClient, make_user):
        user = await make_user("seller@example.com", total_earnings=1000)
        await client.post("/payout-accounts", json=account_payload(user.id))

        response = await client.post("/earnings/withdraw", json={"user_id": user.id, "amount": 5000})

        assert response.status_code == 402
        assert response.json()["error"]["code"] == "INSUFFICIENT_BALANCE"

    @pytest.mark.asyncio
    async def test_withdraw_then_signed_transfer_success(
        self, client: AsyncClient, db_session, make_user
    ):
        """
        Given: A seller with 10000 and an active account
        When: 4000 is withdrawn and a signed transfer.success is delivered
        Then: The payout completes and earnings show 4000 withdrawn
        """
        user = await make_user("seller@example.com", total_earnings=10000)
        await client.post("/payout-accounts", json=account_payload(user.id))

        withdraw = await client.post("/earnings/withdraw", json={"user_id": user.id, "amount": 4000})
        assert withdraw.status_code == 200
        reference = withdraw.json()["reference"]

        earnings = (await client.get(f"/earnings/users/{user.id}")).json()
        assert earnings["pending"] == 4000
        assert earnings["available_earnings"] == 6000

        response = await post_webhook(
            client, {"event": "transfer.success", "data": {"reference": reference, "amount": 4000}}
        )

        assert response.status_code == 200
        assert response.json()["status"] == "applied"
        earnings = (await client.get(f"/earnings/users/{user.id}")).json()
        assert earnings["withdrawn_earnings"] == 4000
        assert earnings["pending"] == 0

        payouts = (await client.get(f"/payouts/users/{user.id}")).json()
        assert payouts["total"] == 1
        assert payouts["payouts"][0]["status"] == "completed"

    @pytest.mark.asyncio
    async def test_withdraw_provider_failure_returns_502(
        self, client: AsyncClient, db_session, make_user, paystack_api
    ):
        user = await make_user("seller@example.com", total_earnings=10000)
        await client.post("/payout-accounts", json=account_payload(user.id))
        paystack_api.fail_transfers = True

        response = await client.post("/earnings/withdraw", json={"user_id": user.id, "amount": 4000})

        assert response.status_code == 502
        (ledger,) = await reload(db_session, Ledger, user_id=user.id)
        assert ledger.pending == 0
        (payout,) = await reload(db_session, Payout, user_id=user.id)
        assert payout.status == PayoutStatus.FAILED

    @pytest.mark.asyncio
    async def test_list_payouts_rejects_bad_limit(self, client: AsyncClient):
        response = await client.get("/payouts/users/someone", params={"limit": 500})

        assert response.status_code == 400


class TestWebhookAPI:
    @pytest.mark.asyncio
    async def test_invalid_signature_acknowledged_without_effect(
        self, client: AsyncClient, db_session
    ):
        event = {
            "event": "charge.success",
            "data": {
                "reference": "T1",
                "metadata": {
                    "isPurchase": True,
                    "buyer_id": "buyer_1",
                    "products": [{"product_id": "p1", "seller_id": "seller_a", "price": 1000}],
                },
            },
        }

        response = await post_webhook(client, event, signature="forged")

        assert response.status_code == 200
        assert await reload(db_session, Ledger, user_id="seller_a") == []

    @pytest.mark.asyncio
    async def test_signed_purchase_credits_seller(self, client: AsyncClient, db_session):
        event = {
            "event": "charge.success",
            "data": {
                "reference": "T1",
                "metadata": {
                    "isPurchase": True,
                    "buyer_id": "buyer_1",
                    "products": [{"product_id": "p1", "seller_id": "seller_a", "price": 1000}],
                },
            },
        }

        response = await post_webhook(client, event)

        assert response.status_code == 200
        earnings = (await client.get("/earnings/users/seller_a")).json()
        assert earnings["total_earnings"] == 1000

    @pytest.mark.asyncio
    async def test_non_json_body_acknowledged(self, client: AsyncClient):
        body = b"not json"

        response = await client.post(
            "/webhooks/paystack", content=body, headers={"x-paystack-signature": sign(body)}
        )

        assert response.status_code == 200


class TestSubscriptionsAPI:
    @pytest.mark.asyncio
    async def test_start_subscription_then_conflict(self, client: AsyncClient, make_user, paystack_api):
        user = await make_user("reader@example.com")

        first = await client.post("/subscriptions", json={"user_id": user.id})
        second = await client.post("/subscriptions", json={"user_id": user.id})

        assert first.status_code == 201
        data = first.json()
        assert data["status"] == "pending"
        assert data["authorization_url"].startswith("https://checkout.paystack.com/")
        assert data["customer_code"].startswith("CUS_")
        assert second.status_code == 409
        assert second.json()["error"]["code"] == "SUBSCRIPTION_CONFLICT"

    @pytest.mark.asyncio
    async def test_start_subscription_unknown_user(self, client: AsyncClient):
        response = await client.post("/subscriptions", json={"user_id": "missing"})

        assert response.status_code == 404
