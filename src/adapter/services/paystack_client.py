"""Paystack Payment Provider

httpx implementation of the PaymentProvider interface against the
Paystack REST API. Every failure (transport error, timeout, non-2xx
status, unexpected body) is logged and raised as ProviderError.
"""

import hashlib
import hmac
import logging
from typing import Any, Dict, Optional
import httpx
from src.app.errors import ProviderError
from src.app.services.payment_provider import (
    PaymentProvider,
    ProviderCustomerDTO,
    ProviderSubscriptionDTO,
    TransactionInitializationDTO,
    TransferRecipientDTO,
    TransferDTO,
)

logger = logging.getLogger(__name__)


class PaystackClient(PaymentProvider):
    """
    Paystack API client

    Amounts are passed through in minor units (kobo), which is what
    Paystack expects for transactions and transfers.
    """

    def __init__(
        self,
        secret_key: str,
        base_url: str = "https://api.paystack.co",
        timeout: float = 15.0,
        currency: str = "NGN",
        callback_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.secret_key = secret_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.currency = currency
        self.callback_url = callback_url
        self._transport = transport

    async def create_customer(
        self, email: str, full_name: str, phone: Optional[str] = None
    ) -> ProviderCustomerDTO:
        names = full_name.strip().split()
        payload = {
            "email": email,
            "first_name": names[0] if names else "",
            "last_name": names[-1] if names else "",
            "phone": phone,
        }
        body = await self._request("POST", "/customer", json=payload)
        return self._to_customer(body["data"])

    async def fetch_customer(self, email: str) -> Optional[ProviderCustomerDTO]:
        body = await self._request("GET", f"/customer/{email}", allow_not_found=True)
        if body is None:
            return None
        return self._to_customer(body["data"])

    async def initialize_transaction(
        self, email: str, amount: int, plan_code: Optional[str] = None
    ) -> TransactionInitializationDTO:
        payload: Dict[str, Any] = {"email": email, "amount": amount}
        if self.callback_url:
            payload["callback_url"] = self.callback_url
        if plan_code:
            payload["plan"] = plan_code

        body = await self._request("POST", "/transaction/initialize", json=payload)
        data = body["data"]
        return TransactionInitializationDTO(
            authorization_url=data["authorization_url"],
            access_code=data["access_code"],
            reference=data["reference"],
        )

    async def resolve_account_number(self, account_number: str, bank_code: str) -> bool:
        try:
            body = await self._request(
                "GET",
                "/bank/resolve",
                params={"account_number": account_number, "bank_code": bank_code},
            )
        except ProviderError as e:
            # Paystack answers 422 for accounts it cannot resolve
            if e.status_code in (400, 422):
                return False
            raise
        return bool(body.get("status"))

    async def create_transfer_recipient(
        self, name: str, account_number: str, bank_code: str
    ) -> TransferRecipientDTO:
        payload = {
            "type": "nuban",
            "name": name,
            "account_number": account_number,
            "bank_code": bank_code,
            "currency": self.currency,
        }
        body = await self._request("POST", "/transferrecipient", json=payload)
        return TransferRecipientDTO(recipient_code=body["data"]["recipient_code"])

    async def initiate_transfer(
        self, amount: int, recipient_code: str, reference: str
    ) -> TransferDTO:
        payload = {
            "source": "balance",
            "reason": "Payout",
            "amount": amount,
            "recipient": recipient_code,
            "reference": reference,
        }
        body = await self._request("POST", "/transfer", json=payload)
        data = body["data"]
        return TransferDTO(
            transfer_code=data["transfer_code"],
            reference=data.get("reference", reference),
            status=data.get("status", "pending"),
        )

    def verify_webhook_signature(self, payload: bytes, signature: Optional[str]) -> bool:
        if not signature or not self.secret_key:
            return False
        computed = hmac.new(self.secret_key.encode("utf-8"), payload, hashlib.sha512).hexdigest()
        return hmac.compare_digest(computed, signature)

    async def _request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        allow_not_found: bool = False,
    ) -> Optional[Dict[str, Any]]:
        headers = {
            "Authorization": f"Bearer {self.secret_key}",
            "Cache-Control": "no-cache",
        }
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url, timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.request(method, path, json=json, params=params, headers=headers)
        except httpx.TimeoutException as e:
            logger.critical(f"Paystack {method} {path} timed out: {e}")
            raise ProviderError(f"Paystack request timed out: {method} {path}") from e
        except httpx.HTTPError as e:
            logger.critical(f"Paystack {method} {path} failed: {e}")
            raise ProviderError(f"Paystack request failed: {method} {path}") from e

        if allow_not_found and response.status_code == 404:
            return None

        if response.is_error:
            logger.critical(
                f"Paystack {method} {path} returned {response.status_code}: {response.text}"
            )
            raise ProviderError(
                f"Paystack returned {response.status_code} for {method} {path}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            return response.json()
        except ValueError as e:
            raise ProviderError(
                f"Paystack returned a non-JSON body for {method} {path}",
                status_code=response.status_code,
                body=response.text,
            ) from e

    @staticmethod
    def _to_customer(data: Dict[str, Any]) -> ProviderCustomerDTO:
        return ProviderCustomerDTO(
            customer_code=data["customer_code"],
            email=data["email"],
            subscriptions=[
                ProviderSubscriptionDTO(
                    subscription_code=sub["subscription_code"], status=sub["status"]
                )
                for sub in data.get("subscriptions") or []
            ],
        )
