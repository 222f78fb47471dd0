"""
Razorpay gateway client.

Order creation goes over HTTPS with basic auth; signatures are HMAC-SHA256
hex digests compared in constant time.
"""

import hashlib
import hmac
import logging
import time
from typing import Any

import httpx

from shared.config import Settings

from .exceptions import GatewayError, GatewayNotConfiguredError, InvalidSignatureError
from .models import CURRENCY, Order

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 15.0


def hmac_sha256(secret: str, message: bytes) -> str:
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


def signatures_match(expected: str, provided: str) -> bool:
    return hmac.compare_digest(expected.encode("utf-8"), provided.encode("utf-8"))


class RazorpayGateway:
    """Thin client for the parts of the Razorpay API the app uses."""

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self._settings = settings
        self._transport = transport

    @property
    def key_id(self) -> str:
        return self._settings.razorpay_key_id

    async def create_order(self, amount: int, notes: dict[str, Any]) -> Order:
        """Create an order at the Orders API."""
        credentials = self._settings.razorpay_credentials()
        if credentials is None:
            raise GatewayNotConfiguredError()

        payload = {
            "amount": amount,
            "currency": CURRENCY,
            "receipt": f"receipt_{int(time.time() * 1000)}",
            "notes": notes,
        }
        try:
            async with httpx.AsyncClient(
                base_url=self._settings.razorpay_api_url,
                auth=credentials,
                timeout=REQUEST_TIMEOUT,
                transport=self._transport,
            ) as client:
                response = await client.post("/orders", json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Razorpay order request failed: {e}")
            raise GatewayError("Could not reach the payment gateway")

        if response.status_code >= 400:
            logger.error(f"Razorpay rejected order: HTTP {response.status_code}")
            raise GatewayError("Payment gateway rejected the order", response.status_code)

        data = response.json()
        return Order(
            id=data["id"],
            amount=data.get("amount", amount),
            currency=data.get("currency", CURRENCY),
            status=data.get("status", "created"),
            receipt=data.get("receipt"),
            notes=data.get("notes") or notes,
            key_id=self.key_id,
        )

    def verify_payment_signature(self, order_id: str, payment_id: str, signature: str) -> None:
        """
        Check a checkout signature.

        Raises:
            GatewayNotConfiguredError: No key secret to verify with
            InvalidSignatureError: The signature does not match
        """
        secret = self._settings.razorpay_key_secret
        if not secret:
            raise GatewayNotConfiguredError()
        expected = hmac_sha256(secret, f"{order_id}|{payment_id}".encode("utf-8"))
        if not signatures_match(expected, signature):
            raise InvalidSignatureError("payment")

    def verify_webhook_signature(self, body: bytes, signature: str | None) -> None:
        secret = self._settings.razorpay_webhook_secret
        if not secret:
            raise GatewayNotConfiguredError()
        if not signature or not signatures_match(hmac_sha256(secret, body), signature):
            raise InvalidSignatureError("webhook")
