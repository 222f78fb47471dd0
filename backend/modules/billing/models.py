"""
Billing module data models.

Prices are fixed per plan and always looked up server-side; clients never
supply an amount.
"""

from typing import Any, Optional

from pydantic import Field

from shared.models import ApiModel
from modules.users.models import Plan

CURRENCY = "INR"

# Amounts in paise
PLAN_PRICES: dict[Plan, int] = {
    Plan.PREMIUM: 29900,
    Plan.ENTERPRISE: 99900,
}


class CreateOrderRequest(ApiModel):
    plan_id: Optional[str] = None


class Order(ApiModel):
    """A gateway order the checkout widget pays against."""

    id: str
    amount: int
    currency: str = CURRENCY
    status: str = "created"
    receipt: Optional[str] = None
    notes: dict[str, Any] = Field(default_factory=dict)
    key_id: Optional[str] = Field(None, description="Public key for the checkout widget")


class VerifyPaymentRequest(ApiModel):
    """Checkout result posted back by the client."""

    order_id: Optional[str] = None
    payment_id: Optional[str] = None
    signature: Optional[str] = None
    plan_id: Optional[str] = None


class VerifyPaymentResponse(ApiModel):
    success: bool = True
    message: str
    plan: Plan


class WebhookAck(ApiModel):
    received: bool = True
    event: Optional[str] = None
