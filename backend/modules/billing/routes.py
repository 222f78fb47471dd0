"""
Payment API endpoints.
"""

from fastapi import APIRouter, Depends, Header, Request

from api.dependencies import get_billing_service
from api.middleware.auth import get_current_user
from shared.models import AuthenticatedUser

from .interfaces import IBillingService
from .models import (
    CreateOrderRequest,
    Order,
    VerifyPaymentRequest,
    VerifyPaymentResponse,
    WebhookAck,
)

router = APIRouter()


@router.post("/create-order", response_model=Order)
async def create_order(
    request: CreateOrderRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IBillingService = Depends(get_billing_service),
) -> Order:
    """Create a Razorpay order for a paid plan."""
    return await service.create_order(user, request.plan_id)


@router.post("/verify", response_model=VerifyPaymentResponse)
async def verify_payment(
    request: VerifyPaymentRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IBillingService = Depends(get_billing_service),
) -> VerifyPaymentResponse:
    """
    Confirm a checkout and upgrade the caller's plan.

    Answers 400 when the signature does not match.
    """
    updated = await service.verify_payment(user.id, request)
    return VerifyPaymentResponse(message="Payment verified", plan=updated.plan)


@router.post("/webhook", response_model=WebhookAck)
async def webhook(
    request: Request,
    x_razorpay_signature: str | None = Header(default=None),
    service: IBillingService = Depends(get_billing_service),
) -> WebhookAck:
    body = await request.body()
    event = await service.handle_webhook(body, x_razorpay_signature)
    return WebhookAck(event=event)
