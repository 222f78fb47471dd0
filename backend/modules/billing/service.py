"""
Billing service implementation.
"""

import json
import logging
from typing import Any, Optional

from shared.exceptions import ValidationError
from shared.models import AuthenticatedUser
from shared.repository import utcnow
from modules.users.exceptions import UserNotFoundError
from modules.users.models import PaymentRecord, Plan, User
from modules.users.repository import UserRepository

from .exceptions import InvalidSignatureError, UnpaidPlanError
from .gateway import RazorpayGateway
from .interfaces import IBillingService
from .models import CURRENCY, PLAN_PRICES, Order, VerifyPaymentRequest

logger = logging.getLogger(__name__)


def paid_plan(plan_id: Optional[str]) -> Plan:
    """Resolve a plan id that has a price, or raise UnpaidPlanError."""
    try:
        plan = Plan(plan_id)
    except ValueError:
        raise UnpaidPlanError(plan_id)
    if plan not in PLAN_PRICES:
        raise UnpaidPlanError(plan_id)
    return plan


class BillingService(IBillingService):
    """Implementation of the billing service."""

    def __init__(self, users: UserRepository, gateway: RazorpayGateway):
        self._users = users
        self._gateway = gateway

    async def create_order(self, user: AuthenticatedUser, plan_id: Optional[str]) -> Order:
        plan = paid_plan(plan_id)
        order = await self._gateway.create_order(
            PLAN_PRICES[plan],
            {
                "userId": user.id,
                "userEmail": user.email or "",
                "planId": plan.value,
            },
        )
        logger.info(f"Created order {order.id} for user {user.id} ({plan.value})")
        return order

    async def verify_payment(self, user_id: str, request: VerifyPaymentRequest) -> User:
        if not request.order_id or not request.payment_id or not request.signature:
            raise ValidationError(
                "Order ID, payment ID and signature are required",
                code="MISSING_FIELDS",
            )
        plan = paid_plan(request.plan_id)

        try:
            self._gateway.verify_payment_signature(
                request.order_id, request.payment_id, request.signature
            )
        except InvalidSignatureError:
            logger.warning(f"Payment signature mismatch for order {request.order_id}")
            raise

        record = PaymentRecord(
            order_id=request.order_id,
            payment_id=request.payment_id,
            plan_id=plan.value,
            amount=PLAN_PRICES[plan],
            currency=CURRENCY,
            status="captured",
            created_at=utcnow(),
        )
        user = self._users.append_payment(user_id, record, plan=plan)
        if user is None:
            raise UserNotFoundError(user_id)
        logger.info(f"User {user_id} upgraded to {plan.value}")
        return user

    async def handle_webhook(self, body: bytes, signature: Optional[str]) -> Optional[str]:
        try:
            self._gateway.verify_webhook_signature(body, signature)
        except InvalidSignatureError:
            logger.warning("Webhook signature verification failed")
            raise

        try:
            event = json.loads(body)
        except ValueError:
            raise ValidationError("Malformed webhook body", code="INVALID_WEBHOOK")
        if not isinstance(event, dict):
            raise ValidationError("Malformed webhook body", code="INVALID_WEBHOOK")

        name = event.get("event")
        payment = (((event.get("payload") or {}).get("payment") or {}).get("entity")) or {}

        if name == "payment.captured":
            self._record_captured(payment)
        elif name == "payment.failed":
            self._record_failed(payment)
        else:
            logger.info(f"Ignoring webhook event {name}")
        return name

    def _record_captured(self, payment: dict[str, Any]) -> None:
        notes = payment.get("notes") or {}
        user_id = notes.get("userId")
        try:
            plan = paid_plan(notes.get("planId"))
        except UnpaidPlanError:
            logger.warning(f"Captured payment {payment.get('id')} has no valid plan")
            return
        if not user_id:
            logger.warning(f"Captured payment {payment.get('id')} has no user")
            return

        record = PaymentRecord(
            order_id=payment.get("order_id"),
            payment_id=payment.get("id"),
            plan_id=plan.value,
            amount=PLAN_PRICES[plan],
            currency=payment.get("currency") or CURRENCY,
            status="captured",
            created_at=utcnow(),
        )
        if self._users.append_payment(user_id, record, plan=plan) is None:
            logger.warning(f"Captured payment for unknown user {user_id}")
            return
        logger.info(f"Webhook upgraded user {user_id} to {plan.value}")

    def _record_failed(self, payment: dict[str, Any]) -> None:
        notes = payment.get("notes") or {}
        user_id = notes.get("userId")
        if not user_id:
            return
        record = PaymentRecord(
            order_id=payment.get("order_id"),
            payment_id=payment.get("id"),
            plan_id=notes.get("planId"),
            amount=payment.get("amount") or 0,
            currency=payment.get("currency") or CURRENCY,
            status="failed",
            error_code=payment.get("error_code"),
            error_description=payment.get("error_description"),
            created_at=utcnow(),
        )
        self._users.append_payment(user_id, record)
        logger.info(f"Recorded failed payment {payment.get('id')} for user {user_id}")
