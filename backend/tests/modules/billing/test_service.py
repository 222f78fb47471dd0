"""Tests for the billing service."""

import json
from unittest.mock import MagicMock

import pytest

from modules.billing.exceptions import InvalidSignatureError, UnpaidPlanError
from modules.billing.gateway import RazorpayGateway, hmac_sha256
from modules.billing.interfaces import IBillingService
from modules.billing.models import Order, VerifyPaymentRequest
from modules.billing.service import BillingService, paid_plan
from modules.users.exceptions import UserNotFoundError
from modules.users.models import Plan
from shared.exceptions import ValidationError
from tests.conftest import make_principal, make_settings, make_user


def signed(order_id: str, payment_id: str) -> str:
    return hmac_sha256("rzp-key-secret", f"{order_id}|{payment_id}".encode("utf-8"))


def webhook(event: str, **entity) -> tuple[bytes, str]:
    body = json.dumps({"event": event, "payload": {"payment": {"entity": entity}}}).encode()
    return body, hmac_sha256("rzp-webhook-secret", body)


@pytest.fixture
def users():
    repo = MagicMock()
    repo.append_payment.return_value = make_user(plan=Plan.PREMIUM)
    return repo


@pytest.fixture
def service(users) -> BillingService:
    return BillingService(users, RazorpayGateway(make_settings()))


class TestPaidPlan:
    def test_paid_plans(self):
        assert paid_plan("premium") == Plan.PREMIUM
        assert paid_plan("enterprise") == Plan.ENTERPRISE

    @pytest.mark.parametrize("plan_id", ["free", "gold", None])
    def test_unpaid_plans(self, plan_id):
        with pytest.raises(UnpaidPlanError):
            paid_plan(plan_id)


class TestCreateOrder:
    @pytest.mark.asyncio
    async def test_amount_comes_from_price_table(self, users):
        gateway = MagicMock(spec=RazorpayGateway)

        async def create_order(amount, notes):
            return Order(id="order_1", amount=amount, notes=notes)

        gateway.create_order.side_effect = create_order
        service = BillingService(users, gateway)

        order = await service.create_order(make_principal(), "enterprise")

        assert order.amount == 99900
        assert order.notes["userId"] == "test-user-123"
        assert order.notes["planId"] == "enterprise"

    @pytest.mark.asyncio
    async def test_free_plan_is_rejected(self, service):
        with pytest.raises(UnpaidPlanError) as exc_info:
            await service.create_order(make_principal(), "free")
        assert exc_info.value.status_code == 400


class TestVerifyPayment:
    @pytest.mark.asyncio
    async def test_valid_signature_upgrades(self, service, users):
        request = VerifyPaymentRequest(
            order_id="order_1", payment_id="pay_1", signature=signed("order_1", "pay_1"), plan_id="premium"
        )
        user = await service.verify_payment("test-user-123", request)

        assert user.plan == Plan.PREMIUM
        user_id, record = users.append_payment.call_args.args
        assert user_id == "test-user-123"
        assert record.order_id == "order_1"
        assert record.amount == 29900
        assert record.status == "captured"
        assert users.append_payment.call_args.kwargs == {"plan": Plan.PREMIUM}

    @pytest.mark.asyncio
    async def test_signature_mismatch_records_nothing(self, service, users):
        request = VerifyPaymentRequest(
            order_id="order_1", payment_id="pay_1", signature="0" * 64, plan_id="premium"
        )
        with pytest.raises(InvalidSignatureError) as exc_info:
            await service.verify_payment("test-user-123", request)
        assert exc_info.value.status_code == 400
        users.append_payment.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_fields(self, service, users):
        with pytest.raises(ValidationError) as exc_info:
            await service.verify_payment("test-user-123", VerifyPaymentRequest(order_id="order_1"))
        assert exc_info.value.code == "MISSING_FIELDS"
        users.append_payment.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_user(self, service, users):
        users.append_payment.return_value = None
        request = VerifyPaymentRequest(
            order_id="o", payment_id="p", signature=signed("o", "p"), plan_id="premium"
        )
        with pytest.raises(UserNotFoundError):
            await service.verify_payment("ghost", request)

    @pytest.mark.asyncio
    async def test_replay_appends_again(self, service, users):
        request = VerifyPaymentRequest(
            order_id="o", payment_id="p", signature=signed("o", "p"), plan_id="premium"
        )
        await service.verify_payment("test-user-123", request)
        await service.verify_payment("test-user-123", request)
        assert users.append_payment.call_count == 2


class TestWebhook:
    @pytest.mark.asyncio
    async def test_body_must_be_an_object(self, service, users):
        body = b"[]"
        with pytest.raises(ValidationError) as exc:
            await service.handle_webhook(body, hmac_sha256("rzp-webhook-secret", body))
        assert exc.value.code == "INVALID_WEBHOOK"
        users.append_payment.assert_not_called()

    @pytest.mark.asyncio
    async def test_captured_upgrades_from_notes(self, service, users):
        body, signature = webhook(
            "payment.captured",
            id="pay_9",
            order_id="order_9",
            currency="INR",
            notes={"userId": "user-9", "planId": "enterprise"},
        )
        assert await service.handle_webhook(body, signature) == "payment.captured"

        user_id, record = users.append_payment.call_args.args
        assert user_id == "user-9"
        assert record.payment_id == "pay_9"
        assert record.amount == 99900
        assert users.append_payment.call_args.kwargs == {"plan": Plan.ENTERPRISE}

    @pytest.mark.asyncio
    async def test_failed_records_without_plan_change(self, service, users):
        body, signature = webhook(
            "payment.failed",
            id="pay_8",
            amount=29900,
            error_code="BAD_REQUEST_ERROR",
            error_description="Card declined",
            notes={"userId": "user-8", "planId": "premium"},
        )
        await service.handle_webhook(body, signature)

        user_id, record = users.append_payment.call_args.args
        assert user_id == "user-8"
        assert record.status == "failed"
        assert record.error_description == "Card declined"
        assert "plan" not in users.append_payment.call_args.kwargs

    @pytest.mark.asyncio
    async def test_other_events_are_ignored(self, service, users):
        body, signature = webhook("order.paid")
        assert await service.handle_webhook(body, signature) == "order.paid"
        users.append_payment.assert_not_called()

    @pytest.mark.asyncio
    async def test_bad_signature(self, service, users):
        body, _ = webhook("payment.captured", notes={"userId": "u", "planId": "premium"})
        with pytest.raises(InvalidSignatureError):
            await service.handle_webhook(body, "forged")
        users.append_payment.assert_not_called()


def test_service_implements_interface(service):
    assert isinstance(service, IBillingService)
