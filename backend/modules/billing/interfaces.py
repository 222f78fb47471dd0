"""
Billing module interface.

Plan upgrades paid through Razorpay. The API layer depends on
IBillingService, not on the gateway client.
"""

from typing import Optional, Protocol, runtime_checkable

from shared.models import AuthenticatedUser
from modules.users.models import User

from .models import Order, VerifyPaymentRequest


@runtime_checkable
class IBillingService(Protocol):
    """Interface for plan purchases."""

    async def create_order(self, user: AuthenticatedUser, plan_id: Optional[str]) -> Order:
        """
        Create a gateway order for a paid plan.

        The amount comes from the plan price table.

        Raises:
            UnpaidPlanError: plan_id is not premium or enterprise
            GatewayError: The gateway could not create the order
        """
        ...

    async def verify_payment(self, user_id: str, request: VerifyPaymentRequest) -> User:
        """
        Verify a checkout signature, then upgrade the plan.

        Appends one payment-history entry per call; replaying the same
        order/payment pair appends again.

        Raises:
            InvalidSignatureError: Signature mismatch (nothing is recorded)
            UserNotFoundError: If the user does not exist
        """
        ...

    async def handle_webhook(self, body: bytes, signature: Optional[str]) -> Optional[str]:
        """
        Process a signed gateway event.

        Returns:
            The event name

        Raises:
            InvalidSignatureError: Missing or wrong X-Razorpay-Signature
        """
        ...
