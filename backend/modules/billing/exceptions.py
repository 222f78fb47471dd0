"""
Billing module exceptions.

These exceptions are raised by the billing module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import ExternalServiceError, ValidationError


class UnpaidPlanError(ValidationError):
    """Raised when an order is requested for a plan that has no price."""

    def __init__(self, plan: object):
        super().__init__(
            "Plan must be premium or enterprise",
            code="INVALID_PLAN",
            details={"plan": plan},
        )


class InvalidSignatureError(ValidationError):
    """Raised when a payment or webhook signature does not match."""

    def __init__(self, source: str = "payment"):
        super().__init__(
            "Invalid payment signature",
            code="INVALID_SIGNATURE",
            details={"source": source},
        )


class GatewayNotConfiguredError(ExternalServiceError):
    """Raised when the payment gateway credentials are missing."""

    status_code = 500

    def __init__(self):
        super().__init__(
            "Payment gateway is not configured",
            service="razorpay",
            code="GATEWAY_NOT_CONFIGURED",
        )


class GatewayError(ExternalServiceError):
    """Raised when the gateway rejects or fails a request."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(
            message,
            service="razorpay",
            code="GATEWAY_ERROR",
            details={"status": status} if status is not None else {},
        )
