"""
Billing module.

Plan upgrades through the Razorpay gateway.

Public API:
- IBillingService: Interface for plan purchases
- PLAN_PRICES: Fixed plan -> price table (paise)
- Billing exceptions: InvalidSignatureError, UnpaidPlanError, etc.
"""

from .interfaces import IBillingService
from .models import PLAN_PRICES, CURRENCY
from .exceptions import (
    UnpaidPlanError,
    InvalidSignatureError,
    GatewayNotConfiguredError,
    GatewayError,
)

__all__ = [
    # Interface
    "IBillingService",
    # Models
    "PLAN_PRICES",
    "CURRENCY",
    # Exceptions
    "UnpaidPlanError",
    "InvalidSignatureError",
    "GatewayNotConfiguredError",
    "GatewayError",
]
