"""Priority classes for same-day transaction ordering.

Within a single calendar day, transactions are replayed by weight (lower
first). The values are an external contract shared with the database-backed
cap table engine: changing any of them changes replay order and must be
treated as a breaking change.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any

from .models import get_field

DEFAULT_WEIGHT = 50

TRANSACTION_WEIGHTS: MappingProxyType[str, int] = MappingProxyType(
    {
        # Authorized shares / pool adjustments and returns to pool
        "TX_ISSUER_AUTHORIZED_SHARES_ADJUSTMENT": 5,
        "TX_STOCK_CLASS_AUTHORIZED_SHARES_ADJUSTMENT": 5,
        "TX_STOCK_PLAN_POOL_ADJUSTMENT": 5,
        "TX_STOCK_PLAN_RETURN_TO_POOL": 5,
        # Issuances
        "TX_STOCK_ISSUANCE": 10,
        "TX_EQUITY_COMPENSATION_ISSUANCE": 10,
        "TX_PLAN_SECURITY_ISSUANCE": 10,
        "TX_CONVERTIBLE_ISSUANCE": 10,
        "TX_WARRANT_ISSUANCE": 10,
        # Acceptances
        "TX_STOCK_ACCEPTANCE": 11,
        "TX_EQUITY_COMPENSATION_ACCEPTANCE": 11,
        "TX_PLAN_SECURITY_ACCEPTANCE": 11,
        # Splits
        "TX_STOCK_CLASS_SPLIT": 15,
        # Retractions precede transfers
        "TX_STOCK_RETRACTION": 16,
        "TX_CONVERTIBLE_RETRACTION": 16,
        "TX_WARRANT_RETRACTION": 16,
        "TX_EQUITY_COMPENSATION_RETRACTION": 16,
        # Transfers
        "TX_STOCK_TRANSFER": 20,
        "TX_EQUITY_COMPENSATION_TRANSFER": 20,
        "TX_PLAN_SECURITY_TRANSFER": 20,
        # Releases
        "TX_EQUITY_COMPENSATION_RELEASE": 25,
        # Exercises
        "TX_EQUITY_COMPENSATION_EXERCISE": 30,
        "TX_PLAN_SECURITY_EXERCISE": 30,
        "TX_WARRANT_EXERCISE": 30,
        # Conversions
        "TX_CONVERTIBLE_CONVERSION": 35,
        "TX_STOCK_CONVERSION": 35,
        # Repurchases and cancellations
        "TX_STOCK_REPURCHASE": 40,
        "TX_STOCK_CANCELLATION": 40,
        "TX_EQUITY_COMPENSATION_CANCELLATION": 40,
        "TX_PLAN_SECURITY_CANCELLATION": 40,
        "TX_WARRANT_CANCELLATION": 40,
        "TX_CONVERTIBLE_CANCELLATION": 40,
        # Stakeholder events
        "TX_STAKEHOLDER_RELATIONSHIP_CHANGE_EVENT": 45,
        "TX_STAKEHOLDER_STATUS_CHANGE_EVENT": 45,
    }
)


def weight_for(object_type: Any) -> int:
    """Return the weight for an ``object_type`` tag (exact, case-sensitive)."""

    if not isinstance(object_type, str):
        return DEFAULT_WEIGHT
    return TRANSACTION_WEIGHTS.get(object_type, DEFAULT_WEIGHT)


def tx_weight(tx: Any) -> int:
    """Return the weight for a transaction record's ``object_type``."""

    return weight_for(get_field(tx, "object_type", None))


__all__ = ["DEFAULT_WEIGHT", "TRANSACTION_WEIGHTS", "tx_weight", "weight_for"]
