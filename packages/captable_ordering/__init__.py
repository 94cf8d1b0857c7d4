"""Public interface for the ``captable_ordering`` package.

This module re-exports the ordering functions, manifest helpers, models and
error types as the stable import surface. There is no runtime logic here.
"""

from .errors import (
    CapTableError,
    CapTableValidationError,
    ErrorCode,
    InvalidTransactionDateError,
)
from .manifest import (
    build_manifest,
    count_manifest_objects,
    describe_manifest,
    sort_manifest,
)
from .models import (
    MANIFEST_COLLECTIONS,
    OcfManifest,
    TransactionRecord,
    Transactions,
)
from .sorting import (
    NO_SECURITY_GROUP,
    build_transaction_sort_key,
    is_ordered,
    sort_transactions,
    transaction_sort_keys,
)
from .timestamps import FAR_FUTURE_TIMESTAMP, format_epoch_millis, timestamp_or_null
from .weights import DEFAULT_WEIGHT, TRANSACTION_WEIGHTS, tx_weight, weight_for

__all__ = [
    # Ordering
    "build_transaction_sort_key",
    "sort_transactions",
    "transaction_sort_keys",
    "is_ordered",
    "timestamp_or_null",
    "format_epoch_millis",
    "tx_weight",
    "weight_for",
    "TRANSACTION_WEIGHTS",
    "DEFAULT_WEIGHT",
    "FAR_FUTURE_TIMESTAMP",
    "NO_SECURITY_GROUP",
    # Manifest
    "count_manifest_objects",
    "build_manifest",
    "sort_manifest",
    "describe_manifest",
    # Models / types
    "OcfManifest",
    "MANIFEST_COLLECTIONS",
    "TransactionRecord",
    "Transactions",
    # Errors
    "CapTableError",
    "CapTableValidationError",
    "ErrorCode",
    "InvalidTransactionDateError",
]
