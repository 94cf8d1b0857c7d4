"""Deterministic replay ordering for cap-table transactions.

Ledger transactions only carry a calendar ``date``, and many of them can
share one. To replay them in exactly the order the database-backed engine
uses, each transaction gets a composite key::

    day | weight | group | created | id

- ``day``: calendar date of ``date`` (``YYYY-MM-DD``)
- ``weight``: priority class from :mod:`captable_ordering.weights`, zero
  padded to three digits
- ``group``: ``security_id``, or ``_no_security_`` for entity-level events
- ``created``: ``createdAt`` (or ``created_at``) as a UTC ISO timestamp,
  or a far-future placeholder when unknown
- ``id``: the transaction id, so no two distinct transactions tie

Sorting compares the joined string keys, so any caller that stores the
key from :func:`build_transaction_sort_key` and sorts by it gets exactly
the order :func:`sort_transactions` returns.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, TypeAlias, TypeVar

from .errors import InvalidTransactionDateError
from .logging_setup import get_logger
from .models import MISSING, get_field
from .timestamps import (
    FAR_FUTURE_TIMESTAMP,
    format_epoch_millis,
    parse_date,
    timestamp_or_null,
)
from .weights import tx_weight

logger = get_logger(__name__)

NO_SECURITY_GROUP = "_no_security_"
KEY_SEPARATOR = "|"

# Alias spellings for the ledger creation timestamp, in precedence order.
_CREATED_AT_FIELDS: tuple[str, ...] = ("createdAt", "created_at")

SortKeyParts: TypeAlias = tuple[str, str, str, str, str]

T = TypeVar("T")


def _created_component(tx: Any) -> str:
    for name in _CREATED_AT_FIELDS:
        ts = timestamp_or_null(get_field(tx, name, None))
        if ts is None:
            continue
        iso = format_epoch_millis(ts)
        if iso is not None:
            return iso
    return FAR_FUTURE_TIMESTAMP


def sort_key_parts(tx: Any) -> SortKeyParts:
    """Return the five sort-key components of ``tx``.

    Raises
    ------
    InvalidTransactionDateError
        When ``date`` is absent or does not parse to a valid date.
    """

    raw_date = get_field(tx, "date")
    parsed = parse_date(raw_date) if raw_date is not MISSING else None
    if parsed is None:
        raise InvalidTransactionDateError(
            get_field(tx, "id", None),
            get_field(tx, "object_type", None),
            raw_date,
        )

    security_id = get_field(tx, "security_id", None)
    tx_id = get_field(tx, "id", None)
    return (
        parsed.date().isoformat(),
        f"{tx_weight(tx):03d}",
        str(security_id) if security_id else NO_SECURITY_GROUP,
        _created_component(tx),
        "" if tx_id is None else str(tx_id),
    )


def build_transaction_sort_key(tx: Any) -> str:
    """Build the composite ``day|weight|group|created|id`` key for ``tx``.

    Raises
    ------
    InvalidTransactionDateError
        When ``date`` is absent or does not parse to a valid date.
    """

    return KEY_SEPARATOR.join(sort_key_parts(tx))


def sort_transactions(transactions: Iterable[T]) -> list[T]:
    """Return a new list of ``transactions`` in deterministic replay order.

    The input is never mutated. Empty and single-element inputs are copied
    without computing keys. Any transaction without a resolvable ``date``
    aborts the whole sort with :class:`InvalidTransactionDateError`.
    """

    items = list(transactions)
    if len(items) <= 1:
        return items
    ordered = sorted(items, key=build_transaction_sort_key)
    logger.debug("Sorted %d transactions", len(ordered))
    return ordered


def transaction_sort_keys(transactions: Iterable[T]) -> list[tuple[str, T]]:
    """Pair every transaction with its string key, sorted by that key."""

    keyed = [(build_transaction_sort_key(tx), tx) for tx in transactions]
    keyed.sort(key=lambda pair: pair[0])
    return keyed


def is_ordered(transactions: Iterable[Any]) -> bool:
    """Return ``True`` when ``transactions`` are already in replay order."""

    previous: str | None = None
    for tx in transactions:
        current = build_transaction_sort_key(tx)
        if previous is not None and current < previous:
            return False
        previous = current
    return True


__all__ = [
    "KEY_SEPARATOR",
    "NO_SECURITY_GROUP",
    "build_transaction_sort_key",
    "is_ordered",
    "sort_key_parts",
    "sort_transactions",
    "transaction_sort_keys",
]
