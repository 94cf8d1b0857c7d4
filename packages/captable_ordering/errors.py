"""Error types raised by ``captable_ordering``.

The ordering core raises exactly one kind of error,
:class:`InvalidTransactionDateError`, when a transaction has no resolvable
``date``. Every other irregularity (unknown ``object_type``, missing
``security_id`` or creation timestamp, absent manifest fields) degrades to a
documented fallback value instead of raising.
"""

from __future__ import annotations

import json
from enum import StrEnum
from typing import Any

from .models import MISSING


class ErrorCode(StrEnum):
    """Stable machine-readable codes carried by :class:`CapTableError`."""

    INVALID_TRANSACTION_DATE = "INVALID_TRANSACTION_DATE"


class CapTableError(Exception):
    """Base class for all errors raised by this package."""

    def __init__(self, message: str, code: ErrorCode) -> None:
        super().__init__(message)
        self.code = code


class CapTableValidationError(CapTableError):
    """Input data failed validation at ``field_path``."""

    def __init__(
        self,
        field_path: str,
        message: str,
        *,
        expected_type: str | None = None,
        received_value: Any = None,
        code: ErrorCode,
    ) -> None:
        super().__init__(f"Validation error at '{field_path}': {message}", code)
        self.field_path = field_path
        self.expected_type = expected_type
        self.received_value = received_value


def _render_date(value: Any) -> str:
    if value is MISSING:
        return "<missing>"
    try:
        return json.dumps(value)
    except (TypeError, ValueError):
        return repr(value)


class InvalidTransactionDateError(CapTableValidationError):
    """A transaction's ``date`` is absent or does not parse to a valid date.

    Attributes
    ----------
    transaction_id:
        The offending transaction's ``id`` (may be ``None`` when absent).
    object_type:
        The transaction's ``object_type`` tag, for diagnostics.
    date:
        The literal ``date`` value as received, or ``None`` when the field is
        absent altogether.
    """

    def __init__(self, transaction_id: Any, object_type: Any, date: Any) -> None:
        super().__init__(
            "transaction.date",
            (
                "Transaction has missing or invalid date "
                f"(id: {transaction_id}, object_type: {object_type}, "
                f"date: {_render_date(date)})"
            ),
            expected_type="ISO-8601 date string",
            received_value=None if date is MISSING else date,
            code=ErrorCode.INVALID_TRANSACTION_DATE,
        )
        self.transaction_id = transaction_id
        self.object_type = object_type
        self.date = None if date is MISSING else date


__all__ = [
    "CapTableError",
    "CapTableValidationError",
    "ErrorCode",
    "InvalidTransactionDateError",
]
