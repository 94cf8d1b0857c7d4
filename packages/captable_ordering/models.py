"""Data models and type aliases for ``captable_ordering``.

Transactions are kept opaque: the ordering core reads only ``id``, ``date``,
``object_type``, ``security_id`` and ``createdAt``/``created_at`` and never
looks at anything else. Records are usually plain mappings decoded from
ledger responses, but attribute-style records (dataclasses, pydantic models)
are read the same way through :func:`get_field`.

The manifest is a typed pydantic model so that JSON snapshots validate on the
way in; every field is optional and an absent field means "empty".
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, TypeAlias

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Transaction records
# ---------------------------------------------------------------------------

TransactionRecord: TypeAlias = Mapping[str, Any]
"""A single decoded cap-table transaction.

Notes
-----
- ``id`` and ``date`` are required for ordering; ``object_type``,
  ``security_id`` and ``createdAt``/``created_at`` are optional.
- Values are not coerced. ``date`` is normally an ISO-8601 string.
"""

Transactions: TypeAlias = Iterable[TransactionRecord]
"""A generic iterable of transaction records."""


# Sentinel for "field not present" (distinct from a present ``None``).
MISSING: Any = object()


def get_field(record: Any, name: str, default: Any = MISSING) -> Any:
    """Read ``name`` from a mapping by key or from any other object by attribute."""

    if isinstance(record, Mapping):
        return record.get(name, default)
    return getattr(record, name, default)


# ---------------------------------------------------------------------------
# Manifest
# ---------------------------------------------------------------------------

# Collection fields in their fixed order (issuer is handled separately).
MANIFEST_COLLECTIONS: tuple[str, ...] = (
    "stakeholders",
    "stock_classes",
    "stock_plans",
    "vesting_terms",
    "transactions",
    "valuations",
    "documents",
    "stock_legend_templates",
)


class OcfManifest(BaseModel):
    """A reconstructed cap-table snapshot grouped by object kind.

    Field names are snake_case; the camelCase names used on the wire
    (``stockClasses``, ``vestingTerms``, ...) are accepted as aliases and
    used when dumping with ``by_alias=True``.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        validate_by_name=True,
        validate_by_alias=True,
    )

    issuer: Any = None
    stakeholders: list[Any] | None = None
    stock_classes: list[Any] | None = Field(default=None, alias="stockClasses")
    stock_plans: list[Any] | None = Field(default=None, alias="stockPlans")
    vesting_terms: list[Any] | None = Field(default=None, alias="vestingTerms")
    transactions: list[Any] | None = None
    valuations: list[Any] | None = None
    documents: list[Any] | None = None
    stock_legend_templates: list[Any] | None = Field(
        default=None, alias="stockLegendTemplates"
    )


__all__ = [
    "MANIFEST_COLLECTIONS",
    "MISSING",
    "OcfManifest",
    "TransactionRecord",
    "Transactions",
    "get_field",
]
