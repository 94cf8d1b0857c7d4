"""Manifest helpers: completeness counts, grouping and ordering.

A manifest is the reconstructed snapshot of a cap table: one optional issuer
plus eight optional collections. Absent fields always mean "empty".

Public surface:
- ``count_manifest_objects``: total number of objects (issuer counts as one).
- ``build_manifest``: group a flat collection of decoded OCF objects by their
  ``object_type`` into an :class:`~captable_ordering.models.OcfManifest`.
- ``sort_manifest``: copy of a manifest with its transactions in replay order.
- ``describe_manifest``: per-field human-readable counts.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from .logging_setup import get_logger
from .models import MANIFEST_COLLECTIONS, OcfManifest, get_field
from .sorting import sort_transactions

logger = get_logger(__name__)

# Non-transaction OCF object types and the manifest collection they go in.
OBJECT_TYPE_COLLECTIONS: Mapping[str, str] = {
    "STAKEHOLDER": "stakeholders",
    "STOCK_CLASS": "stock_classes",
    "STOCK_PLAN": "stock_plans",
    "VESTING_TERMS": "vesting_terms",
    "VALUATION": "valuations",
    "DOCUMENT": "documents",
    "STOCK_LEGEND_TEMPLATE": "stock_legend_templates",
}

_ISSUER_OBJECT_TYPE = "ISSUER"
_TRANSACTION_PREFIX = "TX_"

# (singular, plural) display labels per manifest field.
_FIELD_LABELS: Mapping[str, tuple[str, str]] = {
    "issuer": ("Issuer", "Issuers"),
    "stakeholders": ("Stakeholder", "Stakeholders"),
    "stock_classes": ("Stock Class", "Stock Classes"),
    "stock_plans": ("Stock Plan", "Stock Plans"),
    "vesting_terms": ("Vesting Terms", "Vesting Terms"),
    "transactions": ("Transaction", "Transactions"),
    "valuations": ("Valuation", "Valuations"),
    "documents": ("Document", "Documents"),
    "stock_legend_templates": ("Stock Legend Template", "Stock Legend Templates"),
}


def _as_manifest(manifest: OcfManifest | Mapping[str, Any]) -> OcfManifest:
    if isinstance(manifest, OcfManifest):
        return manifest
    return OcfManifest.model_validate(dict(manifest))


def _field_counts(manifest: OcfManifest) -> dict[str, int]:
    counts = {"issuer": 1 if manifest.issuer is not None else 0}
    for name in MANIFEST_COLLECTIONS:
        counts[name] = len(getattr(manifest, name) or ())
    return counts


def count_manifest_objects(manifest: OcfManifest | Mapping[str, Any]) -> int:
    """Count every object in ``manifest``.

    The issuer contributes 1 when present and not ``None``; each collection
    contributes its length, and absent collections contribute 0. Mappings may
    use either the camelCase wire names or the snake_case field names.
    """

    return sum(_field_counts(_as_manifest(manifest)).values())


def build_manifest(objects: Iterable[Any]) -> OcfManifest:
    """Group decoded OCF objects into a manifest by ``object_type``.

    - ``ISSUER`` becomes the root entity; a second issuer is a ``ValueError``.
    - ``TX_*`` objects go to ``transactions`` in input order (unsorted).
    - Known object types go to their collection; anything else is skipped
      and logged.

    Collections with no members are left as empty lists so the result counts
    the same as the input.
    """

    issuer: Any = None
    grouped: dict[str, list[Any]] = {name: [] for name in MANIFEST_COLLECTIONS}
    skipped = 0

    for obj in objects:
        object_type = get_field(obj, "object_type", None)
        if object_type == _ISSUER_OBJECT_TYPE:
            if issuer is not None:
                raise ValueError(
                    "manifest already has an issuer "
                    f"(id: {get_field(issuer, 'id', None)}); "
                    f"got another (id: {get_field(obj, 'id', None)})"
                )
            issuer = obj
        elif isinstance(object_type, str) and object_type.startswith(_TRANSACTION_PREFIX):
            grouped["transactions"].append(obj)
        elif object_type in OBJECT_TYPE_COLLECTIONS:
            grouped[OBJECT_TYPE_COLLECTIONS[object_type]].append(obj)
        else:
            skipped += 1
            logger.warning(
                "Skipping unsupported object_type %r (id: %s)",
                object_type,
                get_field(obj, "id", None),
            )

    if skipped:
        logger.info("build_manifest skipped %d unsupported objects", skipped)
    return OcfManifest(issuer=issuer, **grouped)


def sort_manifest(manifest: OcfManifest | Mapping[str, Any]) -> OcfManifest:
    """Return a copy of ``manifest`` with ``transactions`` in replay order."""

    m = _as_manifest(manifest)
    if m.transactions is None:
        return m
    return m.model_copy(update={"transactions": sort_transactions(m.transactions)})


def describe_manifest(manifest: OcfManifest | Mapping[str, Any]) -> list[str]:
    """Return labels like ``"1 Issuer"`` or ``"3 Stock Classes"`` per field."""

    lines: list[str] = []
    for name, count in _field_counts(_as_manifest(manifest)).items():
        singular, plural = _FIELD_LABELS[name]
        lines.append(f"{count} {singular if count == 1 else plural}")
    return lines


__all__ = [
    "OBJECT_TYPE_COLLECTIONS",
    "build_manifest",
    "count_manifest_objects",
    "describe_manifest",
    "sort_manifest",
]
