import logging

import pytest
from pydantic import ValidationError

from captable_ordering.manifest import (
    build_manifest,
    count_manifest_objects,
    describe_manifest,
    sort_manifest,
)
from captable_ordering.models import OcfManifest

_ISSUER = {"id": "issuer-1", "object_type": "ISSUER"}


def _full_manifest() -> dict:
    return {
        "issuer": _ISSUER,
        "stakeholders": [{"id": "s1"}, {"id": "s2"}],
        "stockClasses": [{"id": "sc1"}],
        "stockPlans": [],
        "vestingTerms": [{"id": "vt1"}],
        "transactions": [{"id": "t1"}, {"id": "t2"}, {"id": "t3"}],
        "valuations": [{"id": "v1"}],
        "documents": [{"id": "d1"}, {"id": "d2"}],
        "stockLegendTemplates": [],
    }


# ---- count_manifest_objects --------------------------------------------------


def test_counts_all_objects_in_full_manifest():
    # 1 issuer + 2 + 1 + 0 + 1 + 3 + 1 + 2 + 0
    assert count_manifest_objects(_full_manifest()) == 11


def test_partial_manifest_treats_missing_collections_as_empty():
    partial = _full_manifest()
    for key in ("valuations", "documents", "stockLegendTemplates"):
        del partial[key]
    assert count_manifest_objects(partial) == 8


def test_empty_manifest():
    assert count_manifest_objects({}) == 0
    assert count_manifest_objects(OcfManifest()) == 0


def test_issuer_only_and_null_issuer():
    assert count_manifest_objects({"issuer": _ISSUER}) == 1
    assert count_manifest_objects({"issuer": None}) == 0


def test_snake_case_keys_and_model_instances():
    m = OcfManifest(stock_classes=[{"id": "a"}, {"id": "b"}], vesting_terms=[{"id": "v"}])
    assert count_manifest_objects(m) == 3
    assert count_manifest_objects({"stock_classes": [{"id": "a"}]}) == 1


def test_explicit_null_collections_count_as_empty():
    assert count_manifest_objects({"stakeholders": None, "transactions": None}) == 0


def test_unknown_keys_are_ignored():
    assert count_manifest_objects({"extra": [1, 2, 3], "documents": [{"id": "d"}]}) == 1


def test_non_sequence_collection_is_rejected():
    with pytest.raises(ValidationError):
        count_manifest_objects({"stakeholders": 5})


# ---- build_manifest ----------------------------------------------------------


def test_build_manifest_groups_by_object_type():
    objects = [
        {"id": "tx-2", "object_type": "TX_STOCK_TRANSFER", "date": "2025-01-02"},
        _ISSUER,
        {"id": "sh-1", "object_type": "STAKEHOLDER"},
        {"id": "sc-1", "object_type": "STOCK_CLASS"},
        {"id": "sp-1", "object_type": "STOCK_PLAN"},
        {"id": "vt-1", "object_type": "VESTING_TERMS"},
        {"id": "val-1", "object_type": "VALUATION"},
        {"id": "doc-1", "object_type": "DOCUMENT"},
        {"id": "slt-1", "object_type": "STOCK_LEGEND_TEMPLATE"},
        {"id": "tx-1", "object_type": "TX_STOCK_ISSUANCE", "date": "2025-01-01"},
    ]

    m = build_manifest(objects)

    assert m.issuer == _ISSUER
    assert [o["id"] for o in m.stakeholders] == ["sh-1"]
    assert [o["id"] for o in m.stock_classes] == ["sc-1"]
    assert [o["id"] for o in m.stock_plans] == ["sp-1"]
    assert [o["id"] for o in m.vesting_terms] == ["vt-1"]
    assert [o["id"] for o in m.valuations] == ["val-1"]
    assert [o["id"] for o in m.documents] == ["doc-1"]
    assert [o["id"] for o in m.stock_legend_templates] == ["slt-1"]
    # Input order is kept; ordering is a separate step.
    assert [o["id"] for o in m.transactions] == ["tx-2", "tx-1"]
    assert count_manifest_objects(m) == len(objects)


def test_build_manifest_skips_unsupported_types(caplog: pytest.LogCaptureFixture):
    caplog.set_level(logging.WARNING, logger="captable_ordering")

    m = build_manifest([{"id": "x", "object_type": "FINANCING"}, {"id": "y"}])

    assert count_manifest_objects(m) == 0
    assert "FINANCING" in caplog.text


def test_build_manifest_rejects_second_issuer():
    with pytest.raises(ValueError, match="already has an issuer"):
        build_manifest([_ISSUER, {"id": "issuer-2", "object_type": "ISSUER"}])


def test_build_manifest_empty_input():
    m = build_manifest([])
    assert m.issuer is None
    assert m.transactions == []
    assert count_manifest_objects(m) == 0


# ---- sort_manifest / describe_manifest --------------------------------------


def test_sort_manifest_orders_transactions_without_mutating_input():
    raw = {
        "issuer": _ISSUER,
        "transactions": [
            {"id": "t-late", "date": "2025-02-01", "object_type": "TX_STOCK_ISSUANCE"},
            {"id": "t-early", "date": "2025-01-01", "object_type": "TX_STOCK_ISSUANCE"},
        ],
    }
    original = OcfManifest.model_validate(raw)

    ordered = sort_manifest(original)

    assert [t["id"] for t in ordered.transactions] == ["t-early", "t-late"]
    assert [t["id"] for t in original.transactions] == ["t-late", "t-early"]
    assert ordered.issuer == _ISSUER


def test_sort_manifest_without_transactions():
    m = sort_manifest({"issuer": _ISSUER})
    assert m.transactions is None
    assert count_manifest_objects(m) == 1


def test_describe_manifest_pluralizes_labels():
    assert describe_manifest(_full_manifest()) == [
        "1 Issuer",
        "2 Stakeholders",
        "1 Stock Class",
        "0 Stock Plans",
        "1 Vesting Terms",
        "3 Transactions",
        "1 Valuation",
        "2 Documents",
        "0 Stock Legend Templates",
    ]


def test_manifest_dumps_camel_case_aliases():
    m = OcfManifest.model_validate(_full_manifest())
    dumped = m.model_dump(by_alias=True, exclude_none=True)
    assert "stockClasses" in dumped
    assert "stock_classes" not in dumped
