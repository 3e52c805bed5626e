"""
Schemas & Canonicalization
File: tests/unit/test_canonical_json.py

Purpose: Unit tests for canonical JSON serialization of ledger records.
These tests ensure deterministic serialization across runs.
"""

import json
from decimal import Decimal
from enum import Enum

import pytest
from pydantic import BaseModel

from core.schemas import CanonicalizationException
from core.schemas.canonical import canonicalize_value, dumps_canonical, loads_canonical
from core.schemas.ledger import RecipientStatus, Segment


class SampleEnum(str, Enum):
    OPTION_A = "option_a"


class SampleModel(BaseModel):
    z_field: int
    a_field: str
    fraction: Decimal
    note: str | None = None


class TestDeterministicOrdering:
    """Keys are sorted and whitespace-free."""

    def test_dict_keys_sorted(self):
        assert dumps_canonical({"b": 1, "a": 2, "c": 3}) == '{"a":2,"b":1,"c":3}'

    def test_nested_dict_keys_sorted(self):
        result = dumps_canonical({"outer": {"z": 1, "a": 2}})

        assert result == '{"outer":{"a":2,"z":1}}'

    def test_model_fields_sorted(self):
        result = dumps_canonical(SampleModel(z_field=1, a_field="x", fraction=Decimal("0.5")))

        assert list(json.loads(result)) == ["a_field", "fraction", "note", "z_field"]

    def test_insertion_order_irrelevant(self):
        first = {"user": "wasm1a", "claimed": 5, "assigned": 10}
        second = {"assigned": 10, "claimed": 5, "user": "wasm1a"}

        assert dumps_canonical(first) == dumps_canonical(second)


class TestValueRules:
    """Type-specific canonicalization."""

    def test_decimal_plain_string(self):
        assert canonicalize_value(Decimal("5E-1")) == "0.5"
        assert canonicalize_value(Decimal("0.333333333333333333")) == "0.333333333333333333"

    def test_non_finite_decimal_rejected(self):
        with pytest.raises(CanonicalizationException):
            dumps_canonical({"x": Decimal("NaN")})

    def test_float_rejected_with_path(self):
        with pytest.raises(CanonicalizationException) as exc_info:
            dumps_canonical({"state": {"total": 1.5}})

        assert exc_info.value.details["path"] == "state.total"

    def test_float_in_list_path(self):
        with pytest.raises(CanonicalizationException) as exc_info:
            dumps_canonical({"items": [1, 2.0]})

        assert exc_info.value.details["path"] == "items[1]"

    def test_enum_serializes_to_value(self):
        assert dumps_canonical({"e": SampleEnum.OPTION_A}) == '{"e":"option_a"}'
        assert canonicalize_value(RecipientStatus.FULLY_CLAIMED) == "fully_claimed"

    def test_none_kept(self):
        assert dumps_canonical({"a": None}) == '{"a":null}'

    def test_bytes_as_hex(self):
        assert canonicalize_value(b"\x00\xff") == "00ff"

    def test_large_integers_exact(self):
        value = 2**128 - 1

        assert loads_canonical(dumps_canonical({"v": value}))["v"] == value

    def test_unsupported_type(self):
        with pytest.raises(CanonicalizationException):
            dumps_canonical({"s": {1, 2}})


class TestLedgerRecords:
    """Canonical form of schedule segments."""

    def test_segment(self):
        segment = Segment(start=100, end=200, fraction=Decimal("0.50"))

        assert dumps_canonical(segment) == '{"end":200,"fraction":"0.50","start":100}'

    def test_repeated_serialization_identical(self):
        segments = [Segment(start=0, end=0, fraction=Decimal("1"))]

        assert len({dumps_canonical(segments) for _ in range(5)}) == 1
