"""Tests for lenient field coercion and record normalization."""

import math
from datetime import datetime, timezone

import numpy as np
import pandas as pd
import pytest

from metrics_engine.core.cleaning import native, to_int, to_number, to_text, to_utc_datetime
from metrics_engine.schemas import normalize_orders, normalize_products


class TestToNumber:
    @pytest.mark.parametrize("raw,expected", [
        (12, 12.0),
        ("12.5", 12.5),
        ("$1,200.50", 1200.5),
        (np.int64(7), 7.0),
    ])
    def test_parses_numeric_values(self, raw, expected):
        assert to_number(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "   ", "abc", True, float("nan"), float("inf"), [1]])
    def test_garbage_falls_back_to_zero(self, raw):
        assert to_number(raw) == 0.0

    def test_custom_default(self):
        assert to_number(None, default=-1.0) == -1.0

    def test_to_int_truncates(self):
        assert to_int("7.9") == 7
        assert to_int(None) == 0

    @pytest.mark.parametrize("raw", [1e300, -1e300, "9" * 40, 2 ** 63])
    def test_to_int_out_of_int64_range_falls_back(self, raw):
        assert to_int(raw) == 0
        assert to_int(raw, default=5) == 5


class TestToText:
    def test_strips_and_blanks_become_none(self):
        assert to_text("  Ana ") == "Ana"
        assert to_text("   ") is None
        assert to_text(None) is None


class TestToUtcDatetime:
    def test_iso_string_with_z(self):
        parsed = to_utc_datetime("2026-10-19T12:00:00Z")
        assert parsed == datetime(2026, 10, 19, 12, tzinfo=timezone.utc)

    def test_naive_string_is_taken_as_utc(self):
        parsed = to_utc_datetime("2026-10-19 08:30:00")
        assert parsed.utcoffset().total_seconds() == 0
        assert parsed.hour == 8

    def test_offset_is_converted(self):
        parsed = to_utc_datetime("2026-10-19T07:00:00-05:00")
        assert parsed == datetime(2026, 10, 19, 12, tzinfo=timezone.utc)

    def test_epoch_milliseconds(self):
        parsed = to_utc_datetime(0)
        assert parsed == datetime(1970, 1, 1, tzinfo=timezone.utc)

    @pytest.mark.parametrize("raw", [None, "", "not a date", float("nan")])
    def test_unparseable_is_none(self, raw):
        assert to_utc_datetime(raw) is None

    @pytest.mark.parametrize("raw", [1e20, -1e20, 10 ** 30, "99999-01-01"])
    def test_out_of_range_is_none(self, raw):
        assert to_utc_datetime(raw) is None


class TestNative:
    def test_numpy_scalars_become_python(self):
        assert type(native(np.int64(3))) is int
        assert type(native(np.float64(1.5))) is float

    def test_timestamps_become_iso_strings(self):
        ts = pd.Timestamp("2026-10-19T12:00:00", tz="UTC")
        assert native(ts) == "2026-10-19T12:00:00+00:00"
        assert native(pd.NaT) is None

    def test_non_finite_float_is_none(self):
        assert native(float("nan")) is None
        assert native(math.inf) is None


class TestNormalization:
    def test_order_wire_names_and_coercion(self):
        [order] = normalize_orders([{
            "id": 9,
            "orderNumber": " ORD-9 ",
            "total": "$1,000",
            "paymentStatus": "PAGADO",
            "paymentMethod": "TRANSFERENCIA_INTERNA",
            "seller": {"id": 1, "name": "Ana", "role": "admin"},
            "items": [{"productId": 3, "quantity": "2", "price": "10"}],
            "createdAt": "2026-10-19T12:00:00Z",
        }])
        assert order.order_number == "ORD-9"
        assert order.total == 1000.0
        assert order.payment_method == "TRANSFERENCIA_INTERNA"
        assert order.seller.role == "admin"
        assert order.items[0].product_id == 3
        assert order.items[0].quantity == 2
        assert order.created_at.tzinfo is not None

    def test_order_with_broken_relations(self):
        [order] = normalize_orders([{"id": 1, "total": None, "seller": "nobody", "items": "x"}])
        assert order.total == 0.0
        assert order.seller is None
        assert order.items == []
        assert order.created_at is None

    def test_broken_nested_product_is_dropped(self):
        [order] = normalize_orders([{"id": 1, "total": 10, "items": [{"product": "abc", "quantity": 1}]}])
        assert order.items[0].product is None
        assert order.items[0].quantity == 1

    @pytest.mark.parametrize("raw", [
        {"id": 1.5},
        {"id": 2, "seller": {"id": {"nested": True}}},
        {"id": 3, "items": [{"productId": [1, 2]}]},
    ])
    def test_invalid_records_are_skipped_with_warning(self, raw, caplog):
        with caplog.at_level("WARNING"):
            orders = normalize_orders([raw, {"id": 9}])
        assert [o.id for o in orders] == [9]
        assert "Skipping invalid order record" in caplog.text

    def test_non_mapping_records_are_skipped(self, caplog):
        with caplog.at_level("WARNING"):
            orders = normalize_orders([{"id": 1}, "junk", None, 42])
        assert [o.id for o in orders] == [1]
        assert "Skipping" in caplog.text

    def test_none_input_is_empty(self):
        assert normalize_orders(None) == []
        assert normalize_products(None) == []

    def test_product_brand_and_category_shapes(self):
        products = normalize_products([
            {"id": 1, "price": "5", "stock": None, "brand": "Acme", "category": 4},
            {"id": 2, "brand": {"id": 7, "name": " Zeta "}, "category": {"name": "Audio"}},
            {"id": 3, "brand": "  ", "category": None},
        ])
        assert products[0].price == 5.0
        assert products[0].stock == 0
        assert products[0].brand.name == "Acme"
        assert products[0].category.id == 4
        assert products[1].brand.id == 7
        assert products[1].brand.name == "Zeta"
        assert products[2].brand is None
        assert products[2].category is None
