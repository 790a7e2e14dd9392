"""Unit tests for the AND-composed filter pipeline."""

import itertools

import pytest

from app.audience.criteria import CriterionId
from app.audience.pipeline import apply_filters
from app.schemas.audience import FilterConfig
from tests.conftest import make_order, make_record


def _population() -> list[dict]:
    return [
        make_record(
            id="a",
            defaultAddress={"country": "Canada"},
            amountSpent={"amount": "500", "currencyCode": "CAD"},
            orders={"nodes": [make_order(createdAt="2024-03-09T10:00:00Z")]},
        ),
        make_record(
            id="b",
            defaultAddress={"country": "Canada"},
            amountSpent={"amount": "20", "currencyCode": "CAD"},
            orders={"nodes": [make_order(createdAt="2024-03-09T10:00:00Z")]},
        ),
        make_record(
            id="c",
            defaultAddress={"country": "Germany"},
            amountSpent={"amount": "900", "currencyCode": "EUR"},
            orders={"nodes": [make_order(createdAt="2024-03-09T10:00:00Z")]},
        ),
        make_record(
            id="d",
            defaultAddress={"country": "Mexico"},
            amountSpent={"amount": "300", "currencyCode": "MXN"},
            orders={"nodes": [make_order(createdAt="2024-03-06T10:00:00Z")]},
        ),
    ]


CONFIG = FilterConfig(
    location=["North America"],
    amountSpent={"amount": 100, "operator": "min"},
    timing=["Weekends"],
)


class TestApplyFilters:
    def test_and_composition(self):
        result = apply_filters(_population(), CONFIG)
        assert [r["id"] for r in result] == ["a"]

    @pytest.mark.parametrize(
        "order",
        list(
            itertools.permutations(
                [CriterionId.location, CriterionId.amount_spent, CriterionId.timing]
            )
        ),
    )
    def test_result_independent_of_stage_order(self, order):
        result = apply_filters(_population(), CONFIG, order=order)
        assert [r["id"] for r in result] == ["a"]

    def test_no_active_criteria_keeps_everything(self):
        records = _population()
        assert apply_filters(records, FilterConfig()) == records

    def test_records_are_not_mutated(self):
        records = _population()
        snapshot = [dict(r) for r in records]
        apply_filters(records, CONFIG)
        assert records == snapshot

    def test_resolved_selection_overrides_config(self):
        records = _population()
        resolved = {CriterionId.location: ("Germany",)}
        result = apply_filters(records, FilterConfig(location=["Canada"]), resolved=resolved)
        assert [r["id"] for r in result] == ["c"]

    def test_order_accepts_wire_ids(self):
        result = apply_filters(_population(), CONFIG, order=["timing", "amountSpent", "location"])
        assert [r["id"] for r in result] == ["a"]
