"""Unit tests for fetch planning: selection merge, rendering and page size."""

import pytest

from app.audience.compiler import (
    BASELINE_SELECTION,
    DEFAULT_PAGE_SIZE,
    REDUCED_PAGE_SIZE,
    build_fetch_spec,
)
from app.schemas.audience import FilterConfig
from app.shopify.selection import (
    Field,
    count_fields,
    field,
    leaves,
    merge_selections,
    render_selection,
)


class TestMergeSelections:
    def test_equal_leaves_collapse(self):
        merged = merge_selections(leaves("id", "email"), leaves("email", "createdAt"))
        assert [f.name for f in merged] == ["id", "email", "createdAt"]

    def test_nested_fields_merge_recursively(self):
        a = (field("orders", field("nodes", "createdAt"), args="first: 10"),)
        b = (field("orders", field("nodes", "createdAt", "paymentGatewayNames"), args="first: 10"),)
        (orders,) = merge_selections(a, b)
        (nodes,) = orders.children
        assert [c.name for c in nodes.children] == ["createdAt", "paymentGatewayNames"]

    def test_conflicting_arguments_raise(self):
        a = (field("orders", "id", args="first: 10"),)
        b = (field("orders", "id", args="first: 5"),)
        with pytest.raises(ValueError, match="orders"):
            merge_selections(a, b)

    def test_field_shorthand_builds_leaves(self):
        built = field("amountSpent", "amount", "currencyCode")
        assert built.children == (Field("amount"), Field("currencyCode"))
        assert not built.is_leaf

    def test_render_indents_children(self):
        text = render_selection((field("amountSpent", "amount"), Field("id")))
        assert text == "amountSpent {\n  amount\n}\nid"

    def test_render_includes_arguments(self):
        text = render_selection((field("lineItems", "id", args="first: 10"),))
        assert text.startswith("lineItems(first: 10) {")


class TestBuildFetchSpec:
    def test_empty_config_is_baseline_only(self):
        spec = build_fetch_spec(FilterConfig())
        assert spec.selection == BASELINE_SELECTION
        assert spec.page_size == DEFAULT_PAGE_SIZE
        assert spec.criteria == ()

    def test_scalar_and_location_keep_default_page_size(self):
        config = FilterConfig(
            location=["Europe"],
            amountSpent={"amount": 50, "operator": "max"},
            customerCreatedFrom="2024-01-01",
        )
        spec = build_fetch_spec(config)
        assert spec.page_size == DEFAULT_PAGE_SIZE
        assert count_fields(spec.selection, "defaultAddress") == 1
        assert count_fields(spec.selection, "orders") == 0

    @pytest.mark.parametrize(
        "config",
        [
            {"products": ["Mug"]},
            {"timing": ["Weekends"]},
            {"payment": ["PayPal"]},
            {"delivery": ["Free Shipping"]},
        ],
    )
    def test_any_order_criterion_reduces_page_size(self, config):
        assert build_fetch_spec(FilterConfig(**config)).page_size == REDUCED_PAGE_SIZE

    def test_order_criteria_share_one_orders_block(self):
        config = FilterConfig(
            products=["Mug"],
            timing=["Weekends"],
            payment=["PayPal"],
            delivery=["Free Shipping"],
        )
        spec = build_fetch_spec(config)

        assert count_fields(spec.selection, "orders") == 1
        assert count_fields(spec.selection, "createdAt") == 2  # customer + order
        assert count_fields(spec.selection, "lineItems") == 1
        assert count_fields(spec.selection, "shippingLines") == 1

    def test_baseline_fields_always_present_once(self):
        spec = build_fetch_spec(FilterConfig(location=["Canada"], payment=["Prepaid"]))
        for name in ("id", "displayName", "email", "numberOfOrders", "amountSpent"):
            assert count_fields(spec.selection, name) >= 1
        assert count_fields(spec.selection, "amountSpent") == 1

    def test_page_sizes_are_configurable(self):
        config = FilterConfig(timing=["Weekdays"])
        spec = build_fetch_spec(config, page_size=100, reduced_page_size=20)
        assert spec.page_size == 20

    def test_query_uses_cursor_variables(self):
        spec = build_fetch_spec(FilterConfig(location=["Canada"]))
        query = spec.to_query()

        assert query.startswith("query AudienceCustomers($first: Int!, $after: String)")
        assert "customers(first: $first, after: $after)" in query
        assert "hasNextPage" in query
        assert "orders(first: 10, sortKey: CREATED_AT, reverse: true)" not in query
        assert spec.variables() == {"first": DEFAULT_PAGE_SIZE, "after": None}
        assert spec.variables("abc") == {"first": DEFAULT_PAGE_SIZE, "after": "abc"}

    def test_query_renders_recent_orders(self):
        query = build_fetch_spec(FilterConfig(payment=["PayPal"])).to_query()
        assert "orders(first: 10, sortKey: CREATED_AT, reverse: true) {" in query
        assert "paymentGatewayNames" in query
