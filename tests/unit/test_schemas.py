"""Unit tests for Pydantic schemas."""

from datetime import UTC, datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from app.models.saved_list import ListSource, ListStatus
from app.schemas.audience import (
    AmountSpentFilter,
    FilterConfig,
    GenerateSegmentResponse,
)
from app.schemas.saved_list import (
    SavedListCreate,
    SavedListListResponse,
    SavedListResponse,
    SavedListUpdate,
)
from tests.conftest import make_saved_list_model


class TestFilterConfig:
    def test_accepts_camel_case_keys(self):
        config = FilterConfig.model_validate(
            {
                "location": ["Europe"],
                "amountSpent": {"amount": "250", "operator": "max"},
                "customerCreatedFrom": "2024-06-01",
            }
        )
        assert config.amount_spent == AmountSpentFilter(amount=Decimal("250"), operator="max")
        assert config.customer_created_from == "2024-06-01"

    def test_accepts_field_names(self):
        config = FilterConfig(customer_created_from="2024-06-01")
        assert config.customer_created_from == "2024-06-01"

    def test_ignores_unknown_keys(self):
        config = FilterConfig.model_validate(
            {"device": ["Mobile"], "graphqlQuery": "query { shop }", "timing": ["Weekdays"]}
        )
        assert config.timing == ["Weekdays"]
        assert not hasattr(config, "device")

    def test_blank_items_dropped(self):
        config = FilterConfig(location=["", "  ", "Canada", None])
        assert config.location == ["Canada"]

    def test_single_string_becomes_list(self):
        assert FilterConfig(payment="PayPal").payment == ["PayPal"]

    @pytest.mark.parametrize(
        "amount_spent",
        [
            {"amount": "lots", "operator": "min"},
            {"amount": 100, "operator": "between"},
            {"amount": True, "operator": "min"},
            {"amount": "", "operator": ""},
        ],
    )
    def test_malformed_amount_spent_never_raises(self, amount_spent):
        config = FilterConfig.model_validate({"amountSpent": amount_spent})
        value = config.amount_spent
        assert value.amount is None or value.operator is None

    def test_non_mapping_amount_spent(self):
        assert FilterConfig.model_validate({"amountSpent": 100}).amount_spent is None

    def test_blank_created_from(self):
        assert FilterConfig(customerCreatedFrom="  ").customer_created_from is None

    def test_operator_case_insensitive(self):
        assert AmountSpentFilter(amount=1, operator=" MIN ").operator == "min"


class TestGenerateSegmentResponse:
    def test_serializes_camel_case(self):
        response = GenerateSegmentResponse(match_count=0, filters=FilterConfig(), customers=[])
        payload = response.model_dump(by_alias=True)
        assert payload["matchCount"] == 0
        assert payload["success"] is True


class TestSavedListCreate:
    def test_valid_camel_case(self):
        data = SavedListCreate.model_validate(
            {
                "listName": "  Big spenders ",
                "filters": {"amountSpent": {"amount": 500, "operator": "min"}},
                "customerIds": ["c1", "c2", "c1"],
                "source": "ai-search",
            }
        )
        assert data.list_name == "Big spenders"
        assert data.customer_ids == ["c1", "c2"]
        assert data.source is ListSource.ai_search

    def test_unknown_source_falls_back(self):
        data = SavedListCreate(list_name="x", source="spreadsheet")
        assert data.source is ListSource.filter_audience

    def test_default_source(self):
        assert SavedListCreate(list_name="x").source is ListSource.filter_audience

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            SavedListCreate(list_name="   ")

    def test_missing_name_rejected(self):
        with pytest.raises(ValidationError):
            SavedListCreate.model_validate({"customerIds": []})


class TestSavedListUpdate:
    def test_archive(self):
        data = SavedListUpdate(status="archived")
        assert data.status is ListStatus.archived
        assert data.model_dump(exclude_unset=True) == {"status": ListStatus.archived}

    def test_invalid_status(self):
        with pytest.raises(ValidationError):
            SavedListUpdate(status="deleted")


class TestSavedListResponse:
    def test_from_model(self):
        model = make_saved_list_model(list_name="Weekend shoppers")
        response = SavedListResponse.model_validate(model)
        assert response.list_name == "Weekend shoppers"
        assert response.customer_count == 2

    def test_paginated(self):
        items = [SavedListResponse.model_validate(make_saved_list_model()) for _ in range(3)]
        page = SavedListListResponse.paginate(items=items, total=7, page=1, size=3)
        assert page.pages == 3
        assert len(page.items) == 3

    def test_paginated_empty(self):
        page = SavedListListResponse.paginate(items=[], total=0, page=1, size=50)
        assert page.pages == 0
        assert page.items == []

    def test_created_at_round_trips(self):
        now = datetime.now(UTC)
        response = SavedListResponse.model_validate(make_saved_list_model(created_at=now))
        assert response.created_at == now
