"""Pydantic schemas for audience filtering."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class AmountSpentFilter(BaseModel):
    """Lifetime-spend threshold.

    Values a half-filled form can send (blank, non-numeric amount, unknown
    operator) are coerced to ``None`` so the criterion reads as inactive.
    """

    amount: Decimal | None = None
    operator: Literal["min", "max"] | None = None

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount(cls, v: Any) -> Decimal | None:
        if v is None or isinstance(v, bool):
            return None
        try:
            amount = Decimal(str(v).strip())
        except (InvalidOperation, ValueError):
            return None
        return amount if amount.is_finite() else None

    @field_validator("operator", mode="before")
    @classmethod
    def coerce_operator(cls, v: Any) -> str | None:
        if isinstance(v, str) and v.strip().lower() in ("min", "max"):
            return v.strip().lower()
        return None


class FilterConfig(BaseModel):
    """The merchant's selection across all audience criteria.

    Accepts the camelCase keys the admin UI posts as well as field names.
    Unknown keys (``device``, ``graphqlQuery``) are ignored.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    location: list[str] = Field(default_factory=list)
    products: list[str] = Field(default_factory=list)
    timing: list[str] = Field(default_factory=list)
    payment: list[str] = Field(default_factory=list)
    delivery: list[str] = Field(default_factory=list)
    amount_spent: AmountSpentFilter | None = None
    customer_created_from: str | None = None

    @field_validator("location", "products", "timing", "payment", "delivery", mode="before")
    @classmethod
    def drop_blank_items(cls, v: Any) -> list[str]:
        if v is None:
            return []
        if isinstance(v, str):
            v = [v]
        return [str(item).strip() for item in v if item is not None and str(item).strip()]

    @field_validator("amount_spent", mode="before")
    @classmethod
    def ignore_non_mapping_amount(cls, v: Any) -> Any:
        return v if isinstance(v, (dict, AmountSpentFilter)) else None

    @field_validator("customer_created_from", mode="before")
    @classmethod
    def blank_date_is_none(cls, v: Any) -> str | None:
        if not isinstance(v, str) or not v.strip():
            return None
        return v.strip()


class FilteredCustomer(BaseModel):
    """Caller-facing shape of one customer that survived every filter."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    email: str
    country: str
    created_at: str
    number_of_orders: int
    total_spent: str


class FilterCustomersResult(BaseModel):
    customers: list[FilteredCustomer] = Field(default_factory=list)
    total: int = 0


class GenerateSegmentRequest(BaseModel):
    filters: FilterConfig


class GenerateSegmentResponse(BaseModel):
    """Response for segment generation."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    match_count: int
    filters: FilterConfig
    customers: list[FilteredCustomer]
    message: str | None = None


class FilterSectionResponse(BaseModel):
    """One section of the filter catalog shown by the admin UI."""

    id: str
    title: str
    options: list[str]
