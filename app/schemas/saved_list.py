"""Pydantic schemas for saved customer lists."""

from datetime import datetime
from math import ceil
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.models.saved_list import ListSource, ListStatus
from app.schemas.audience import FilterConfig


class SavedListCreate(BaseModel):
    """Request schema for saving a generated segment."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    list_name: str = Field(min_length=1, max_length=255)
    filters: FilterConfig = Field(default_factory=FilterConfig)
    customer_ids: list[str] = Field(default_factory=list)
    source: ListSource = ListSource.filter_audience

    @field_validator("list_name", mode="before")
    @classmethod
    def strip_name(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("source", mode="before")
    @classmethod
    def default_unknown_source(cls, v: Any) -> ListSource:
        try:
            return ListSource(v)
        except ValueError:
            return ListSource.filter_audience

    @field_validator("customer_ids", mode="before")
    @classmethod
    def dedupe_ids(cls, v: Any) -> list[str]:
        if not v:
            return []
        return list(dict.fromkeys(str(item) for item in v if item))


class SavedListUpdate(BaseModel):
    """Request schema for renaming or archiving a list."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    list_name: str | None = Field(default=None, min_length=1, max_length=255)
    status: ListStatus | None = None

    @field_validator("list_name", mode="before")
    @classmethod
    def strip_name(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v


class SavedListResponse(BaseModel):
    """Response schema for a saved list."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: str
    shop: str
    list_name: str
    query_data: dict[str, Any]
    customer_ids: list[str]
    customer_count: int
    source: str
    status: str
    created_at: datetime
    updated_at: datetime


class SavedListListResponse(BaseModel):
    """One page of a shop's saved lists."""

    items: list[SavedListResponse]
    total: int
    page: int
    size: int
    pages: int

    @classmethod
    def paginate(
        cls, *, items: list[SavedListResponse], total: int, page: int, size: int
    ) -> "SavedListListResponse":
        return cls(
            items=items,
            total=total,
            page=page,
            size=size,
            pages=ceil(total / size) if size > 0 else 0,
        )
