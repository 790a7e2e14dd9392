"""Saved customer list model."""

import enum
from typing import Any

from sqlalchemy import Index, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, TimestampMixin, UUIDMixin


class ListSource(enum.StrEnum):
    ai_search = "ai-search"
    filter_audience = "filter-audience"
    manual = "manual"


class ListStatus(enum.StrEnum):
    active = "active"
    archived = "archived"


class SavedList(UUIDMixin, TimestampMixin, Base):
    """A generated audience segment persisted for later export."""

    __tablename__ = "saved_customer_lists"

    shop: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    list_name: Mapped[str] = mapped_column(String(255), nullable=False)
    query_data: Mapped[dict[str, Any]] = mapped_column(JSONB, nullable=False, default=dict)
    customer_ids: Mapped[list[str]] = mapped_column(JSONB, nullable=False, default=list)
    source: Mapped[str] = mapped_column(
        String(20), nullable=False, default=ListSource.filter_audience.value
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=ListStatus.active.value
    )

    __table_args__ = (
        UniqueConstraint("shop", "list_name", name="uq_saved_list_shop_name"),
        Index("idx_saved_list_shop_status", "shop", "status"),
    )

    @property
    def customer_count(self) -> int:
        return len(self.customer_ids or [])
