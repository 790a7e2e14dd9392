"""Shared interface and record helpers for audience criteria."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from datetime import UTC, datetime
from typing import Any, ClassVar, Generic, TypeVar

from app.schemas.audience import FilterConfig
from app.shopify.client import AdminGraphQL
from app.shopify.selection import Field, field

CandidateRecord = Mapping[str, Any]
S = TypeVar("S")

RECENT_ORDERS_ARGS = "first: 10, sortKey: CREATED_AT, reverse: true"


class CriterionId(enum.StrEnum):
    location = "location"
    products = "products"
    timing = "timing"
    payment = "payment"
    delivery = "delivery"
    amount_spent = "amountSpent"
    customer_created_from = "customerCreatedFrom"


class Criterion(ABC, Generic[S]):
    """One filter family.

    ``selection`` normalizes the raw config value into whatever ``matches``
    consumes and returns ``None`` when the criterion is inactive. Criteria
    hold no per-call state; the registry keeps one instance of each.
    """

    id: ClassVar[CriterionId]
    config_field: ClassVar[str]
    fragment: ClassVar[tuple[Field, ...]] = ()
    requires_orders: ClassVar[bool] = False
    # lower runs earlier in the pipeline
    cost: ClassVar[int] = 100

    def raw_value(self, config: FilterConfig) -> Any:
        return getattr(config, self.config_field)

    @abstractmethod
    def selection(self, config: FilterConfig) -> S | None: ...

    def is_active(self, config: FilterConfig) -> bool:
        return self.selection(config) is not None

    async def resolve(self, selection: S, client: AdminGraphQL | None) -> S:
        """Enrich a selection with upstream lookups before filtering."""
        return selection

    @abstractmethod
    def matches(self, record: CandidateRecord, selection: S) -> bool: ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.id.value}>"


class ListCriterion(Criterion[tuple[str, ...]]):
    """Multi-select criterion: active when at least one value is configured."""

    def selection(self, config: FilterConfig) -> tuple[str, ...] | None:
        values = tuple(dict.fromkeys(self.raw_value(config) or ()))
        return values or None


def recent_orders(*node_fields: Field | str) -> Field:
    """The ``orders`` selection every order-based criterion shares."""
    return field("orders", field("edges", field("node", *node_fields)), args=RECENT_ORDERS_ARGS)


def connection_nodes(value: Any) -> list[Mapping[str, Any]]:
    """Read nodes from a list, a ``{nodes}`` connection or an ``{edges}`` connection."""
    if not value:
        return []
    if isinstance(value, list):
        return [item for item in value if isinstance(item, Mapping)]
    if isinstance(value, Mapping):
        if "nodes" in value:
            return [n for n in value.get("nodes") or [] if isinstance(n, Mapping)]
        return [
            edge["node"]
            for edge in value.get("edges") or []
            if isinstance(edge, Mapping) and isinstance(edge.get("node"), Mapping)
        ]
    return []


def iter_orders(record: CandidateRecord) -> Iterator[Mapping[str, Any]]:
    yield from connection_nodes(record.get("orders"))


def parse_timestamp(value: Any) -> datetime | None:
    """Parse a Shopify ISO-8601 timestamp into an aware UTC datetime."""
    if not value or not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)
