"""Merge the active criteria's field requirements into one customers query."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from app.audience.criteria import CriterionId, active_criteria
from app.schemas.audience import FilterConfig
from app.shopify.selection import Field, field, leaves, merge_selections, render_selection

DEFAULT_PAGE_SIZE = 250
REDUCED_PAGE_SIZE = 50

BASELINE_SELECTION: tuple[Field, ...] = (
    *leaves("id", "displayName", "email", "createdAt", "numberOfOrders"),
    field("amountSpent", "amount", "currencyCode"),
)


@dataclass(frozen=True)
class FetchSpec:
    """Fields and page size for one compiled customers query. Never persisted."""

    selection: tuple[Field, ...]
    page_size: int
    criteria: tuple[CriterionId, ...] = ()

    def to_query(self) -> str:
        nodes = render_selection(self.selection, depth=3)
        return (
            "query AudienceCustomers($first: Int!, $after: String) {\n"
            "  customers(first: $first, after: $after) {\n"
            "    pageInfo {\n"
            "      hasNextPage\n"
            "      endCursor\n"
            "    }\n"
            "    nodes {\n"
            f"{nodes}\n"
            "    }\n"
            "  }\n"
            "}\n"
        )

    def variables(self, cursor: str | None = None) -> dict[str, Any]:
        return {"first": self.page_size, "after": cursor}


def build_fetch_spec(
    config: FilterConfig,
    *,
    page_size: int = DEFAULT_PAGE_SIZE,
    reduced_page_size: int = REDUCED_PAGE_SIZE,
) -> FetchSpec:
    """Union the baseline with every active criterion's fragment.

    Order-based criteria all select ``orders`` with the same arguments, so
    the merge folds them into a single nested block. Any of them being active
    drops the page size, since nested order and line-item selections
    multiply Shopify's query cost.
    """
    criteria = active_criteria(config)
    selection = merge_selections(BASELINE_SELECTION, *(c.fragment for c in criteria))
    expensive = any(c.requires_orders for c in criteria)
    return FetchSpec(
        selection=selection,
        page_size=reduced_page_size if expensive else page_size,
        criteria=tuple(c.id for c in criteria),
    )
