"""Delivery preference criterion."""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from types import MappingProxyType
from typing import Any

from app.audience.criteria.base import (
    CandidateRecord,
    CriterionId,
    ListCriterion,
    connection_nodes,
    iter_orders,
    recent_orders,
)
from app.shopify.selection import field

FREE_SHIPPING = "Free Shipping"

# Display name -> lower-case substrings of Shopify shipping-line titles
DELIVERY_PATTERNS = MappingProxyType(
    {
        "Standard Shipping": ("standard", "regular", "ground", "economy"),
        "Express Shipping": ("express", "expedited", "priority", "fast"),
        FREE_SHIPPING: ("free", "complimentary"),
        "Local Pickup": ("pickup", "local", "store pickup", "in-store"),
        "Same-day Delivery": ("same day", "same-day", "today", "instant"),
        "International Shipping": ("international", "global", "worldwide"),
        "Scheduled Delivery": ("scheduled", "appointment", "delivery window"),
    }
)

# Catalog entries with no shipping-line signal yet; they never match
UNSUPPORTED_METHODS = frozenset({"Eco-friendly Packaging"})


def title_matches(title: str, method: str) -> bool:
    if not title:
        return False
    title = title.lower()
    if any(pattern in title for pattern in DELIVERY_PATTERNS.get(method, ())):
        return True
    return title == method.lower()


def shipping_price(line: Mapping[str, Any]) -> Decimal:
    """Shop-currency price of a shipping line; missing prices read as zero."""
    amount = (((line.get("originalPriceSet") or {}).get("shopMoney")) or {}).get("amount")
    try:
        return Decimal(str(amount)) if amount not in (None, "") else Decimal("0")
    except InvalidOperation:
        return Decimal("0")


class DeliveryCriterion(ListCriterion):
    id = CriterionId.delivery
    config_field = "delivery"
    fragment = (
        recent_orders(
            field(
                "shippingLines",
                field("nodes", "title", field("originalPriceSet", field("shopMoney", "amount"))),
                args="first: 5",
            )
        ),
    )
    requires_orders = True
    cost = 60

    def matches(self, record: CandidateRecord, selection: tuple[str, ...]) -> bool:
        methods = [m for m in selection if m not in UNSUPPORTED_METHODS]
        if not methods:
            return False
        for order in iter_orders(record):
            for line in connection_nodes(order.get("shippingLines")):
                title = line.get("title") or ""
                for method in methods:
                    if method == FREE_SHIPPING and shipping_price(line) == 0:
                        return True
                    if title_matches(title, method):
                        return True
        return False
