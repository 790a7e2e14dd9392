"""Shape surviving records for display and export."""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal, InvalidOperation

from app.audience.criteria import CandidateRecord
from app.audience.criteria.base import parse_timestamp
from app.audience.criteria.location import UNKNOWN_COUNTRY, customer_country
from app.schemas.audience import FilteredCustomer

NOT_AVAILABLE = "N/A"
NO_SPEND = "0.00"


def _display_date(value: object) -> str:
    moment = parse_timestamp(value)
    if moment is None:
        return NOT_AVAILABLE
    return f"{moment.month}/{moment.day}/{moment.year}"


def _order_count(value: object) -> int:
    # numberOfOrders is an UnsignedInt64 and arrives as a string
    try:
        return max(int(value), 0)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0


def _money(value: object) -> str:
    if not isinstance(value, Mapping) or value.get("amount") in (None, ""):
        return NO_SPEND
    try:
        amount = Decimal(str(value["amount"]))
    except InvalidOperation:
        return NO_SPEND
    if not amount.is_finite():
        return NO_SPEND
    currency = value.get("currencyCode")
    return f"{amount:.2f} {currency}" if currency else f"{amount:.2f}"


def format_customer(record: CandidateRecord) -> FilteredCustomer:
    """Never raises; every missing field falls back to a display default."""
    return FilteredCustomer(
        id=str(record.get("id") or ""),
        name=str(record.get("displayName") or NOT_AVAILABLE),
        email=str(record.get("email") or NOT_AVAILABLE),
        country=str(customer_country(record) or UNKNOWN_COUNTRY),
        created_at=_display_date(record.get("createdAt")),
        number_of_orders=_order_count(record.get("numberOfOrders")),
        total_spent=_money(record.get("amountSpent")),
    )
