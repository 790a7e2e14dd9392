"""Static filter-option catalog served to the admin UI."""

from __future__ import annotations

from app.audience.criteria.delivery import DELIVERY_PATTERNS, UNSUPPORTED_METHODS
from app.audience.criteria.location import REGIONS
from app.audience.criteria.payment import CASH_ON_DELIVERY, GATEWAY_ALIASES, PREPAID
from app.audience.criteria.timing import TIMING_BUCKETS
from app.schemas.audience import FilterSectionResponse

FEATURED_COUNTRIES = (
    "United States",
    "Canada",
    "United Kingdom",
    "Australia",
    "India",
    "Germany",
    "France",
    "Japan",
    "Brazil",
    "Mexico",
)

# Shown in the catalog but matched by no predicate
UNSUPPORTED_TIMING = ("Holidays", "Sale Events")


def filter_sections() -> list[FilterSectionResponse]:
    """Sections in display order. Products are free text and ship no options."""
    return [
        FilterSectionResponse(
            id="location",
            title="Geographic Location",
            options=[*FEATURED_COUNTRIES, *REGIONS],
        ),
        FilterSectionResponse(id="products", title="Products & Categories", options=[]),
        FilterSectionResponse(
            id="timing",
            title="Shopping Timing",
            options=[*TIMING_BUCKETS, *UNSUPPORTED_TIMING],
        ),
        FilterSectionResponse(
            id="payment",
            title="Payment Methods",
            options=[*GATEWAY_ALIASES, PREPAID, CASH_ON_DELIVERY],
        ),
        FilterSectionResponse(
            id="delivery",
            title="Delivery Preferences",
            options=[*DELIVERY_PATTERNS, *sorted(UNSUPPORTED_METHODS)],
        ),
    ]
