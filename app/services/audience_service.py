"""Service layer for audience segment generation."""

from __future__ import annotations

from collections.abc import Sequence

from app.audience import (
    active_criteria,
    apply_filters,
    build_fetch_spec,
    fetch_candidates,
    format_customer,
    page_fetcher,
)
from app.audience.fetcher import MAX_CANDIDATES
from app.config import Settings
from app.schemas.audience import FilterConfig, FilterCustomersResult
from app.shopify.client import AdminGraphQL
from app.utils.logging import get_logger

logger = get_logger(__name__)


class AudienceService:
    """Compiles a FilterConfig into one paginated fetch and filters the result."""

    def __init__(self, client: AdminGraphQL, settings: Settings | None = None) -> None:
        self._client = client
        self.max_candidates = settings.audience_max_candidates if settings else MAX_CANDIDATES
        self._page_sizes = (
            {
                "page_size": settings.audience_page_size,
                "reduced_page_size": settings.audience_reduced_page_size,
            }
            if settings
            else {}
        )

    async def filter_customers(self, config: FilterConfig) -> FilterCustomersResult:
        """Return the customers matching every active criterion.

        An empty config returns an empty result without touching Shopify.
        ``AccessDeniedError`` and ``UpstreamQueryError`` propagate unchanged.
        """
        criteria = active_criteria(config)
        if not criteria:
            return FilterCustomersResult(customers=[], total=0)

        spec = build_fetch_spec(config, **self._page_sizes)
        logger.info(
            "Generating segment: criteria=%s page_size=%d",
            ",".join(c.id.value for c in criteria),
            spec.page_size,
        )
        records = await fetch_candidates(
            spec, page_fetcher(self._client), max_records=self.max_candidates
        )
        if not records:
            logger.info("Segment matched 0 of 0 candidates")
            return FilterCustomersResult(customers=[], total=0)

        # lookups run after the fetch so a denied or empty fetch costs no extra calls
        resolved = {}
        for criterion in criteria:
            resolved[criterion.id] = await criterion.resolve(
                criterion.selection(config), self._client
            )

        survivors = apply_filters(records, config, resolved=resolved)
        customers = [format_customer(record) for record in survivors]
        logger.info("Segment matched %d of %d candidates", len(customers), len(records))
        return FilterCustomersResult(customers=customers, total=len(customers))


async def filter_customers(
    client: AdminGraphQL,
    config: FilterConfig,
    settings: Settings | None = None,
) -> FilterCustomersResult:
    return await AudienceService(client, settings).filter_customers(config)


async def filter_customers_by_countries(
    client: AdminGraphQL,
    countries: Sequence[str],
    settings: Settings | None = None,
) -> FilterCustomersResult:
    """Location-only filtering, kept for older callers."""
    return await filter_customers(client, FilterConfig(location=list(countries)), settings)
