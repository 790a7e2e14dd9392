"""Cursor-paginated retrieval of candidate customer records."""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

from app.audience.compiler import FetchSpec
from app.audience.criteria import CandidateRecord
from app.shopify.client import AdminGraphQL
from app.shopify.errors import UpstreamQueryError, raise_for_graphql_errors
from app.utils.logging import get_logger

logger = get_logger(__name__)

MAX_CANDIDATES = 1000

PageFetcher = Callable[[FetchSpec, str | None], Awaitable[dict[str, Any]]]


def page_fetcher(client: AdminGraphQL) -> PageFetcher:
    """Adapt a GraphQL client to the ``fetch_page(spec, cursor)`` shape."""

    async def fetch_page(spec: FetchSpec, cursor: str | None) -> dict[str, Any]:
        return await client.query(spec.to_query(), spec.variables(cursor))

    return fetch_page


async def iter_candidate_pages(
    spec: FetchSpec,
    fetch_page: PageFetcher,
    *,
    max_records: int = MAX_CANDIDATES,
) -> AsyncIterator[list[CandidateRecord]]:
    """Yield pages of customer nodes until the last page or the record cap.

    Pages are requested strictly one after another; each payload's errors are
    raised before any of its nodes are yielded.
    """
    cursor: str | None = None
    fetched = 0
    while fetched < max_records:
        payload = await fetch_page(spec, cursor)
        raise_for_graphql_errors(payload)

        connection = (payload.get("data") or {}).get("customers")
        if connection is None:
            raise UpstreamQueryError("Response is missing the customers connection")

        nodes = list(connection.get("nodes") or [])[: max_records - fetched]
        fetched += len(nodes)
        if nodes:
            yield nodes

        page_info = connection.get("pageInfo") or {}
        cursor = page_info.get("endCursor")
        if not page_info.get("hasNextPage") or not cursor:
            return

    logger.info("Candidate cap of %d records reached; remaining pages skipped", max_records)


async def fetch_candidates(
    spec: FetchSpec,
    fetch_page: PageFetcher,
    *,
    max_records: int = MAX_CANDIDATES,
) -> list[CandidateRecord]:
    """Accumulate up to ``max_records`` candidates.

    Segments whose base population exceeds the cap are undercounted.
    """
    records: list[CandidateRecord] = []
    async for page in iter_candidate_pages(spec, fetch_page, max_records=max_records):
        records.extend(page)
    logger.debug("Fetched %d candidate customers (page size %d)", len(records), spec.page_size)
    return records
